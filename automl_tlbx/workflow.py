"""End-to-end workflow: profile, select a target, encode, train."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

import pandas as pd

from automl_tlbx.analysis.feature_encoder import FeatureEncoder
from automl_tlbx.analysis.model_registry import ModelRegistry
from automl_tlbx.analysis.problem_type import select_target
from automl_tlbx.analysis.profiler import AnalysisRecord, DatasetProfiler
from automl_tlbx.analysis.training import ResultsRecord, TrainingPipeline
from automl_tlbx.data.tabular_dataset import TabularDataset
from automl_tlbx.data.views import EncodedFeatures
from automl_tlbx.models.base import ModelKind
from automl_tlbx.utils.engine_config import DEFAULT_ENGINE_CFG, EngineConfig


logger = logging.getLogger(__name__)


class TabularWorkflow:
    """Drive the engine the way the interactive trainer does.

    Steps must run in order; calling a step before its prerequisite raises a
    ``ValueError``. Selecting another target resets the encoded matrices, so a
    workflow can be reused after an :class:`~automl_tlbx.errors.EngineError`.

    Example:
        >>> wf = TabularWorkflow(TabularDataset.from_frame(df))
        >>> wf.analyze().numeric_columns
        >>> wf.select_target("species").problem_type
        >>> wf.train("decisiontree").metrics
    """

    def __init__(
        self,
        dataset: TabularDataset,
        config: EngineConfig | None = None,
        registry: ModelRegistry | None = None,
    ) -> None:
        self.dataset = dataset
        self._cfg = config or DEFAULT_ENGINE_CFG
        self._pipeline = TrainingPipeline(registry=registry, config=self._cfg)
        self._analysis: AnalysisRecord | None = None
        self._encoded: EncodedFeatures | None = None

    @property
    def analysis(self) -> AnalysisRecord:
        if self._analysis is None:
            raise ValueError("Call analyze() first")
        return self._analysis

    def analyze(self) -> AnalysisRecord:
        """Profile the dataset (once) and return the analysis record."""
        if self._analysis is None:
            self._analysis = DatasetProfiler(self.dataset, config=self._cfg).fit().result()
        return self._analysis

    def select_target(self, target_col: str) -> AnalysisRecord:
        """Record ``target_col`` with its problem type and class balance.

        Raises:
            InvalidTargetError: If the column does not exist.
        """
        analysis = select_target(self.analyze(), self.dataset, target_col, config=self._cfg)
        self._encoded = None
        logger.info("Selected target '%s' (%s)", target_col, analysis.problem_type)
        return analysis

    def encode(self) -> EncodedFeatures:
        """Encode every non-target column and the target.

        Raises:
            NoValidRowsError: If every row is incomplete.
        """
        analysis = self.analysis
        if analysis.target_column is None:
            raise ValueError("Call select_target() first")
        if self._encoded is None:
            self._encoded = (
                FeatureEncoder(
                    self.dataset,
                    feature_cols=analysis.feature_columns(),
                    target_col=analysis.target_column,
                    config=self._cfg,
                )
                .fit()
                .result()
            )
        return self._encoded

    def train(self, model: ModelKind | str = ModelKind.AUTO) -> ResultsRecord:
        """Train and evaluate ``model`` on the encoded data.

        Raises:
            TrainingError: If the model cannot be trained.
        """
        encoded = self.encode()
        return self._pipeline.run_encoded(encoded, self.analysis.problem_type, model=model)

    def available_models(self) -> list[ModelKind]:
        """Model tokens available for the selected target's problem type."""
        if self.analysis.problem_type is None:
            raise ValueError("Call select_target() first")
        return self._pipeline.registry.available(self.analysis.problem_type)


def run_workflow(
    data: TabularDataset | pd.DataFrame | Iterable[Mapping[str, object]],
    target_col: str,
    model: ModelKind | str = ModelKind.AUTO,
    config: EngineConfig | None = None,
) -> tuple[AnalysisRecord, ResultsRecord]:
    """Profile ``data``, select ``target_col`` and train ``model`` in one call."""
    if isinstance(data, TabularDataset):
        dataset = data
    elif isinstance(data, pd.DataFrame):
        dataset = TabularDataset.from_frame(data)
    else:
        dataset = TabularDataset.from_records(data)

    wf = TabularWorkflow(dataset, config=config)
    wf.analyze()
    analysis = wf.select_target(target_col)
    return analysis, wf.train(model)
