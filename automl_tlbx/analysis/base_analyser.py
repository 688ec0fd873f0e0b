"""Base analyzer class for the profiling and encoding stages of the engine."""

from abc import ABC, abstractmethod
from typing import Any


class BaseAnalyser(ABC):
    """Abstract base class for dataset analysis stages.

    All analyzers must:
    1. Accept a :class:`~automl_tlbx.data.TabularDataset` in their constructor
    2. Implement fit() to perform the computation and return self for chaining
    3. Implement result() to return a dataclass with the outputs

    Analyzers are pure with respect to the dataset: fit() reads the rows and
    never mutates them.

    ---

    ### Adding a New Stage

    ```python
    @dataclass(frozen=True)
    class MyStageResult:
        '''Results package for MyStage.'''
        summary: pd.DataFrame

    class MyStage(BaseAnalyser):
        def __init__(self, dataset: TabularDataset, config: EngineConfig | None = None):
            self._dataset = dataset
            self._cfg = config or DEFAULT_ENGINE_CFG
            self._result: MyStageResult | None = None

        def fit(self) -> "MyStage":
            self._result = MyStageResult(...)
            return self

        def result(self) -> MyStageResult:
            if self._result is None:
                raise ValueError("Must call fit() before result()")
            return self._result
    ```

    Then add a ``make_my_stage()`` factory method to ``TabularDataset`` that
    imports the stage lazily.
    """

    @abstractmethod
    def fit(self) -> "BaseAnalyser":
        """Run the analysis on the dataset.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def result(self) -> Any:
        """Return the analysis output.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...
