from .engine_config import DEFAULT_ENGINE_CFG, EngineConfig


__all__ = [
    "DEFAULT_ENGINE_CFG",
    "EngineConfig",
]
