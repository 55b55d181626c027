from .config import (
    BatchConfig,
    CompressionCurveConfig,
    load_batch_config,
)

__all__ = [
    "BatchConfig",
    "CompressionCurveConfig",
    "load_batch_config",
]
