"""Public package exports for Audo_Comp with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "BatchCoordinator",
    "BatchResult",
    "CompressionExecutor",
    "FileSelector",
    "JsonMetadataStore",
    "LoudnessAnalyzer",
    "LoudnessStats",
    "OutcomeStatus",
    "ProcessingOutcome",
    "AnalysisError",
    "CompressionError",
    "NotFoundError",
    "PersistenceError",
    "ValidationError",
]

_EXPORT_MODULES: dict[str, str] = {
    "BatchCoordinator": "audo_comp.application.batch_service",
    "BatchResult": "audo_comp.domain.models",
    "CompressionExecutor": "audo_comp.application.compression_executor",
    "FileSelector": "audo_comp.selection",
    "JsonMetadataStore": "audo_comp.infrastructure.json_metadata_store",
    "LoudnessAnalyzer": "audo_comp.application.loudness_analyzer",
    "LoudnessStats": "audo_comp.domain.models",
    "OutcomeStatus": "audo_comp.domain.models",
    "ProcessingOutcome": "audo_comp.domain.models",
    "AnalysisError": "audo_comp.errors",
    "CompressionError": "audo_comp.errors",
    "NotFoundError": "audo_comp.errors",
    "PersistenceError": "audo_comp.errors",
    "ValidationError": "audo_comp.errors",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'audo_comp' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
