"""DDD application layer."""

from .batch_service import BatchCoordinator
from .compression_executor import CompressionExecutor
from .event_publisher import EventPublisher, NullEventPublisher
from .loudness_analyzer import LoudnessAnalyzer

__all__ = ["BatchCoordinator", "CompressionExecutor", "EventPublisher", "NullEventPublisher", "LoudnessAnalyzer"]
