"""Application layer."""

from .event_publisher import EventPublisher, NullEventPublisher
from .check_service import CheckSubmission

__all__ = ["EventPublisher", "NullEventPublisher", "CheckSubmission"]
