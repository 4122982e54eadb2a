"""
Notification interfaces module.

Contains the log event/result data classes and the abstract notifier
contract implemented by the Slack logger.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class LogEvent:
    """
    A single status message to be logged.

    Attributes:
        success: Whether the automation run succeeded.
        summary: Short summary ("synced ok", "error processing account").
        details: Optional transcript, rendered in a fixed-width block.
        fields: Optional per-call fields, appended after the default fields.
        entity: Optional type of the entity this message relates to.
        entity_id: Optional identifier of that entity.
    """
    success: Optional[bool]
    summary: Optional[str]
    details: Optional[str] = None
    fields: Dict[str, Any] = field(default_factory=dict)
    entity: Optional[str] = None
    entity_id: Optional[str] = None

    @property
    def has_entity(self) -> bool:
        """Check whether the entity pair was supplied."""
        return self.entity is not None or self.entity_id is not None


@dataclass
class LogResult:
    """
    Outcome of a log call.

    Attributes:
        success: Whether Slack accepted the message.
        status_code: HTTP status code (None when no response was received).
        error: Error description on failure.
        code: Machine-readable error code on failure.
        elapsed: Seconds spent in the HTTP exchange (when timing is measured).
    """
    success: bool
    status_code: int | None = None
    error: str | None = None
    code: str | None = None
    elapsed: float | None = None

    def __bool__(self) -> bool:
        return self.success

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the action output shape ({'success', 'error'})."""
        result: Dict[str, Any] = {'success': self.success}
        if self.error:
            result['error'] = self.error
        return result


class ILogNotifier(ABC):
    """
    Status log notifier interface.

    Defines the contract for delivering success/failure messages to a chat
    channel.
    """

    @abstractmethod
    def notify(self, event: LogEvent) -> LogResult:
        """
        Format and deliver a log event.

        Args:
            event: The event to deliver.

        Returns:
            LogResult describing the delivery outcome.
        """
        pass

    @abstractmethod
    def post(
        self,
        attachment: Dict[str, Any],
        username: Optional[str] = None
    ) -> LogResult:
        """
        Deliver a pre-built attachment.

        Args:
            attachment: Attachment dictionary in the chat wire format.
            username: Optional display name override.

        Returns:
            LogResult describing the delivery outcome.
        """
        pass
