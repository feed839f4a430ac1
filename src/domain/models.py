"""
Data models for the notification domain.

These type-safe data structures define clear contracts between components.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class AppointmentDetails:
    """
    Appointment fields rendered into a confirmation email.

    Attributes:
        client_name: Customer name used in the greeting
        date: Appointment date, already formatted for display
        time: Appointment time, already formatted for display
        barber_name: Assigned barber
        service_name: Booked service (type of cut)
        comments: Free-form customer comments (optional)
    """
    client_name: str
    date: str
    time: str
    barber_name: str
    service_name: str
    comments: Optional[str] = None


@dataclass(frozen=True)
class SendRequest:
    """
    One logical notification, ready for delivery.

    Built on the caller's thread and handed to a single delivery task.

    Attributes:
        recipients: Trimmed, non-empty destination addresses, in send order
        sender: Configured sender address
        subject: Subject line
        text_body: Plain-text body
        html_body: HTML body (None for text-only messages)
    """
    recipients: Tuple[str, ...]
    sender: str
    subject: str
    text_body: str
    html_body: Optional[str] = None

    def __post_init__(self):
        if not self.recipients:
            raise ValueError("SendRequest requires at least one recipient")


@dataclass
class DeliveryOutcome:
    """
    Result of one send attempt to one recipient.

    This explicit result type makes success/failure handling clear
    and prevents exceptions from being used for control flow.

    Attributes:
        recipient: Destination address
        success: Whether the provider accepted the message
        message_id: Provider message id (on success)
        error_message: Error description (on failure)
    """
    recipient: str
    success: bool
    message_id: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def sent(cls, recipient: str, message_id: str) -> 'DeliveryOutcome':
        return cls(recipient=recipient, success=True, message_id=message_id)

    @classmethod
    def failed(cls, recipient: str, error_message: str) -> 'DeliveryOutcome':
        return cls(recipient=recipient, success=False, error_message=error_message)

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return f"DeliveryOutcome(success=True, recipient={self.recipient}, message_id={self.message_id})"
        else:
            return f"DeliveryOutcome(success=False, recipient={self.recipient}, error={self.error_message})"


@dataclass
class BatchSummary:
    """Per-recipient outcomes of one delivery task."""
    outcomes: List[DeliveryOutcome] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed(self) -> int:
        return self.total - self.succeeded

    @property
    def failed_recipients(self) -> List[str]:
        return [o.recipient for o in self.outcomes if not o.success]

    def add(self, outcome: DeliveryOutcome) -> 'BatchSummary':
        self.outcomes.append(outcome)
        return self
