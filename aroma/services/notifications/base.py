"""
Notification Service Abstract Base Class

Defines the interface for sending transactional email.
Supports both Mock (development) and Real (production) implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

CONFIRMATION_SUBJECT = "Your Reservation is Confirmed!"


@dataclass
class NotificationResult:
    """Result from sending a notification."""
    success: bool
    message_id: Optional[str] = None
    error_message: Optional[str] = None
    provider: str = "unknown"


def format_reservation_date(value: Union[date, datetime, str]) -> str:
    """Render a booking date as `04 July 2025`."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return value.strftime("%d %B %Y")


def reservation_confirmation_body(
    customer_name: str,
    reservation_date: Union[date, datetime, str],
    reservation_time: str,
    guests: int,
    restaurant_name: str,
) -> tuple[str, str]:
    """(html, text) bodies of the confirmation email."""
    when = format_reservation_date(reservation_date)
    text = (
        f"Dear {customer_name},\n"
        f"Your reservation for {guests} guest(s) on {when} at {reservation_time} "
        f"has been confirmed.\n"
        f"We look forward to welcoming you at {restaurant_name}!"
    )
    html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h1 style="color: #b8860b;">Reservation Confirmed</h1>
        <p>Dear {customer_name},</p>
        <div style="background: #f8f9fa; padding: 15px; border-radius: 8px; margin: 20px 0;">
            <p><strong>Date:</strong> {when}</p>
            <p><strong>Time:</strong> {reservation_time}</p>
            <p><strong>Guests:</strong> {guests}</p>
        </div>
        <p>We look forward to welcoming you at {restaurant_name}!</p>
    </div>
    """
    return html, text


class BaseNotificationService(ABC):
    """Abstract base class for notification services."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def send_email(
        self,
        to_email: str,
        subject: str,
        body_html: str,
        body_text: Optional[str] = None,
    ) -> NotificationResult:
        """Send an email."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check service connectivity."""
        pass

    async def send_reservation_confirmation(
        self,
        customer_name: str,
        customer_email: str,
        reservation_date: Union[date, datetime, str],
        reservation_time: str,
        guests: int,
        restaurant_name: str,
    ) -> NotificationResult:
        """Tell the guest their booking was confirmed."""
        html, text = reservation_confirmation_body(
            customer_name, reservation_date, reservation_time, guests, restaurant_name
        )
        return await self.send_email(
            to_email=customer_email,
            subject=CONFIRMATION_SUBJECT,
            body_html=html,
            body_text=text,
        )
