"""
Email content utilities for notification delivery.

This module provides reusable functions for cleaning recipient lists and
building the plain-text and HTML bodies of appointment confirmations.
"""

import logging
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

SHOP_NAME = 'Papus BarberShop'
CONFIRMATION_SUBJECT = f"Appointment Confirmation - {SHOP_NAME}"

# Order matters: '&' first so produced entities are not escaped twice
_HTML_ESCAPES = (
    ('&', '&amp;'),
    ('<', '&lt;'),
    ('>', '&gt;'),
    ('"', '&quot;'),
    ("'", '&#39;'),
)


def filter_recipients(recipients: Optional[Iterable[Optional[str]]]) -> List[str]:
    """
    Drop missing and blank addresses and trim the rest.

    Args:
        recipients: Raw recipient list (may be None or contain None/blank entries)

    Returns:
        List of trimmed, non-empty addresses in their original order

    Example:
        >>> filter_recipients(["  a@example.com ", None, "", "b@example.com"])
        ['a@example.com', 'b@example.com']
    """
    if not recipients:
        return []

    # A bare string is one address, not a sequence of characters
    if isinstance(recipients, str):
        recipients = [recipients]

    cleaned = []
    for recipient in recipients:
        if recipient is None:
            continue
        address = str(recipient).strip()
        if address:
            cleaned.append(address)

    return cleaned


def escape_html(text: Optional[str]) -> str:
    """
    Escape the five HTML metacharacters (& < > " ').

    Args:
        text: Raw value (None is rendered as an empty string)

    Returns:
        str: Text safe to embed in HTML element content or attribute values

    Example:
        >>> escape_html("<script>alert('x')</script>")
        '&lt;script&gt;alert(&#39;x&#39;)&lt;/script&gt;'
    """
    if text is None:
        return ''

    result = str(text)
    for char, entity in _HTML_ESCAPES:
        result = result.replace(char, entity)
    return result


def _has_comments(comments: Optional[str]) -> bool:
    return comments is not None and bool(comments.strip())


def build_confirmation_text(
    client_name: str,
    date: str,
    time: str,
    barber_name: str,
    service_name: str,
    comments: Optional[str] = None
) -> str:
    """
    Build the plain-text body of an appointment confirmation.

    Values are inserted literally. The comments line is left out when
    comments are blank.

    Returns:
        str: Plain-text email body
    """
    lines = [
        f"Hello {client_name}! 👋",
        "",
        "✨ Your appointment has been confirmed ✨",
        "",
        "📋 Appointment details:",
        f"📅 Date: {date}",
        f"🕐 Time: {time}",
        f"💇 Barber: {barber_name}",
        f"✂️ Service: {service_name}",
    ]

    if _has_comments(comments):
        lines.append(f"💬 Comments: {comments}")

    lines.extend([
        "",
        f"🎯 We look forward to seeing you at {SHOP_NAME} 🎯",
        "",
        "Kind regards,",
        f"The {SHOP_NAME} Team 💈",
    ])

    return "\n".join(lines)


def build_confirmation_html(
    client_name: str,
    date: str,
    time: str,
    barber_name: str,
    service_name: str,
    comments: Optional[str] = None
) -> str:
    """
    Build the HTML body of an appointment confirmation.

    Every caller-supplied value is passed through escape_html().

    Returns:
        str: HTML email body
    """
    parts = [
        '<!DOCTYPE html>',
        '<html>',
        '<head><meta charset="UTF-8"></head>',
        '<body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">',
        '<div style="max-width: 600px; margin: 0 auto; padding: 20px;">',
        f'<h2 style="color: #2c3e50;">Hello {escape_html(client_name)}! 👋</h2>',
        '<p style="font-size: 18px; color: #27ae60;">✨ Your appointment has been confirmed ✨</p>',
        '<div style="background-color: #f8f9fa; padding: 20px; border-radius: 5px; margin: 20px 0;">',
        '<h3 style="color: #2c3e50; margin-top: 0;">📋 Appointment details:</h3>',
        f'<p><strong>📅 Date:</strong> {escape_html(date)}</p>',
        f'<p><strong>🕐 Time:</strong> {escape_html(time)}</p>',
        f'<p><strong>💇 Barber:</strong> {escape_html(barber_name)}</p>',
        f'<p><strong>✂️ Service:</strong> {escape_html(service_name)}</p>',
    ]

    if _has_comments(comments):
        parts.append(f'<p><strong>💬 Comments:</strong> {escape_html(comments)}</p>')

    parts.extend([
        '</div>',
        f'<p style="font-size: 16px; color: #2c3e50;">🎯 We look forward to seeing you at {SHOP_NAME} 🎯</p>',
        f'<p>Kind regards,<br>The {SHOP_NAME} Team 💈</p>',
        '</div>',
        '</body>',
        '</html>',
    ])

    return ''.join(parts)
