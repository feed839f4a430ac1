"""
AWS Lambda handler for queuing appointment notifications.

Thin orchestration layer that delegates to NotificationDispatcher.
Policy: Accept and return. Delivery happens on background workers and its
outcome is only visible in CloudWatch logs.
"""

import json
import logging
from typing import Dict, Any

from config import Settings
from domain.notification_dispatcher import NotificationDispatcher
from integrations import ses_client
from services.executor import DeliveryExecutor

settings = Settings.from_environment()

# Configure logging
logger = logging.getLogger()
logger.setLevel(settings.log_level)

# Add console handler for local testing (AWS Lambda provides handlers automatically)
if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.log_level)
    formatter = logging.Formatter('%(levelname)s - %(message)s')
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

# Initialize once at module level (reused across invocations)
executor = DeliveryExecutor(
    max_workers=settings.executor_threads,
    drain_on_exit=settings.shutdown_wait
)
dispatcher = NotificationDispatcher(
    executor=executor,
    ses_client=ses_client.create_ses_client(
        settings.ses_access_key,
        settings.ses_secret_key,
        settings.ses_region
    ),
    sender=settings.sender
)
dispatcher.validate_configuration()


def _response(status_code: int, body: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps(body)
    }


def _require_str(event: Dict[str, Any], key: str, required: bool = True) -> str:
    value = event.get(key)
    if value is None:
        if required:
            raise ValueError(f"{key} is required")
        return ''
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string")
    return value


def _queue_appointment_confirmation(event: Dict[str, Any]) -> None:
    recipients = event.get('recipients')
    if not isinstance(recipients, list):
        raise ValueError("recipients must be a list")

    dispatcher.send_appointment_confirmation(
        recipients=recipients,
        client_name=_require_str(event, 'clientName'),
        date=_require_str(event, 'date'),
        time=_require_str(event, 'time'),
        barber_name=_require_str(event, 'barberName'),
        service_name=_require_str(event, 'serviceName'),
        comments=_require_str(event, 'comments', required=False) or None
    )


def _queue_generic_email(event: Dict[str, Any]) -> None:
    dispatcher.send_generic_email(
        recipient=_require_str(event, 'recipient', required=False),
        subject=_require_str(event, 'subject'),
        body=_require_str(event, 'body')
    )


_ROUTES = {
    'appointment_confirmation': _queue_appointment_confirmation,
    'generic': _queue_generic_email,
}


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Queue a notification for background delivery.

    Expected event format:
    {
        "type": "appointment_confirmation",
        "recipients": ["client@example.com", "barber@example.com"],
        "clientName": "Ana",
        "date": "2025-11-12",
        "time": "10:30",
        "barberName": "Luis",
        "serviceName": "Fade",
        "comments": "Optional"
    }
    or
    {
        "type": "generic",
        "recipient": "client@example.com",
        "subject": "Subject",
        "body": "Plain text body"
    }

    Returns:
        202 once the request is accepted (delivery is not awaited),
        400 if the event is malformed
    """
    if not isinstance(event, dict):
        logger.warning(f"⚠ Unsupported event payload: {type(event).__name__}")
        return _response(400, {'error': 'event must be a JSON object'})

    notification_type = event.get('type')
    route = _ROUTES.get(notification_type) if isinstance(notification_type, str) else None

    if route is None:
        logger.warning(f"⚠ Unsupported notification type: {notification_type}")
        return _response(400, {
            'error': f"type must be one of: {', '.join(sorted(_ROUTES))}"
        })

    try:
        route(event)
    except ValueError as ve:
        logger.warning(f"⚠ Invalid {notification_type} event: {ve}")
        return _response(400, {'error': str(ve)})

    return _response(202, {'status': 'accepted', 'type': notification_type})


def health_check(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Simple health check endpoint for monitoring.
    """
    return _response(200, {
        'status': 'healthy',
        'environment': settings.environment,
        'providerConfigured': dispatcher.provider_configured,
        'executorRunning': executor.is_running
    })
