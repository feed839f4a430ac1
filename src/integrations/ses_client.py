"""
Amazon SES Provider Client

Thin wrapper around the boto3 SES client used by the notification
dispatcher to send one email to one recipient.

Usage:
    from integrations import ses_client

    client = ses_client.create_ses_client(access_key, secret_key, region)
    if client is not None:
        message_id = client.send(
            sender="noreply@example.com",
            recipient="customer@example.com",
            subject="Hello",
            text_body="Plain text",
            html_body="<p>HTML</p>"   # Optional
        )

create_ses_client() returns None when credentials are not configured;
callers treat that as degraded mode.
"""

import logging
from typing import Optional

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError

from config import ConfigurationError

logger = logging.getLogger(__name__)

CHARSET = 'UTF-8'


# ============================================================================
# Custom Exception Classes
# ============================================================================

class ValidationException(Exception):
    """Raised when send arguments are invalid."""
    pass


class ProviderSendError(Exception):
    """
    Raised when SES fails or rejects a send.

    Attributes:
        recipient: Address the send was addressed to
        error_code: AWS error code (e.g. "MessageRejected"), or the
                    exception class name for non-AWS failures
    """

    def __init__(self, message: str, recipient: str = '', error_code: str = 'Unknown'):
        super().__init__(message)
        self.recipient = recipient
        self.error_code = error_code


# ============================================================================
# Client Construction
# ============================================================================

def _client_config() -> Config:
    """Build botocore config: no retries, bounded timeouts."""
    return Config(
        retries={
            'max_attempts': 1,  # 1 attempt total (no retries)
            'mode': 'standard'
        },
        connect_timeout=5,   # 5 seconds to establish connection
        read_timeout=15      # 15 seconds max for the SendEmail response
    )


def _validate_region(region: str) -> None:
    """
    Check the region against the SES regions known to botocore.

    Every partition is searched (aws, aws-us-gov, aws-cn, ...).

    Raises:
        ConfigurationError: If region is empty or not an SES region
    """
    if not region:
        raise ConfigurationError("AWS SES region is empty")

    session = boto3.session.Session()
    available = set()
    for partition in session.get_available_partitions():
        available.update(session.get_available_regions('ses', partition_name=partition))

    if available and region not in available:
        raise ConfigurationError(
            f"Invalid AWS SES region: '{region}'. "
            f"Expected one of: {', '.join(sorted(available))}"
        )


def create_ses_client(
    access_key: str,
    secret_key: str,
    region: str
) -> Optional['SesEmailClient']:
    """
    Create the SES provider client from static credentials.

    Args:
        access_key: AWS access key id
        secret_key: AWS secret access key
        region: AWS region hosting SES (e.g. "us-east-2")

    Returns:
        SesEmailClient, or None when credentials are not configured

    Raises:
        ConfigurationError: If credentials are present but the region is invalid
    """
    if not access_key and not secret_key:
        logger.warning("SES credentials not configured, provider client disabled")
        return None

    if not access_key or not secret_key:
        missing = 'AWS_SES_ACCESS_KEY' if not access_key else 'AWS_SES_SECRET_KEY'
        logger.error(f"Incomplete SES credentials: {missing} is not set, provider client disabled")
        return None

    _validate_region(region)

    client = boto3.client(
        'ses',
        region_name=region,
        aws_access_key_id=access_key,
        aws_secret_access_key=secret_key,
        config=_client_config()
    )

    logger.info(f"SES client initialized: region={region}, connect_timeout=5s, read_timeout=15s, max_attempts=1")
    return SesEmailClient(client)


# ============================================================================
# Sending
# ============================================================================

def _content(data: str) -> dict:
    return {'Data': data, 'Charset': CHARSET}


class SesEmailClient:
    """
    Sends single-recipient emails through Amazon SES.

    The wrapped boto3 client is thread-safe; one instance is shared by all
    delivery workers and never mutated after construction.
    """

    def __init__(self, client):
        self._client = client

    def send(
        self,
        sender: str,
        recipient: str,
        subject: str,
        text_body: str,
        html_body: Optional[str] = None
    ) -> str:
        """
        Send one email to one recipient.

        Args:
            sender: Verified SES sender address
            recipient: Destination address
            subject: Subject line
            text_body: Plain-text body
            html_body: Optional HTML body (sent as multipart alternative)

        Returns:
            str: SES message id

        Raises:
            ValidationException: If sender or recipient is empty
            ProviderSendError: If SES rejects the message or the call fails
        """
        if not sender or not sender.strip():
            raise ValidationException("Sender address must be a non-empty string")
        if not recipient or not recipient.strip():
            raise ValidationException("Recipient address must be a non-empty string")

        recipient = recipient.strip()

        body = {'Text': _content(text_body or '')}
        if html_body:
            body['Html'] = _content(html_body)

        try:
            response = self._client.send_email(
                Source=sender,
                Destination={'ToAddresses': [recipient]},
                Message={
                    'Subject': _content(subject or ''),
                    'Body': body
                }
            )
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', 'Unknown')
            error_message = e.response.get('Error', {}).get('Message', str(e))
            raise ProviderSendError(
                f"SES rejected email to {recipient}: {error_code}: {error_message}",
                recipient=recipient,
                error_code=error_code
            ) from e
        except Exception as e:
            raise ProviderSendError(
                f"SES send to {recipient} failed: {e}",
                recipient=recipient,
                error_code=type(e).__name__
            ) from e

        return response['MessageId']
