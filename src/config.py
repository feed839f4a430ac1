"""
Runtime configuration for the notification service.

All values are read once at startup from environment variables. Missing
provider credentials are a supported state (degraded mode), not an error.
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_SENDER = 'noreply@papusbarbershop.com'
DEFAULT_REGION = 'us-east-1'
DEFAULT_EXECUTOR_THREADS = 4

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


class ConfigurationError(Exception):
    """Raised when an environment variable holds an unusable value."""
    pass


@dataclass(frozen=True)
class Settings:
    """
    Service settings.

    Attributes:
        sender: Verified SES sender address
        ses_access_key: AWS access key id for SES (empty if unset)
        ses_secret_key: AWS secret access key for SES (empty if unset)
        ses_region: AWS region hosting SES
        executor_threads: Worker count of the delivery pool
        shutdown_wait: Drain in-flight deliveries at process exit
        environment: Deployment environment name
        log_level: Root logger level name
    """
    sender: str = DEFAULT_SENDER
    ses_access_key: str = ''
    ses_secret_key: str = ''
    ses_region: str = DEFAULT_REGION
    executor_threads: int = DEFAULT_EXECUTOR_THREADS
    shutdown_wait: bool = True
    environment: str = 'dev'
    log_level: str = 'INFO'

    @property
    def ses_credentials_present(self) -> bool:
        """True when both SES credentials are set."""
        return bool(self.ses_access_key and self.ses_secret_key)

    @classmethod
    def from_environment(cls, environ: Optional[Mapping[str, str]] = None) -> 'Settings':
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Returns:
            Settings: Parsed settings

        Raises:
            ConfigurationError: If EMAIL_EXECUTOR_THREADS is not a positive integer
                or LOG_LEVEL is not a logging level name
        """
        if environ is None:
            environ = os.environ

        return cls(
            sender=environ.get('SES_FROM_EMAIL', '').strip() or DEFAULT_SENDER,
            ses_access_key=environ.get('AWS_SES_ACCESS_KEY', '').strip(),
            ses_secret_key=environ.get('AWS_SES_SECRET_KEY', '').strip(),
            ses_region=environ.get('AWS_SES_REGION', '').strip() or DEFAULT_REGION,
            executor_threads=_parse_thread_count(environ.get('EMAIL_EXECUTOR_THREADS')),
            shutdown_wait=environ.get('EMAIL_SHUTDOWN_WAIT', 'true').strip().lower() in _TRUE_VALUES,
            environment=environ.get('ENVIRONMENT', 'dev'),
            log_level=_parse_log_level(environ.get('LOG_LEVEL')),
        )


def _parse_log_level(raw: Optional[str]) -> str:
    if raw is None or not raw.strip():
        return 'INFO'

    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigurationError(
            f"LOG_LEVEL must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL, got: '{raw}'"
        )

    return level


def _parse_thread_count(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_EXECUTOR_THREADS

    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(
            f"EMAIL_EXECUTOR_THREADS must be an integer, got: '{raw}'"
        )

    if value < 1:
        raise ConfigurationError(
            f"EMAIL_EXECUTOR_THREADS must be at least 1, got: {value}"
        )

    return value
