"""
Notification dispatch - core business logic.

This module turns notification requests into delivery tasks:
1. Filter recipients (drop the request if none remain)
2. Build subject and bodies
3. Submit one task to the DeliveryExecutor
4. On a worker thread, send through SES once per recipient
5. Log per-recipient outcomes and a batch summary

Nothing raised below the public methods reaches the caller: callers only
learn that a request was accepted, never whether it was delivered.
"""

import logging
from typing import Iterable, Optional

from config import DEFAULT_SENDER
from .models import AppointmentDetails, BatchSummary, DeliveryOutcome, SendRequest
from services import email as email_service
from services.executor import DeliveryExecutor, ExecutorUnavailable
from integrations.ses_client import SesEmailClient, ProviderSendError

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """
    Accepts notification requests and delivers them in the background.

    The SES client is optional. Without it every delivery task logs what
    would have been sent and returns (degraded mode).
    """

    def __init__(
        self,
        executor: DeliveryExecutor,
        ses_client: Optional[SesEmailClient] = None,
        sender: str = DEFAULT_SENDER
    ):
        self._executor = executor
        self._ses_client = ses_client
        self.sender = sender

    @property
    def provider_configured(self) -> bool:
        return self._ses_client is not None

    def validate_configuration(self) -> bool:
        """
        Log the email configuration report.

        Returns:
            bool: True if the SES client is configured
        """
        logger.info("=" * 50)
        logger.info("Validating Amazon SES configuration")

        if not self.provider_configured:
            logger.error("⚠ SES client is not configured.")
            logger.error("⚠ Confirmation emails will NOT be sent.")
            logger.error("⚠ To enable delivery set the following environment variables:")
            logger.error("⚠   - AWS_SES_ACCESS_KEY (AWS IAM access key id)")
            logger.error("⚠   - AWS_SES_SECRET_KEY (AWS IAM secret access key)")
            logger.error("⚠   - AWS_SES_REGION (AWS region, e.g. us-east-2)")
            logger.error("⚠   - SES_FROM_EMAIL (sender address verified in SES)")
        else:
            logger.info("✓ SES client configured")
            logger.info(f"✓ Sender: {self.sender}")

        logger.info("=" * 50)
        return self.provider_configured

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------

    def send_appointment_confirmation(
        self,
        recipients: Optional[Iterable[Optional[str]]],
        client_name: str,
        date: str,
        time: str,
        barber_name: str,
        service_name: str,
        comments: Optional[str] = None
    ) -> None:
        """
        Queue an appointment confirmation for every usable recipient.

        Returns immediately. Blank and missing addresses are dropped; if none
        remain the request is dropped with a warning and nothing is queued.

        Args:
            recipients: Destination addresses (may contain None/blank entries)
            client_name: Customer name
            date: Appointment date
            time: Appointment time
            barber_name: Assigned barber
            service_name: Booked service
            comments: Optional customer comments
        """
        valid_recipients = email_service.filter_recipients(recipients)
        if not valid_recipients:
            logger.warning("⚠ No valid recipients for appointment confirmation, request dropped")
            return

        try:
            details = AppointmentDetails(
                client_name=client_name,
                date=date,
                time=time,
                barber_name=barber_name,
                service_name=service_name,
                comments=comments
            )
            request = self._build_confirmation_request(valid_recipients, details)
        except Exception as e:
            logger.error(f"✗ Failed to build appointment confirmation: {e}", exc_info=True)
            return

        def deliver_confirmation():
            self._deliver_confirmation(request)

        if self._submit(deliver_confirmation):
            logger.info(
                f"Appointment confirmation queued for background delivery. "
                f"Recipients: {list(request.recipients)}"
            )

    def send_generic_email(self, recipient: Optional[str], subject: str, body: str) -> None:
        """
        Queue a plain-text email to a single recipient.

        Returns immediately. A blank recipient is dropped with a warning.

        Args:
            recipient: Destination address
            subject: Subject line
            body: Plain-text body
        """
        valid_recipients = email_service.filter_recipients([recipient])
        if not valid_recipients:
            logger.warning("⚠ No recipient provided for email, request dropped")
            return

        request = SendRequest(
            recipients=tuple(valid_recipients),
            sender=self.sender,
            subject=subject,
            text_body=body
        )

        def deliver_email():
            self._deliver_single(request)

        if self._submit(deliver_email):
            logger.info(f"Email queued for background delivery. Recipient: {valid_recipients[0]}")

    # ------------------------------------------------------------------
    # Caller-thread helpers
    # ------------------------------------------------------------------

    def _build_confirmation_request(self, recipients, details: AppointmentDetails) -> SendRequest:
        """Build subject and both bodies for a confirmation."""
        fields = (
            details.client_name,
            details.date,
            details.time,
            details.barber_name,
            details.service_name,
            details.comments,
        )
        return SendRequest(
            recipients=tuple(recipients),
            sender=self.sender,
            subject=email_service.CONFIRMATION_SUBJECT,
            text_body=email_service.build_confirmation_text(*fields),
            html_body=email_service.build_confirmation_html(*fields)
        )

    def _submit(self, task) -> bool:
        """
        Hand a task to the executor.

        Returns:
            bool: False if the executor refused the task (logged, not raised)
        """
        try:
            self._executor.submit(task)
            return True
        except ExecutorUnavailable as e:
            logger.error(f"✗ Delivery executor unavailable, notification dropped: {e}")
            return False

    # ------------------------------------------------------------------
    # Worker-thread task bodies
    # ------------------------------------------------------------------

    def _deliver_confirmation(self, request: SendRequest) -> Optional[BatchSummary]:
        """
        Send a confirmation to each recipient in order.

        Runs on a delivery worker. A failed recipient does not stop the loop.

        Returns:
            BatchSummary, or None in degraded mode or after a critical failure
        """
        if self._ses_client is None:
            self._log_skipped(request)
            return None

        try:
            logger.info(
                f"Starting confirmation delivery. Sender: {request.sender}, "
                f"Recipients: {list(request.recipients)}"
            )

            summary = BatchSummary()
            for recipient in request.recipients:
                summary.add(self._attempt_send(request, recipient))

            logger.info(
                f"Confirmation delivery completed. Total sent: "
                f"{summary.succeeded}/{summary.total}"
            )
            if summary.failed:
                logger.warning(f"⚠ Confirmation not delivered to: {summary.failed_recipients}")

            return summary

        except Exception as e:
            logger.error(f"✗ Critical error during confirmation delivery: {e}", exc_info=True)
            return None

    def _deliver_single(self, request: SendRequest) -> Optional[DeliveryOutcome]:
        """Send a single-recipient email. Runs on a delivery worker."""
        if self._ses_client is None:
            self._log_skipped(request)
            return None

        return self._attempt_send(request, request.recipients[0])

    def _attempt_send(self, request: SendRequest, recipient: str) -> DeliveryOutcome:
        """
        Send one message to one recipient.

        Returns:
            DeliveryOutcome describing the attempt (never raises)
        """
        try:
            message_id = self._ses_client.send(
                sender=request.sender,
                recipient=recipient,
                subject=request.subject,
                text_body=request.text_body,
                html_body=request.html_body
            )
        except ProviderSendError as e:
            logger.error(f"✗ Failed to send email to {recipient} (code={e.error_code}): {e}")
            return DeliveryOutcome.failed(recipient, str(e))
        except Exception as e:
            logger.error(f"✗ Failed to send email to {recipient}: {e}", exc_info=True)
            return DeliveryOutcome.failed(recipient, str(e))

        logger.info(f"✓ Email sent to {recipient}. MessageId: {message_id}")
        return DeliveryOutcome.sent(recipient, message_id)

    def _log_skipped(self, request: SendRequest) -> None:
        logger.warning("⚠ SES client is not configured. Email will not be sent.")
        logger.info(
            f"Email that would have been sent: subject='{request.subject}', "
            f"recipients={list(request.recipients)}"
        )
