"""
Tests for the notification Lambda handler.
"""

import json
import pytest
from unittest.mock import Mock, patch
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

import notification_handler


@pytest.fixture
def lambda_context():
    """Mock Lambda context."""
    context = Mock()
    context.request_id = "test-request-id"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test"
    return context


@pytest.fixture
def confirmation_event():
    """Sample appointment confirmation event."""
    return {
        'type': 'appointment_confirmation',
        'recipients': ['client@example.com', 'barber@example.com'],
        'clientName': 'Ana Torres',
        'date': '2025-11-12',
        'time': '10:30',
        'barberName': 'Luis',
        'serviceName': 'Skin Fade',
        'comments': 'Beard trim too'
    }


class TestModuleWiring:
    """Test module-level initialization."""

    def test_starts_in_degraded_mode_without_credentials(self):
        """Test missing SES credentials leave the provider unconfigured."""
        assert notification_handler.dispatcher.provider_configured is False

    def test_executor_sized_from_settings(self):
        """Test pool size comes from EMAIL_EXECUTOR_THREADS."""
        assert notification_handler.executor.max_workers == notification_handler.settings.executor_threads

    def test_exit_policy_from_settings(self):
        """Test EMAIL_SHUTDOWN_WAIT decides whether queued work drains at exit."""
        assert notification_handler.executor.drain_on_exit is notification_handler.settings.shutdown_wait


class TestLambdaHandler:
    """Test event routing."""

    @patch('notification_handler.dispatcher')
    def test_appointment_confirmation_accepted(self, mock_dispatcher, confirmation_event, lambda_context):
        """Test a confirmation is queued and acknowledged with 202."""
        response = notification_handler.lambda_handler(confirmation_event, lambda_context)

        assert response['statusCode'] == 202
        assert json.loads(response['body']) == {'status': 'accepted', 'type': 'appointment_confirmation'}
        mock_dispatcher.send_appointment_confirmation.assert_called_once_with(
            recipients=['client@example.com', 'barber@example.com'],
            client_name='Ana Torres',
            date='2025-11-12',
            time='10:30',
            barber_name='Luis',
            service_name='Skin Fade',
            comments='Beard trim too'
        )

    @patch('notification_handler.dispatcher')
    def test_comments_optional(self, mock_dispatcher, confirmation_event, lambda_context):
        """Test missing comments are passed as None."""
        del confirmation_event['comments']

        response = notification_handler.lambda_handler(confirmation_event, lambda_context)

        assert response['statusCode'] == 202
        assert mock_dispatcher.send_appointment_confirmation.call_args.kwargs['comments'] is None

    @patch('notification_handler.dispatcher')
    def test_blank_recipients_still_accepted(self, mock_dispatcher, confirmation_event, lambda_context):
        """Test dropping is the dispatcher's concern, not a client error."""
        confirmation_event['recipients'] = ['', None]

        response = notification_handler.lambda_handler(confirmation_event, lambda_context)

        assert response['statusCode'] == 202
        mock_dispatcher.send_appointment_confirmation.assert_called_once()

    @patch('notification_handler.dispatcher')
    def test_generic_email_accepted(self, mock_dispatcher, lambda_context):
        """Test a generic email is queued and acknowledged with 202."""
        event = {
            'type': 'generic',
            'recipient': 'client@example.com',
            'subject': 'Reminder',
            'body': 'See you tomorrow'
        }

        response = notification_handler.lambda_handler(event, lambda_context)

        assert response['statusCode'] == 202
        mock_dispatcher.send_generic_email.assert_called_once_with(
            recipient='client@example.com',
            subject='Reminder',
            body='See you tomorrow'
        )

    @pytest.mark.parametrize('event', [
        {},
        {'type': 'sms'},
        {'type': None},
    ])
    def test_unknown_type_rejected(self, event, lambda_context):
        """Test unsupported notification types return 400."""
        response = notification_handler.lambda_handler(event, lambda_context)

        assert response['statusCode'] == 400
        assert 'error' in json.loads(response['body'])

    @pytest.mark.parametrize('event', [None, [], 'appointment_confirmation', 42])
    def test_non_object_event_rejected(self, event, lambda_context):
        """Test an event that is not a JSON object returns 400."""
        response = notification_handler.lambda_handler(event, lambda_context)

        assert response['statusCode'] == 400
        assert 'JSON object' in json.loads(response['body'])['error']

    def test_unhashable_type_rejected(self, lambda_context):
        """Test a non-string type field returns 400."""
        response = notification_handler.lambda_handler({'type': ['generic']}, lambda_context)

        assert response['statusCode'] == 400

    @patch('notification_handler.dispatcher')
    def test_recipients_must_be_list(self, mock_dispatcher, confirmation_event, lambda_context):
        """Test a non-list recipients field returns 400."""
        confirmation_event['recipients'] = 'client@example.com'

        response = notification_handler.lambda_handler(confirmation_event, lambda_context)

        assert response['statusCode'] == 400
        mock_dispatcher.send_appointment_confirmation.assert_not_called()

    @patch('notification_handler.dispatcher')
    def test_missing_required_field_rejected(self, mock_dispatcher, confirmation_event, lambda_context):
        """Test a missing appointment field returns 400."""
        del confirmation_event['barberName']

        response = notification_handler.lambda_handler(confirmation_event, lambda_context)

        assert response['statusCode'] == 400
        assert 'barberName' in json.loads(response['body'])['error']

    def test_degraded_mode_end_to_end(self, confirmation_event, lambda_context):
        """Test real wiring accepts requests without SES configured."""
        response = notification_handler.lambda_handler(confirmation_event, lambda_context)

        assert response['statusCode'] == 202


def test_health_check(lambda_context):
    """Test health check endpoint."""
    response = notification_handler.health_check({}, lambda_context)

    assert response['statusCode'] == 200
    body = json.loads(response['body'])
    assert body['status'] == 'healthy'
    assert body['environment'] == 'test'
    assert body['providerConfigured'] is False
    assert body['executorRunning'] is True
