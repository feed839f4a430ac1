"""
Pytest configuration and fixtures for all tests.
"""

import os
import sys
import pytest

# Add src to Python path before any imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '../src'))

# Set up test environment variables before importing any modules.
# SES credentials are cleared so module-level wiring starts in degraded mode
# and no AWS client is ever built.
os.environ['AWS_SES_ACCESS_KEY'] = ''
os.environ['AWS_SES_SECRET_KEY'] = ''
os.environ.setdefault('AWS_SES_REGION', 'us-east-1')
os.environ.setdefault('SES_FROM_EMAIL', 'noreply@example.com')
os.environ.setdefault('EMAIL_EXECUTOR_THREADS', '2')
os.environ.setdefault('ENVIRONMENT', 'test')
os.environ.setdefault('LOG_LEVEL', 'INFO')


class InlineExecutor:
    """Executor double that runs each task on the submitting thread."""

    def __init__(self):
        self.submitted = []

    def submit(self, task):
        self.submitted.append(task)
        task()


@pytest.fixture
def inline_executor():
    """Executor that runs tasks immediately."""
    return InlineExecutor()


@pytest.fixture
def appointment():
    """Sample appointment fields."""
    return {
        'client_name': 'Ana Torres',
        'date': '2025-11-12',
        'time': '10:30',
        'barber_name': 'Luis',
        'service_name': 'Skin Fade',
        'comments': 'Please trim the beard too',
    }
