"""
Domain layer for notification dispatch.

This layer contains:
- Data models (send requests, appointment details)
- Business logic (validation, task submission, per-recipient delivery)
- Result types (explicit per-recipient success/failure)
"""
