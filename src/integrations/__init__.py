"""
External service integrations (Amazon SES).
"""
