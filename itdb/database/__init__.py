"""
Database package for the integration-test database.

Provides the readiness check run against a freshly started container.
"""

from .connection_verifier import (
    ConnectionVerifier,
    DatabaseConnectionError,
    next_wait_ms
)

__all__ = [
    'ConnectionVerifier',
    'DatabaseConnectionError',
    'next_wait_ms'
]
