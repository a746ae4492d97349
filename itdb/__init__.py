"""
itdb: ephemeral database containers for integration tests

Creates (or reuses) a named database container on a dedicated Docker network,
waits until the database answers and hands out connection parameters.
"""

__version__ = "0.1.0"

from .config import ConfigValidationError, ItDatabaseConfig
from .models import CleanupReport, ConnectionParameters
from .testing import DatabaseNotReadyError, DatabaseTestManager

__all__ = [
    'ItDatabaseConfig',
    'ConfigValidationError',
    'ConnectionParameters',
    'CleanupReport',
    'DatabaseTestManager',
    'DatabaseNotReadyError',
]
