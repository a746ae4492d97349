"""
Integration-test database lifecycle

Docker container and network management plus the lifecycle facade used by
test harnesses.
"""

from .database_manager import DatabaseNotReadyError, DatabaseTestManager
from .docker_manager import DockerTestManager

__all__ = ['DatabaseTestManager', 'DatabaseNotReadyError', 'DockerTestManager']
