"""Configuration management package for the integration-test database."""

from .config_manager import DEFAULT_DB_PORT, LOCALHOST, ConfigValidationError, ItDatabaseConfig

__all__ = ['ItDatabaseConfig', 'ConfigValidationError', 'DEFAULT_DB_PORT', 'LOCALHOST']
