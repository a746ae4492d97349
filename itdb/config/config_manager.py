"""
Configuration Manager for the integration-test database.

Holds the immutable settings of one test database container: image, names,
ports, tmpfs mounts, credentials and the readiness marker table. A couple of
fields can be overridden from the environment when the config is built.
"""

import os
from typing import Any, ClassVar, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from itdb.models.connection_parameters import ConnectionParameters

# Port the database listens on inside the container
DEFAULT_DB_PORT = 5432

LOCALHOST = '127.0.0.1'


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""
    pass


class ItDatabaseConfig(BaseModel):
    """
    Settings for the integration-test database container.

    Attributes:
        image_name: Database image reference
        container_name: Name (and network alias) of the container
        external_port: Host port bound to the database port
        network_name: Name of the attachable bridge network
        data_dir: Database data directory, mounted as tmpfs
        tmp_dir: Temporary files directory, mounted as tmpfs
        data_tmpfs_size: Size cap of the data directory mount
        tmp_tmpfs_size: Size cap of the temporary files mount
        current_container_id: Id of the container running the tests, if any
        verify_db_connection: Whether start/restart wait for the database
        db_username: Database user
        db_password: Database password
        db_name: Database name
        marker_table: Table queried to decide the database is ready
    """

    model_config = ConfigDict(frozen=True)

    # Environment variable mappings
    ENV_VARS: ClassVar[Dict[str, str]] = {
        'current_container_id': 'IT_CONTAINER',
        'image_name': 'IT_IMAGE_NAME',
    }

    image_name: str = Field('postgres:17', min_length=1)
    container_name: str = Field('node-it-container-qwerty12345', min_length=1)
    external_port: int = Field(3806, ge=1, le=65535)
    network_name: str = Field('node-it-test-net', min_length=1)
    data_dir: str = Field('/var/lib/postgresql/data', min_length=1)
    tmp_dir: str = Field('/tmp', min_length=1)
    data_tmpfs_size: str = '600m'
    tmp_tmpfs_size: str = '50m'
    current_container_id: Optional[str] = None
    verify_db_connection: bool = True
    db_username: str = 'ituser'
    db_password: str = 'ituser'
    db_name: str = 'nursebuddy'
    marker_table: str = Field('integration_test_flag', pattern=r'^[A-Za-z_][A-Za-z0-9_.]*$')

    @classmethod
    def from_env(cls, **overrides: Any) -> 'ItDatabaseConfig':
        """
        Build a configuration, letting the environment override some fields.

        Environment variables take precedence over the keyword arguments,
        which take precedence over the defaults. Empty variables are ignored.

        Raises:
            ConfigValidationError: If the resulting configuration is invalid
        """
        values: Dict[str, Any] = dict(overrides)
        for field_name, env_var in cls.ENV_VARS.items():
            env_value = os.getenv(env_var)
            if env_value:
                values[field_name] = env_value

        # Empty container id means "not running inside a container"
        if not values.get('current_container_id'):
            values['current_container_id'] = None

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid test database configuration: {e}") from e

    @property
    def runs_inside_network(self) -> bool:
        """True when the tests run in a container attached to the test network."""
        return self.current_container_id is not None

    @property
    def tmpfs_mounts(self) -> Dict[str, str]:
        """In-memory mounts for the database container."""
        return {
            self.data_dir: f"rw,noexec,nosuid,size={self.data_tmpfs_size}",
            self.tmp_dir: f"rw,noexec,nosuid,size={self.tmp_tmpfs_size}",
        }

    def connection_parameters(self) -> ConnectionParameters:
        """Derive how clients reach the database. No I/O."""
        if self.runs_inside_network:
            host, port = self.container_name, str(DEFAULT_DB_PORT)
        else:
            host, port = LOCALHOST, self.external_port

        return ConnectionParameters(
            host=host,
            port=port,
            user=self.db_username,
            password=self.db_password,
            database=self.db_name,
        )
