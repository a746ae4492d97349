"""
Connection parameters handed to tests that use the integration database.
"""

from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class ConnectionParameters(BaseModel):
    """
    How a client reaches the test database.

    The port is the host port (int) when connecting through localhost, or the
    database port inside the container (str) when connecting over the test
    network.
    """

    model_config = ConfigDict(frozen=True)

    host: str = Field(..., description="Host name or address")
    port: Union[int, str] = Field(..., description="Database port")
    user: str = Field(..., description="Database user")
    password: str = Field(..., description="Database password")
    database: str = Field(..., description="Database name")

    def dsn(self) -> str:
        """Get a PostgreSQL connection string for these parameters."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"
