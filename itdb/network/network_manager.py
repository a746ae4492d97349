"""
Docker Network Manager

Finds or creates the attachable bridge network the test database and the
test runner container share.
"""

import asyncio
import logging
from typing import Optional

import docker
from docker.models.networks import Network

logger = logging.getLogger(__name__)


def is_conflict(error: docker.errors.APIError) -> bool:
    """Check whether an engine error means the resource already exists."""
    return error.status_code == 409 or "already exists" in str(error)


class NetworkManager:
    """Manages the test network through an injected Docker client."""

    def __init__(self, docker_client=None):
        """Initialize NetworkManager with Docker client."""
        if docker_client is None:
            self.docker_client = docker.from_env()
        else:
            self.docker_client = docker_client

    async def find_network(self, name: str) -> Optional[Network]:
        """
        Look up a network by exact name.

        Listing errors are tolerated and reported as "not found".
        """
        try:
            networks = await asyncio.to_thread(self.docker_client.networks.list)
        except docker.errors.DockerException as e:
            logger.debug(f"Failed to list docker networks: {e}")
            return None

        for network in networks:
            if network.name == name:
                return network
        return None

    async def ensure_network(self, name: str) -> Network:
        """
        Return the network called `name`, creating it if it does not exist.

        Raises:
            docker.errors.APIError: If creation fails for a reason other than
                another client creating the same network first
        """
        network = await self.find_network(name)
        if network is not None:
            logger.debug(f"Reusing network '{name}' ({network.id})")
            return network

        logger.info("No existing network, creating it.")
        try:
            network = await asyncio.to_thread(
                self.docker_client.networks.create,
                name,
                driver='bridge',
                check_duplicate=True,
                attachable=True,
            )
        except docker.errors.APIError as e:
            if not is_conflict(e):
                raise
            # Somebody else created it between our lookup and create
            logger.info(f"Network '{name}' was created concurrently, fetching it")
            return await asyncio.to_thread(self.docker_client.networks.get, name)

        logger.info(f"Network '{name}' created")
        return network

    async def get_network(self, name: str) -> Optional[Network]:
        """Fetch a network by name, or None if it does not exist."""
        try:
            return await asyncio.to_thread(self.docker_client.networks.get, name)
        except docker.errors.NotFound:
            return None

    async def remove_network(self, network: Network) -> None:
        """Remove a network."""
        await asyncio.to_thread(network.remove)
        logger.info(f"Network '{network.name}' removed")
