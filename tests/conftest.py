"""
Centralized test configuration and fixtures for itdb.

This module provides shared test fixtures that:
1. Configure logging for tests
2. Provide a stateful mock Docker client for unit tests
3. Provide asyncpg-style connection doubles for the readiness check
"""

import itertools
import logging
from typing import Any, Dict
from unittest.mock import AsyncMock, Mock

import docker
import pytest

from itdb.config.config_manager import ItDatabaseConfig

# Configure logging for tests
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

_ids = itertools.count(1)


def make_mock_network(name: str, networks: Dict[str, Any]) -> Mock:
    """Mock Docker network that removes itself from `networks` on remove()."""
    network = Mock()
    network.name = name
    network.id = f"net{next(_ids)}"
    network.remove.side_effect = lambda: networks.pop(name, None)
    return network


def make_mock_container(name: str, containers: Dict[str, Any]) -> Mock:
    """Mock Docker container tracking a running/stopped status."""
    container = Mock()
    container.name = name
    container.id = f"ctr{next(_ids)}"
    container.status = 'created'

    def start():
        container.status = 'running'

    def stop():
        container.status = 'exited'

    container.start.side_effect = start
    container.restart.side_effect = start
    container.stop.side_effect = stop
    container.remove.side_effect = lambda force=False: containers.pop(name, None)
    return container


def make_docker_client() -> Mock:
    """
    Build a mock DockerClient backed by in-memory networks and containers.

    The dicts are exposed as `client.state_networks` and
    `client.state_containers` so tests can inspect what exists.
    """
    networks: Dict[str, Any] = {}
    containers: Dict[str, Any] = {}
    client = Mock()
    client.state_networks = networks
    client.state_containers = containers

    def create_network(name, **kwargs):
        network = make_mock_network(name, networks)
        network.create_kwargs = kwargs
        networks[name] = network
        return network

    def get_network(name):
        if name not in networks:
            raise docker.errors.NotFound(f"network {name} not found")
        return networks[name]

    def create_container(**kwargs):
        container = make_mock_container(kwargs['name'], containers)
        container.create_kwargs = kwargs
        containers[kwargs['name']] = container
        return container

    def get_container(name):
        if name not in containers:
            raise docker.errors.NotFound(f"No such container: {name}")
        return containers[name]

    client.networks.list.side_effect = lambda: list(networks.values())
    client.networks.create.side_effect = create_network
    client.networks.get.side_effect = get_network
    client.containers.create.side_effect = create_container
    client.containers.get.side_effect = get_container
    client.api.create_endpoint_config.side_effect = lambda aliases=None: {'Aliases': aliases}
    return client


def make_db_connection(rows=None) -> AsyncMock:
    """asyncpg.Connection double returning `rows` from fetch()."""
    connection = AsyncMock()
    connection.fetch.return_value = [{'id': 1}] if rows is None else rows
    return connection


@pytest.fixture
def docker_client():
    """Stateful mock Docker client."""
    return make_docker_client()


@pytest.fixture
def it_config():
    """Configuration used by the end-to-end scenarios."""
    return ItDatabaseConfig(db_name='nursebuddy', external_port=3806, verify_db_connection=True)


@pytest.fixture
def external_config():
    """Configuration for tests running inside a container on the test network."""
    return ItDatabaseConfig(current_container_id='runner123')


@pytest.fixture
def db_connection():
    return make_db_connection()


@pytest.fixture
def db_connect(db_connection):
    """asyncpg.connect double that always succeeds."""
    return AsyncMock(return_value=db_connection)


@pytest.fixture
def no_sleep():
    """Sleep double recording the requested waits."""
    return AsyncMock()

