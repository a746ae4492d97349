"""Docker network management for the integration-test database."""

from .network_manager import NetworkManager, is_conflict

__all__ = ['NetworkManager', 'is_conflict']
