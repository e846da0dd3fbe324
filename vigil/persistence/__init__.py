"""Persistence layers for monitor state."""

from vigil.persistence.base import PersistenceLayer
from vigil.persistence.keys import MonitorKeys
from vigil.persistence.memory import InMemoryPersistence
from vigil.persistence.redis_store import RedisPersistence

__all__ = [
    "InMemoryPersistence",
    "MonitorKeys",
    "PersistenceLayer",
    "RedisPersistence",
]
