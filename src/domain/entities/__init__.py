"""Domain entities."""

from src.domain.entities.base import BaseEntity
from src.domain.entities.proxy_match import ProxyMatch
from src.domain.entities.proxy_participant import ProxyParticipant


__all__ = [
    "BaseEntity",
    "ProxyMatch",
    "ProxyParticipant",
]
