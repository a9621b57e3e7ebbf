"""Base entity class for domain entities."""

from uuid import UUID


class BaseEntity:
    """Base class for all domain entities.

    Entities are identified by their id. Two entities of the same class with
    the same id are equal; entities without an id are only equal to themselves.
    """

    def __init__(self, id: UUID | None = None) -> None:
        self.id = id

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        if self.id is None:
            return id(self)
        return hash((self.__class__.__name__, self.id))
