"""Defines the interface the EntityId codec needs from a persistence layer."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Tuple

from pydantic import Field

from utils.base_model import ImmutableModel


class ClassMetadata(ImmutableModel):
    """Structural metadata of a persisted entity type."""
    name: str = Field(description="Logical entity name")
    entity_class: Optional[type] = Field(default=None, description="Class of the entity instances")
    identifier: Tuple[str, ...] = Field(description="Identifying attribute names, in order")

    def get_identifier(self) -> Tuple[str, ...]:
        """Return the identifying attribute names."""
        return self.identifier

    @property
    def is_composite(self) -> bool:
        return len(self.identifier) > 1


class EntityManager(ABC):
    """Abstract base class for persistence layers the codec can delegate to."""

    @abstractmethod
    def get_class_metadata(self, entity_name: str) -> Optional[ClassMetadata]:
        """Returns the metadata of an entity type, or None if the name is unknown."""
        pass

    @abstractmethod
    def get_reference(self, entity_name: str, identifier: Any) -> Any:
        """Returns a deferred handle to an entity without loading or checking it."""
        pass
