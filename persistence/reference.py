"""Deferred handle to a persisted entity."""

from typing import Any, Callable, Optional

from serialization.exceptions import EntityNotFoundError

_UNLOADED = object()


class EntityReference:
    """
    Reference to an entity that is loaded on first access.

    The entity name and identifier are known up front, so a reference can be
    compared, hashed and serialized again without touching the persistence
    layer. Any other attribute access resolves the reference through its
    loader; a loader returning None means the entity no longer exists.
    """

    def __init__(self, entity_name: str, identifier: Any, loader: Callable[[], Optional[Any]]):
        self._entity_name = entity_name
        self._identifier = identifier
        self._loader = loader
        self._entity = _UNLOADED

    @property
    def entity_name(self) -> str:
        return self._entity_name

    @property
    def identifier(self) -> Any:
        return self._identifier

    @property
    def is_loaded(self) -> bool:
        """Whether the referenced entity has been fetched."""
        return self._entity is not _UNLOADED

    def resolve(self) -> Any:
        """
        Load the referenced entity, once.

        Raises:
            EntityNotFoundError: If the loader finds no entity for the identifier
        """
        if self._entity is _UNLOADED:
            entity = self._loader()
            if entity is None:
                raise EntityNotFoundError(self._entity_name, self._identifier)
            self._entity = entity
        return self._entity

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes not defined on the reference itself
        if name.startswith('_'):
            raise AttributeError(name)
        return getattr(self.resolve(), name)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EntityReference):
            return NotImplemented
        return (self._entity_name, self._identifier) == (other._entity_name, other._identifier)

    def __hash__(self) -> int:
        return hash((self._entity_name, self._identifier))

    def __repr__(self) -> str:
        state = "loaded" if self.is_loaded else "deferred"
        return f"<EntityReference {self._entity_name}#{self._identifier!r} ({state})>"
