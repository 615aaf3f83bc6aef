"""In-memory implementation of the EntityManager interface."""

import logging
from typing import Any, Dict, Optional, Sequence

from persistence.entity_manager import ClassMetadata, EntityManager
from persistence.reference import EntityReference
from serialization.exceptions import UnknownEntityTypeError
from utils.constants import DEFAULT_IDENTIFIER_FIELD
from utils.identifiable import Identifiable

# Configure logging
logger = logging.getLogger(__name__)


class InMemoryEntityManager(EntityManager):
    """Identity map of entities kept in memory, keyed by entity name and identifier."""

    def __init__(self):
        self.class_metadata: Dict[str, ClassMetadata] = {}  # name -> metadata
        self.class_names: Dict[type, str] = {}  # class -> name
        self.identity_map: Dict[str, Dict[Any, Any]] = {}  # name -> identifier -> entity

    def register_entity_class(self, entity_class: type, name: Optional[str] = None,
                              identifier: Optional[Sequence[str]] = None) -> ClassMetadata:
        """Register an entity class under a logical name (the class name by default)."""
        name = name or entity_class.__name__
        if identifier is None:
            if isinstance(entity_class, type) and issubclass(entity_class, Identifiable):
                identifier = entity_class.identifier_names()
            else:
                identifier = (DEFAULT_IDENTIFIER_FIELD,)

        metadata = ClassMetadata(name=name, entity_class=entity_class, identifier=tuple(identifier))
        self.class_metadata[name] = metadata
        self.class_names[entity_class] = name
        self.identity_map.setdefault(name, {})
        logger.debug("Registered entity %s with identifier %s", name, metadata.identifier)
        return metadata

    def persist(self, entity: Any) -> Any:
        """Add an entity to the identity map and return its identifier."""
        name = self._name_of(entity)
        identifier = self._identifier_of(name, entity)
        self.identity_map[name][identifier] = entity
        return identifier

    def remove(self, entity: Any) -> None:
        """Remove an entity from the identity map, if present."""
        name = self._name_of(entity)
        identifier = self._identifier_of(name, entity)
        self.identity_map[name].pop(identifier, None)

    def find(self, entity_name: str, identifier: Any) -> Optional[Any]:
        """Return the stored entity, or None."""
        return self.identity_map.get(entity_name, {}).get(identifier)

    def get_class_metadata(self, entity_name: str) -> Optional[ClassMetadata]:
        return self.class_metadata.get(entity_name)

    def get_reference(self, entity_name: str, identifier: Any) -> EntityReference:
        if entity_name not in self.class_metadata:
            raise UnknownEntityTypeError(entity_name)
        return EntityReference(entity_name, identifier, lambda: self.find(entity_name, identifier))

    def _name_of(self, entity: Any) -> str:
        for cls in type(entity).__mro__:
            if cls in self.class_names:
                return self.class_names[cls]
        raise UnknownEntityTypeError(type(entity).__name__)

    def _identifier_of(self, name: str, entity: Any) -> Any:
        names = self.class_metadata[name].identifier
        if len(names) == 1:
            return getattr(entity, names[0])
        return tuple(getattr(entity, n) for n in names)
