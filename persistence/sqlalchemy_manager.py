"""
SQLAlchemy implementation of the EntityManager interface.

Entity names are resolved against the mappers of a declarative registry,
either by class name (``Contact``) or by dotted path (``app.models.Contact``).
"""

import logging
from typing import Any, Optional

from sqlalchemy.orm import Mapper, Session, registry as mapper_registry

from persistence.entity_manager import ClassMetadata, EntityManager
from persistence.reference import EntityReference
from serialization.exceptions import UnknownEntityTypeError

logger = logging.getLogger(__name__)


class SQLAlchemyEntityManager(EntityManager):
    """Metadata and deferred references backed by a SQLAlchemy session."""

    def __init__(self, session: Session, registry: mapper_registry):
        """
        Initialize entity manager.

        Args:
            session: SQLAlchemy session used to load referenced entities
            registry: Declarative registry holding the mapped entity classes
                (``Base.registry``)
        """
        self.session = session
        self.registry = registry

    def get_class_metadata(self, entity_name: str) -> Optional[ClassMetadata]:
        mapper = self._find_mapper(entity_name)
        if mapper is None:
            logger.debug("No mapper found for entity %s", entity_name)
            return None

        identifier = tuple(
            mapper.get_property_by_column(column).key for column in mapper.primary_key
        )
        return ClassMetadata(name=entity_name, entity_class=mapper.class_, identifier=identifier)

    def get_reference(self, entity_name: str, identifier: Any) -> EntityReference:
        mapper = self._find_mapper(entity_name)
        if mapper is None:
            raise UnknownEntityTypeError(entity_name)

        entity_class = mapper.class_
        return EntityReference(
            entity_name,
            identifier,
            lambda: self.session.get(entity_class, identifier),
        )

    def _find_mapper(self, entity_name: str) -> Optional[Mapper]:
        for mapper in self.registry.mappers:
            cls = mapper.class_
            if entity_name in (cls.__name__, f"{cls.__module__}.{cls.__qualname__}"):
                return mapper
        return None
