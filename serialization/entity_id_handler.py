# serialization/entity_id_handler.py
"""
Serialize entity references as their identifier and read them back lazily.

A field typed ``EntityId<'Contact'>`` is written as the scalar primary key of
the Contact it holds. On read, the key is turned into a deferred reference
obtained from the entity manager, without checking that the row exists.
"""
from typing import Any, List, Optional

from persistence.entity_manager import EntityManager
from persistence.reference import EntityReference
from serialization.exceptions import (
    InvalidEntityValueError,
    MissingAccessorError,
    UnknownEntityTypeError,
    UnsupportedCompositeIdentifierError,
)
from serialization.handler_registry import Direction, SubscribingMethod
from serialization.type_descriptor import TypeDescriptor
from utils.constants import ACCESSOR_PREFIX, ENTITY_ID_TYPE, JSON_FORMAT

# Values that cannot stand for an entity
NON_OBJECT_TYPES = (bool, int, float, complex, str, bytes, list, tuple, dict, set, frozenset)

_MISSING = object()


class EntityIdHandler:
    """Subscribing handler for the EntityId type."""

    def __init__(self, entity_manager: EntityManager):
        self.entity_manager = entity_manager

    @classmethod
    def get_subscribing_methods(cls) -> List[SubscribingMethod]:
        return [
            SubscribingMethod(
                direction=Direction.SERIALIZATION,
                format=JSON_FORMAT,
                type=ENTITY_ID_TYPE,
                method='serialize_entity_to_id',
            ),
            SubscribingMethod(
                direction=Direction.DESERIALIZATION,
                format=JSON_FORMAT,
                type=ENTITY_ID_TYPE,
                method='deserialize_id_to_entity',
            ),
        ]

    def deserialize_id_to_entity(self, visitor: Any, id: Any, type_: Any) -> Optional[Any]:
        """Turn an identifier into a deferred reference to the entity it names."""
        if id is None:
            return None
        entity_name = self.get_entity_name(type_)

        return self.entity_manager.get_reference(entity_name, id)

    def serialize_entity_to_id(self, visitor: Any, entity: Any, type_: Any) -> Any:
        """
        Return the identifier of an entity, or None.

        Raises:
            MissingEntityNameError: If the type does not name the entity
            InvalidEntityValueError: If the value is neither None nor an object
            UnknownEntityTypeError: If the entity name has no metadata
            UnsupportedCompositeIdentifierError: If the entity has no single identifier
            MissingAccessorError: If the entity cannot provide its identifier
        """
        entity_name = self.get_entity_name(type_)
        if entity is None:
            return None
        if isinstance(entity, NON_OBJECT_TYPES):
            raise InvalidEntityValueError(entity_name, type(entity).__name__)
        if isinstance(entity, EntityReference):
            if entity.entity_name != entity_name:
                raise InvalidEntityValueError(entity_name, f"EntityReference<{entity.entity_name}>")
            return entity.identifier

        identifier = self.get_entity_identifier(type_)
        return self.read_identifier(entity, identifier, entity_name)

    def get_entity_name(self, type_: Any) -> str:
        return TypeDescriptor.coerce(type_).entity_name

    def get_entity_identifier(self, type_: Any) -> str:
        """Return the name of the single identifying attribute of the target entity."""
        entity_name = self.get_entity_name(type_)
        class_metadata = self.entity_manager.get_class_metadata(entity_name)
        if not class_metadata:
            raise UnknownEntityTypeError(entity_name)

        identifiers = class_metadata.get_identifier()
        if len(identifiers) != 1:
            raise UnsupportedCompositeIdentifierError(entity_name, len(identifiers))

        return identifiers[0]

    @staticmethod
    def read_identifier(entity: Any, identifier: str, entity_name: str) -> Any:
        """Read an identifier through get_<name>(), get<Name>() or the plain attribute."""
        for getter in (f"{ACCESSOR_PREFIX}_{identifier}", ACCESSOR_PREFIX + identifier[:1].upper() + identifier[1:]):
            accessor = getattr(entity, getter, None)
            if callable(accessor):
                return accessor()

        value = getattr(entity, identifier, _MISSING)
        if value is _MISSING:
            raise MissingAccessorError(entity_name, identifier, type(entity).__name__)
        return value
