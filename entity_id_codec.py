# entity_id_codec.py
"""
EntityId reference codec - Main package module
"""
from typing import Optional

from persistence.entity_manager import ClassMetadata, EntityManager
from persistence.in_memory import InMemoryEntityManager
from persistence.reference import EntityReference
from serialization.entity_id_handler import EntityIdHandler
from serialization.exceptions import (
    EntityIdError,
    EntityNotFoundError,
    HandlerNotRegisteredError,
    HandlerRegistrationError,
    InvalidEntityValueError,
    InvalidTypeDescriptorError,
    MissingAccessorError,
    MissingEntityNameError,
    UnknownEntityTypeError,
    UnsupportedCompositeIdentifierError,
)
from serialization.fields import EntityId
from serialization.handler_registry import Direction, HandlerRegistry, SubscribingMethod
from serialization.type_descriptor import TypeDescriptor


def build_handler_registry(entity_manager: EntityManager,
                           registry: Optional[HandlerRegistry] = None) -> HandlerRegistry:
    """Return a registry with the EntityId handler subscribed for the given entity manager."""
    registry = registry or HandlerRegistry()
    registry.register_subscribing_handler(EntityIdHandler(entity_manager))
    return registry


__all__ = [
    'build_handler_registry',
    'ClassMetadata',
    'Direction',
    'EntityId',
    'EntityIdError',
    'EntityIdHandler',
    'EntityManager',
    'EntityNotFoundError',
    'EntityReference',
    'HandlerNotRegisteredError',
    'HandlerRegistrationError',
    'HandlerRegistry',
    'InMemoryEntityManager',
    'InvalidEntityValueError',
    'InvalidTypeDescriptorError',
    'MissingAccessorError',
    'MissingEntityNameError',
    'SubscribingMethod',
    'TypeDescriptor',
    'UnknownEntityTypeError',
    'UnsupportedCompositeIdentifierError',
]
