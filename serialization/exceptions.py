"""
Exceptions raised by the EntityId codec and its collaborators.

All of them are configuration or usage errors: they are raised
synchronously to the caller and never retried. None of them derives from
ValueError, so pydantic lets them propagate instead of folding them into a
ValidationError.
"""

from typing import Any, Optional


class EntityIdError(Exception):
    """Base exception for all EntityId codec errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MissingEntityNameError(EntityIdError):
    """Raised when a type descriptor does not name the target entity."""

    def __init__(self, type_name: str = "EntityId"):
        super().__init__(
            message=f"You must specify the entity name in the type, e.g. {type_name}<'Contact'>.",
            details={"type": type_name},
        )


class InvalidTypeDescriptorError(EntityIdError):
    """Raised when a value cannot be interpreted as a type descriptor."""

    def __init__(self, value: Any):
        super().__init__(
            message=f"Can't interpret {value!r} as a type descriptor",
            details={"value": value},
        )


class InvalidEntityValueError(EntityIdError):
    """Raised when a non-None value to serialize is not an entity object."""

    def __init__(self, entity_name: str, kind: str):
        super().__init__(
            message=f"Value of EntityId<'{entity_name}'> must be an entity or None, {kind} given.",
            details={"entity_name": entity_name, "kind": kind},
        )


class UnknownEntityTypeError(EntityIdError):
    """Raised when the entity manager has no metadata for an entity name."""

    def __init__(self, entity_name: str):
        super().__init__(
            message=f"Can't find metadata for entity {entity_name}",
            details={"entity_name": entity_name},
        )


class UnsupportedCompositeIdentifierError(EntityIdError):
    """Raised when the target entity does not have exactly one identifier."""

    def __init__(self, entity_name: str, count: int):
        self.entity_name = entity_name
        self.count = count
        super().__init__(
            message=(
                f"EntityId<> supports entities with only one identifier, "
                f"{entity_name} contains {count} identifier(s)."
            ),
            details={"entity_name": entity_name, "count": count},
        )


class MissingAccessorError(EntityIdError):
    """Raised when an entity exposes no accessor for its identifier attribute."""

    def __init__(self, entity_name: str, attribute: str, kind: str):
        super().__init__(
            message=f"{kind} has no accessor for identifier '{attribute}' of entity {entity_name}",
            details={"entity_name": entity_name, "attribute": attribute, "kind": kind},
        )


class HandlerNotRegisteredError(EntityIdError):
    """Raised when a field needs a handler that is not available in the context."""

    def __init__(self, direction: str, type_name: str, format_name: str):
        super().__init__(
            message=f"No {direction} handler registered for type {type_name} in format {format_name}",
            details={"direction": direction, "type": type_name, "format": format_name},
        )


class HandlerRegistrationError(EntityIdError):
    """Raised when a subscribing method does not exist on its handler."""

    def __init__(self, handler: Any, method: str):
        super().__init__(
            message=f"{type(handler).__name__} has no method {method}",
            details={"handler": type(handler).__name__, "method": method},
        )


class EntityNotFoundError(EntityIdError):
    """Raised when a deferred reference points at an entity that does not exist."""

    def __init__(self, entity_name: str, identifier: Any):
        super().__init__(
            message=f"Entity {entity_name} with identifier {identifier!r} was not found",
            details={"entity_name": entity_name, "identifier": identifier},
        )
