# serialization/fields.py
"""
pydantic integration for the EntityId type.

    class ContactNote(ImmutableModel):
        contact: EntityId["Contact"]

    registry = HandlerRegistry()
    registry.register_subscribing_handler(EntityIdHandler(entity_manager))

    data = note.model_dump(mode="json", context=registry.context())
    note = ContactNote.model_validate(data, context=registry.context())

The handlers are looked up in the HandlerRegistry carried by pydantic's
context on every call, so one model class can be used with any entity manager.
"""
from decimal import Decimal
from typing import Annotated, Any, Mapping, Optional
from uuid import UUID

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from serialization.entity_id_handler import NON_OBJECT_TYPES
from serialization.exceptions import HandlerNotRegisteredError
from serialization.handler_registry import Direction, HandlerCallable, HandlerRegistry
from serialization.type_descriptor import TypeDescriptor
from utils.constants import ENTITY_ID_TYPE, HANDLER_REGISTRY_CONTEXT_KEY, JSON_FORMAT

# Input that is an identifier rather than an entity already built in Python
_IDENTIFIER_TYPES = (str, bytes, int, float, Decimal, UUID)


class EntityId:
    """Annotation marker for a field holding a reference to a persisted entity."""

    def __init__(self, *params: Any, format_name: str = JSON_FORMAT):
        self.descriptor = TypeDescriptor(name=ENTITY_ID_TYPE, params=params)
        self.format_name = format_name

    def __class_getitem__(cls, params: Any) -> Any:
        if not isinstance(params, tuple):
            params = (params,)
        return Annotated[Any, cls(*params)]

    def __repr__(self) -> str:
        return f"EntityId({self.descriptor})"

    def __get_pydantic_core_schema__(self, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        # A missing entity name is a model definition error
        self.descriptor.entity_name

        return core_schema.with_info_plain_validator_function(
            self.deserialize,
            serialization=core_schema.plain_serializer_function_ser_schema(
                self.serialize,
                info_arg=True,
                when_used="always",
            ),
        )

    def __get_pydantic_json_schema__(self, schema: core_schema.CoreSchema,
                                     handler: GetJsonSchemaHandler) -> JsonSchemaValue:
        return {
            "type": ["integer", "string"],
            "description": f"Identifier of a {self.descriptor.entity_name}",
        }

    def deserialize(self, value: Any, info: core_schema.ValidationInfo) -> Any:
        if value is None:
            return None
        if not isinstance(value, _IDENTIFIER_TYPES):
            if isinstance(value, NON_OBJECT_TYPES):
                raise ValueError(
                    f"Value of {self.descriptor} must be an identifier, an entity or None, "
                    f"{type(value).__name__} given"
                )
            # Entities and references built in Python are kept as they are
            return value
        handler = self.get_handler(Direction.DESERIALIZATION, info.context)
        return handler(info, value, self.descriptor)

    def serialize(self, value: Any, info: core_schema.SerializationInfo) -> Any:
        if value is None:
            return None
        handler = self.get_handler(Direction.SERIALIZATION, info.context)
        return handler(info, value, self.descriptor)

    def get_handler(self, direction: Direction, context: Optional[Mapping[str, Any]]) -> HandlerCallable:
        registry = (context or {}).get(HANDLER_REGISTRY_CONTEXT_KEY)
        handler = None
        if isinstance(registry, HandlerRegistry):
            handler = registry.get_handler(direction, self.descriptor.name, self.format_name)
        if handler is None:
            raise HandlerNotRegisteredError(direction.value, self.descriptor.name, self.format_name)
        return handler
