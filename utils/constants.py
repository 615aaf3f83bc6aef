"""
Constants for the EntityId reference codec.
"""

# Custom type tag handled by the EntityId codec, as in EntityId<'Contact'>
ENTITY_ID_TYPE = "EntityId"

# Only wire format the codec subscribes to
JSON_FORMAT = "json"

# Key under which the HandlerRegistry travels in pydantic's validation/serialization context
HANDLER_REGISTRY_CONTEXT_KEY = "handler_registry"

# Accessor convention: get + ucfirst(attribute), e.g. id -> getId
ACCESSOR_PREFIX = "get"

# Identifier attribute assumed for entity classes that declare none
DEFAULT_IDENTIFIER_FIELD = "id"
