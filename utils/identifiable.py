from typing import Any, ClassVar, Dict, Tuple
from pydantic import BaseModel, model_validator

from utils.constants import DEFAULT_IDENTIFIER_FIELD


class Identifiable(BaseModel):
    """
    Mixin class for pydantic models that are persisted as entities.

    An entity is addressed by the attribute(s) named in ``identifier_fields``.
    Most entities have a single ``id`` field; entities keyed by several
    attributes override ``identifier_fields``, which makes them unusable
    with the EntityId codec.

    Usage:
        class Contact(ImmutableModel, Identifiable):
            id: int
            name: str

        class Membership(ImmutableModel, Identifiable):
            identifier_fields = ("contact_id", "group_id")
            contact_id: int
            group_id: int
    """
    identifier_fields: ClassVar[Tuple[str, ...]] = (DEFAULT_IDENTIFIER_FIELD,)

    @classmethod
    def identifier_names(cls) -> Tuple[str, ...]:
        """Return the names of the identifying attributes, in declaration order."""
        return tuple(cls.identifier_fields)

    def identifier_values(self) -> Dict[str, Any]:
        """Map each identifying attribute to its value on this instance."""
        return {name: getattr(self, name) for name in self.identifier_names()}

    @model_validator(mode='after')
    def validate_identifier(self) -> 'Identifiable':
        """Validate that every identifying attribute is set and not blank."""
        for name in self.identifier_names():
            if name not in type(self).model_fields:
                raise ValueError(f"Identifier field '{name}' is not declared on {type(self).__name__}")
            value = getattr(self, name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValueError(f"Identifier '{name}' cannot be empty")
        return self
