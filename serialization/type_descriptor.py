# serialization/type_descriptor.py
import re
from typing import Any, Mapping, Tuple

from pydantic import Field, ValidationError

from serialization.exceptions import InvalidTypeDescriptorError, MissingEntityNameError
from utils.base_model import ImmutableModel
from utils.constants import ENTITY_ID_TYPE

# EntityId, EntityId<Contact>, EntityId<'Contact'>, EntityId<"a", "b">
_TYPE_PATTERN = re.compile(r"^\s*(?P<name>[A-Za-z_][\w\\.]*)\s*(?:<(?P<params>.*)>)?\s*$")
_QUOTED = re.compile(r"^(['\"])(?P<value>.*)\1$")


class TypeDescriptor(ImmutableModel):
    """A custom type tag with its parameters.

    For EntityId the first parameter is the logical name of the target entity.
    """
    name: str = Field(default=ENTITY_ID_TYPE, description="Type tag, e.g. 'EntityId'")
    params: Tuple[Any, ...] = Field(default=(), description="Type parameters")

    @property
    def entity_name(self) -> str:
        """The target entity's logical name.

        Raises:
            MissingEntityNameError: If the first parameter is absent, empty or not a string
        """
        entity_name = self.params[0] if self.params else None
        if not entity_name or not isinstance(entity_name, str):
            raise MissingEntityNameError(self.name)
        return entity_name

    def __str__(self) -> str:
        if not self.params:
            return self.name
        rendered = ", ".join(f"'{p}'" if isinstance(p, str) else str(p) for p in self.params)
        return f"{self.name}<{rendered}>"

    @classmethod
    def parse(cls, type_string: str) -> 'TypeDescriptor':
        """Parse a type string such as ``EntityId<'Contact'>``."""
        match = _TYPE_PATTERN.match(type_string)
        if not match:
            raise InvalidTypeDescriptorError(type_string)

        params = []
        raw_params = match.group("params")
        if raw_params is not None and raw_params.strip():
            for raw in raw_params.split(","):
                raw = raw.strip()
                quoted = _QUOTED.match(raw)
                params.append(quoted.group("value") if quoted else raw)

        return cls(name=match.group("name"), params=tuple(params))

    @classmethod
    def coerce(cls, value: Any) -> 'TypeDescriptor':
        """Build a descriptor from a descriptor, a type string or a mapping."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, Mapping):
            try:
                return cls.model_validate(dict(value))
            except ValidationError as e:
                raise InvalidTypeDescriptorError(value) from e
        raise InvalidTypeDescriptorError(value)
