# utils/base_model.py
from typing import TypeVar, Any, cast
from pydantic import BaseModel

T = TypeVar('T', bound=BaseModel)


class ImmutableModel(BaseModel):
    """
    Base class for value objects that describe types and metadata.

    Type descriptors, class metadata and subscribing-method records are
    built once and shared by every serialization call, so they are frozen:
    - Immutability: instances cannot be modified after creation
    - Hashability: frozen models can be used as dictionary keys
    - Copyability: modified copies are made via with_changes()
    """
    model_config = {
        "frozen": True,
        "arbitrary_types_allowed": True,
    }

    def with_changes(self, **changes: Any) -> T:
        """
        Create a new instance with specified changes.

        Raises:
            ValueError: If an invalid field name is provided
        """
        current_data = {name: getattr(self, name) for name in type(self).model_fields}

        for key, value in changes.items():
            if key not in current_data:
                raise ValueError(f"Invalid field: {key}")
            current_data[key] = value

        return cast(T, self.__class__.model_validate(current_data))
