# serialization/handler_registry.py
import logging
import re
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import Field

from serialization.exceptions import HandlerRegistrationError
from utils.base_model import ImmutableModel
from utils.constants import HANDLER_REGISTRY_CONTEXT_KEY, JSON_FORMAT

# Configure logging
logger = logging.getLogger(__name__)

# (visitor, value, type descriptor) -> converted value
HandlerCallable = Callable[[Any, Any, Any], Any]


class Direction(Enum):
    """Direction of a traversal."""
    SERIALIZATION = "serialize"
    DESERIALIZATION = "deserialize"


class SubscribingMethod(ImmutableModel):
    """One handler method declared for a type and format.

    The direction and method can be omitted: a missing direction subscribes
    both directions, a missing method name is derived from the type and format.
    """
    type: str = Field(description="Custom type tag, e.g. 'EntityId'")
    format: str = Field(default=JSON_FORMAT, description="Wire format")
    direction: Optional[Direction] = Field(default=None, description="Traversal direction")
    method: Optional[str] = Field(default=None, description="Name of the handler method")

    def directions(self) -> List[Direction]:
        return [self.direction] if self.direction else list(Direction)

    def method_name(self, direction: Direction) -> str:
        """Return the declared method name, or the conventional one for a direction."""
        if self.method:
            return self.method
        type_name = re.sub(r'(?<!^)(?=[A-Z])', '_', self.type).lower()
        joint = "to" if direction is Direction.SERIALIZATION else "from"
        return f"{direction.value}_{type_name}_{joint}_{self.format}"


class HandlerRegistry:
    """Handlers keyed by direction, type and format."""

    def __init__(self):
        self.handlers: Dict[Tuple[Direction, str, str], HandlerCallable] = {}

    def register_handler(self, direction: Direction, type_name: str, format_name: str,
                         handler: HandlerCallable) -> None:
        """Register a callable for one direction, type and format."""
        self.handlers[(direction, type_name, format_name)] = handler
        logger.debug("Registered %s handler for %s (%s)", direction.value, type_name, format_name)

    def register_subscribing_handler(self, handler: Any) -> None:
        """Register every method a handler declares in get_subscribing_methods()."""
        for subscription in handler.get_subscribing_methods():
            for direction in subscription.directions():
                method_name = subscription.method_name(direction)
                method = getattr(handler, method_name, None)
                if not callable(method):
                    raise HandlerRegistrationError(handler, method_name)
                self.register_handler(direction, subscription.type, subscription.format, method)

    def get_handler(self, direction: Direction, type_name: str,
                    format_name: str = JSON_FORMAT) -> Optional[HandlerCallable]:
        return self.handlers.get((direction, type_name, format_name))

    def has_handler(self, direction: Direction, type_name: str, format_name: str = JSON_FORMAT) -> bool:
        return (direction, type_name, format_name) in self.handlers

    def context(self) -> Dict[str, Any]:
        """Context to pass to model_dump()/model_validate() so EntityId fields find their handlers."""
        return {HANDLER_REGISTRY_CONTEXT_KEY: self}
