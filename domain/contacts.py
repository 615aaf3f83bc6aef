# domain/contacts.py
from typing import ClassVar, Optional, Tuple

from pydantic import Field, field_validator

from serialization.fields import EntityId
from utils.base_model import ImmutableModel
from utils.identifiable import Identifiable


class Company(ImmutableModel, Identifiable):
    """A company contacts can work for, keyed by its registration code."""
    identifier_fields: ClassVar[Tuple[str, ...]] = ("code",)

    code: str = Field(description="Registration code")
    name: str = Field(description="Company name")


class Contact(ImmutableModel, Identifiable):
    """A person in the contact book."""
    id: int = Field(description="Primary key")
    name: str = Field(description="Full name")
    email: Optional[str] = Field(default=None, description="E-mail address")

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        """Validate that the name is not blank."""
        if not value.strip():
            raise ValueError("Name cannot be empty")
        return value

    def get_id(self) -> int:
        return self.id


class ContactGroupMembership(ImmutableModel, Identifiable):
    """Link between a contact and a group, keyed by both."""
    identifier_fields: ClassVar[Tuple[str, ...]] = ("contact_id", "group_id")

    contact_id: int
    group_id: int


class ContactNote(ImmutableModel):
    """A note about a contact.

    The contact and company are written as their identifiers and read back
    as deferred references.
    """
    text: str = Field(description="Note body")
    contact: EntityId["Contact"]
    company: Optional[EntityId["Company"]] = None
