# tests/serialization/test_fields.py
import json

import pytest
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from domain.contacts import ContactNote
from persistence.reference import EntityReference
from serialization.exceptions import (
    HandlerNotRegisteredError,
    MissingEntityNameError,
    UnknownEntityTypeError,
)
from serialization.fields import EntityId
from serialization.handler_registry import HandlerRegistry
from utils.base_model import ImmutableModel


class TestEntityIdField:
    """Tests for EntityId fields on pydantic models."""

    def test_dump_writes_identifiers(self, handler_registry, contact, company):
        """Test that references are written as bare identifiers."""
        note = ContactNote(text="Call back", contact=contact, company=company)

        data = note.model_dump(mode="json", context=handler_registry.context())

        assert data == {"text": "Call back", "contact": 123, "company": "ANL-1843"}

    def test_dump_json(self, handler_registry, contact):
        """Test that model_dump_json writes the identifier and null."""
        note = ContactNote(text="Call back", contact=contact)

        document = note.model_dump_json(context=handler_registry.context())

        assert json.loads(document) == {"text": "Call back", "contact": 123, "company": None}

    def test_validate_reads_deferred_references(self, handler_registry, contact, company):
        """Test that identifiers are read back as deferred references."""
        note = ContactNote.model_validate(
            {"text": "Call back", "contact": 123, "company": "ANL-1843"},
            context=handler_registry.context(),
        )

        assert isinstance(note.contact, EntityReference)
        assert note.contact.entity_name == "Contact"
        assert note.contact.identifier == 123
        assert not note.contact.is_loaded
        assert note.contact.name == "Ada Lovelace"
        assert note.company.resolve() is company

    def test_validate_json_round_trip(self, handler_registry, contact):
        """Test that a document read back writes the same identifiers."""
        document = '{"text": "Call back", "contact": 123, "company": null}'

        note = ContactNote.model_validate_json(document, context=handler_registry.context())

        assert note.company is None
        assert json.loads(note.model_dump_json(context=handler_registry.context())) == json.loads(document)
        assert not note.contact.is_loaded

    def test_validate_null_needs_no_handler(self):
        """Test that null references are accepted without a registry."""
        class Assignment(ImmutableModel):
            contact: EntityId["Contact"]

        assert Assignment.model_validate({"contact": None}).contact is None

    def test_objects_pass_through_validation(self, contact):
        """Test that models can be built from entities without a registry."""
        note = ContactNote(text="Call back", contact=contact)

        assert note.contact is contact

    @pytest.mark.parametrize("raw, kind", [
        ('{"id": 1}', "dict"),
        ('[1, 2]', "list"),
    ])
    def test_json_objects_and_arrays_rejected(self, handler_registry, raw, kind):
        """Test that JSON objects and arrays are not accepted as references."""
        document = f'{{"text": "Call back", "contact": {raw}}}'

        with pytest.raises(ValidationError, match=f"{kind} given"):
            ContactNote.model_validate_json(document, context=handler_registry.context())

    def test_dump_json_wraps_codec_errors(self, handler_registry, company):
        """Test that codec errors raised while dumping JSON surface through pydantic."""
        reference = EntityReference("Company", company.code, lambda: company)
        note = ContactNote(text="Call back", contact=reference)

        with pytest.raises(PydanticSerializationError, match="EntityReference<Company> given"):
            note.model_dump_json(context=handler_registry.context())

    def test_validate_without_registry(self):
        """Test that identifiers cannot be read without a registry in the context."""
        with pytest.raises(HandlerNotRegisteredError):
            ContactNote.model_validate({"text": "Call back", "contact": 123})

    def test_validate_with_empty_registry(self):
        """Test that identifiers cannot be read when no EntityId handler is registered."""
        with pytest.raises(HandlerNotRegisteredError, match="No deserialize handler"):
            ContactNote.model_validate(
                {"text": "Call back", "contact": 123},
                context=HandlerRegistry().context(),
            )

    def test_handler_errors_propagate(self, handler_registry):
        """Test that codec errors are not turned into validation errors."""
        class Invoice(ImmutableModel):
            customer: EntityId["Customer"]

        with pytest.raises(UnknownEntityTypeError):
            Invoice.model_validate({"customer": 7}, context=handler_registry.context())

    def test_missing_entity_name_fails_at_definition(self):
        """Test that a field without an entity name is rejected when the model is defined."""
        with pytest.raises(MissingEntityNameError):
            class Broken(ImmutableModel):
                contact: EntityId[""]

    def test_json_schema(self):
        """Test that the JSON schema describes an identifier."""
        schema = ContactNote.model_json_schema()

        assert "Contact" in schema["properties"]["contact"]["description"]
        assert schema["properties"]["contact"]["type"] == ["integer", "string"]
