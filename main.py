#!/usr/bin/env python3
"""
EntityId reference codec - demo

Writes a contact note to JSON with its contact as a bare identifier, then
reads it back into a deferred reference resolved from an in-memory store.
"""
__version__ = "1.0"

import logging

from domain.contacts import Company, Contact, ContactNote
from entity_id_codec import build_handler_registry
from persistence.in_memory import InMemoryEntityManager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)


def main() -> str:
    """Run the round trip and return the JSON document."""
    entity_manager = InMemoryEntityManager()
    entity_manager.register_entity_class(Contact)
    entity_manager.register_entity_class(Company)

    contact = Contact(id=123, name="Ada Lovelace", email="ada@example.com")
    company = Company(code="ANL-1843", name="Analytical Engines Ltd")
    entity_manager.persist(contact)
    entity_manager.persist(company)

    registry = build_handler_registry(entity_manager)

    note = ContactNote(text="Met at the conference", contact=contact, company=company)
    document = note.model_dump_json(context=registry.context())
    logger.info(f"Serialized note: {document}")

    restored = ContactNote.model_validate_json(document, context=registry.context())
    logger.info(f"Restored reference {restored.contact!r} resolving to {restored.contact.name}")
    return document


if __name__ == "__main__":
    main()
