"""
Test configuration and fixtures
"""

import pytest

from domain.contacts import Company, Contact, ContactGroupMembership
from persistence.in_memory import InMemoryEntityManager
from serialization.entity_id_handler import EntityIdHandler
from serialization.handler_registry import HandlerRegistry


@pytest.fixture
def entity_manager():
    """In-memory entity manager knowing the contact-management entities"""
    manager = InMemoryEntityManager()
    manager.register_entity_class(Contact)
    manager.register_entity_class(Company)
    manager.register_entity_class(ContactGroupMembership)
    return manager


@pytest.fixture
def contact(entity_manager):
    """A persisted contact with id 123"""
    contact = Contact(id=123, name="Ada Lovelace", email="ada@example.com")
    entity_manager.persist(contact)
    return contact


@pytest.fixture
def company(entity_manager):
    """A persisted company keyed by its code"""
    company = Company(code="ANL-1843", name="Analytical Engines Ltd")
    entity_manager.persist(company)
    return company


@pytest.fixture
def handler(entity_manager):
    return EntityIdHandler(entity_manager)


@pytest.fixture
def handler_registry(handler):
    """Handler registry with the EntityId handler subscribed"""
    registry = HandlerRegistry()
    registry.register_subscribing_handler(handler)
    return registry
