from __future__ import annotations

from datetime import date

import pytest

from customer_api import create_app
from customer_api.application.services.customer_service import CustomerService
from customer_api.config.settings import TestingConfig
from customer_api.infrastructure.repositories.memory_customer_directory import InMemoryCustomerDirectory
from customer_api.infrastructure.service_container import ServiceContainer

TODAY = date(2025, 6, 15)


@pytest.fixture
def directory() -> InMemoryCustomerDirectory:
    return InMemoryCustomerDirectory()


@pytest.fixture
def service(directory) -> CustomerService:
    return CustomerService(directory=directory, clock=lambda: TODAY)


@pytest.fixture
def app():
    ServiceContainer.reset()
    app = create_app(TestingConfig)
    # pin "now" so tier assertions don't drift with the calendar
    app.config["service_container"].get_customer_service().clock = lambda: TODAY
    yield app
    ServiceContainer.reset()


@pytest.fixture
def client(app):
    return app.test_client()
