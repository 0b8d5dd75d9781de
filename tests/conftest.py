"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from pipeline_console.api.container import Container, reset_container, set_container
from pipeline_console.api.dependencies import limiter
from pipeline_console.domain.entities.configuration import ConfigurationRecord
from pipeline_console.domain.ports.config import AppConfig
from pipeline_console.main import app

FULL_RECORD = ConfigurationRecord(
    repository_path="/repos/rusty",
    output_path="parsed_repository.json",
    write_in_place="false",
    model_identifier="gpt-4-1106-preview",
    embedding_model_identifier="text-embedding-ada-002",
    vector_store_url="http://localhost:6334",
    vector_store_collection="rusty",
    api_key="sk-test",
)


@pytest.fixture
def full_record() -> ConfigurationRecord:
    """Record with every field populated."""
    return FULL_RECORD


@pytest.fixture
def gateway() -> AsyncMock:
    """Gateway double; tests set invoke.return_value or side_effect."""
    fake = AsyncMock()
    fake.invoke = AsyncMock()
    fake.close = AsyncMock()
    return fake


@pytest.fixture
def container(gateway: AsyncMock):
    """Global container wired to the fake gateway, fresh per test."""
    reset_container()
    limiter.reset()
    c = Container(config=AppConfig(), gateway=gateway)
    set_container(c)
    yield c
    reset_container()


@pytest.fixture
async def client(container: Container):
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


@pytest.fixture
def populated(container: Container, full_record: ConfigurationRecord) -> Container:
    """Container whose store holds every field of full_record."""
    for name, value in full_record.model_dump().items():
        container.configuration_store.set(name, value)
    return container
