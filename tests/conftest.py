"""Configuration for pytest testing framework."""

import pytest

from repokit.config import RepositorySettings
from repokit.depends import depends
from repokit.models import ModelCatalog
from tests.mocks import InMemoryModel


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line(
        "markers", "integration: mark test as exercising several components"
    )


@pytest.fixture(autouse=True)
def reset_dependency_container():
    """Reset the dependency container before each test to ensure test isolation."""
    depends.clear()
    yield
    depends.clear()


@pytest.fixture
def settings() -> RepositorySettings:
    return RepositorySettings()


@pytest.fixture
def user_model() -> InMemoryModel:
    return InMemoryModel("User")


@pytest.fixture
def models(user_model: InMemoryModel) -> ModelCatalog:
    return ModelCatalog({"User": user_model, "Widget": InMemoryModel("Widget")})
