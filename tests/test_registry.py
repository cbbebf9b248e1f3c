"""Tests for the repository registry."""

import pytest

from repokit.base import RepositoryBase
from repokit.config import RepositorySettings
from repokit.depends import depends
from repokit.exceptions import RepositoryConfigurationError
from repokit.models import ModelCatalog, ModelProvider
from repokit.registry import RepositoryRegistry


class UserRepository(RepositoryBase):
    name = "users"

    def __init__(self) -> None:
        super().__init__("User")


class WidgetRepository(RepositoryBase):
    def __init__(self) -> None:
        super().__init__("Widget")


@pytest.fixture
def registry(models: ModelCatalog, settings: RepositorySettings) -> RepositoryRegistry:
    depends.set(ModelProvider, models)
    depends.set(RepositorySettings, settings)
    return RepositoryRegistry()


@pytest.mark.unit
class TestRepositoryRegistry:
    def test_empty(self, registry: RepositoryRegistry) -> None:
        assert len(registry) == 0
        assert registry.names() == []
        assert registry.get("users") is None
        assert "users" not in registry

    def test_push_instance(self, registry: RepositoryRegistry) -> None:
        repository = UserRepository()

        assert registry.push(repository) is repository
        assert registry.get("users") is repository
        assert "users" in registry

    def test_push_class(self, registry: RepositoryRegistry) -> None:
        instance = registry.push(UserRepository)

        assert isinstance(instance, UserRepository)
        assert registry.get("users") is instance
        assert registry.get("users") is registry.get("users")

    def test_class_name_is_default_key(self, registry: RepositoryRegistry) -> None:
        registry.push(WidgetRepository)

        assert registry.names() == ["WidgetRepository"]

    def test_last_push_wins(self, registry: RepositoryRegistry) -> None:
        first = registry.push(UserRepository)
        second = registry.push(UserRepository)

        assert first is not second
        assert registry.get("users") is second
        assert len(registry) == 1

    def test_iteration(self, registry: RepositoryRegistry) -> None:
        users = registry.push(UserRepository)
        widgets = registry.push(WidgetRepository)

        assert list(registry) == [users, widgets]

    @pytest.mark.parametrize("value", [object(), dict, "users", None])
    def test_push_rejects_non_repositories(
        self, registry: RepositoryRegistry, value: object
    ) -> None:
        with pytest.raises(RepositoryConfigurationError) as exc_info:
            registry.push(value)  # type: ignore[arg-type]

        assert exc_info.value.model_name == "RepositoryRegistry"
        assert len(registry) == 0

    def test_get_or_raise(self, registry: RepositoryRegistry) -> None:
        repository = registry.push(UserRepository)

        assert registry.get_or_raise("users") is repository

        with pytest.raises(RepositoryConfigurationError) as exc_info:
            registry.get_or_raise("orders")

        assert exc_info.value.message == (
            "[RepositoryRegistry] No repository registered under name: orders"
        )
