"""Tests for application wiring."""

import pytest

from repokit.base import RepositoryBase
from repokit.bootstrap import setup_repositories
from repokit.config import RepositorySettings
from repokit.criteria import Criteria
from repokit.depends import depends
from repokit.models import ModelCatalog, ModelProvider
from repokit.registry import RepositoryRegistry
from tests.mocks import InMemoryModel


class UserRepository(RepositoryBase):
    name = "users"

    def __init__(self) -> None:
        super().__init__("User")

    async def active(self) -> list:
        return await self.all(Criteria(where={"active": True}))


@pytest.mark.integration
class TestSetupRepositories:
    def test_registers_collaborators(self, models: ModelCatalog) -> None:
        settings = RepositorySettings(default_page_size=5)

        registry = setup_repositories(models=models, settings=settings)

        assert depends.get_sync(RepositorySettings) is settings
        assert depends.get_sync(ModelProvider) is models
        assert depends.get_sync(RepositoryRegistry) is registry
        assert len(registry) == 0

    def test_pushes_repository_classes(
        self, models: ModelCatalog, user_model: InMemoryModel
    ) -> None:
        registry = setup_repositories(UserRepository, models=models)

        repository = registry.get_or_raise("users")
        assert isinstance(repository, UserRepository)
        assert repository.model is user_model
        assert repository.settings is depends.get_sync(RepositorySettings)

    def test_fills_given_registry(self, models: ModelCatalog) -> None:
        registry = RepositoryRegistry()

        result = setup_repositories(UserRepository, models=models, registry=registry)

        assert result is registry
        assert "users" in registry

    @pytest.mark.asyncio
    async def test_end_to_end(
        self, models: ModelCatalog, user_model: InMemoryModel
    ) -> None:
        registry = setup_repositories(UserRepository, models=models)
        repository = registry.get_or_raise("users")

        created = await repository.create({"id": 7, "name": "Ann", "active": True})
        await repository.create({"name": "Bob", "active": False})
        active = await repository.active()

        assert active == [created]
        assert created.id == 1

        await repository.update(created.id, {"active": False})
        assert await repository.active() == []

        await repository.delete(created.id)
        assert await repository.one_by_id(created.id) is None
