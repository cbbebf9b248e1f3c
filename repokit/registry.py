"""Repository Registry Implementation.

Maps repository names to singleton instances. The registry is filled once
during application startup and only read afterwards; ``push`` is not
synchronized and must not race with ``get``.
"""

import inspect
import logging

import typing as t
from typing import Any

from .base import RepositoryBase
from .exceptions import RepositoryConfigurationError

logger = logging.getLogger(__name__)


class RepositoryRegistry:
    """Registry of repository instances keyed by repository name."""

    def __init__(self) -> None:
        self._repositories: dict[str, RepositoryBase] = {}

    def push(self, repository: RepositoryBase | type[RepositoryBase]) -> RepositoryBase:
        """Register a repository instance, or instantiate and register a class.

        A repository pushed under an existing name replaces the previous one.

        Args:
            repository: Repository instance, or a subclass of RepositoryBase
                constructible without arguments

        Returns:
            The registered instance

        Raises:
            RepositoryConfigurationError: If the argument is not a repository
        """
        if isinstance(repository, RepositoryBase):
            instance = repository
        elif inspect.isclass(repository) and issubclass(repository, RepositoryBase):
            instance = repository()
        else:
            msg = f"Cannot register {repository!r}: not a repository"
            raise RepositoryConfigurationError(msg, "RepositoryRegistry")

        if instance.name in self._repositories:
            logger.debug(f"Replacing repository {instance.name}")
        self._repositories[instance.name] = instance
        return instance

    def get(self, name: str) -> RepositoryBase | None:
        """Return the repository registered under ``name``, or None."""
        return self._repositories.get(name)

    def get_or_raise(self, name: str) -> RepositoryBase:
        """Return the repository registered under ``name``.

        Raises:
            RepositoryConfigurationError: If no repository has that name
        """
        repository = self.get(name)
        if repository is None:
            msg = f"No repository registered under name: {name}"
            raise RepositoryConfigurationError(msg, "RepositoryRegistry")
        return repository

    def names(self) -> list[str]:
        return list(self._repositories)

    def __contains__(self, name: Any) -> bool:
        return name in self._repositories

    def __len__(self) -> int:
        return len(self._repositories)

    def __iter__(self) -> t.Iterator[RepositoryBase]:
        return iter(list(self._repositories.values()))
