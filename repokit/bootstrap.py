"""Application wiring for repositories.

Call :func:`setup_repositories` once at startup, before serving traffic::

    models = ModelCatalog({"User": user_handle})
    registry = setup_repositories(UserRepository, models=models)

The model provider, the settings and the registry are registered in the
dependency container so repositories constructed later (including those
instantiated by ``RepositoryRegistry.push``) resolve the same objects.
"""

import logging

from .base import RepositoryBase
from .config import RepositorySettings
from .depends import depends
from .models import ModelProvider
from .registry import RepositoryRegistry

logger = logging.getLogger(__name__)


def setup_repositories(
    *repositories: RepositoryBase | type[RepositoryBase],
    models: ModelProvider | None = None,
    settings: RepositorySettings | None = None,
    registry: RepositoryRegistry | None = None,
) -> RepositoryRegistry:
    """Wire the repository layer and register the given repositories.

    Args:
        repositories: Repository instances or classes to push
        models: Model provider to register, keeps the current one if None
        settings: Settings to register, built from the environment if None
        registry: Registry to fill, a new one if None

    Returns:
        The filled registry
    """
    depends.set(RepositorySettings, settings or RepositorySettings())
    if models is not None:
        depends.set(ModelProvider, models)

    registry = registry if registry is not None else RepositoryRegistry()
    for repository in repositories:
        registry.push(repository)

    depends.set(RepositoryRegistry, registry)
    logger.info(f"Registered {len(registry)} repositories: {', '.join(registry.names())}")
    return registry
