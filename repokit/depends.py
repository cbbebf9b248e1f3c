import typing as t
from bevy import Inject, auto_inject, get_container
from contextlib import suppress


class Depends:
    """Dependency container facade used for repository wiring.

    Thin layer over bevy's global container so application startup can
    register the model provider, the settings and the repository registry
    once and let every repository resolve them explicitly by type.
    """

    @staticmethod
    def inject(func: t.Callable[..., t.Any]) -> t.Callable[..., t.Any]:
        """Decorator to inject dependencies into a function."""
        return t.cast("t.Callable[..., t.Any]", auto_inject(func))

    @staticmethod
    def set(class_: t.Any, instance: t.Any = None) -> t.Any:
        """Register a class/instance in the dependency container.

        Returns the instance that was registered.
        """
        if instance is None:
            instance = class_()
        get_container().add(class_, instance)
        return instance

    @staticmethod
    def get_sync(category: t.Any) -> t.Any:
        """Get a dependency instance synchronously."""
        result = get_container().get(category)
        if isinstance(result, tuple):
            if not result:
                msg = f"Dependency '{category}' not found in container"
                raise RuntimeError(msg)
            return result[0]
        return result

    async def get(self, category: t.Any) -> t.Any:
        """Get a dependency instance from async code."""
        return Depends.get_sync(category)

    @staticmethod
    def clear() -> None:
        """Forget every registered instance (testing helper).

        bevy exposes no public reset, so the global container's instance maps
        are emptied directly. Only the maps present in the installed bevy
        release are touched.
        """
        try:
            from bevy import DEFAULT_CONTAINER
        except ImportError:
            return

        for attr in ("_instances", "_factories", "_qualifier_map"):
            with suppress(AttributeError):
                getattr(DEFAULT_CONTAINER, attr).clear()


depends = Depends()

__all__ = ["Depends", "Inject", "depends", "get_container"]
