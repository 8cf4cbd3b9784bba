"""Generic registry for plugin-style class registration.

Output renderers and failure policies are looked up by the name given
on the command line.  Implementations register themselves with a
decorator, so adding one never touches the CLI::

    renderer_registry = Registry("renderer")

    @renderer_registry.register("yaml")
    class YamlRenderer(ResultRenderer):
        ...

    renderer = renderer_registry.create("yaml")
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Type, TypeVar

T = TypeVar("T")


class Registry:
    """A registry for decorator-based class registration."""

    def __init__(self, name: str = "registry") -> None:
        """Initialize the registry.

        Args:
            name: Human-readable name for error messages.
        """
        self._name = name
        self._items: Dict[str, Type[Any]] = {}

    def register(self, key: str) -> Callable[[Type[T]], Type[T]]:
        """Decorator to register a class under ``key``.

        Raises:
            ValueError: If the key is already registered.
        """
        def decorator(cls: Type[T]) -> Type[T]:
            if key in self._items:
                raise ValueError(
                    f"{self._name}: key '{key}' already registered "
                    f"to {self._items[key].__name__}"
                )
            self._items[key] = cls
            return cls
        return decorator

    def get(self, key: str) -> Type[Any]:
        """Return the class registered under ``key``.

        Raises:
            KeyError: If the key is not registered.
        """
        if key not in self._items:
            available = ", ".join(sorted(self._items.keys()))
            raise KeyError(
                f"{self._name}: unknown key '{key}'. "
                f"Available: {available}"
            )
        return self._items[key]

    def create(self, key: str, **kwargs: Any) -> Any:
        """Create an instance of the class registered under ``key``."""
        return self.get(key)(**kwargs)

    def keys(self) -> List[str]:
        """Return the registered keys, for argparse choices."""
        return list(self._items.keys())

    def __contains__(self, key: str) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
