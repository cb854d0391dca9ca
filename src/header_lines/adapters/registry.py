from __future__ import annotations

from collections.abc import Iterable
from typing import Callable

from header_lines.adapters.contracts import get_adapter_meta


class AdapterRegistryError(ValueError):
    # Raised when adapter lookup/build fails.
    pass


class AdapterRegistry:
    # Registry of adapter factories keyed by role + kind.
    def __init__(self) -> None:
        self._factories: dict[tuple[str, str], Callable[[dict[str, object]], object]] = {}

    def register(self, role: str, kind: str, factory: Callable[[dict[str, object]], object]) -> None:
        key = (role, kind)
        if key in self._factories:
            raise AdapterRegistryError(f"Duplicate adapter registration: {role}/{kind}")
        self._factories[key] = factory

    def register_all(self, role: str, factories: Iterable[Callable[[dict[str, object]], object]]) -> None:
        # Bulk registration uses the kind declared via @adapter on each factory.
        for factory in factories:
            meta = get_adapter_meta(factory)
            if meta is None:
                raise AdapterRegistryError(f"Adapter factory {factory!r} declares no kind")
            self.register(role, meta.kind, factory)

    def build(self, role: str, config: dict[str, object]) -> object:
        if not isinstance(config, dict):
            raise AdapterRegistryError("Adapter config must be a mapping")
        kind = config.get("kind")
        if not isinstance(kind, str):
            raise AdapterRegistryError("Adapter kind must be a string")
        settings = config.get("settings", {})
        if not isinstance(settings, dict):
            raise AdapterRegistryError("Adapter settings must be a mapping")
        key = (role, kind)
        if key not in self._factories:
            raise AdapterRegistryError(f"Unknown adapter kind for role {role}: {kind}")
        return self._factories[key](settings)

    def kinds(self, role: str) -> list[str]:
        return sorted(kind for registered_role, kind in self._factories if registered_role == role)
