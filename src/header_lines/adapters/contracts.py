from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True, slots=True)
class AdapterMeta:
    # Config-facing identity of a sink factory: `kind` is the value selected in YAML.
    name: str
    kind: str


def adapter(*, kind: str, name: str | None = None) -> Callable[[F], F]:
    # Tags a factory with the kind AdapterRegistry.register_all files it under.
    if not kind:
        raise ValueError("adapter kind must be a non-empty string")

    def _decorate(factory: F) -> F:
        factory.__adapter_meta__ = AdapterMeta(name=name or factory.__name__, kind=kind)  # type: ignore[attr-defined]
        return factory

    return _decorate


def get_adapter_meta(target: Any) -> AdapterMeta | None:
    meta = getattr(target, "__adapter_meta__", None)
    return meta if isinstance(meta, AdapterMeta) else None
