from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Config models map YAML sections to typed structures.


class ResponseConfig(BaseModel):
    # Response to render: status line, header fields in order, body text.
    model_config = ConfigDict(extra="forbid")
    status_line: str
    headers: list[tuple[str, str]] = Field(default_factory=list)
    body: str = ""
    encoding: str = "latin-1"

    @field_validator("headers", mode="before")
    @classmethod
    def _coerce_header_pairs(cls, value: Any) -> Any:
        # Mapping or list-of-pairs form; YAML scalars (Content-Length: 0) become strings either way.
        if isinstance(value, dict):
            value = list(value.items())
        if not isinstance(value, list):
            return value
        return [_coerce_pair(item) for item in value]


def _coerce_pair(item: Any) -> Any:
    if isinstance(item, (list, tuple)) and len(item) == 2 and all(_is_scalar(part) for part in item):
        return (str(item[0]), str(item[1]))
    return item


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float))


class AdapterConfig(BaseModel):
    # Adapter selection mirrors the registry's {kind, settings} contract.
    model_config = ConfigDict(extra="forbid")
    kind: str
    settings: dict[str, Any] = Field(default_factory=dict)


class AppConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    version: int = 1
    response: ResponseConfig
    output: AdapterConfig
    logging: AdapterConfig = Field(default_factory=lambda: AdapterConfig(kind="stdout"))
