"""Merge configuration layers into a validated :class:`MetaExtractorConfig`."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import MetaExtractorConfig

ENV_PREFIX = "METAEXTRACTOR__"


def resolve_with_precedence(
    *,
    defaults: MetaExtractorConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> MetaExtractorConfig:
    """Layer overrides onto defaults: file, then environment, then CLI.

    Override keys may be nested mappings or dotted paths such as
    ``"trid.matches"``.

    Raises:
        ConfigError: If an override is malformed or the merged values fail
            validation.
    """
    merged = defaults.model_dump(mode="python")
    for layer, source in (
        ("file", file_overrides),
        ("environment", env_overrides),
        ("cli", cli_overrides),
    ):
        if source is None:
            continue
        merged = _deep_merge(merged, _expand_dotted(source, layer=layer))

    try:
        return MetaExtractorConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: MetaExtractorConfig) -> Dict[str, str]:
    """Render the config as ``METAEXTRACTOR__SECTION__KEY`` variables."""
    flat: Dict[str, str] = {}

    def _walk(prefix: list[str], value: Any) -> None:
        if isinstance(value, dict):
            for key, child in value.items():
                _walk(prefix + [str(key)], child)
            return
        name = ENV_PREFIX + "__".join(part.upper() for part in prefix)
        if isinstance(value, list):
            flat[name] = yaml.safe_dump(value, default_flow_style=True).strip()
        else:
            flat[name] = "null" if value is None else str(value)

    _walk([], config.model_dump(mode="python"))
    return flat


def _expand_dotted(source: Mapping[str, Any], *, layer: str) -> dict[str, Any]:
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{layer.capitalize()} overrides must be a mapping.")

    expanded: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{layer.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = _expand_dotted(value, layer=layer)

        *parents, leaf = key.split(".")
        node = expanded
        for segment in parents:
            child = node.setdefault(segment, {})
            if not isinstance(child, dict):
                raise ConfigError(
                    f"{layer.capitalize()} override for {key} conflicts with existing value."
                )
            node = child

        existing = node.get(leaf)
        if isinstance(value, dict) and isinstance(existing, dict):
            node[leaf] = _deep_merge(existing, value)
        else:
            node[leaf] = value
    return expanded


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = ["ENV_PREFIX", "resolve_with_precedence", "flatten_for_env"]
