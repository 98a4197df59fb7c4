"""
Configuration management (YAML layers + CS_* environment overrides).
"""
from __future__ import annotations

import copy
import json
import logging
import os
import re
from pathlib import Path
from typing import Any, Collection, Dict, Iterator, List, Mapping, Optional, Tuple

import jsonschema
import yaml

from resumer.core.exceptions import ConfigError
from resumer.data import read_yaml

logger = logging.getLogger(__name__)

DEFAULT_USER_CONFIG = Path("~/.cs/config.yaml")

# Single-variable shortcuts for the most common overrides.
ENV_ALIASES: Dict[str, Tuple[str, ...]] = {
    "CS_NAMESPACE": ("session", "namespace"),
    "CS_DB_PATH": ("registry", "path"),
}


def deep_merge(base: Dict[str, Any], override: Mapping[str, Any]) -> Dict[str, Any]:
    """Recursively merge ``override`` into a copy of ``base`` (override wins)."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigManager:
    """Load, merge, and validate configuration.

    Configuration sources (highest to lowest priority):
    1. Environment variables: CS_<SECTION>__<KEY>, plus the CS_NAMESPACE and
       CS_DB_PATH aliases
    2. User config: ~/.cs/config.yaml (or the file named by CS_CONFIG)
    3. Bundled defaults: resumer.data/config/defaults.yaml

    The merged result is validated against the bundled JSON schema.
    """

    ENV_PREFIX = "CS_"
    CONFIG_PATH_ENV = "CS_CONFIG"

    def __init__(
        self,
        user_config_path: Optional[Path] = None,
        *,
        environ: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.environ: Mapping[str, str] = os.environ if environ is None else environ
        self.user_config_path = (user_config_path or self._default_user_config_path()).expanduser()

    def _default_user_config_path(self) -> Path:
        override = self.environ.get(self.CONFIG_PATH_ENV)
        if override:
            return Path(override)
        return DEFAULT_USER_CONFIG

    # ---------- Loading ----------

    def load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load one YAML layer. Missing files are empty; invalid YAML is fatal."""
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise ConfigError(
                f"Cannot read config file {path}: {exc}", context={"path": str(path)}
            ) from exc

        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(
                f"Invalid YAML in {path}: {exc}", context={"path": str(path)}
            ) from exc

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {path} must contain a mapping at top level",
                context={"path": str(path)},
            )
        return data

    def _as_bool(self, v: str) -> Optional[bool]:
        low = v.strip().lower()
        if low in {"true", "false"}:
            return low == "true"
        return None

    def _as_int(self, v: str) -> Optional[int]:
        if re.fullmatch(r"[-+]?\d+", v.strip() or " "):
            return int(v)
        return None

    def _as_float(self, v: str) -> Optional[float]:
        s = v.strip()
        if re.fullmatch(r"[-+]?\d*\.\d+", s) or re.fullmatch(r"[-+]?\d+\.\d*", s):
            return float(s)
        return None

    def _as_json(self, v: str) -> Optional[Any]:
        s = v.strip()
        if (s.startswith("{") and s.endswith("}")) or (s.startswith("[") and s.endswith("]")):
            try:
                return json.loads(s)
            except json.JSONDecodeError:
                return None
        return None

    def _coerce_type(self, value: str) -> Any:
        for caster in (self._as_bool, self._as_int, self._as_float, self._as_json):
            result = caster(value)
            if result is not None:
                return result
        return value.strip()

    def _iter_env_overrides(self, sections: Collection[str]) -> Iterator[Tuple[List[str], Any, str]]:
        # Aliases are plain strings: a namespace or a path must never be coerced.
        for name, path in ENV_ALIASES.items():
            if name in self.environ:
                yield list(path), self.environ[name], name

        for key in sorted(self.environ.keys()):
            if not key.startswith(self.ENV_PREFIX) or "__" not in key:
                continue
            raw = key[len(self.ENV_PREFIX):]
            segs = raw.split("__")
            if segs[0].lower() not in sections:
                # Only sections with bundled defaults are configurable.
                logger.debug("ignoring %s: not a config section", key)
                continue
            if any(seg == "" for seg in segs):
                raise ConfigError(
                    f"Malformed {self.ENV_PREFIX}* key: empty segment in '{key}'",
                    context={"variable": key},
                )
            yield [seg.lower() for seg in segs], self._coerce_type(self.environ[key]), key

    def _set_nested(self, root: Dict[str, Any], path: List[str], value: Any) -> None:
        cur = root
        for part in path[:-1]:
            nxt = cur.get(part)
            if not isinstance(nxt, dict):
                nxt = {}
                cur[part] = nxt
            cur = nxt
        cur[path[-1]] = value

    def apply_env_overrides(self, cfg: Dict[str, Any]) -> None:
        sections = read_yaml("config", "defaults.yaml").keys()
        for path, typed_value, raw in self._iter_env_overrides(sections):
            logger.debug("config override from %s -> %s", raw, ".".join(path))
            self._set_nested(cfg, path, typed_value)

    def validate_schema(self, cfg: Dict[str, Any]) -> None:
        schema = read_yaml("schemas", "config.schema.yaml")
        validator = jsonschema.Draft202012Validator(schema)
        errors = sorted(validator.iter_errors(cfg), key=lambda e: list(e.path))
        if errors:
            first = errors[0]
            where = ".".join(str(p) for p in first.path) or "<root>"
            raise ConfigError(
                f"Invalid configuration at {where}: {first.message}",
                context={"key": where, "errors": len(errors)},
            )

    def load_config(self, validate: bool = True) -> Dict[str, Any]:
        """Load and merge configuration from all layers.

        Args:
            validate: If True, validate the merged result against the schema

        Returns:
            Merged configuration dictionary

        Raises:
            ConfigError: On unreadable/invalid YAML, malformed CS_* keys, or a
                schema violation.
        """
        cfg = copy.deepcopy(read_yaml("config", "defaults.yaml"))
        cfg = deep_merge(cfg, self.load_yaml(self.user_config_path))
        self.apply_env_overrides(cfg)

        if validate:
            self.validate_schema(cfg)
        return cfg


__all__ = ["ConfigManager", "deep_merge", "ENV_ALIASES", "DEFAULT_USER_CONFIG"]
