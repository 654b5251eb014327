"""
Beacon client configuration.

This file defines the typed configuration object for:
- Where records are fetched from (base URL, HTTP timeout, user agent)
- The freshness policy (max record age; whether historical lookups are checked)
- The seeded generator's auto-update interval
- Fields that must be present for a record to normalize

It provides:
- A dataclass-based config with validation
- Loading from environment variables (prefix configurable)
- Loading from a JSON or YAML file
"""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Tuple
from urllib.parse import urlparse

import yaml

from .constants import (
    DEFAULT_BASE_URL,
    DEFAULT_MAX_AGE_S,
    DEFAULT_REFRESH_INTERVAL_S,
    DEFAULT_TIMEOUT_S,
    USER_AGENT,
    XML_FIELDS,
)

_RECORD_ATTRS = frozenset(attr for _, attr in XML_FIELDS)


@dataclass
class BeaconConfig:
    """
    Remote:
      - base_url: scheme + host of the beacon (paths are fixed)
      - timeout_s: HTTP timeout applied by the default transport
      - user_agent: User-Agent header sent by the default transport

    Freshness:
      - max_age_s: a record older than this (vs. the local clock) is stale
      - check_historical_staleness: also apply max_age_s to the timestamp
        lookups (current/previous/next/start-chain); off by default since
        those return old records by design

    Generator:
      - refresh_interval_s: an auto-updating generator reseeds once its
        record is older than this

    Normalization:
      - required_fields: RawRecord attribute names that must be present
    """

    base_url: str = DEFAULT_BASE_URL
    timeout_s: float = DEFAULT_TIMEOUT_S
    user_agent: str = USER_AGENT

    max_age_s: int = DEFAULT_MAX_AGE_S
    check_historical_staleness: bool = False

    refresh_interval_s: int = DEFAULT_REFRESH_INTERVAL_S

    required_fields: Tuple[str, ...] = field(default_factory=tuple)

    def validate(self) -> None:
        u = urlparse(self.base_url)
        if u.scheme not in {"http", "https"} or not u.netloc:
            raise ValueError("base_url must be an http(s) URL with a host")
        if self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")
        if self.max_age_s < 0:
            raise ValueError("max_age_s must be >= 0")
        if self.refresh_interval_s < 0:
            raise ValueError("refresh_interval_s must be >= 0")
        unknown = set(self.required_fields) - _RECORD_ATTRS
        if unknown:
            raise ValueError(f"unknown required_fields: {sorted(unknown)}")

    # -------------------------
    # Serialization helpers
    # -------------------------

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["required_fields"] = list(self.required_fields)
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    # -------------------------
    # Loaders
    # -------------------------

    @staticmethod
    def from_env(prefix: str = "NISTBEACON_") -> "BeaconConfig":
        """
        Load configuration from environment variables. All variables are optional.

        Supported keys (examples):
          - NISTBEACON_BASE_URL=https://beacon.nist.gov
          - NISTBEACON_TIMEOUT_S=10
          - NISTBEACON_USER_AGENT=my-app/1.0
          - NISTBEACON_MAX_AGE_S=60
          - NISTBEACON_CHECK_HISTORICAL_STALENESS=false
          - NISTBEACON_REFRESH_INTERVAL_S=60
          - NISTBEACON_REQUIRED_FIELDS=version,timestamp
        """

        def _get(name: str, cast: Any, default: Any) -> Any:
            key = prefix + name
            raw = os.getenv(key)
            if raw is None:
                return default
            try:
                if cast is bool:
                    return _as_bool(raw)
                if cast is tuple:
                    return tuple(p.strip() for p in raw.split(",") if p.strip())
                return cast(raw)
            except Exception as e:
                raise ValueError(f"Invalid value for {key}: {raw!r}") from e

        cfg = BeaconConfig(
            base_url=_get("BASE_URL", str, DEFAULT_BASE_URL),
            timeout_s=_get("TIMEOUT_S", float, DEFAULT_TIMEOUT_S),
            user_agent=_get("USER_AGENT", str, USER_AGENT),
            max_age_s=_get("MAX_AGE_S", int, DEFAULT_MAX_AGE_S),
            check_historical_staleness=_get("CHECK_HISTORICAL_STALENESS", bool, False),
            refresh_interval_s=_get("REFRESH_INTERVAL_S", int, DEFAULT_REFRESH_INTERVAL_S),
            required_fields=_get("REQUIRED_FIELDS", tuple, ()),
        )
        cfg.validate()
        return cfg

    @staticmethod
    def from_file(path: str) -> "BeaconConfig":
        """
        Load configuration from a JSON or YAML file. Keys mirror the dataclass
        fields. Example (YAML):

            base_url: https://beacon.nist.gov
            timeout_s: 5
            max_age_s: 60
            check_historical_staleness: false
            refresh_interval_s: 60
            required_fields: [version, timestamp]
        """
        text = _read_text(path)
        data = _parse_json_or_yaml(text, path)
        if not isinstance(data, dict):
            raise ValueError(f"{path!r} must contain a mapping at top level")

        unknown = set(data) - {f for f in BeaconConfig.__dataclass_fields__}
        if unknown:
            raise ValueError(f"unknown config keys in {path!r}: {sorted(unknown)}")

        cfg = BeaconConfig(
            base_url=data.get("base_url", DEFAULT_BASE_URL),
            timeout_s=float(data.get("timeout_s", DEFAULT_TIMEOUT_S)),
            user_agent=data.get("user_agent", USER_AGENT),
            max_age_s=int(data.get("max_age_s", DEFAULT_MAX_AGE_S)),
            check_historical_staleness=_as_bool(
                data.get("check_historical_staleness", False), "check_historical_staleness"
            ),
            refresh_interval_s=int(data.get("refresh_interval_s", DEFAULT_REFRESH_INTERVAL_S)),
            required_fields=tuple(data.get("required_fields") or ()),
        )
        cfg.validate()
        return cfg


# -------------------------
# Utilities
# -------------------------


_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def _as_bool(value: Any, name: str = "value") -> bool:
    # JSON/YAML booleans pass through; strings use the same words as the env loader
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        v = value.strip().lower()
        if v in _TRUE:
            return True
        if v in _FALSE:
            return False
    raise ValueError(f"{name} must be a boolean, got {value!r}")


def _read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


def _parse_json_or_yaml(text: str, path_hint: str) -> Any:
    # First try JSON
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ValueError(
            f"Failed to parse {path_hint!r} as JSON or YAML. Original error: {e}"
        ) from e


# A handy default instance for quick use in REPL/tests.
DEFAULT: BeaconConfig = BeaconConfig()


__all__ = [
    "BeaconConfig",
    "DEFAULT",
]
