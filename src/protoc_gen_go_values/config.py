from __future__ import annotations

import math
import os
import shlex
from dataclasses import dataclass, replace
from typing import List, Mapping, Optional

from protoc_gen_go_values.errors import InvalidInputError

DEFAULT_BASE_PLUGIN = "protoc-gen-go"
DEFAULT_TIMEOUT = 60.0

ENV_BASE_PLUGIN = "PROTOC_GEN_GO_VALUES_BASE"
ENV_TIMEOUT = "PROTOC_GEN_GO_VALUES_TIMEOUT"
ENV_WORKERS = "PROTOC_GEN_GO_VALUES_WORKERS"
ENV_VERBOSE = "PROTOC_GEN_GO_VALUES_VERBOSE"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"", "0", "false", "no", "off"}


@dataclass(frozen=True)
class PluginConfig:
    """Process-level settings; none of them change which fields are rewritten."""

    base_plugin: str = DEFAULT_BASE_PLUGIN
    timeout: float = DEFAULT_TIMEOUT
    workers: int = 1
    verbose: bool = False

    def __post_init__(self):
        if not self.base_command:
            raise InvalidInputError("base plugin command cannot be empty")
        if not math.isfinite(self.timeout) or self.timeout <= 0:
            raise InvalidInputError(f"timeout must be a positive finite number, got {self.timeout}")
        if self.workers < 1:
            raise InvalidInputError(f"workers must be at least 1, got {self.workers}")

    @property
    def base_command(self) -> List[str]:
        try:
            return shlex.split(self.base_plugin)
        except ValueError as e:
            raise InvalidInputError(f"invalid base plugin command {self.base_plugin!r}: {e}") from e

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> PluginConfig:
        env = os.environ if environ is None else environ
        kwargs = {}
        if ENV_BASE_PLUGIN in env:
            kwargs["base_plugin"] = env[ENV_BASE_PLUGIN]
        if ENV_TIMEOUT in env:
            kwargs["timeout"] = _parse_float(ENV_TIMEOUT, env[ENV_TIMEOUT])
        if ENV_WORKERS in env:
            kwargs["workers"] = _parse_int(ENV_WORKERS, env[ENV_WORKERS])
        if ENV_VERBOSE in env:
            kwargs["verbose"] = _parse_bool(ENV_VERBOSE, env[ENV_VERBOSE])
        return cls(**kwargs)

    def with_overrides(self, **overrides) -> PluginConfig:
        """Return a copy with every non-None override applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise InvalidInputError(f"{name} must be a number, got {value!r}") from e


def _parse_int(name: str, value: str) -> int:
    try:
        return int(value)
    except ValueError as e:
        raise InvalidInputError(f"{name} must be an integer, got {value!r}") from e


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    raise InvalidInputError(f"{name} must be a boolean, got {value!r}")
