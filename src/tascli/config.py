from __future__ import annotations

import dataclasses
import logging
import math
import os
import tomllib
from typing import Any, Dict, List, Optional, Tuple

from .api import METHODS
from .errors import ConfigError

log = logging.getLogger(__name__)

ENV_PREFIX = "TASCLI_"
CONFIG_DIR = os.path.join(os.path.expanduser("~"), ".config", "tascli")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.toml")
DEFAULT_TIMEOUT = 5.0


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(f"{ENV_PREFIX}{name}", default)


@dataclasses.dataclass(frozen=True)
class Settings:
    path: str = CONFIG_PATH
    devices: Dict[str, str] = dataclasses.field(default_factory=dict)
    timeout: float = DEFAULT_TIMEOUT
    method: str = "GET"

    def as_rows(self) -> List[Tuple[str, str]]:
        rows = [
            ("config", self.path),
            ("http.method", self.method),
            ("http.timeout", f"{self.timeout:g}"),
        ]
        rows.extend((f"devices.{name}", addr) for name, addr in self.devices.items())
        return sorted(rows)


def config_path(arg_path: Optional[str] = None) -> str:
    # --config > TASCLI_CONFIG > default location
    return arg_path or env("CONFIG") or CONFIG_PATH


def _load_file(path: str) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        log.debug("No config file at %s", path)
        return {}
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e


def load_settings(arg_path: Optional[str] = None) -> Settings:
    path = config_path(arg_path)
    cfg = _load_file(path)

    devices = cfg.get("devices", {})
    if not isinstance(devices, dict) or not all(isinstance(v, str) for v in devices.values()):
        raise ConfigError(f"[devices] in {path} must map device names to address strings")

    http = cfg.get("http", {})
    if not isinstance(http, dict):
        raise ConfigError(f"[http] in {path} must be a table")
    timeout = http.get("timeout", DEFAULT_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or not math.isfinite(timeout) or timeout <= 0:
        raise ConfigError(f"http.timeout in {path} must be a positive number")
    method = str(http.get("method", "GET")).upper()
    if method not in METHODS:
        raise ConfigError(f"http.method in {path} must be one of {', '.join(METHODS)}")

    return Settings(path=path, devices=dict(sorted(devices.items())), timeout=float(timeout), method=method)


def _positive(value: float, source: str) -> float:
    if not math.isfinite(value) or value <= 0:
        raise ConfigError(f"{source} must be a positive number, got {value!r}")
    return value


def resolve_timeout(arg_timeout: Optional[float], settings: Settings) -> float:
    if arg_timeout is not None:
        return _positive(arg_timeout, "--timeout")
    raw = env("TIMEOUT")
    if raw:
        try:
            value = float(raw)
        except ValueError:
            raise ConfigError(f"{ENV_PREFIX}TIMEOUT must be a number, got {raw!r}") from None
        return _positive(value, f"{ENV_PREFIX}TIMEOUT")
    return settings.timeout
