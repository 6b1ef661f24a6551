"""Configuration management for tksctl.

Settings are resolved from several sources with the following precedence:
1. Explicitly passed values (command-line options)
2. Environment variables (a .env file is loaded into the environment)
3. The YAML config file
4. Default values
"""
import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from tksctl.errors import ConfigurationError

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATHS = [
    Path(".tks.yaml"),
    Path("~/.tks.yaml").expanduser(),
]

TRANSPORT_INSECURE = "insecure"
TRANSPORT_TLS = "tls"
TRANSPORT_CHOICES = (TRANSPORT_INSECURE, TRANSPORT_TLS)

DEFAULT_CALL_TIMEOUT = 30 * 60  # 30 minutes
DEFAULT_CONNECT_TIMEOUT = 10

# config file key -> (environment variable, Config attribute)
SETTINGS = {
    "tksClusterLcmUrl": ("TKS_CLUSTER_LCM_URL", "lcm_url"),
    "transportSecurity": ("TKS_TRANSPORT_SECURITY", "transport_security"),
    "callTimeout": ("TKS_CALL_TIMEOUT", "call_timeout"),
    "connectTimeout": ("TKS_CONNECT_TIMEOUT", "connect_timeout"),
}


@dataclass
class Config:
    """Resolved settings for one invocation."""
    lcm_url: str = ""
    transport_security: str = TRANSPORT_INSECURE
    call_timeout: float = DEFAULT_CALL_TIMEOUT
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT
    source: Optional[Path] = None

    @classmethod
    def load(
        cls,
        config_path: Optional[Path] = None,
        overrides: Optional[Dict[str, Any]] = None,
    ) -> "Config":
        """Build a Config from file, environment and explicit overrides."""
        path = find_config_file(config_path)
        file_values = read_config_file(path) if path else {}

        values: Dict[str, Any] = {}
        for key, (env_var, attr) in SETTINGS.items():
            if key in file_values and file_values[key] is not None:
                values[attr] = file_values[key]
            env_value = os.getenv(env_var)
            if env_value:
                values[attr] = env_value
        for attr, value in (overrides or {}).items():
            if value is not None:
                values[attr] = value

        config = cls(source=path)
        config.lcm_url = str(values.get("lcm_url", "")).strip()
        config.transport_security = str(
            values.get("transport_security", TRANSPORT_INSECURE)
        ).lower()
        config.call_timeout = _as_seconds(
            "callTimeout", values.get("call_timeout", DEFAULT_CALL_TIMEOUT)
        )
        config.connect_timeout = _as_seconds(
            "connectTimeout", values.get("connect_timeout", DEFAULT_CONNECT_TIMEOUT)
        )
        logger.debug(f"Loaded configuration from {path or 'environment only'}")
        return config

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.lcm_url:
            raise ConfigurationError("You must specify tksClusterLcmUrl at config file")
        if self.transport_security not in TRANSPORT_CHOICES:
            raise ConfigurationError(
                f"Invalid transportSecurity '{self.transport_security}', "
                f"expected one of: {', '.join(TRANSPORT_CHOICES)}"
            )


def find_config_file(config_path: Optional[Path] = None) -> Optional[Path]:
    """Return the config file to read, or None when there is none."""
    if config_path is not None:
        config_path = Path(config_path).expanduser()
        if not config_path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        return config_path
    for candidate in DEFAULT_CONFIG_PATHS:
        if candidate.exists():
            return candidate
    return None


def read_config_file(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")
    return data


def _as_seconds(name: str, value: Any) -> float:
    try:
        seconds = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be a number of seconds, got '{value}'")
    if seconds <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return seconds
