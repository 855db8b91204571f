import logging
import os
from pathlib import Path
from typing import Dict, Mapping, NamedTuple, Optional

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".stencil"
CONFIG_FILE = CONFIG_DIR / "config"

REPOSITORY_KEY = "STENCIL_REPOSITORY"
DEFAULT_REPOSITORY = "pledbrook/lazybones-templates"


class ProxySettings(NamedTuple):
    host: str
    port: int
    secure: bool

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"


def _read_config(config_file: Path) -> Dict[str, str]:
    config = {}
    if not config_file.exists():
        return config

    try:
        with open(config_file, "r") as f:
            for line in f:
                line = line.strip()
                if "=" in line:
                    key, value = line.split("=", 1)
                    config[key] = value
    except (IOError, PermissionError, OSError):
        # an unreadable config file is treated as empty
        return {}
    return config


def get_setting(
    key: str,
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
) -> Optional[str]:
    """look a setting up in the environment first, then in the config file."""
    environ = os.environ if environ is None else environ
    value = environ.get(key)
    if value:
        return value

    value = _read_config(config_file or CONFIG_FILE).get(key)
    return value or None


def set_setting(key: str, value: str, config_file: Optional[Path] = None):
    """set a value in the config file, preserving other config values."""
    config_file = config_file or CONFIG_FILE
    config_file.parent.mkdir(parents=True, exist_ok=True)

    config = _read_config(config_file)
    config[key] = value

    try:
        with open(config_file, "w") as f:
            for k, v in config.items():
                f.write(f"{k}={v}\n")
    except (IOError, PermissionError, OSError) as e:
        raise RuntimeError(f"failed to write config file: {e}") from e


def get_repository(config_file: Optional[Path] = None) -> str:
    return get_setting(REPOSITORY_KEY, config_file=config_file) or DEFAULT_REPOSITORY


def load_system_proxy(
    use_https: bool,
    environ: Optional[Mapping[str, str]] = None,
    config_file: Optional[Path] = None,
) -> Optional[ProxySettings]:
    """
    read proxy settings from HTTP(S)_PROXY_HOST and HTTP(S)_PROXY_PORT.

    args:
        use_https: true for the secure-transport proxy, false for the plain one
        environ: mapping to read instead of os.environ
        config_file: config file to fall back on

    returns:
        the proxy settings, or None if no proxy host is set
    """
    prefix = "HTTPS" if use_https else "HTTP"
    host = get_setting(f"{prefix}_PROXY_HOST", environ, config_file)
    if not host:
        return None

    default_port = 443 if use_https else 80
    port = default_port
    raw_port = get_setting(f"{prefix}_PROXY_PORT", environ, config_file)
    if raw_port:
        try:
            port = int(raw_port)
        except ValueError:
            logger.warning(f"ignoring non-numeric {prefix}_PROXY_PORT {raw_port!r}, using {default_port}")

    return ProxySettings(host=host, port=port, secure=use_https)
