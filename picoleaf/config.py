"""Load connection settings from ``~/.picoleafrc`` and the environment."""
from __future__ import annotations

import configparser
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from picoleaf import const
from picoleaf.client import NanoleafError

_LOGGER = logging.getLogger(__name__)

# The rc file is plain ``key = value`` lines with no section header.
_SECTION = "picoleaf"


class PicoleafConfigError(NanoleafError):
    """The configuration is missing or incomplete."""


@dataclass(slots=True)
class PicoleafConfig:
    """Connection settings for a device."""

    host: str
    token: str
    verbose: bool = False


def _env_bool(environ: Mapping[str, str], name: str, default: bool = False) -> bool:
    val = environ.get(name)
    if val is None:
        return default
    return val.strip().lower() in {"1", "true", "yes", "on", "y"}


def _env_str(environ: Mapping[str, str], name: str) -> str | None:
    val = environ.get(name)
    if val is None or not val.strip():
        return None
    return val.strip()


def default_config_path(environ: Mapping[str, str] | None = None) -> Path:
    """Return the rc file path, honouring ``PICOLEAF_CONFIG``."""
    if environ is None:
        environ = os.environ
    override = _env_str(environ, const.ENV_CONFIG)
    if override:
        return Path(override).expanduser()
    return Path.home() / const.DEFAULT_CONFIG_FILE


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def read_config_file(path: Path) -> dict[str, str]:
    """Parse an rc file into a plain dict of its keys."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        raise PicoleafConfigError(f"Failed to read {path}: {err}") from err

    parser = configparser.ConfigParser(
        interpolation=None, inline_comment_prefixes=("#", ";")
    )
    try:
        parser.read_string(f"[{_SECTION}]\n{text}", source=str(path))
    except configparser.Error as err:
        raise PicoleafConfigError(f"Failed to parse {path}: {err}") from err
    return {key: _unquote(value) for key, value in parser.items(_SECTION)}


def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> PicoleafConfig:
    """Build the config from the rc file, then apply environment overrides.

    The rc file may be absent when both ``PICOLEAF_HOST`` and
    ``PICOLEAF_TOKEN`` are set.
    """
    if environ is None:
        environ = os.environ
    config_path = Path(path).expanduser() if path else default_config_path(environ)

    env_host = _env_str(environ, const.ENV_HOST)
    env_token = _env_str(environ, const.ENV_TOKEN)

    values: dict[str, str] = {}
    if config_path.exists():
        values = read_config_file(config_path)
    elif not (env_host and env_token):
        raise PicoleafConfigError(f"Config file {config_path} not found")
    else:
        _LOGGER.debug("No config file at %s; using environment", config_path)

    host = env_host or values.get(const.CONF_HOST, "").strip()
    token = env_token or values.get(const.CONF_ACCESS_TOKEN, "").strip()
    if not host:
        raise PicoleafConfigError(f"No {const.CONF_HOST} configured in {config_path}")
    if not token:
        raise PicoleafConfigError(
            f"No {const.CONF_ACCESS_TOKEN} configured in {config_path}"
        )

    return PicoleafConfig(
        host=host,
        token=token,
        verbose=_env_bool(environ, const.ENV_VERBOSE),
    )
