"""
Configuration management for sigstamp.

Resolves placement defaults from, in priority order, environment
variables, ``~/.sigstamp/config.json``, and built-in constants.
"""

from __future__ import annotations

__all__ = [
    "SETTING_KEYS",
    "get_render_scale",
    "get_settings",
    "get_signature_size",
    "get_strict_pages",
    "reset_settings",
    "save_settings",
]

import logging
import os

from ..constants import (
    DEFAULT_RENDER_SCALE,
    DEFAULT_SIGNATURE_HEIGHT,
    DEFAULT_SIGNATURE_WIDTH,
    ENV_SCALE,
    ENV_STRICT_PAGES,
)
from ..core.coords import SignatureSize
from ..errors import ConfigError
from . import _storage
from ._storage import load_config, load_raw_config, save_config, valid_dimension, valid_scale

_logger = logging.getLogger(__name__)

SETTING_KEYS = ("render_scale", "signature_width", "signature_height", "strict_pages")

_TRUE_STRINGS = {"1", "true", "yes", "on"}
_FALSE_STRINGS = {"0", "false", "no", "off"}


def _parse_bool(text: str) -> bool | None:
    value = text.strip().lower()
    if value in _TRUE_STRINGS:
        return True
    if value in _FALSE_STRINGS:
        return False
    return None


def get_render_scale() -> float:
    """Render scale for page previews.

    Priority: SIGSTAMP_SCALE > config file > DEFAULT_RENDER_SCALE.
    """
    env_val = os.environ.get(ENV_SCALE, "").strip()
    if env_val:
        try:
            scale = valid_scale(float(env_val))
        except ValueError:
            scale = None
        if scale is not None:
            return scale
        _logger.warning("Invalid %s value %r, ignoring", ENV_SCALE, env_val)

    return load_config().get("render_scale", DEFAULT_RENDER_SCALE)


def get_signature_size() -> SignatureSize:
    """On-screen signature footprint from config, or the 400x150 default."""
    config = load_config()
    return SignatureSize(
        width=config.get("signature_width", DEFAULT_SIGNATURE_WIDTH),
        height=config.get("signature_height", DEFAULT_SIGNATURE_HEIGHT),
    )


def get_strict_pages() -> bool:
    """Whether an out-of-range page is an error instead of falling back to page 1.

    Priority: SIGSTAMP_STRICT_PAGES > config file > False.
    """
    env_val = os.environ.get(ENV_STRICT_PAGES, "").strip()
    if env_val:
        parsed = _parse_bool(env_val)
        if parsed is not None:
            return parsed
        _logger.warning("Invalid %s value %r, ignoring", ENV_STRICT_PAGES, env_val)

    return load_config().get("strict_pages", False)


def get_settings() -> dict[str, object]:
    """Effective settings after applying env vars, config file, and defaults."""
    size = get_signature_size()
    return {
        "render_scale": get_render_scale(),
        "signature_width": size.width,
        "signature_height": size.height,
        "strict_pages": get_strict_pages(),
    }


def _coerce_setting(key: str, value: object) -> object:
    """Validate a single setting, parsing strings from the command line."""
    if key == "render_scale":
        if isinstance(value, str):
            try:
                value = float(value)
            except ValueError:
                value = None
        scale = valid_scale(value)
        if scale is None:
            raise ConfigError("render_scale must be a positive number")
        return scale

    if key in ("signature_width", "signature_height"):
        if isinstance(value, str):
            try:
                value = int(value)
            except ValueError:
                value = None
        dim = valid_dimension(value)
        if dim is None:
            raise ConfigError(f"{key} must be a positive integer")
        return dim

    if key == "strict_pages":
        if isinstance(value, str):
            value = _parse_bool(value)
        if not isinstance(value, bool):
            raise ConfigError("strict_pages must be true or false")
        return value

    raise ConfigError(f"Unknown setting {key!r}. Valid: {', '.join(SETTING_KEYS)}")


def save_settings(**values: object) -> None:
    """Validate and persist settings, preserving other keys in the file.

    Raises:
        ConfigError: On an unknown key or invalid value. Nothing is
            written in that case.
    """
    config = load_raw_config()
    for key, value in values.items():
        config[key] = _coerce_setting(key, value)
    save_config(config)
    _logger.debug("Saved settings: %s", ", ".join(sorted(values)))


def reset_settings() -> None:
    """Remove all stored settings."""
    config = load_raw_config()
    for key in SETTING_KEYS:
        config.pop(key, None)
    if config:
        save_config(config)
    else:
        _storage.CONFIG_FILE.unlink(missing_ok=True)
