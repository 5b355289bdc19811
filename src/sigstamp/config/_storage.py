"""
On-disk storage for sigstamp settings (~/.sigstamp/config.json).

Values are type-checked on load; anything invalid is logged and left
out, so callers always fall back to the built-in default.
"""

from __future__ import annotations

__all__ = [
    "CONFIG_DIR",
    "CONFIG_FILE",
    "load_config",
    "load_raw_config",
    "save_config",
    "valid_dimension",
    "valid_scale",
]

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any, TypedDict, cast

from ..constants import MAX_RENDER_SCALE

_logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".sigstamp"
CONFIG_FILE = CONFIG_DIR / "config.json"


class ConfigDict(TypedDict, total=False):
    """Type definition for the config file structure."""

    render_scale: float
    signature_width: int
    signature_height: int
    strict_pages: bool


def load_raw_config() -> dict[str, object]:
    """Read config.json as-is, unknown keys included.

    Returns an empty dict when the file is missing, unreadable, or does
    not hold a JSON object. Settings writers merge into this so keys
    they do not know about survive a save.
    """
    try:
        text = CONFIG_FILE.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        _logger.warning("Cannot read %s: %s", CONFIG_FILE, e)
        return {}

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as e:
        _logger.warning("Config file corrupted, ignoring: %s", e)
        return {}
    if not isinstance(data, dict):
        _logger.warning("Config file %s does not hold an object, ignoring", CONFIG_FILE)
        return {}
    return cast("dict[str, object]", data)


def valid_scale(value: object) -> float | None:
    """Return ``value`` as a render scale, or None if it is not one."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    scale = float(value)
    if not math.isfinite(scale) or scale <= 0 or scale > MAX_RENDER_SCALE:
        return None
    return scale


def valid_dimension(value: object) -> int | None:
    """Return ``value`` as a positive pixel dimension, or None."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return None
    return value


def _validate_config_dict(data: dict[str, object]) -> ConfigDict:
    """Validate and return config dict, picking only known keys with correct types."""
    result: ConfigDict = {}

    if "render_scale" in data:
        scale = valid_scale(data["render_scale"])
        if scale is None:
            _logger.warning("Config render_scale=%r is invalid, ignoring", data["render_scale"])
        else:
            result["render_scale"] = scale

    for key in ("signature_width", "signature_height"):
        if key in data:
            dim = valid_dimension(data[key])
            if dim is None:
                _logger.warning("Config %s=%r is invalid, ignoring", key, data[key])
            else:
                result[key] = dim  # type: ignore[literal-required]  # dynamic key from known set

    strict = data.get("strict_pages")
    if isinstance(strict, bool):
        result["strict_pages"] = strict
    elif strict is not None:
        _logger.warning("Config strict_pages=%r is not a boolean, ignoring", strict)

    return result


def load_config() -> ConfigDict:
    """Load config from disk, returning only known typed keys."""
    return _validate_config_dict(load_raw_config())


def save_config(config: dict[str, object]) -> None:
    """Write ``config`` to config.json, readable by the owner only.

    The JSON goes to a temp file in the config directory first and is
    renamed over the old file, so readers never see a partial write.
    """
    CONFIG_DIR.mkdir(parents=True, exist_ok=True, mode=0o700)
    payload = json.dumps(config, indent=2, sort_keys=True) + "\n"

    fd, tmp_name = tempfile.mkstemp(dir=CONFIG_DIR, prefix=".config.", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        if os.name != "nt":
            os.chmod(tmp, 0o600)
        os.replace(tmp, CONFIG_FILE)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
