"""
Configuration for placement defaults.

Import from this package directly rather than from the submodules.
"""

from __future__ import annotations

from ._storage import CONFIG_FILE
from .config import (
    SETTING_KEYS,
    get_render_scale,
    get_settings,
    get_signature_size,
    get_strict_pages,
    reset_settings,
    save_settings,
)

__all__ = [
    "CONFIG_FILE",
    "SETTING_KEYS",
    "get_render_scale",
    "get_settings",
    "get_signature_size",
    "get_strict_pages",
    "reset_settings",
    "save_settings",
]
