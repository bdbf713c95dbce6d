"""Projector configuration module."""

from .style_config import (
    DEFAULT_STYLES,
    StyleConfig,
    get_style,
    load_style_config,
)

__all__ = [
    "DEFAULT_STYLES",
    "StyleConfig",
    "get_style",
    "load_style_config",
]
