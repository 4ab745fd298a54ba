"""Source parsers for asset bundle and widget classes."""

from .assets import (
    parse_asset_file,
    parse_asset_source,
    parse_widget_file,
    parse_widget_source,
)
from .php import PhpSyntaxError

__all__ = [
    "PhpSyntaxError",
    "parse_asset_file",
    "parse_asset_source",
    "parse_widget_file",
    "parse_widget_source",
]
