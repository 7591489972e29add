"""
Cli package.
"""

from .ui import (
    COLOR_ERROR,
    COLOR_INFO,
    COLOR_SUCCESS,
    COLOR_UPDATE,
    COLOR_WARNING,
    ConsoleUpdateListener,
    InfoPanel,
    TableDisplay,
    print_error,
    print_info,
    print_success,
    print_warning,
    show_spinner,
)
from .utils import (
    build_config,
    format_duration,
)

__all__ = [
    "COLOR_ERROR",
    "COLOR_INFO",
    "COLOR_SUCCESS",
    "COLOR_UPDATE",
    "COLOR_WARNING",
    "ConsoleUpdateListener",
    "InfoPanel",
    "TableDisplay",
    "build_config",
    "format_duration",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "show_spinner",
]
