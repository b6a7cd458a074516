"""Utility modules for ctxgen.

This module exports commonly used utility functions.
"""

from ctxgen.utils.formatting import (
    console,
    err_console,
    format_node_label,
    print_error,
    print_info,
    print_scan_issue,
    print_success,
    print_warning,
)

__all__ = [
    "console",
    "err_console",
    "format_node_label",
    "print_error",
    "print_info",
    "print_scan_issue",
    "print_success",
    "print_warning",
]
