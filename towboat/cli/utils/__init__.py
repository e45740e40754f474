"""CLI utility functions"""

from .output import (
    console,
    print_header,
    print_item,
    format_run_result,
    print_error,
)

__all__ = [
    'console',
    'print_header',
    'print_item',
    'format_run_result',
    'print_error',
]
