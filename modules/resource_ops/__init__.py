"""
Resource operations module for install-ops.

Provides named, error-mapped filesystem, process and download operations.
"""

from .ops import ResourceOperator, Command
from .platform import Platform, PosixPlatform, WindowsPlatform, CURRENT_PLATFORM
from .raw import (
    RawOperations,
    LocalRawOperations,
    is_directory,
    is_file,
    path_exists,
    to_absolute,
    if_not_empty,
    random_string,
    prefix_arg,
    home_dir,
)

__all__ = [
    'ResourceOperator',
    'Command',
    'Platform',
    'PosixPlatform',
    'WindowsPlatform',
    'CURRENT_PLATFORM',
    'RawOperations',
    'LocalRawOperations',
    'is_directory',
    'is_file',
    'path_exists',
    'to_absolute',
    'if_not_empty',
    'random_string',
    'prefix_arg',
    'home_dir',
]
