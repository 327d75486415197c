"""
Porter Builder Utils Module

- logger: Logging setup and configuration

Usage:
    from porterbuilder.utils import setup_logger
"""

from .logger import setup_logger, parse_module_levels, normalize_module_name

__all__ = [
    'setup_logger',
    'parse_module_levels',
    'normalize_module_name',
]
