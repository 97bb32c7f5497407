"""
Utility modules for Idle Conductor
"""
from .logger import setup_logger
from .merge import merge
from .singleton import singleton

__all__ = [
    "setup_logger",
    "merge",
    "singleton",
]
