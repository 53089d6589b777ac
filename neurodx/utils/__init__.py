"""
Utilities Package - Logging and Exception Handling
"""
from .logging import get_logger, setup_logging
from .exceptions import (
    NeuroDxError,
    SessionLoadError,
    UnknownPresetError,
)

__all__ = [
    "get_logger",
    "setup_logging",
    "NeuroDxError",
    "SessionLoadError",
    "UnknownPresetError",
]
