"""
Custom Exception Hierarchy

The differential engine itself never raises on clinical input; these types
cover the edges around it (loading session files, resolving presets).
"""
from typing import Optional, Dict, Any


class NeuroDxError(Exception):
    """Base exception for all NeuroDx errors."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a JSON-ready dictionary."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details
        }


class SessionLoadError(NeuroDxError):
    """A session snapshot file could not be read or decoded."""

    def __init__(
        self,
        message: str,
        path: str = "unknown",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            code="SESSION_LOAD_ERROR",
            details={"path": path, **(details or {})}
        )
        self.path = path


class UnknownPresetError(NeuroDxError):
    """Requested preset session does not exist."""

    def __init__(
        self,
        name: str,
        available: Optional[list] = None,
    ):
        super().__init__(
            message=f"Unknown preset: {name!r}",
            code="UNKNOWN_PRESET",
            details={"preset": name, "available": list(available or [])}
        )
        self.name = name
