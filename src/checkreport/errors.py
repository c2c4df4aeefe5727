"""Exceptions raised while assembling or saving a report."""

from __future__ import annotations


class ReportError(Exception):
    """Base exception for checkreport."""

    def __init__(self, message: str, *, code: str = "error") -> None:
        self.message = message
        self.code = code
        super().__init__(message)


class MalformedInputError(ReportError, ValueError):
    """Caller passed structurally inconsistent data (e.g. ragged table columns)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        if field:
            message = f"{field}: {message}"
        super().__init__(message, code="malformed_input")
        self.field = field


class MissingArtifactError(ReportError):
    """A referenced file or image could not be read."""

    def __init__(self, artifact: str, reason: str = "Not found") -> None:
        super().__init__(f"{artifact}: {reason}", code="missing_artifact")
        self.artifact = artifact
        self.reason = reason


class SerializationError(ReportError):
    """The finished document could not be written."""

    def __init__(self, target: str, reason: str) -> None:
        super().__init__(f"Could not write {target}: {reason}", code="serialization_failed")
        self.target = target
