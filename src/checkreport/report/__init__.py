"""Report assembly and artifact storage."""

from .document import ReportDocument
from .sink import ArtifactSink, DirectorySink, load_image
from .stamp import get_version, version_stamp

__all__ = [
    "ArtifactSink",
    "DirectorySink",
    "ReportDocument",
    "get_version",
    "load_image",
    "version_stamp",
]
