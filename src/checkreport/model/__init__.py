"""Block IR and rendering policy."""

from .blocks import (
    Block,
    Caption,
    Comment,
    DiffBlock,
    ErrorBlock,
    FootnoteBlock,
    FileListing,
    ImageRef,
    MarkedLines,
    PassMarker,
    PlainText,
    Preamble,
    Score,
    ScoreSummary,
    SectionHeader,
    SystemErrorBlock,
    TableBlock,
)
from .policy import RenderPolicy, numbered_suffixes

__all__ = [
    "Block",
    "Caption",
    "Comment",
    "DiffBlock",
    "ErrorBlock",
    "FootnoteBlock",
    "FileListing",
    "ImageRef",
    "MarkedLines",
    "PassMarker",
    "PlainText",
    "Preamble",
    "Score",
    "ScoreSummary",
    "SectionHeader",
    "SystemErrorBlock",
    "TableBlock",
    "RenderPolicy",
    "numbered_suffixes",
]
