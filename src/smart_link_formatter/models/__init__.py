"""Pydantic models for Smart Link Formatter."""

from smart_link_formatter.models.common import (
    Extraction,
    FailureMode,
    LinkResult,
    Metadata,
    TitleReplacement,
)

__all__ = [
    "Extraction",
    "FailureMode",
    "LinkResult",
    "Metadata",
    "TitleReplacement",
]
