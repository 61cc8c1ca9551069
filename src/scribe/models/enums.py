"""Shared enums for models."""

from enum import Enum


class ChangelogStatus(str, Enum):
    """Changelog lifecycle status. Drafts move to published exactly once."""

    DRAFT = "draft"
    PUBLISHED = "published"
