"""Changelog Generation Package"""

from relnotes.changelog.models import (
    Context,
    Generate,
    Note,
    ParsedCommit,
    Reference,
    Revert,
    SynthesizedSummary,
    TransformState,
    TransformedCommit,
)
from relnotes.changelog.parser import parse_commit, version_from_tags
from relnotes.changelog.transformer import CommitTransformer, transform, generate_on
from relnotes.changelog.writer import ReleaseBlock, collect_releases, render_changelog, render_release

__all__ = [
    "Context",
    "Generate",
    "Note",
    "ParsedCommit",
    "Reference",
    "Revert",
    "SynthesizedSummary",
    "TransformState",
    "TransformedCommit",
    "parse_commit",
    "version_from_tags",
    "CommitTransformer",
    "transform",
    "generate_on",
    "ReleaseBlock",
    "collect_releases",
    "render_changelog",
    "render_release",
]
