"""Changelog Models - Commit records, context, and per-run transform state."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Union

SEMVER_PATTERN = re.compile(
    r'^v?(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)(?:-[0-9A-Za-z.-]+)?(?:\+[0-9A-Za-z.-]+)?$'
)

ARCHIVED_VERSION = 'Archived Releases'
ARCHIVED_DATE = 'pre-CI/CD'


def is_semver(version: Optional[str]) -> bool:
    """Check if a string is a valid semantic version (optional leading 'v')."""
    return bool(version) and bool(SEMVER_PATTERN.match(version.strip()))


def short_hash(commit_hash: str) -> str:
    return commit_hash[:7]


@dataclass
class Note:
    """A breaking-change annotation attached to a commit."""
    title: str
    text: str


@dataclass
class Reference:
    """An issue reference found in a commit message."""
    issue: str
    action: Optional[str] = None
    owner: Optional[str] = None
    repository: Optional[str] = None
    prefix: str = '#'
    raw: str = ''


@dataclass
class Revert:
    """What a revert commit undoes."""
    header: str
    hash: Optional[str] = None


@dataclass
class ParsedCommit:
    """One version-control commit after conventional-commit parsing."""
    hash: str = ''
    type: Optional[str] = None
    scope: Optional[str] = None
    subject: Optional[str] = None
    merge: Optional[str] = None
    header: Optional[str] = None
    body: Optional[str] = None
    footer: Optional[str] = None
    notes: list[Note] = field(default_factory=list)
    references: list[Reference] = field(default_factory=list)
    mentions: list[str] = field(default_factory=list)
    revert: Optional[Revert] = None
    git_tags: Optional[str] = None
    committer_date: Optional[str] = None
    version: Optional[str] = None
    short_hash: Optional[str] = None
    id: Optional[str] = None
    source: Optional[str] = None


@dataclass
class SynthesizedSummary:
    """The single entry that lists every release made before conventional commits."""
    subject: str
    hash: str
    short_hash: str
    version: str = ARCHIVED_VERSION
    committer_date: str = ARCHIVED_DATE

    # Every other commit field reads as empty
    type = None
    scope = None
    merge = None
    header = None
    body = None
    footer = None
    revert = None
    git_tags = None
    id = None
    source = None

    @property
    def notes(self) -> list[Note]:
        return []

    @property
    def references(self) -> list[Reference]:
        return []

    @property
    def mentions(self) -> list[str]:
        return []


TransformedCommit = Union[ParsedCommit, SynthesizedSummary]


@dataclass
class Context:
    """Repository metadata shared by every commit of a changelog run."""
    host: Optional[str] = None
    owner: Optional[str] = None
    repository: Optional[str] = None
    repo_url: Optional[str] = None
    git_semver_tags: list[str] = field(default_factory=list)
    version: Optional[str] = None
    date: Optional[str] = None
    link_references: bool = True

    @property
    def url(self) -> Optional[str]:
        """Base URL for commit and issue links."""
        if self.repository:
            return f"{self.host}/{self.owner}/{self.repository}"
        return self.repo_url

    @property
    def first_release_version(self) -> Optional[str]:
        """Oldest known tag without its one-character prefix ('v1.0.0' -> '1.0.0')."""
        if not self.git_semver_tags:
            return None
        return self.git_semver_tags[-1][1:]


class Generate(Enum):
    """Whether the next commit may open a new changelog section."""
    YES = 'yes'
    NO = 'no'
    ALWAYS = 'always'


@dataclass
class TransformState:
    """Mutable state threaded through a single changelog pass."""
    legacy_releases: list[ParsedCommit] = field(default_factory=list)
    should_generate: Generate = Generate.YES

    def reset(self) -> None:
        self.legacy_releases.clear()
        self.should_generate = Generate.YES
