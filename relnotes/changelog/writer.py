"""Changelog Writer - Group transformed commits into release sections and render Markdown."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from relnotes import CHANGELOG_TITLE
from relnotes.changelog.models import Context, ParsedCommit, TransformedCommit
from relnotes.changelog.transformer import CommitTransformer

logger = logging.getLogger(__name__)

# Section order; anything else follows alphabetically
GROUP_ORDER = ['Features', 'Bug Fixes', 'Performance Improvements', 'Reverts']


@dataclass
class ReleaseBlock:
    """One version header and the entries listed under it."""
    version: Optional[str]
    date: Optional[str]
    commits: list[TransformedCommit] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.commits


def _group_key(label: Optional[str]) -> tuple[int, str]:
    if label is None:
        return (-1, '')
    if label in GROUP_ORDER:
        return (GROUP_ORDER.index(label), label)
    return (len(GROUP_ORDER), label)


def collect_releases(commits: Iterable[ParsedCommit], context: Context) -> list[ReleaseBlock]:
    """Split newest-first commits into release blocks.

    A commit that passes `generate_on` closes the block being collected and
    heads the next one. Commits newer than every release go into a leading
    block labelled with `context.version`.
    """
    transformer = CommitTransformer(context)
    blocks = []
    current = ReleaseBlock(version=context.version, date=context.date)

    for commit in commits:
        transformed = transformer.transform(commit)
        key_commit = transformed or commit
        if transformer.generate_on(key_commit):
            blocks.append(current)
            current = ReleaseBlock(version=key_commit.version, date=key_commit.committer_date)
        if transformed is not None:
            current.commits.append(transformed)
    blocks.append(current)

    if transformer.state.legacy_releases:
        logger.warning(
            "%d legacy release(s) were never summarized; is the oldest tag missing from the context?",
            len(transformer.state.legacy_releases),
        )

    # The leading block only matters when there are unreleased entries
    if blocks and blocks[0].is_empty:
        blocks.pop(0)
    return blocks


def _format_commit(commit: TransformedCommit, context: Context) -> str:
    url = context.url
    scope = f"**{commit.scope}:** " if commit.scope else ''
    line = f"* {scope}{commit.subject or commit.header or ''}"

    if commit.short_hash:
        if url:
            line += f" ([{commit.short_hash}]({url}/commit/{commit.hash}))"
        else:
            line += f" ({commit.short_hash})"

    if context.link_references and commit.references:
        refs = []
        for ref in commit.references:
            text = f"{ref.owner}/{ref.repository}#{ref.issue}" if ref.repository else f"#{ref.issue}"
            if url and not ref.repository:
                text = f"[{text}]({url}/issues/{ref.issue})"
            refs.append(f"{ref.action.lower() if ref.action else 'closes'} {text}")
        line += ', ' + ', '.join(refs)

    return line


def render_release(block: ReleaseBlock, context: Context) -> str:
    """Render one release block as Markdown."""
    header = f"## {block.version}" if block.version else "## Unreleased"
    if block.date:
        header += f" ({block.date})"
    lines = [header, '']

    groups: dict[Optional[str], list[TransformedCommit]] = {}
    for commit in block.commits:
        groups.setdefault(commit.type, []).append(commit)

    for label in sorted(groups, key=_group_key):
        if label is not None:
            lines.extend([f"### {label}", ''])
        lines.extend(_format_commit(commit, context) for commit in groups[label])
        lines.append('')

    notes = [note for commit in block.commits for note in commit.notes]
    if notes:
        lines.extend([f"### {notes[0].title}", ''])
        lines.extend(f"* {note.text}" for note in notes)
        lines.append('')

    return '\n'.join(lines).rstrip() + '\n'


def render_changelog(commits: Iterable[ParsedCommit], context: Context, title: str = CHANGELOG_TITLE) -> str:
    """Render a complete changelog document from newest-first commits."""
    sections = [title.rstrip() + '\n']
    for block in collect_releases(commits, context):
        sections.append(render_release(block, context))
    return '\n'.join(sections)
