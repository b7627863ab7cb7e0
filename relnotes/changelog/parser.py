"""Commit Parser - Turn raw commit messages into ParsedCommit records."""

import logging
import re
from typing import Optional

from relnotes import MERGE_PATTERN, MERGE_CORRESPONDENCE, NOTE_KEYWORDS
from relnotes.changelog.models import ParsedCommit, Note, Reference, Revert, is_semver

logger = logging.getLogger(__name__)

HEADER_PATTERN = re.compile(r'^(\w*)(?:\((.*)\))?(!?): (.*)$')
REVERT_HEADER_PATTERN = re.compile(r'^Revert "(.+)"$')
REVERT_PATTERN = re.compile(
    r'^(?:Revert|revert:)\s"?([\s\S]+?)"?\s*This reverts commit (\w*)\.',
    re.MULTILINE,
)
NOTE_PATTERN = re.compile(
    rf'^[\s|*]*({"|".join(sorted(map(re.escape, NOTE_KEYWORDS), key=len, reverse=True))})[:\s]+(.*)$'
)
REFERENCE_ACTIONS = r'close[sd]?|fix(?:e[sd])?|resolve[sd]?'
REFERENCE_PATTERN = re.compile(
    rf'(?:\b({REFERENCE_ACTIONS})\s+)?(?:([\w-]+)/([\w.-]+))?#(\d+)',
    re.IGNORECASE,
)
FOOTER_REFERENCE_LINE = re.compile(rf'^\s*({REFERENCE_ACTIONS})\s+\S*#\d+', re.IGNORECASE)
MENTION_PATTERN = re.compile(r'\B@([\w-]+)')
TAG_PATTERN = re.compile(r'tag:\s*[v=]?(.+?)[,)]', re.IGNORECASE)


def version_from_tags(git_tags: Optional[str]) -> Optional[str]:
    """Pick the first semver tag out of a `git log %d` decoration string."""
    if not git_tags:
        return None
    for match in TAG_PATTERN.finditer(git_tags):
        candidate = match.group(1).strip()
        if is_semver(candidate):
            return candidate
    return None


def _clean_lines(message: str) -> list[str]:
    """Split into lines without surrounding blank lines; '#' lines are content, not comments."""
    lines = [line.rstrip() for line in message.replace('\r\n', '\n').split('\n')]
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _parse_references(text: str) -> list[Reference]:
    references = []
    seen = set()
    for match in REFERENCE_PATTERN.finditer(text):
        action, owner, repository, issue = match.groups()
        key = (owner, repository, issue)
        if key in seen:
            continue
        seen.add(key)
        references.append(Reference(
            issue=issue,
            action=action.capitalize() if action else None,
            owner=owner,
            repository=repository,
            raw=match.group(0).strip(),
        ))
    return references


def _split_body_and_footer(lines: list[str]) -> tuple[list[str], list[str]]:
    """The footer starts at the first note keyword or closing reference line."""
    for i, line in enumerate(lines):
        if NOTE_PATTERN.match(line) or FOOTER_REFERENCE_LINE.match(line):
            return lines[:i], lines[i:]
    return lines, []


def _parse_notes(footer: list[str]) -> list[Note]:
    notes: list[Note] = []
    current: Optional[Note] = None
    for line in footer:
        match = NOTE_PATTERN.match(line)
        if match:
            current = Note(title=match.group(1), text=match.group(2).strip())
            notes.append(current)
        elif FOOTER_REFERENCE_LINE.match(line):
            current = None
        elif current is not None:
            current.text = f"{current.text}\n{line}".strip()
    return notes


def _join(lines: list[str]) -> Optional[str]:
    text = '\n'.join(lines).strip()
    return text or None


def parse_commit(
    message: str,
    hash: str = '',
    committer_date: Optional[str] = None,
    git_tags: Optional[str] = None,
) -> ParsedCommit:
    """Parse a commit message as a conventional commit.

    Never raises: a message that doesn't follow the convention yields a
    commit whose type, scope and subject are None.
    """
    commit = ParsedCommit(
        hash=hash,
        committer_date=committer_date,
        git_tags=git_tags,
        version=version_from_tags(git_tags),
    )
    lines = _clean_lines(message or '')
    if not lines:
        return commit

    header = lines.pop(0).strip()
    merge_match = re.match(MERGE_PATTERN, header)
    if merge_match:
        commit.merge = header
        for name, value in zip(MERGE_CORRESPONDENCE, merge_match.groups()):
            setattr(commit, name, value)
        while lines and not lines[0].strip():
            lines.pop(0)
        header = lines.pop(0).strip() if lines else header

    commit.header = header
    header_match = HEADER_PATTERN.match(header)
    revert_header = REVERT_HEADER_PATTERN.match(header)
    if header_match:
        commit.type, commit.scope, breaking, commit.subject = header_match.groups()
        commit.type = commit.type or None
        commit.scope = commit.scope or None
    elif revert_header:
        commit.type = 'revert'
        commit.subject = revert_header.group(1)
        breaking = ''
    else:
        logger.debug("header does not follow conventional format: %r", header)
        breaking = ''

    body, footer = _split_body_and_footer(lines)
    commit.body = _join(body)
    commit.footer = _join(footer)
    commit.notes = _parse_notes(footer)
    if breaking and not commit.notes and commit.subject:
        commit.notes.append(Note(title='BREAKING CHANGE', text=commit.subject))

    full_text = '\n'.join([header, *lines])
    commit.references = _parse_references(full_text)
    commit.mentions = MENTION_PATTERN.findall(full_text)

    revert_match = REVERT_PATTERN.search('\n'.join([header, *lines]))
    if revert_match:
        commit.revert = Revert(header=revert_match.group(1), hash=revert_match.group(2) or None)

    return commit
