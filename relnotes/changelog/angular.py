"""Angular Preset - Conventional-commit field transform for changelog entries."""

import re
from dataclasses import replace
from typing import Optional

from relnotes.changelog.models import Context, Note, ParsedCommit, short_hash

# Types always shown in the changelog
RELEASE_TYPE_LABELS = {
    'feat': 'Features',
    'fix': 'Bug Fixes',
    'perf': 'Performance Improvements',
    'revert': 'Reverts',
}

# Types shown only when the commit carries breaking-change notes
NOTE_ONLY_TYPE_LABELS = {
    'docs': 'Documentation',
    'style': 'Styles',
    'refactor': 'Code Refactoring',
    'test': 'Tests',
    'build': 'Build System',
    'ci': 'Continuous Integration',
}

BREAKING_TITLE = 'BREAKING CHANGES'

ISSUE_PATTERN = re.compile(r'#([0-9]+)')
USERNAME_PATTERN = re.compile(r'\B@([a-z0-9](?:-?[a-z0-9/]){0,38})')


def _link_subject(subject: str, context: Context, issues: list[str]) -> str:
    url = context.url
    if url:
        def _issue_link(match):
            issues.append(match.group(1))
            return f"[#{match.group(1)}]({url}/issues/{match.group(1)})"
        subject = ISSUE_PATTERN.sub(_issue_link, subject)

    if context.host:
        def _user_link(match):
            username = match.group(1)
            if '/' in username:
                return f"@{username}"
            return f"[@{username}]({context.host}/{username})"
        subject = USERNAME_PATTERN.sub(_user_link, subject)

    return subject


def transform(commit: ParsedCommit, context: Context) -> Optional[ParsedCommit]:
    """Label the commit type and link its subject; None if not changelog-worthy."""
    notes = [Note(title=BREAKING_TITLE, text=note.text) for note in commit.notes]
    discard = not notes

    if commit.type in RELEASE_TYPE_LABELS:
        label = RELEASE_TYPE_LABELS[commit.type]
    elif commit.revert:
        label = RELEASE_TYPE_LABELS['revert']
    elif discard:
        return None
    else:
        label = NOTE_ONLY_TYPE_LABELS.get(commit.type, commit.type)

    scope = '' if commit.scope == '*' else commit.scope
    issues: list[str] = []
    subject = commit.subject
    if isinstance(subject, str):
        subject = _link_subject(subject, context, issues)

    return replace(
        commit,
        type=label,
        scope=scope,
        subject=subject,
        notes=notes,
        short_hash=short_hash(commit.hash) if isinstance(commit.hash, str) else None,
        references=[ref for ref in commit.references if ref.issue not in issues],
    )
