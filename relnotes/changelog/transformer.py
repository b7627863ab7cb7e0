"""Commit Transformer - Decide which commits become changelog entries and how they read."""

import logging
import re
from dataclasses import replace
from typing import Optional

from relnotes import CUSTOM_COMMIT_TYPE, CUSTOM_TYPE_LABEL, SHOW_REVERSION_TYPES, SKIP_COMMANDS
from relnotes.changelog import angular
from relnotes.changelog.models import (
    Context,
    Generate,
    ParsedCommit,
    SynthesizedSummary,
    TransformState,
    TransformedCommit,
    is_semver,
    short_hash,
)

logger = logging.getLogger(__name__)

REVERTS_LABEL = angular.RELEASE_TYPE_LABELS['revert']
VISIBLE_REVERT_PATTERNS = [
    re.compile(rf'^\W?{re.escape(commit_type)}: ', re.IGNORECASE)
    for commit_type in SHOW_REVERSION_TYPES
]


def sentence_case(text: str) -> str:
    return text[:1].upper() + text[1:]


def _summarize_legacy_releases(
    commit: ParsedCommit, context: Context, state: TransformState
) -> SynthesizedSummary:
    """Fold every collected legacy release into one nested Markdown list.

    Releases are collected newest first; folding oldest first leaves the
    newest release as the outermost line.
    """
    url = context.url
    subject = f"Version {commit.version}"
    for legacy in reversed(state.legacy_releases):
        link = f"[{short_hash(legacy.hash)}]({url}/commit/{legacy.hash})"
        subject = f"Version {legacy.version} ({link})\n\n- {subject}"
    state.legacy_releases.clear()

    return SynthesizedSummary(
        subject=subject,
        hash=commit.hash,
        short_hash=short_hash(commit.hash),
    )


def _transform_conventional(commit: ParsedCommit, context: Context) -> Optional[ParsedCommit]:
    fake_fix = False
    if commit.type == CUSTOM_COMMIT_TYPE:
        logger.debug("encountered custom commit type %r", commit.type)
        commit = replace(commit, type='fix')
        fake_fix = True

    transformed = angular.transform(commit, context)
    logger.debug("angular transformed commit = %r", transformed)
    if transformed is None:
        return None

    if fake_fix:
        transformed.type = CUSTOM_TYPE_LABEL
        logger.debug("commit type set to custom value %r", transformed.type)
    elif transformed.type:
        transformed.type = sentence_case(transformed.type)
    else:
        logger.debug("commit has breaking notes but no type; commit skipped")
        return None

    subject = transformed.subject or ''
    if any(cmd in subject for cmd in SKIP_COMMANDS):
        logger.debug("saw skip command in commit message; commit skipped")
        return None

    if transformed.type == REVERTS_LABEL:
        logger.debug("saw special commit type %r", REVERTS_LABEL)
        # Only reverts of release-triggering commits are shown
        if not any(pattern.match(subject.strip()) for pattern in VISIBLE_REVERT_PATTERNS):
            logger.debug("this revert was ignored")
            return None
        transformed.subject = f"*{transformed.subject}*"

    return transformed


def transform(
    commit: ParsedCommit, context: Context, state: TransformState
) -> Optional[TransformedCommit]:
    """Transform one parsed commit into a changelog entry, or None to drop it.

    Untyped commits tagged with a version are pre-conventional ("legacy")
    releases: they are collected in `state` and reported together when the
    oldest tagged release is reached. The input commit is never mutated.
    """
    version = commit.version or None
    first_release = version is not None and version == context.first_release_version

    logger.debug("transform encountered commit = %r", commit)
    logger.debug("commit version = %s, first_release = %s", version, first_release)

    if not first_release or commit.type:
        if version and not commit.type:
            logger.debug("determined commit is legacy release")
            state.legacy_releases.append(commit)
            state.should_generate = Generate.NO
            return None
        result = _transform_conventional(commit, context)
    else:
        logger.debug("generating summary legacy release commit")
        state.should_generate = Generate.ALWAYS
        result = _summarize_legacy_releases(commit, context, state)

    logger.debug("final commit = %r", result)
    return result


def generate_on(commit: TransformedCommit, state: TransformState) -> bool:
    """Whether `commit` opens a new release section; resets the flag afterwards."""
    decision = state.should_generate is Generate.ALWAYS or (
        state.should_generate is Generate.YES and is_semver(commit.version)
    )
    logger.debug("generate_on should_generate=%s decision=%s", state.should_generate.value, decision)
    state.should_generate = Generate.YES
    return decision


class CommitTransformer:
    """Runs commits through `transform` with its own state for one changelog pass."""

    def __init__(self, context: Context):
        self.context = context
        self.state = TransformState()

    def transform(self, commit: ParsedCommit) -> Optional[TransformedCommit]:
        return transform(commit, self.context, self.state)

    def generate_on(self, commit: TransformedCommit) -> bool:
        return generate_on(commit, self.state)

    def reset(self) -> None:
        self.state.reset()
