"""Git Log Reader - Extract commits, tags and repository identity from git."""

import logging
import re
import subprocess
from dataclasses import dataclass
from typing import Optional

from relnotes.changelog.models import Context, ParsedCommit, is_semver
from relnotes.changelog.parser import parse_commit

logger = logging.getLogger(__name__)

# Unlikely to appear in commit messages
FIELD_SEP = '\x1f'
RECORD_SEP = '\x1e'
LOG_FORMAT = f'%H{FIELD_SEP}%cs{FIELD_SEP}%d{FIELD_SEP}%B{RECORD_SEP}'

REMOTE_PATTERNS = [
    re.compile(r'^(?:https?|ssh|git)://(?:[^@/]+@)?(?P<host>[^/:]+)(?::\d+)?/(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?/?$'),
    re.compile(r'^(?:[^@]+@)?(?P<host>[^:/]+):(?P<owner>[^/]+)/(?P<repo>[^/]+?)(?:\.git)?$'),
]


@dataclass
class RawCommit:
    """A commit as it comes out of `git log`."""
    hash: str
    date: str
    decorations: str
    message: str

    def parse(self) -> ParsedCommit:
        return parse_commit(
            self.message,
            hash=self.hash,
            committer_date=self.date,
            git_tags=self.decorations or None,
        )


class GitError(Exception):
    """Raised when git operations fail."""
    pass


def parse_remote_url(remote: str) -> tuple[Optional[str], Optional[str], Optional[str]]:
    """Split a remote URL into (host URL, owner, repository)."""
    remote = remote.strip()
    for pattern in REMOTE_PATTERNS:
        match = pattern.match(remote)
        if match:
            return f"https://{match.group('host')}", match.group('owner'), match.group('repo')
    return None, None, None


class GitLog:
    """Reads history and metadata from the repository in the current directory."""

    def __init__(self, cwd: Optional[str] = None):
        self.cwd = cwd
        self._verify_git_available()
        self._verify_in_repo()

    def _run_git(self, *args: str) -> str:
        """Run a git command and return stdout."""
        logger.debug("running git %s", ' '.join(args))
        try:
            result = subprocess.run(
                ['git', *args],
                capture_output=True,
                text=True,
                check=True,
                encoding='utf-8',
                errors='replace',
                cwd=self.cwd,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            raise GitError(f"Git command failed: git {' '.join(args)}\n{e.stderr}")
        except FileNotFoundError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_git_available(self) -> None:
        """Fail fast if git isn't available."""
        try:
            self._run_git('--version')
        except GitError:
            raise GitError("Git is not installed or not in PATH")

    def _verify_in_repo(self) -> None:
        """Fail fast if we're not in a git repository."""
        try:
            self._run_git('rev-parse', '--git-dir')
        except GitError:
            raise GitError("Not inside a git repository")

    def git_dir(self) -> str:
        return self._run_git('rev-parse', '--git-dir').strip()

    def get_raw_commits(self, rev: str = 'HEAD') -> list[RawCommit]:
        """Newest-first commits reachable from `rev`."""
        output = self._run_git('log', f'--format={LOG_FORMAT}', '--decorate=short', rev)
        commits = []
        for record in output.split(RECORD_SEP):
            record = record.strip('\n')
            if not record:
                continue
            parts = record.split(FIELD_SEP, 3)
            if len(parts) != 4:
                logger.debug("skipping malformed log record %r", record[:80])
                continue
            commit_hash, date, decorations, message = parts
            commits.append(RawCommit(
                hash=commit_hash.strip(),
                date=date.strip(),
                decorations=decorations.strip(),
                message=message,
            ))
        return commits

    def get_commits(self, rev: str = 'HEAD') -> list[ParsedCommit]:
        return [raw.parse() for raw in self.get_raw_commits(rev)]

    def get_semver_tags(self) -> list[str]:
        """Semantic-version tags, most recent first."""
        output = self._run_git('tag', '--merged', 'HEAD', '--sort=-creatordate')
        return [tag.strip() for tag in output.splitlines() if is_semver(tag.strip())]

    def get_remote_url(self, remote: str = 'origin') -> Optional[str]:
        try:
            return self._run_git('remote', 'get-url', remote).strip() or None
        except GitError:
            return None

    def get_history(self, rev: str = 'HEAD') -> str:
        """Every commit message reachable from `rev`, or '' if `rev` doesn't exist."""
        try:
            return self._run_git('log', '--format=%B', rev)
        except GitError:
            return ''

    def build_context(
        self,
        version: Optional[str] = None,
        date: Optional[str] = None,
        repo_url: Optional[str] = None,
        host: Optional[str] = None,
    ) -> Context:
        """Assemble the shared changelog context for this repository."""
        remote_host, owner, repository = parse_remote_url(self.get_remote_url() or '')
        if repo_url:
            owner = repository = None
        return Context(
            host=host or remote_host,
            owner=owner,
            repository=repository,
            repo_url=repo_url,
            git_semver_tags=self.get_semver_tags(),
            version=version,
            date=date,
        )
