"""Git Operations Package"""

from relnotes.git.log import GitLog, GitError, RawCommit, parse_remote_url

__all__ = [
    "GitLog",
    "GitError",
    "RawCommit",
    "parse_remote_url",
]
