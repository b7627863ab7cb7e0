"""
Release Notes Tooling

Changelog generation from conventional commits and commit message spellchecking.
"""

__version__ = "1.0.0"

# Commit types whose reversions are added to the changelog (release-triggering types only)
SHOW_REVERSION_TYPES = ['feat', 'fix', 'perf', 'build']

# Strings in commit subjects that cause the commit to be skipped
SKIP_COMMANDS = ['[skip ci]', '[ci skip]', '[skip github]', '[github skip]']

# Custom commit type remapped through "fix" and relabelled afterwards
CUSTOM_COMMIT_TYPE = 'build'
CUSTOM_TYPE_LABEL = 'Build System'

MERGE_PATTERN = r'^Merge pull request #(\d+) from (.*)$'
MERGE_CORRESPONDENCE = ['id', 'source']
NOTE_KEYWORDS = ['BREAKING CHANGE', 'BREAKING CHANGES', 'BREAKING']

CHANGELOG_TITLE = (
    "# Changelog\n\n"
    "All notable changes to this project will be documented in this file.\n\n"
    "The format is based on [Conventional Commits](https://conventionalcommits.org),\n"
    "and this project adheres to [Semantic Versioning](https://semver.org)."
)
