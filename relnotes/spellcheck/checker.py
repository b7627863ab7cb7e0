"""Commit Message Spellchecker - Warn about likely typos in the last commit message."""

import json
import logging
import re
import sys
import tomllib
from pathlib import Path
from typing import Iterable, Optional

from spellchecker import SpellChecker

from relnotes.output import warning, dim, bold

logger = logging.getLogger(__name__)

# Fragments left behind when splitting contractions on the apostrophe
CONTRACTIONS = ['ve', 're', 's', 'll', 't', 'd', 'o', 'ol']

# File extensions that show up in commit messages as bare words
TEXT_EXTENSIONS = [
    'bat', 'c', 'cc', 'cfg', 'cjs', 'cmd', 'conf', 'cpp', 'cs', 'css', 'csv',
    'diff', 'dockerfile', 'env', 'gitignore', 'go', 'gradle', 'h', 'hpp',
    'htm', 'html', 'ini', 'java', 'js', 'json', 'jsonc', 'jsx', 'kt', 'less',
    'lock', 'log', 'lua', 'makefile', 'markdown', 'md', 'mdx', 'mjs', 'patch',
    'php', 'pl', 'properties', 'ps1', 'py', 'pyi', 'rb', 'rs', 'rst', 'sass',
    'scss', 'sh', 'sql', 'svg', 'swift', 'toml', 'ts', 'tsx', 'txt', 'vue',
    'xml', 'yaml', 'yml', 'zsh',
]

CSPELL_KEYS = ['cSpell.words', 'cSpell.userWords', 'cSpell.ignoreWords']

PASCAL_CASE = re.compile(r'^([A-Z]{2,}.+|[A-Z][a-z]+[A-Z].*)$')
CAMEL_CASE = re.compile(r'^[a-z]+[A-Z]+.*$')
ALL_CAPS = re.compile(r'^[^a-z]+$')
NON_LETTERS = re.compile(r'[^a-zA-Z]+')
WORD_PATTERN = re.compile(r"[A-Za-z']+")
REQUIREMENT_NAME = re.compile(r'^\s*([A-Za-z0-9][A-Za-z0-9._-]*)')


def split_out_words(phrase: str) -> list[str]:
    """Split a phrase on non-letters, keeping the whole phrase as well."""
    return [w for w in [*NON_LETTERS.split(phrase), phrase] if w]


def is_pascal_case(word: str) -> bool:
    return bool(PASCAL_CASE.match(word))


def is_camel_case(word: str) -> bool:
    return bool(CAMEL_CASE.match(word))


def is_all_caps(word: str) -> bool:
    return bool(ALL_CAPS.match(word))


def _try_to_read(path: Path) -> str:
    try:
        return path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError):
        return ''


def read_word_list(path: Path) -> list[str]:
    """One ignored word per line."""
    return _try_to_read(path).split('\n')


def read_cspell_words(path: Path) -> list[str]:
    """Words from the cSpell entries of an editor settings file."""
    try:
        settings = json.loads(_try_to_read(path))
    except json.JSONDecodeError:
        return []
    if not isinstance(settings, dict):
        return []
    words = []
    for key in CSPELL_KEYS:
        value = settings.get(key) or []
        if isinstance(value, list):
            words.extend(str(w) for w in value)
    return words


def read_project_words(path: Path) -> list[str]:
    """Dependency, extra and script names declared in pyproject.toml."""
    try:
        data = tomllib.loads(_try_to_read(path))
    except tomllib.TOMLDecodeError:
        return []
    project = data.get('project', {})

    names = []
    requirements = list(project.get('dependencies', []))
    for extra, extra_requirements in project.get('optional-dependencies', {}).items():
        names.append(extra)
        requirements.extend(extra_requirements)
    for requirement in requirements:
        match = REQUIREMENT_NAME.match(requirement)
        if match:
            names.append(match.group(1))
    names.extend(project.get('scripts', {}).keys())

    return [word for name in names for word in split_out_words(name)]


def collect_ignore_words(
    cwd: Path,
    home: Path,
    history: str = '',
    extra: Iterable[str] = (),
) -> set[str]:
    """Gather every word that should never be reported as a typo."""
    sources = [
        read_word_list(cwd / '.spellcheckignore'),
        read_word_list(home / '.config' / '_spellcheckignore'),
        read_cspell_words(cwd / '.vscode' / 'settings.json'),
        read_cspell_words(home / '.config' / 'Code' / 'User' / 'settings.json'),
        TEXT_EXTENSIONS,
        CONTRACTIONS,
        read_project_words(cwd / 'pyproject.toml'),
        # Previous commit messages were already checked; drop the whole-text entry
        split_out_words(history)[:-1] if history else [],
        list(extra),
    ]

    ignore_words = set()
    for source in sources:
        for entry in source:
            entry = entry.strip().lower()
            if entry:
                ignore_words.update(split_out_words(entry))
    logger.debug("collected %d ignore words", len(ignore_words))
    return ignore_words


def _strip_comments(message: str) -> str:
    return '\n'.join(line for line in message.split('\n') if not line.startswith('#'))


def find_typos(message: str, ignore_words: set[str], checker: SpellChecker) -> list[str]:
    """Unique lower-cased words the dictionary doesn't know, in message order.

    Whole words (contractions included) go to the dictionary first; only
    unknown ones are split on apostrophes. ALL-CAPS, camelCase and PascalCase
    words are assumed to be identifiers.
    """
    tokens = [t.strip("'") for t in WORD_PATTERN.findall(_strip_comments(message))]
    tokens = list(dict.fromkeys(t for t in tokens if t))
    unknown = checker.unknown([t.lower() for t in tokens])

    typos = []
    for token in tokens:
        if token.lower() not in unknown:
            continue
        for word in token.split("'"):
            if not word or is_all_caps(word) or is_camel_case(word) or is_pascal_case(word):
                continue
            word = word.lower()
            if word not in ignore_words:
                typos.append(word)

    return list(dict.fromkeys(typos))


def suggest(typo: str, checker: SpellChecker, limit: int = 5) -> list[str]:
    candidates = checker.candidates(typo) or set()
    best = checker.correction(typo)
    ranked = sorted(candidates - {typo}, key=lambda w: (w != best, -checker.word_usage_frequency(w), w))
    return ranked[:limit]


def report_typos(
    typos: list[str],
    checker: SpellChecker,
    max_typos: int = 5,
    max_suggestions: int = 5,
    stream=None,
) -> None:
    """Print typo warnings with suggested corrections."""
    stream = stream or sys.stderr
    if not typos:
        return

    print(warning(bold("WARNING: there may be misspelled words in your commit message!")), file=stream)
    print(dim("Commit messages can be fixed before push with `git commit -S --amend`"), file=stream)
    print('---', file=stream)

    for typo in typos[:max_typos]:
        corrections = suggest(typo, checker, max_suggestions) if max_suggestions else []
        suggestion = f" (did you mean {', '.join(corrections)}?)" if corrections else ''
        print(f"{warning(typo)}{suggestion}", file=stream)

    if len(typos) > max_typos:
        print(f"{len(typos) - max_typos} more...", file=stream)
    print('---', file=stream)


def check_message(
    message: str,
    ignore_words: set[str],
    checker: Optional[SpellChecker] = None,
    max_typos: int = 5,
    max_suggestions: int = 5,
    stream=None,
) -> list[str]:
    """Find and report typos; returns the typos found."""
    checker = checker or SpellChecker()
    typos = find_typos(message, ignore_words, checker)
    logger.debug("found %d possible typos", len(typos))
    report_typos(typos, checker, max_typos, max_suggestions, stream)
    return typos
