"""
Tests for the commit message spellchecker.

Run with:
    pytest tests/test_spellcheck.py -v
"""

import io
import json
import re

import pytest
from spellchecker import SpellChecker

from relnotes.spellcheck import (
    CONTRACTIONS,
    check_message,
    collect_ignore_words,
    find_typos,
    is_all_caps,
    is_camel_case,
    is_pascal_case,
    read_cspell_words,
    read_project_words,
    report_typos,
    split_out_words,
    suggest,
)

ANSI_RE = re.compile(r'\033\[[0-9;]*m')


class FakeChecker:
    """Dictionary stand-in with a fixed vocabulary."""

    def __init__(self, known=(), suggestions=None):
        self.known = set(known)
        self.suggestions = suggestions or {}

    def unknown(self, words):
        return {w for w in words if w not in self.known}

    def candidates(self, word):
        return set(self.suggestions.get(word, [])) or None

    def correction(self, word):
        options = self.suggestions.get(word)
        return options[0] if options else None

    def word_usage_frequency(self, word):
        return 0.0


# ---------------------------------------------------------------------------
# Word helpers
# ---------------------------------------------------------------------------

class TestWordHelpers:

    @pytest.mark.parametrize("phrase, expected", [
        ("conventional-changelog", ["conventional", "changelog", "conventional-changelog"]),
        ("pytest", ["pytest", "pytest"]),
        ("@types/node", ["types", "node", "@types/node"]),
        ("", []),
    ])
    def test_split_out_words(self, phrase, expected):
        assert split_out_words(phrase) == expected

    @pytest.mark.parametrize("word", ["HTTPServer", "JSONParser", "GitLog", "McDonald"])
    def test_pascal_case(self, word):
        assert is_pascal_case(word)

    @pytest.mark.parametrize("word", ["myVar", "parseHTML"])
    def test_camel_case(self, word):
        assert is_camel_case(word)

    @pytest.mark.parametrize("word", ["API", "CI", "V2"])
    def test_all_caps(self, word):
        assert is_all_caps(word)

    @pytest.mark.parametrize("word", ["Fix", "parser", "Hello"])
    def test_plain_words_are_not_identifiers(self, word):
        assert not (is_pascal_case(word) or is_camel_case(word) or is_all_caps(word))


# ---------------------------------------------------------------------------
# Ignore word sources
# ---------------------------------------------------------------------------

class TestIgnoreWords:

    @pytest.fixture
    def project(self, tmp_path):
        cwd = tmp_path / "repo"
        home = tmp_path / "home"
        (cwd / ".vscode").mkdir(parents=True)
        home.mkdir()
        (cwd / ".spellcheckignore").write_text("Kubernetes\nfoo-bar\n\n")
        (cwd / ".vscode" / "settings.json").write_text(json.dumps({
            "cSpell.words": ["pytest"],
            "cSpell.ignoreWords": ["xyzzy"],
        }))
        (cwd / "pyproject.toml").write_text(
            '[project]\n'
            'name = "demo"\n'
            'dependencies = ["argcomplete>=3.0", "py-spellchecker"]\n'
            '[project.optional-dependencies]\n'
            'test = ["pytest-cov"]\n'
            '[project.scripts]\n'
            'relnotes = "relnotes.cli:main"\n'
        )
        return cwd, home

    def test_local_sources(self, project):
        cwd, home = project
        words = collect_ignore_words(cwd, home)
        for expected in ["kubernetes", "foo-bar", "foo", "bar", "pytest", "xyzzy"]:
            assert expected in words

    def test_project_names(self, project):
        cwd, home = project
        words = collect_ignore_words(cwd, home)
        for expected in ["argcomplete", "py-spellchecker", "spellchecker", "relnotes", "cov", "test"]:
            assert expected in words

    def test_home_sources(self, project):
        cwd, home = project
        (home / ".config").mkdir()
        (home / ".config" / "_spellcheckignore").write_text("Grafana\n")
        words = collect_ignore_words(cwd, home)
        assert "grafana" in words

    def test_history_words_without_whole_text(self, project):
        cwd, home = project
        words = collect_ignore_words(cwd, home, history="fix: tweak frobnicator\n")
        assert "frobnicator" in words
        assert "fix: tweak frobnicator" not in words

    def test_builtin_words(self, tmp_path):
        words = collect_ignore_words(tmp_path, tmp_path)
        assert set(CONTRACTIONS) <= words
        assert "md" in words
        assert "yml" in words

    def test_missing_and_malformed_sources(self, tmp_path):
        (tmp_path / ".vscode").mkdir()
        (tmp_path / ".vscode" / "settings.json").write_text("{ not json")
        (tmp_path / "pyproject.toml").write_text("[[[ broken")
        assert read_cspell_words(tmp_path / ".vscode" / "settings.json") == []
        assert read_cspell_words(tmp_path / "missing.json") == []
        assert read_project_words(tmp_path / "pyproject.toml") == []


# ---------------------------------------------------------------------------
# Typo detection
# ---------------------------------------------------------------------------

class TestFindTypos:

    @pytest.fixture
    def checker(self):
        return FakeChecker(known=["fix", "the", "parser", "for", "and", "panic", "don"])

    def test_finds_unknown_words_in_order(self, checker):
        typos = find_typos("Fix teh parser and dont panic", set(), checker)
        assert typos == ["teh", "dont"]

    def test_skips_identifiers(self, checker):
        typos = find_typos("fix HTTPServer and myVar for API", set(), checker)
        assert typos == []

    def test_known_contraction_not_split(self, checker):
        checker.known.add("don't")
        assert find_typos("don't panic", set(), checker) == []

    def test_unknown_contraction_split(self, checker):
        checker.known.discard("don")
        assert find_typos("don't panic", set(), checker) == ["don", "t"]
        assert find_typos("don't panic", {"t"}, checker) == ["don"]

    def test_ignore_words(self, checker):
        assert find_typos("fix teh parser", {"teh"}, checker) == []

    def test_deduplicates(self, checker):
        assert find_typos("teh teh Teh", set(), checker) == ["teh"]

    def test_comment_lines_ignored(self, checker):
        message = "fix the parser\n# Plese entr the mesage"
        assert find_typos(message, set(), checker) == []

    def test_real_dictionary(self):
        typos = find_typos("fix the broken window qzxwvt", set(), SpellChecker())
        assert typos == ["qzxwvt"]

    @pytest.mark.parametrize("message", [
        "don't crash when it isn't there",
        "it doesn't fail and wasn't flaky",
    ])
    def test_real_dictionary_contractions(self, message):
        assert find_typos(message, set(CONTRACTIONS), SpellChecker()) == []


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------

class TestReport:

    @pytest.fixture
    def checker(self):
        return FakeChecker(suggestions={"teh": ["the", "ten", "tea"]})

    def test_suggest_puts_best_first(self, checker):
        assert suggest("teh", checker) == ["the", "tea", "ten"]

    def test_suggest_limit(self, checker):
        assert suggest("teh", checker, limit=1) == ["the"]

    def test_suggest_without_candidates(self, checker):
        assert suggest("qqq", checker) == []

    def test_report_lists_typos_with_suggestions(self, checker):
        stream = io.StringIO()
        report_typos(["teh", "qqq"], checker, stream=stream)
        out = ANSI_RE.sub('', stream.getvalue())
        assert "WARNING: there may be misspelled words in your commit message!" in out
        assert "teh (did you mean the, tea, ten?)" in out
        assert "\nqqq\n" in out
        assert out.count("---") == 2

    def test_report_collapses_extra_typos(self, checker):
        stream = io.StringIO()
        typos = ["aaa", "bbb", "ccc", "ddd", "eee", "fff", "ggg"]
        report_typos(typos, checker, max_typos=5, stream=stream)
        out = ANSI_RE.sub('', stream.getvalue())
        assert "2 more..." in out
        assert "fff" not in out

    def test_no_typos_prints_nothing(self, checker):
        stream = io.StringIO()
        report_typos([], checker, stream=stream)
        assert stream.getvalue() == ""

    def test_check_message_returns_typos(self, checker):
        stream = io.StringIO()
        typos = check_message("teh", set(), checker=checker, stream=stream)
        assert typos == ["teh"]
        assert "teh" in stream.getvalue()
