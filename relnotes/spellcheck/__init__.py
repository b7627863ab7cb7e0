"""Commit Message Spellcheck Package"""

from relnotes.spellcheck.checker import (
    CONTRACTIONS,
    TEXT_EXTENSIONS,
    check_message,
    collect_ignore_words,
    find_typos,
    is_all_caps,
    is_camel_case,
    is_pascal_case,
    read_cspell_words,
    read_project_words,
    read_word_list,
    report_typos,
    split_out_words,
    suggest,
)

__all__ = [
    "CONTRACTIONS",
    "TEXT_EXTENSIONS",
    "check_message",
    "collect_ignore_words",
    "find_typos",
    "is_all_caps",
    "is_camel_case",
    "is_pascal_case",
    "read_cspell_words",
    "read_project_words",
    "read_word_list",
    "report_typos",
    "split_out_words",
    "suggest",
]
