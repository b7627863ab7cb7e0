"""Command Line Interface Package"""

from relnotes.cli.main import main

__all__ = ["main"]
