"""CLI Main Entry Point"""

from relnotes.config import load_config
from relnotes.output import setup_logging

from relnotes.cli.args import build_parser
from relnotes.cli.commands import display_config, run_changelog, run_install_completion, run_spellcheck

COMMANDS = {
    'changelog': run_changelog,
    'spellcheck': run_spellcheck,
}


def _handle_subcommands(args):
    """Handle flags that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(), True
    if args.display_config:
        return display_config(), True
    return 0, False


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    exit_code, should_exit = _handle_subcommands(args)
    if should_exit:
        return exit_code

    if args.command not in COMMANDS:
        parser.print_help()
        return 2

    config = load_config()
    return COMMANDS[args.command](args, config)
