"""CLI Commands"""

import datetime
import logging
import os
import sys
from pathlib import Path

from relnotes.changelog import render_changelog
from relnotes.config import Config, load_config, get_config_path
from relnotes.git import GitLog, GitError
from relnotes.output import bold, dim, info, print_success, print_error
from relnotes.spellcheck import check_message, collect_ignore_words

logger = logging.getLogger(__name__)


def display_config() -> int:
    """Display current configuration."""
    config = load_config()
    config_path = get_config_path()

    print(f"\n{bold('Current Configuration')}\n")

    if config_path:
        print(f"  {dim('Loaded from:')} {config_path}")
    else:
        print(f"  {dim('Loaded from:')} defaults (no .relnotesrc found)")

    env_output = os.environ.get('RELNOTES_OUTPUT')
    env_release = os.environ.get('RELNOTES_RELEASE')
    if env_output or env_release:
        print(f"  {dim('Environment overrides:')}")
        if env_output:
            print(f"    RELNOTES_OUTPUT={env_output}")
        if env_release:
            print(f"    RELNOTES_RELEASE={env_release}")

    print()
    print(f"  {bold('Settings:')}")
    print(f"    output:          {info(config.output)}")
    print(f"    repo_url:        {info(config.repo_url or 'from origin remote')}")
    print(f"    host:            {info(config.host or 'from origin remote')}")
    print(f"    link_references: {info(str(config.link_references).lower())}")
    print(f"    max_typos:       {info(str(config.max_typos))}")
    print(f"    max_suggestions: {info(str(config.max_suggestions))}")

    print(f"\n  {dim('Config locations:')}")
    print(f"    Local:  .relnotesrc (in current directory)")
    print(f"    Global: ~/.relnotesrc\n")

    return 0


def run_install_completion() -> int:
    """Install shell tab completion."""
    shell = os.environ.get('SHELL', '')

    print(f"\n{bold('Tab Completion Setup')}\n")

    line = 'eval "$(register-python-argcomplete relnotes)"'
    if 'zsh' in shell or 'bash' in shell:
        rc_file = os.path.expanduser('~/.zshrc' if 'zsh' in shell else '~/.bashrc')
        print(f"Add this line to {dim(rc_file)}:\n")
        print(f"  {line}\n")
        print(f"Then run: {dim('source ' + rc_file)}")
    else:
        print("Run one of these based on your shell:\n")
        print(f"  {dim('# Bash/Zsh')}")
        print(f"  {line}\n")
        print(f"  {dim('# Fish')}")
        print("  register-python-argcomplete --shell fish relnotes | source")

    print(f"\n{dim('After setup, press TAB to autocomplete flags.')}")
    return 0


def run_changelog(args, config: Config) -> int:
    """Render the changelog for the repository in the current directory."""
    output = args.output or os.environ.get('RELNOTES_OUTPUT') or config.output
    release = args.release or os.environ.get('RELNOTES_RELEASE')

    try:
        git = GitLog()
        context = git.build_context(
            version=release,
            date=datetime.date.today().isoformat() if release else None,
            repo_url=args.repo_url or config.repo_url,
            host=config.host,
        )
        context.link_references = config.link_references
        commits = git.get_commits()
    except GitError as e:
        print_error(str(e))
        return 1

    logger.debug("read %d commits, %d semver tags", len(commits), len(context.git_semver_tags))
    changelog = render_changelog(commits, context)

    if output == '-':
        sys.stdout.write(changelog)
        return 0

    path = Path(output)
    try:
        path.write_text(changelog, encoding='utf-8')
    except OSError as e:
        print_error(f"Could not write {path}: {e}")
        return 1
    print_success(f"Wrote {path} ({len(commits)} commits)")
    return 0


def run_spellcheck(args, config: Config) -> int:
    """Check the last commit message; typos are warnings, never failures."""
    history = ''
    git_dir = Path('.git')
    try:
        git = GitLog()
        git_dir = Path(git.git_dir())
        history = git.get_history(rev='HEAD~1')
    except GitError as e:
        logger.debug("previous commit messages unavailable: %s", e)

    message_path = Path(args.message_file) if args.message_file else git_dir / 'COMMIT_EDITMSG'
    try:
        message = message_path.read_text(encoding='utf-8')
    except OSError as e:
        print_error(f"Could not read commit message from {message_path}: {e}")
        return 1

    ignore_words = collect_ignore_words(Path.cwd(), Path.home(), history=history)
    check_message(
        message,
        ignore_words,
        max_typos=config.max_typos,
        max_suggestions=config.max_suggestions,
    )
    return 0
