"""Command line entry point for promptline."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .colored_tokens import Color, Token
from .config import Config, load_configuration
from .errors import error_handler
from .git_status import discover, summarize
from .platform import get_current_directory, shorten_path


def setup_logging(config: Config) -> None:
    """Configure the promptline loggers.

    Logging goes to stderr unless a log file is configured. The default
    WARNING level keeps an ordinary prompt render silent.
    """
    class StructuredFormatter(logging.Formatter):
        def format(self, record):
            if hasattr(record, 'operation'):
                record.msg = f"[{record.operation}] {record.msg}"
            return super().format(record)

    formatter = StructuredFormatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger('promptline')
    logger.setLevel(getattr(logging, config.log_level))

    if not logger.handlers:
        handler = logging.StreamHandler()
        if config.log_file is not None:
            try:
                handler = logging.FileHandler(config.log_file, encoding="utf-8")
            except OSError:
                handler = logging.NullHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False


def build_prompt_line(cwd: Optional[Path], config: Config) -> str:
    """Render ``<shortened-path> <summary>`` for ``cwd``."""
    logger = logging.getLogger('promptline.cli')

    if cwd is None:
        logger.debug("Current directory is unavailable")
        return " "

    path_token = Token(shorten_path(cwd, config.home_dir), Color.BLUE)

    summary_text = ""
    located = discover(cwd)
    if located.success:
        summary = summarize(located.value)
        if summary is not None:
            summary_text = summary.render(config.enable_color)
    else:
        logger.debug(f"No repository status: {located.message}")

    return f"{path_token.render(config.enable_color)} {summary_text}"


def precmd(args: argparse.Namespace, config: Config) -> int:
    """Print the prompt line for the current directory."""
    cwd = get_current_directory()
    try:
        line = build_prompt_line(cwd, config)
    except Exception as e:
        # Last resort: a broken prompt must not break the shell
        logging.getLogger('promptline.cli').debug(f"Prompt rendering failed: {e}", exc_info=True)
        line = f"{shorten_path(cwd, config.home_dir) if cwd else ''} "
    print(line)
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="promptline",
        description="Git-aware shell prompt helper"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")
    precmd_parser = subparsers.add_parser(
        "precmd",
        help="print the current directory and repository status"
    )
    precmd_parser.set_defaults(func=precmd)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the promptline command."""
    parser = create_parser()
    # Unknown arguments are ignored rather than failing the prompt hook
    args, unknown = parser.parse_known_args(argv)

    try:
        config = load_configuration()
    except ValueError as e:
        error_handler.handle_configuration_error(e)
        config = Config()

    setup_logging(config)
    if unknown:
        logging.getLogger('promptline.cli').debug(f"Ignoring unknown arguments: {unknown}")

    if not hasattr(args, "func"):
        parser.print_help()
        return 0

    return args.func(args, config)


if __name__ == "__main__":
    sys.exit(main())
