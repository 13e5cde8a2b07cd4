"""
Command-line entry point: ``termshell [--config FILE] [-c LINE]``.

With ``-c`` a single command line is executed and its success becomes the
exit status. When stdin is not a terminal every line read from it is
executed in turn. Otherwise the interactive shell runs in raw mode until
``exit`` or Ctrl+D.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from termshell import __version__
from termshell.core.common.exceptions import ConfigurationError
from termshell.core.common.logging_utils import configure_logging_with_environment_tagging
from termshell.core.config.app_config import LogLevel, ShellConfig, load_config
from termshell.core.engine import ShellEngine
from termshell.core.terminal.console import ConsoleTerminal

logger = logging.getLogger(__name__)


def build_cli_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="termshell", description="Run the interactive command shell"
    )
    parser.add_argument(
        "--config",
        dest="config_file",
        metavar="FILE",
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        choices=[level.value for level in LogLevel],
        type=str.upper,
        help="Logging level",
    )
    parser.add_argument(
        "--log-file",
        dest="log_file",
        metavar="FILE",
        help="Write log records to this file instead of stderr",
    )
    parser.add_argument(
        "--history-file",
        dest="history_file",
        metavar="FILE",
        help="JSON file the command history is loaded from and saved to",
    )
    parser.add_argument(
        "--prompt",
        dest="prompt",
        help="Prompt shown before each command line",
    )
    parser.add_argument(
        "-c",
        "--command",
        dest="command",
        metavar="LINE",
        help="Execute a single command line and exit",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    return parser


def parse_cli_args(argv: list[str] | None = None) -> argparse.Namespace:
    return build_cli_parser().parse_args(argv)


def apply_cli_args(args: argparse.Namespace) -> ShellConfig:
    """Load the configuration and let the CLI flags override it."""
    cfg = load_config(args.config_file)

    if args.log_level is not None:
        cfg.logging.level = LogLevel(args.log_level)
    if args.log_file is not None:
        cfg.logging.log_file = args.log_file
    if args.history_file is not None:
        cfg.history.file = args.history_file
    if args.prompt is not None:
        cfg.prompt = args.prompt
    return cfg


def _configure_logging(cfg: ShellConfig) -> None:
    configure_logging_with_environment_tagging(
        level=getattr(logging, cfg.logging.level.value),
        log_file=cfg.logging.log_file,
    )


async def _run_lines(engine: ShellEngine, lines: list[str]) -> bool:
    await engine.boot(show_prompt=False)
    success = True
    for line in lines:
        if not line.strip():
            continue
        engine.history.add_command(line)
        success = await engine.execute(line)
        if engine.exit_requested:
            break
    return success


async def _run_interactive(engine: ShellEngine, terminal: ConsoleTerminal) -> None:
    with terminal.raw_mode():
        await engine.run(terminal.read_keys())
    terminal.write("\r\n")


def main(argv: list[str] | None = None) -> int:
    args = parse_cli_args(argv)
    try:
        cfg = apply_cli_args(args)
    except ConfigurationError as e:
        sys.stderr.write(f"termshell: {e.message}\n")
        return 2

    _configure_logging(cfg)

    terminal = ConsoleTerminal()
    if args.command is not None:
        cfg.welcome_message = False
        engine = ShellEngine(terminal, cfg)
        return 0 if asyncio.run(_run_lines(engine, [args.command])) else 1

    if not terminal.is_interactive:
        engine = ShellEngine(terminal, cfg)
        lines = sys.stdin.read().splitlines()
        return 0 if asyncio.run(_run_lines(engine, lines)) else 1

    engine = ShellEngine(terminal, cfg)
    try:
        asyncio.run(_run_interactive(engine, terminal))
    except KeyboardInterrupt:
        logger.info("Interrupted")
    return 0
