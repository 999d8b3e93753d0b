from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import AppConfig, SortPattern, load_config
from .errors import LogstreamError
from .locator import locate_logstreams
from .report import StreamTableRenderer, ValidationFormatter
from .utils import load_yaml_file
from .validation import validate_config_data
from .version import __version__

CONSOLE = Console()
LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_PARSE_ERRORS = 2


def configure_logging(level: int | str = logging.INFO, log_file: Optional[Path] = None) -> None:
    """Send log records to the console through Rich and optionally to a file."""
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        root.removeHandler(handler)

    console_handler = RichHandler(console=Console(stderr=True), show_path=False, markup=False)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root.addHandler(console_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s"))
        root.addHandler(file_handler)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="logstream",
        description="Order rotated logfiles by the metadata embedded in their names.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    sort_parser = subparsers.add_parser("sort", help="Print the ordered logfiles of each stream")
    sort_parser.add_argument("directory", type=Path, nargs="?", help="Directory to scan (ad-hoc mode)")
    sort_parser.add_argument("--config", "-c", type=Path, help="YAML file describing the streams")
    sort_parser.add_argument("--stream", "-s", help="Only sort the stream with this id from --config")
    sort_parser.add_argument("--match", "-m", dest="file_match", help="Regex with named groups (ad-hoc mode)")
    sort_parser.add_argument(
        "--priority",
        "-p",
        nargs="+",
        default=[],
        help="Group names to sort on, most significant first; prefix with ^ for descending",
    )
    sort_parser.add_argument(
        "--differentiator",
        "-d",
        nargs="+",
        default=[],
        help="Group names or literals identifying separate streams",
    )
    sort_parser.add_argument("--json", action="store_true", help="Print {stream: [paths]} as JSON")

    validate_parser = subparsers.add_parser("validate-config", help="Check a YAML stream configuration")
    validate_parser.add_argument("--config", "-c", type=Path, required=True, help="YAML file to validate")
    validate_parser.add_argument("--no-suggestions", action="store_true", help="Hide fix suggestions")

    return parser


def _resolve_targets(args: argparse.Namespace, config: Optional[AppConfig]) -> List[Tuple[str, Path, SortPattern]]:
    if config is not None:
        streams = [config.get_stream(args.stream)] if args.stream else config.streams
        return [(stream.id, stream.directory, stream.sort_pattern) for stream in streams]

    if args.directory is None or not args.file_match:
        raise LogstreamError("Either --config or a directory together with --match is required")
    pattern = SortPattern(
        file_match=args.file_match,
        priority=tuple(args.priority),
        differentiator=tuple(args.differentiator),
    )
    return [(str(args.directory), args.directory, pattern)]


def _logging_options(args: argparse.Namespace, config: Optional[AppConfig]) -> Tuple[int | str, Optional[Path]]:
    # Command line flags win over the settings block of the config file
    if args.verbose:
        level: int | str = logging.DEBUG
    elif config is not None:
        level = config.settings.log_level
    else:
        level = logging.WARNING
    log_file = args.log_file
    if log_file is None and config is not None:
        log_file = config.settings.log_file
    return level, log_file


def run_sort(args: argparse.Namespace) -> int:
    config: Optional[AppConfig] = None
    try:
        if args.config is not None:
            config = load_config(args.config)
        configure_logging(*_logging_options(args, config))
        targets = _resolve_targets(args, config)
        results = [(stream_id, pattern, locate_logstreams(directory, pattern)) for stream_id, directory, pattern in targets]
    except (LogstreamError, OSError, yaml.YAMLError) as exc:
        CONSOLE.print(f"[bold red]✗ {escape(str(exc))}[/bold red]")
        return EXIT_FAILURE

    if args.json:
        payload = {stream_id: result.ordered_paths() for stream_id, _, result in results}
        CONSOLE.print_json(json.dumps(payload))
    else:
        renderer = StreamTableRenderer(CONSOLE)
        for stream_id, pattern, result in results:
            CONSOLE.rule(f"[bold]{escape(stream_id)}[/bold]")
            renderer.print_result(result, pattern.priority)

    if any(result.errors for _, _, result in results):
        return EXIT_PARSE_ERRORS
    return EXIT_OK


def run_validate_config(args: argparse.Namespace) -> int:
    try:
        data = load_yaml_file(args.config, expand=False)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        CONSOLE.print(f"[bold red]✗ Unable to load {escape(str(args.config))}: {escape(str(exc))}[/bold red]")
        return EXIT_FAILURE

    report = validate_config_data(data)
    ValidationFormatter(CONSOLE, show_suggestions=not args.no_suggestions).format_report(report)
    return EXIT_OK if report.is_valid else EXIT_FAILURE


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "sort":
        return run_sort(args)
    if args.command == "validate-config":
        return run_validate_config(args)

    parser.print_help()
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
