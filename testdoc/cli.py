"""CLI entrypoints for testdoc commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from pathlib import Path

from .assembler import DocumentAssembler
from .config import ConfigError, FilterConfig, TestDocConfig, load_config, validate_precision
from .logging import configure_logging, get_logger
from .models import MethodRecord
from .narrative import NarrativeComposer
from .records import RecordsError, load_records


def _add_logging_options(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Only log warnings and errors.",
    )


def _add_filter_options(parser: argparse.ArgumentParser) -> None:
    for flag, help_text in (
        ("--include-method", "Only document methods whose name fully matches REGEX."),
        ("--exclude-method", "Skip methods whose name fully matches REGEX."),
        ("--include-tag", "Only document methods with a tag fully matching REGEX."),
        ("--exclude-tag", "Skip methods with a tag fully matching REGEX."),
    ):
        parser.add_argument(flag, action="append", default=[], metavar="REGEX", help=help_text)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="testdoc",
        description="Generate narrative documentation and statistics for test methods.",
    )
    _add_logging_options(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build",
        help="Build the document model for a parsed records file.",
    )
    _add_logging_options(build_parser, suppress_default=True)
    build_parser.add_argument("records", help="JSON or YAML file produced by the source parser.")
    build_parser.add_argument(
        "--config",
        default=".",
        help="Path to .testdoc.yml or its directory (defaults to current directory).",
    )
    build_parser.add_argument(
        "--output",
        "-o",
        help="Write the model JSON here instead of standard output.",
    )
    _add_filter_options(build_parser)
    build_parser.add_argument(
        "--tags-chart",
        action="store_true",
        help="Compute tag category statistics.",
    )
    build_parser.add_argument("--dark-mode", action="store_true", help="Flag the report for dark mode.")
    build_parser.add_argument("--title", help="Report title override.")
    build_parser.add_argument("--header", help="Report header override.")
    build_parser.add_argument(
        "--precision",
        type=int,
        choices=(1, 2),
        help="Decimal places for class percentages.",
    )
    build_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Compose narratives with this many worker threads.",
    )

    describe_parser = subparsers.add_parser(
        "describe",
        help="Print the narrative for a single method name.",
    )
    _add_logging_options(describe_parser, suppress_default=True)
    describe_parser.add_argument("name", help="Method identifier, e.g. TC01_userCanLogin.")
    describe_parser.add_argument("--body-file", help="File holding the method body source.")
    describe_parser.add_argument(
        "--config",
        default=".",
        help="Path to .testdoc.yml or its directory (defaults to current directory).",
    )

    return parser


def _apply_overrides(config: TestDocConfig, args: argparse.Namespace) -> TestDocConfig:
    extra = FilterConfig.build(
        include_methods=args.include_method,
        exclude_methods=args.exclude_method,
        include_tags=args.include_tag,
        exclude_tags=args.exclude_tag,
    )
    presentation = config.presentation
    if args.tags_chart:
        presentation = replace(presentation, display_tags_chart=True)
    if args.dark_mode:
        presentation = replace(presentation, dark_mode=True)
    if args.title:
        presentation = replace(presentation, title=args.title)
    if args.header:
        presentation = replace(presentation, header=args.header)
    precision = config.percentage_precision
    if args.precision is not None:
        precision = validate_precision(args.precision)
    return replace(
        config,
        filters=config.filters.merged(extra),
        presentation=presentation,
        percentage_precision=precision,
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for testdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), quiet=bool(args.quiet))
    logger = get_logger("cli")

    if args.command == "build":
        try:
            config = _apply_overrides(load_config(Path(args.config)), args)
            classes = load_records(Path(args.records))
        except (ConfigError, RecordsError, FileNotFoundError) as exc:
            parser.exit(1, f"testdoc build failed: {exc}\n")
        logger.debug("Loaded %d classes from %s", len(classes), args.records)

        model = DocumentAssembler(config, max_workers=args.workers).assemble(classes)
        payload = json.dumps(model.to_dict(), indent=2)
        if args.output:
            output = Path(args.output)
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(payload + "\n", encoding="utf-8")
            print(f"Document model written to {_relativize(output)}")
        else:
            print(payload)
    elif args.command == "describe":
        body = None
        try:
            config = load_config(Path(args.config))
            if args.body_file:
                body = Path(args.body_file).read_text(encoding="utf-8")
        except (ConfigError, OSError, UnicodeDecodeError) as exc:
            parser.exit(1, f"testdoc describe failed: {exc}\n")
        composer = NarrativeComposer(config.narrative)
        print(composer.describe(MethodRecord(name=args.name, body_text=body)), end="")
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _relativize(path: Path) -> str:
    try:
        return str(path.resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
