"""Command line entry point: print descriptions for error codes."""
from __future__ import annotations

import argparse
import errno
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from .codes import AVERROR_UNKNOWN, averror, averror_to_errnum
from .config import ConfigurationError, load_settings, write_default_config
from .registry import ErrorRegistry
from .translator import Translator, get_translator

LOGGER = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_UNRESOLVED = 1
EXIT_USAGE = 2


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer: {value}")
    return number


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="averror-strerror",
        description="Describe media error codes and negated platform error numbers",
        epilog="Hexadecimal negative codes such as -0x20464f45 must follow '--'.",
    )
    parser.add_argument(
        "codes",
        nargs="*",
        metavar="CODE",
        help="Integer code, registry tag (EOF, AVERROR_EOF) or errno name (ENOENT)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging output",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to the YAML configuration file",
    )
    parser.add_argument(
        "--size",
        type=_positive_int,
        default=None,
        help="Buffer size in bytes, including the terminator",
    )
    parser.add_argument(
        "--tag",
        action="store_true",
        default=None,
        help="Show the symbolic tag next to each description",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="List every registered custom error code",
    )
    parser.add_argument(
        "--write-default-config",
        dest="write_default_config",
        type=Path,
        default=None,
        help="Write the default configuration YAML to the provided path and exit",
    )
    return parser


def parse_code(value: str, registry: ErrorRegistry) -> int:
    """Resolve a command line token to an error code."""

    text = value.strip()
    try:
        return int(text, 0)
    except ValueError:
        pass
    entry = registry.find_tag(text)
    if entry is not None:
        return entry.code
    name = text.upper()
    errnum = getattr(errno, name, None)
    if name.startswith("E") and isinstance(errnum, int):
        return averror(errnum)
    raise ValueError(f"not an error code, tag or errno name: {value!r}")


def code_tag(code: int, registry: ErrorRegistry) -> str | None:
    entry = registry.get_entry(code)
    if entry is not None:
        return entry.tag
    return errno.errorcode.get(averror_to_errnum(code))


def format_listing(registry: ErrorRegistry) -> list[str]:
    return [f"{entry.code:>12}  {entry.tag:<26} {entry.message}" for entry in registry]


def describe_codes(
    tokens: Sequence[str],
    translator: Translator,
    size: int,
    show_tag: bool = False,
) -> tuple[list[str], int]:
    """Return the output lines for ``tokens`` and the resulting exit status."""

    lines: list[str] = []
    status = EXIT_OK
    for token in tokens:
        try:
            code = parse_code(token, translator.registry)
        except ValueError as exc:
            LOGGER.error("%s", exc)
            status = EXIT_UNRESOLVED
            continue
        result, text = translator.strerror(code, size)
        if result == AVERROR_UNKNOWN:
            status = EXIT_UNRESOLVED
        tag = code_tag(code, translator.registry) if show_tag else None
        if tag:
            lines.append(f"{code}: [{tag}] {text}")
        else:
            lines.append(f"{code}: {text}")
    return lines, status


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.write_default_config:
        try:
            target = write_default_config(args.write_default_config)
        except ConfigurationError as exc:
            LOGGER.error("%s", exc)
            return EXIT_USAGE
        print(f"Wrote default configuration to {target}")
        return EXIT_OK

    try:
        settings = load_settings(args.config)
    except ConfigurationError:
        LOGGER.exception("Failed to load configuration")
        return EXIT_USAGE
    if not args.debug:
        logging.getLogger().setLevel(settings.logging.level)

    translator = get_translator()
    if args.list:
        for line in format_listing(translator.registry):
            print(line)
        if not args.codes:
            return EXIT_OK
    if not args.codes:
        parser.print_usage(sys.stderr)
        return EXIT_USAGE

    size = args.size or settings.strerror.buffer_size
    show_tag = settings.strerror.show_tag if args.tag is None else args.tag
    lines, status = describe_codes(args.codes, translator, size, show_tag)
    for line in lines:
        print(line)
    return status


if __name__ == "__main__":
    sys.exit(main())
