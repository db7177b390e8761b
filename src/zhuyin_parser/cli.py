"""CLI entrypoint for inspecting how a keyboard scheme segments raw input."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from zhuyin_parser.models import ParseResult
from zhuyin_parser.options import ParseOptions
from zhuyin_parser.parser import SchemeParser, ZhuyinScheme
from zhuyin_parser.tables.syllables import hanyu_pinyin

SCHEME_CHOICES = [scheme.value for scheme in ZhuyinScheme]


def _format_table(headers: Sequence[str], data_rows: Sequence[Sequence[str]]) -> str:
    """Format rows as an ASCII table for terminal output.

    Args:
        headers: Table headers.
        data_rows: Row values.

    Returns:
        Monospace table string.
    """

    widths = [len(header) for header in headers]
    for row in data_rows:
        for idx, value in enumerate(row):
            widths[idx] = max(widths[idx], len(value))

    header_line = " | ".join(header.ljust(widths[idx]) for idx, header in enumerate(headers))
    separator_line = "-+-".join("-" * width for width in widths)
    body_lines = [
        " | ".join(value.ljust(widths[idx]) for idx, value in enumerate(row)) for row in data_rows
    ]
    return "\n".join([header_line, separator_line, *body_lines])


def build_arg_parser() -> argparse.ArgumentParser:
    """Construct CLI argument parser.

    Returns:
        Configured parser for the ``zhuyin-parse`` command.
    """

    parser = argparse.ArgumentParser(
        description="Segment raw keyboard input into Zhuyin keys for one keyboard scheme."
    )
    parser.add_argument("text", nargs="+", help="Raw keystrokes to parse (one key sequence each).")
    parser.add_argument(
        "--scheme",
        choices=SCHEME_CHOICES,
        default=ZhuyinScheme.STANDARD.value,
        help="Keyboard scheme (default: standard).",
    )
    parser.add_argument("--tone", action="store_true", help="Recognize trailing tone keys.")
    parser.add_argument(
        "--force-tone",
        action="store_true",
        help="Require a tone key on every syllable (implies --tone).",
    )
    parser.add_argument(
        "--incomplete",
        action="store_true",
        help="Accept a bare initial as an incomplete syllable.",
    )
    parser.add_argument(
        "--option",
        action="append",
        default=[],
        metavar="NAME",
        help="Extra option flag such as amb-c-ch or shuffle-correct (repeatable).",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def _options_from_args(args: argparse.Namespace) -> ParseOptions:
    """Combine option flags from parsed CLI arguments.

    Args:
        args: Parsed CLI namespace.

    Returns:
        Caller options; scheme-mandated flags are added later by the parser.

    Raises:
        ValueError: If an ``--option`` name is unknown.
    """

    options = ParseOptions.from_names(args.option)
    if args.tone or args.force_tone:
        options |= ParseOptions.USE_TONE
    if args.force_tone:
        options |= ParseOptions.FORCE_TONE
    if args.incomplete:
        options |= ParseOptions.ZHUYIN_INCOMPLETE
    return options


def _result_rows(text: str, result: ParseResult) -> list[list[str]]:
    """Build table rows for one parse result.

    Args:
        text: Raw input the result was parsed from.
        result: Parse result of ``text``.

    Returns:
        One row per key: span, raw keys, Zhuyin, Hanyu Pinyin and tone.
    """

    rows: list[list[str]] = []
    for key, span in zip(result.keys, result.spans):
        rows.append(
            [
                f"{span.begin}-{span.end}",
                repr(text[span.begin : span.end]),
                key.zhuyin,
                hanyu_pinyin(key),
                str(int(key.tone)),
            ]
        )
    return rows


def main(argv: Sequence[str] | None = None) -> int:
    """Parse each input text and print the decoded keys.

    Returns:
        Zero when every text was fully consumed, one otherwise.
    """

    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = _options_from_args(args)
        scheme_parser = SchemeParser(args.scheme)
    except ValueError as exc:
        parser.error(str(exc))

    status = 0
    for idx, text in enumerate(args.text):
        result = scheme_parser.parse(options, text)
        if idx:
            print()
        print(f"Input {text!r} ({args.scheme}): {len(result.keys)} keys")
        if result.keys:
            print(_format_table(["span", "raw", "zhuyin", "pinyin", "tone"], _result_rows(text, result)))
        remainder = result.remainder(text)
        if remainder:
            print(f"WARNING: unparsed remainder at offset {result.parsed_length}: {remainder!r}")
            status = 1
    return status


if __name__ == "__main__":
    raise SystemExit(main())
