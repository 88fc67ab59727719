"""Command-line interface for the term-to-regex converter.

WHY: Vocabulary lists usually live in plain text files, one term per
line. The CLI turns such a list into one regex per line so it can be
piped into other tools.

HOW: Uses argparse for configuration flags. Builds one Converter up
front (defaults, optionally a JSON config file, then flag overrides),
reads lines from stdin or the given files, and writes the printable form
of each regex to stdout. With --remote, terms are converted by a running
term2regex HTTP service instead.

RULES:
- One output line per input line, same order, trailing newline stripped
- Non-printable characters in the output are shown as \\xNN / \\uNNNN
- Status and error messages go to stderr (not stdout)
- Exit codes: 0 success, 1 config/I-O/decode/API error, 2 usage error,
  130 interrupted
- --explain prints each span's kind and rendering to stderr; it cannot be
  combined with --remote
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Iterator, List, Optional, TextIO

from term2regex.api.client import ConverterAPIError, ConverterClient
from term2regex.config import default_config, load_config_file
from term2regex.core.converter import Converter, build_converter
from term2regex.core.escaper import DIALECTS
from term2regex.core.models import ConverterConfig, parse_stop_words


def _status(msg: str) -> None:
    """Print a status message to stderr."""
    print(msg, file=sys.stderr, flush=True)


def printable(s: str) -> str:
    """Return s with non-printable characters shown as escape sequences.

    RULES:
    - Printable characters (including space) are kept as-is
    - Code points below 0x100 become \\xNN, below 0x10000 \\uNNNN,
      anything else \\UNNNNNNNN
    """
    out: List[str] = []
    for ch in s:
        if ch.isprintable():
            out.append(ch)
            continue
        code = ord(ch)
        if code < 0x100:
            out.append("\\x{:02x}".format(code))
        elif code < 0x10000:
            out.append("\\u{:04x}".format(code))
        else:
            out.append("\\U{:08x}".format(code))
    return "".join(out)


def _read_lines(paths: List[str]) -> Iterator[str]:
    """Yield input lines without their line terminator.

    A path of "-" (or no paths at all) means stdin.
    """
    if not paths:
        paths = ["-"]
    for path in paths:
        if path == "-":
            yield from _strip_newlines(sys.stdin)
        else:
            with open(path, "r", encoding="utf-8") as f:
                yield from _strip_newlines(f)


def _strip_newlines(stream: TextIO) -> Iterator[str]:
    for line in stream:
        yield line.rstrip("\r\n")


def _resolve_config(args: argparse.Namespace) -> ConverterConfig:
    """Combine defaults, an optional config file, and flag overrides.

    RULES:
    - --config replaces the defaults (missing keys keep default values)
    - Individual flags override whatever the config file set
    - --no-trail wins over --trail
    """
    config = load_config_file(args.config) if args.config else default_config()

    changes = {}
    if args.split is not None:
        changes["word_split_pattern"] = args.split
    if args.sep is not None:
        changes["word_sep_pattern"] = args.sep
    if args.trail is not None:
        changes["trailing_context_pattern"] = args.trail
    if args.no_trail:
        changes["trailing_context_pattern"] = ""
    if args.stop_words is not None:
        changes["stop_words"] = parse_stop_words(args.stop_words)
    if args.dialect is not None:
        changes["dialect"] = args.dialect

    return config.replace(**changes) if changes else config


def _explain(converter: Converter, term: str) -> None:
    """Print the span breakdown of one conversion to stderr."""
    _status("{}:".format(printable(term)))
    for span in converter.spans(term):
        _status("  {:>3} {:<9} {!r:<20} -> {}".format(
            span.start, span.kind.value, span.text, printable(converter.render(span))
        ))


def _run_local(args: argparse.Namespace, out: TextIO) -> None:
    converter = build_converter(_resolve_config(args))
    for line in _read_lines(args.inputs):
        if args.explain:
            _explain(converter, line)
        out.write(printable(converter.convert(line)))
        out.write("\n")
    out.flush()


async def _run_remote(args: argparse.Namespace, out: TextIO) -> None:
    """Convert all input lines through a running HTTP service."""
    terms = list(_read_lines(args.inputs))
    overrides = _resolve_config(args).to_dict()
    _status("Converting {} term(s) via {}...".format(len(terms), args.remote))
    async with ConverterClient(base_url=args.remote) as client:
        regexes = await client.convert(terms, config=overrides)
    for regex in regexes:
        out.write(printable(regex))
        out.write("\n")
    out.flush()


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="term2regex",
        description="Convert multi-word terms (one per line) into regular "
                    "expressions that also match case, plural, and ae/e variants.",
    )

    parser.add_argument(
        "inputs",
        nargs="*",
        help="Files with one term per line. Default (or '-'): read stdin.",
    )

    parser.add_argument(
        "--config",
        default=None,
        help="JSON configuration file (keys: word_split_pattern, word_sep_pattern, "
             "trailing_context_pattern, stop_words, dialect).",
    )

    parser.add_argument(
        "--split",
        default=None,
        help="Regex matching a separator run in input terms.",
    )

    parser.add_argument(
        "--sep",
        default=None,
        help="Sub-pattern emitted between words.",
    )

    parser.add_argument(
        "--trail",
        default=None,
        help="Sub-pattern appended to every regex.",
    )

    parser.add_argument(
        "--no-trail",
        action="store_true",
        help="Do not append a trailing-context sub-pattern.",
    )

    parser.add_argument(
        "--stop-words",
        default=None,
        help="Comma-separated stop words copied unchanged (replaces the defaults).",
    )

    parser.add_argument(
        "--dialect",
        choices=sorted(DIALECTS),
        default=None,
        help="Target regex dialect used for escaping.",
    )

    parser.add_argument(
        "--explain",
        action="store_true",
        help="Print how each term was split and classified (to stderr).",
    )

    parser.add_argument(
        "--remote",
        default=None,
        metavar="URL",
        help="Convert through a running term2regex HTTP service at URL.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.explain and args.remote:
        parser.error("--explain works on local conversions only, not with --remote")

    if args.verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(name)s %(levelname)s %(message)s",
        )

    try:
        if args.remote:
            asyncio.run(_run_remote(args, sys.stdout))
        else:
            _run_local(args, sys.stdout)
    except KeyboardInterrupt:
        _status("\nCancelled by user.")
        sys.exit(130)
    except ValueError as e:
        # ConfigurationError, and input that is not valid UTF-8
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except ConverterAPIError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)
    except OSError as e:
        print("Error: {}".format(e), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
