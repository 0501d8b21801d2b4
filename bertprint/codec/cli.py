"""Command-line interface for bertprint."""
from __future__ import annotations

import argparse
import difflib
import json
import sys
from pathlib import Path

from ..constants import DEFAULT_INDENT_WIDTH, DEFAULT_MAX_TERMS_PER_LINE, PROGRAM_NAME
from .decoder import decode, decode_sequence
from .errors import DecodeError, SourceError
from .graph import export_graphviz, term_stats
from .printer import PrettyPrinter


def read_source(name: str) -> bytes:
    """Read a whole file, or standard input when *name* is ``-``."""

    try:
        if name == "-":
            return sys.stdin.buffer.read()
        with open(name, "rb") as f:
            return f.read()
    except OSError as exc:
        raise SourceError(name, exc) from exc


def decode_source(name: str, *, bert2=False, max_depth=None):
    """Read and decode one input; returns ``(terms, symtable)``."""

    data = read_source(name)
    if bert2:
        return decode_sequence(data, max_depth=max_depth)
    term, symtable = decode(data, max_depth=max_depth)
    return [term], symtable


def render_source(name: str, params) -> list[str]:
    terms, symtable = decode_source(
        name, bert2=params.bert2, max_depth=params.max_depth
    )
    return [
        PrettyPrinter(term, symtable, params.indent, params.max_terms_per_line).render()
        for term in terms
    ]


def _viz_path(output: str, index: int, total: int) -> Path:
    path = Path(output)
    if total == 1:
        return path
    return path.with_name(f"{path.stem}_{index}{path.suffix}")


def _report(name: str, exc: Exception) -> None:
    print(f"{PROGRAM_NAME}: {name}: {exc}", file=sys.stderr)


def diff_sources(file_a: str, file_b: str, params) -> bool:
    """Print a unified diff of two renderings; True when they match.

    Decode failures propagate with the offending input recorded on the
    exception as ``source``.
    """

    texts = []
    for name in (file_a, file_b):
        try:
            texts.append("\n".join(render_source(name, params)).splitlines())
        except DecodeError as exc:
            exc.source = name
            raise
    text_a, text_b = texts
    diff = list(
        difflib.unified_diff(text_a, text_b, fromfile=file_a, tofile=file_b, lineterm="")
    )
    if not diff:
        print("Terms are identical.")
        return True
    for line in diff:
        print(line)
    return False


def process_source(name: str, params) -> None:
    terms, symtable = decode_source(
        name, bert2=params.bert2, max_depth=params.max_depth
    )
    for index, term in enumerate(terms):
        print(
            PrettyPrinter(
                term, symtable, params.indent, params.max_terms_per_line
            ).render()
        )
        if params.stats:
            print(json.dumps(term_stats(term, symtable), sort_keys=True))
        if params.viz:
            export_graphviz(term, symtable, _viz_path(params.viz, index, len(terms)))


def _non_negative(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"expected a non-negative integer, got {text}")
    return value


def parse_args(args):
    argp = argparse.ArgumentParser(
        prog=PROGRAM_NAME,
        description="Pretty print structures encoded in Erlang's External Term Format",
    )

    argp.add_argument(
        "files",
        nargs="*",
        metavar="BERT FILE",
        help="Input files; '-' or none reads standard input",
    )
    argp.add_argument(
        "-i",
        "--indent",
        type=_non_negative,
        default=DEFAULT_INDENT_WIDTH,
        help=f"Spaces per nesting level (default {DEFAULT_INDENT_WIDTH})",
    )
    argp.add_argument(
        "-m",
        "--max-terms-per-line",
        type=_non_negative,
        default=DEFAULT_MAX_TERMS_PER_LINE,
        help=(
            "Largest collection of basic terms kept on one line "
            f"(default {DEFAULT_MAX_TERMS_PER_LINE})"
        ),
    )
    argp.add_argument(
        "--bert2",
        action="store_true",
        help="Inputs are varint length-prefixed BERT2 record streams",
    )
    argp.add_argument(
        "--max-depth",
        type=_non_negative,
        metavar="N",
        help="Reject terms nested deeper than N levels",
    )
    argp.add_argument(
        "--stats",
        action="store_true",
        help="Print node count, depth and kind totals after each term",
    )
    argp.add_argument(
        "--viz",
        metavar="OUTPUT",
        help="Export each decoded term tree with Graphviz (.dot written raw)",
    )
    argp.add_argument(
        "--diff",
        nargs=2,
        metavar=("A", "B"),
        help="Compare the renderings of two inputs",
    )

    params = argp.parse_args(args)
    if not params.files:
        params.files = ["-"]
    return params


def main(args) -> int:
    params = parse_args(args)

    if params.diff:
        try:
            same = diff_sources(params.diff[0], params.diff[1], params)
        except (DecodeError, SourceError) as exc:
            _report(getattr(exc, "source", params.diff[0]), exc)
            return 1
        return 0 if same else 1

    failures = 0
    for name in params.files:
        try:
            process_source(name, params)
        except (DecodeError, RuntimeError, OSError) as exc:
            failures += 1
            _report(name, exc)
    return 1 if failures else 0


__all__ = [
    "decode_source",
    "diff_sources",
    "main",
    "parse_args",
    "process_source",
    "read_source",
    "render_source",
]


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main(sys.argv[1:]))
