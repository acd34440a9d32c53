"""
CLI interface for Unravel.

Pipe-friendly tree rewriter: reads an mdast tree, removes redundant
paragraph wrappers around components, writes the tree back.

    remark-mdx-to-json page.mdx | unravel --mode all > page.json
"""

from __future__ import annotations

import argparse
import logging
import sys

from .config import get_config, non_negative_int
from .core import UnwrapMode, unravel
from .formats import json as _json  # noqa: F401 - ensure json format is registered
from .formats import outline as _outline  # noqa: F401 - ensure outline format is registered
from .formats.base import TreeFormatError, registry

logger = logging.getLogger(__name__)


def _indent(value: str) -> int:
    try:
        return non_negative_int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"invalid indent {value!r}: must be a whole number >= 0") from e


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="unravel",
        description="Remove redundant paragraph wrappers around MDX components",
    )

    parser.add_argument(
        "file",
        nargs="?",
        help="Input tree (reads from stdin if not provided)",
    )

    parser.add_argument(
        "--mode",
        "-m",
        choices=[m.value for m in UnwrapMode],
        help="'component-only' unwraps paragraphs; 'all' also hoists lone "
        "paragraphs out of components (default from config: all)",
    )

    parser.add_argument(
        "--from",
        "-f",
        dest="input_format",
        type=str,
        help="Input format (default: by file extension, else config)",
    )

    parser.add_argument(
        "--to",
        "-t",
        dest="output_format",
        type=str,
        help="Output format: json or outline",
    )

    parser.add_argument(
        "--indent",
        type=_indent,
        help="Indentation for the output (0 = single line)",
    )

    parser.add_argument(
        "--output",
        "-o",
        type=str,
        help="Write to this file instead of stdout",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log what the rewrite passes did",
    )

    return parser.parse_args(args)


def read_input(filepath: str | None) -> tuple[str, str | None]:
    """Read from file or stdin, return (content, filename)."""
    if filepath:
        with open(filepath, encoding="utf-8") as f:
            return f.read(), filepath
    return sys.stdin.read(), None


def rewrite(
    content: str,
    mode: str = "all",
    input_format: str = "json",
    output_format: str = "json",
    indent: int | None = 2,
) -> str:
    """Parse, rewrite and render a serialised tree."""
    tree = registry.get_by_name(input_format).parse(content)
    unravel(mode)(tree)
    return registry.get_by_name(output_format).render(tree, indent=indent if indent and indent > 0 else None)


def setup_logging(level: str, verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.getLevelNamesMapping().get(level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(args: list[str] | None = None) -> int:
    """Main entry point."""
    parsed = parse_args(args)
    cfg = get_config()
    setup_logging(cfg.logging.level, parsed.verbose)

    # Read content
    try:
        content, filename = read_input(parsed.file)
    except FileNotFoundError:
        print(f"Error: File not found: {parsed.file}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return 1

    mode = parsed.mode or cfg.transform.mode
    indent = parsed.indent if parsed.indent is not None else cfg.io.indent

    try:
        if parsed.input_format:
            input_format = parsed.input_format
        else:
            input_format = registry.for_filename(filename, cfg.io.input_format).name
        output_format = parsed.output_format or cfg.io.output_format

        logger.debug("Rewriting %s (%s -> %s, mode=%s)", filename or "<stdin>", input_format, output_format, mode)
        output = rewrite(
            content,
            mode=mode,
            input_format=input_format,
            output_format=output_format,
            indent=indent,
        )
    except TreeFormatError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except ValueError as e:  # unknown mode from config or environment
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if parsed.output:
        try:
            with open(parsed.output, "w", encoding="utf-8") as f:
                f.write(output + "\n")
        except OSError as e:
            print(f"Error writing output: {e}", file=sys.stderr)
            return 1
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
