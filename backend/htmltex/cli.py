from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import BinaryIO

from .latex_writer import LatexWriteError
from .logging_utils import get_logger, set_level
from .render import convert_html
from .web_tools import WebToolError, fetch_html

log = get_logger(__name__)


def _err(msg: str) -> None:
    print(f"ERROR: {msg}", file=sys.stderr)


def read_input(source: str | None, url: str | None) -> str:
    if url:
        result = asyncio.run(fetch_html(url))
        log.info("Fetched %s (%d bytes, status %d)", result.final_url, result.bytes, result.status)
        return result.html
    if source is None or source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8-sig")


def _convert_to(html: str, output: str | None) -> None:
    if output is None or output == "-":
        sink: BinaryIO = sys.stdout.buffer
        convert_html(html, sink)
        return
    with Path(output).open("wb") as f:
        convert_html(html, f)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="htmltex", description="Convert a styled HTML fragment into escaped LaTeX.")
    ap.add_argument("input", nargs="?", default=None, help="HTML file to read ('-' or omitted reads stdin)")
    ap.add_argument("--url", type=str, default=None, help="Fetch the HTML from an http(s) URL instead")
    ap.add_argument("-o", "--output", type=str, default=None, help="Write LaTeX here instead of stdout")
    ap.add_argument("--log-level", type=str, default=None, help="Override HTMLTEX_LOG_LEVEL (e.g. DEBUG)")
    args = ap.parse_args(argv)

    if args.input is not None and args.url:
        ap.error("give either an input file or --url, not both")
    if args.log_level:
        try:
            set_level(args.log_level)
        except ValueError:
            ap.error(f"unknown log level: {args.log_level}")

    try:
        html = read_input(args.input, args.url)
    except WebToolError as e:
        _err(str(e))
        return 2
    except (OSError, UnicodeDecodeError) as e:
        _err(f"cannot read input: {e}")
        return 2

    try:
        _convert_to(html, args.output)
    except LatexWriteError as e:
        _err(str(e))
        return 2
    except OSError as e:
        _err(f"cannot write output: {e}")
        return 2

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
