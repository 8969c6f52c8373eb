from __future__ import annotations

import io
from typing import BinaryIO

from bs4 import BeautifulSoup
from bs4.element import NavigableString, PageElement, PreformattedString, Tag

from .latex_writer import LatexWriter
from .logging_utils import get_logger
from .styles import parse_style

log = get_logger(__name__)


def _write_children(node: Tag, out: LatexWriter) -> None:
    for child in node.children:
        write_node(child, out)


def write_node(node: PageElement, out: LatexWriter) -> None:
    if isinstance(node, PreformattedString):
        # Comments, doctypes, CDATA and processing instructions carry no text.
        return
    if isinstance(node, NavigableString):
        out.write(str(node))
        return
    if not isinstance(node, Tag):
        return

    if node.name == "p":
        out.write("\n\n")

    declarations = node.get("style")
    if declarations is None:
        _write_children(node, out)
        return

    style = parse_style(str(declarations))
    out.write(style.prefix())
    _write_children(node, out)
    out.write(style.suffix())


def write_document(html: str, out: LatexWriter) -> None:
    soup = BeautifulSoup(html or "", "html.parser")
    for node in soup.children:
        write_node(node, out)


def convert_html(html: str, sink: BinaryIO) -> None:
    with LatexWriter(sink) as out:
        write_document(html, out)


def html_to_latex(html: str) -> str:
    buf = io.BytesIO()
    convert_html(html, buf)
    text = buf.getvalue().decode("utf-8")
    log.debug("Converted %d HTML chars into %d LaTeX chars", len(html or ""), len(text))
    return text
