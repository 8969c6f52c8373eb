from .latex_writer import EncodingError, LatexWriteError, LatexWriter, SinkError
from .render import convert_html, html_to_latex
from .styles import Style, parse_style

__all__ = [
    "EncodingError",
    "LatexWriteError",
    "LatexWriter",
    "SinkError",
    "Style",
    "convert_html",
    "html_to_latex",
    "parse_style",
]
