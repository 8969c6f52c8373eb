from __future__ import annotations

import pytest

from htmltex.styles import Style, parse_style, tokenize


@pytest.mark.parametrize(
    "css, expected",
    [
        ("font-weight: bold", Style(bold=True)),
        ("font-weight: BOLDER", Style(bold=True)),
        ("font-weight: 700", Style(bold=True)),
        ("font-weight: 400", Style()),
        ("font-style: italic; vertical-align: super", Style(italic=True, superscript=True)),
        ("margin-left: 60px", Style(quotation=True)),
        ("margin-left: 40px", Style()),
        ("margin-left: 60%", Style()),
        ("margin-left: 60", Style()),
        ("font: italic bold 12px/30px Georgia, serif", Style(bold=True, italic=True)),
        ("vertical-align: super; font: 12px Arial", Style(superscript=True)),
        ("font-weight: bold; font-weight: normal", Style()),
        ("/* heading */ font-weight: bold", Style(bold=True)),
        ("color red; font-style:italic", Style(italic=True)),
        ("", Style()),
        ('font-family: "x; font-weight: bold"', Style()),
        ("font-family: 'a;b'; font-style: italic", Style(italic=True)),
    ],
)
def test_parse_style(css: str, expected: Style) -> None:
    assert parse_style(css) == expected


def test_tokenize_kinds() -> None:
    kinds = [t.kind for t in tokenize("bold 700 12px 50% 'Times' ,")]
    assert kinds == ["ident", "number", "dimension", "percentage", "other", "other"]


def test_inline_commands_nest_in_order() -> None:
    s = Style(bold=True, italic=True, superscript=True)
    assert s.prefix() == "\\textbf{\\textit{\\footnote{"
    assert s.suffix() == "}}}"


def test_quotation_wins_over_inline_commands() -> None:
    s = Style(bold=True, quotation=True)
    assert s.prefix() == "\\begin{quote}\n"
    assert s.suffix() == "\n\\end{quote}\n"


def test_plain_style_writes_nothing() -> None:
    assert Style().prefix() == ""
    assert Style().suffix() == ""
