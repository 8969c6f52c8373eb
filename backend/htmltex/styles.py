from __future__ import annotations

import re
from dataclasses import dataclass, replace

_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_STRING_OR_SEMI_RE = re.compile(r""""(?:[^"\\]|\\.)*"|'(?:[^'\\]|\\.)*'|;""")
_TOKEN_RE = re.compile(
    r"""
    "(?:[^"\\]|\\.)*"                                 # double-quoted string
    | '(?:[^'\\]|\\.)*'                               # single-quoted string
    | (?P<num>[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)(?P<unit>%|[a-zA-Z]+)?
    | (?P<ident>-?[a-zA-Z_][\w-]*)
    | [^\s]
    """,
    re.VERBOSE,
)

BOLD_WEIGHT = 700.0
QUOTE_INDENT = 50.0


@dataclass(frozen=True)
class Token:
    kind: str  # "ident", "number", "dimension", "percentage" or "other"
    text: str
    value: float | None = None


@dataclass(frozen=True)
class Style:
    bold: bool = False
    italic: bool = False
    superscript: bool = False
    quotation: bool = False

    def prefix(self) -> str:
        if self.quotation:
            return "\\begin{quote}\n"
        out = ""
        if self.bold:
            out += "\\textbf{"
        if self.italic:
            out += "\\textit{"
        if self.superscript:
            out += "\\footnote{"
        return out

    def suffix(self) -> str:
        if self.quotation:
            return "\n\\end{quote}\n"
        return "}" * sum((self.bold, self.italic, self.superscript))


def tokenize(value: str) -> list[Token]:
    tokens: list[Token] = []
    for m in _TOKEN_RE.finditer(value):
        if m.group("num") is not None:
            unit = m.group("unit")
            number = float(m.group("num"))
            if not unit:
                tokens.append(Token("number", m.group(0), number))
            elif unit == "%":
                tokens.append(Token("percentage", m.group(0), number))
            else:
                tokens.append(Token("dimension", m.group(0), number))
        elif m.group("ident") is not None:
            tokens.append(Token("ident", m.group("ident").lower()))
        else:
            tokens.append(Token("other", m.group(0)))
    return tokens


def _split_declarations(text: str) -> list[str]:
    # Only semicolons outside quoted strings end a declaration.
    parts: list[str] = []
    start = 0
    for m in _STRING_OR_SEMI_RE.finditer(text):
        if m.group(0) == ";":
            parts.append(text[start : m.start()])
            start = m.end()
    parts.append(text[start:])
    return parts


def _declarations(style: str) -> list[tuple[str, list[Token]]]:
    out: list[tuple[str, list[Token]]] = []
    for decl in _split_declarations(_COMMENT_RE.sub(" ", style or "")):
        name, sep, value = decl.partition(":")
        name = name.strip().lower()
        if not sep or not name:
            continue
        out.append((name, tokenize(value)))
    return out


def _is_bold(tok: Token) -> bool:
    if tok.kind == "ident":
        return tok.text in ("bold", "bolder")
    return tok.kind == "number" and tok.value is not None and tok.value >= BOLD_WEIGHT


def _first(tokens: list[Token]) -> Token | None:
    return tokens[0] if tokens else None


def parse_style(style: str) -> Style:
    """
    Map an inline CSS declaration block to formatting intents.

    Only the first value token of each longhand property is inspected; a
    later declaration of the same property overrides an earlier one. The
    `font` shorthand resets bold and italic before applying its keywords.
    """
    result = Style()
    for name, tokens in _declarations(style):
        first = _first(tokens)
        if name == "font-weight":
            result = replace(result, bold=first is not None and _is_bold(first))
        elif name == "font-style":
            result = replace(result, italic=first is not None and first.kind == "ident" and first.text == "italic")
        elif name == "vertical-align":
            result = replace(result, superscript=first is not None and first.kind == "ident" and first.text == "super")
        elif name == "margin-left":
            result = replace(
                result,
                quotation=first is not None
                and first.kind == "dimension"
                and first.value is not None
                and first.value >= QUOTE_INDENT,
            )
        elif name == "font":
            result = replace(
                result,
                bold=any(_is_bold(t) for t in tokens),
                italic=any(t.kind == "ident" and t.text == "italic" for t in tokens),
            )
    return result
