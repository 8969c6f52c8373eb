from __future__ import annotations

import codecs
import contextlib
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Generator, Sequence

from .logging_utils import get_logger

log = get_logger(__name__)

Slot = str | None
Window = tuple[Slot, Slot, Slot]
Matcher = Callable[[Slot], bool]

ABSENT: Slot = None
EMPTY_CONTEXT: Window = (ABSENT, ABSENT, ABSENT)

DASHES = frozenset("-\u2013\u2014")
DIGITS = frozenset("0123456789")


class LatexWriteError(RuntimeError):
    pass


class EncodingError(LatexWriteError):
    pass


class SinkError(LatexWriteError):
    pass


def _absent(c: Slot) -> bool:
    return c is ABSENT


def _anything(c: Slot) -> bool:
    return True


def _one_of(chars: str | frozenset[str]) -> Matcher:
    allowed = frozenset(chars)
    return lambda c: c is not ABSENT and c in allowed


def _literal(out: bytes) -> Callable[[Window], bytes]:
    return lambda window: out


def _head(window: Window) -> bytes:
    return str(window[0]).encode("utf-8")


@dataclass(frozen=True)
class Rule:
    name: str
    pattern: tuple[Matcher, Matcher, Matcher]
    emit: Callable[[Window], bytes]
    consumes: int

    def matches(self, window: Window) -> bool:
        return all(m(c) for m, c in zip(self.pattern, window))


# First match wins; the last rule always matches.
RULES: tuple[Rule, ...] = (
    Rule("absent", (_absent, _anything, _anything), _literal(b""), 1),
    Rule("space-run", (_one_of(" "), _one_of(" "), _anything), _literal(b""), 1),
    Rule("space-newline", (_one_of(" "), _one_of("\n"), _anything), _literal(b"\n"), 2),
    Rule("dollar", (_one_of("$"), _anything, _anything), _literal(b"\\$"), 1),
    Rule("percent", (_one_of("%"), _anything, _anything), _literal(b"\\%"), 1),
    Rule("em-dash", (_one_of(" "), _one_of(DASHES), _one_of(" ,")), _literal(b" ---"), 2),
    Rule("comma-em-dash", (_one_of(","), _one_of(DASHES), _one_of(" ")), _literal(b",---"), 2),
    Rule("en-dash-range", (_one_of(DIGITS), _one_of(DASHES), _one_of(DIGITS)), lambda w: _head(w) + b"--", 2),
    Rule("verbatim", (_anything, _anything, _anything), _head, 1),
)


def classify(window: Window) -> tuple[bytes, int]:
    for rule in RULES:
        if rule.matches(window):
            return rule.emit(window), rule.consumes
    raise AssertionError(f"no rule matched window {window!r}")


def trigrams(chars: Sequence[str]) -> Generator[Window, int | None, None]:
    """
    Yield overlapping 3-slot windows over `chars`, padding past the end with ABSENT.

    The value sent back after each window is how many positions that window
    consumed; the next window starts that many positions further on. Plain
    iteration (nothing sent) advances by one.
    """
    n = len(chars)
    i = 0
    while i < n:
        window = tuple(chars[j] if j < n else ABSENT for j in range(i, i + 3))
        step = yield window
        i += step or 1


class LatexWriter:
    """
    Streaming LaTeX escaper in front of a binary sink.

    Text is classified one 3-character window at a time. A window that runs
    past the end of the current chunk is kept as context until the next
    `write` or until `finalize` drains it, so at most 2 characters are ever
    held back and chunk boundaries never change the output.
    """

    def __init__(self, sink: BinaryIO) -> None:
        self.sink = sink
        self._context: Window = EMPTY_CONTEXT
        self._decoder = codecs.getincrementaldecoder("utf-8")()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def _pending(self) -> str:
        return "".join(c for c in self._context if c is not ABSENT)

    def __enter__(self) -> LatexWriter:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def __del__(self) -> None:
        if getattr(self, "_closed", True):
            return
        tail = self._pending
        try:
            self.finalize()
        except Exception as e:
            # Up to 2 buffered characters are lost here.
            with contextlib.suppress(Exception):
                log.warning("Implicit finalize failed, dropping %r: %s", tail, e)

    def _decode(self, chunk: bytes | str) -> str:
        if isinstance(chunk, str):
            if self._decoder.getstate()[0]:
                raise EncodingError("text chunk written while a UTF-8 sequence is incomplete")
            return chunk
        try:
            return self._decoder.decode(bytes(chunk))
        except UnicodeDecodeError as e:
            raise EncodingError(f"chunk is not valid UTF-8: {e}") from e

    def _emit(self, out: bytes) -> None:
        try:
            if out:
                self.sink.write(out)
            self.sink.flush()
        except (OSError, ValueError) as e:
            raise SinkError(f"output sink failed: {e}") from e

    def _run(self, chars: Sequence[str], *, draining: bool) -> None:
        windows = trigrams(chars)
        try:
            window = next(windows)
            while True:
                if window[2] is ABSENT and not draining:
                    self._context = window
                    return
                out, consumed = classify(window)
                self._emit(out)
                window = windows.send(consumed)
        except StopIteration:
            return

    def write(self, chunk: bytes | str) -> int:
        if self._closed:
            raise ValueError("write to closed LatexWriter")
        text = self._decode(chunk)
        if not text:
            return len(chunk)
        chars = [c for c in self._context if c is not ABSENT]
        chars.extend(text)
        # A sink failure mid-chunk must not replay old context.
        self._context = EMPTY_CONTEXT
        self._run(chars, draining=False)
        return len(chunk)

    def finalize(self) -> None:
        tail = self._pending
        self._context = EMPTY_CONTEXT
        try:
            self._decoder.decode(b"", final=True)
        except UnicodeDecodeError as e:
            self._decoder.reset()
            # Emit what was complete before reporting the truncated sequence.
            self._run(list(tail), draining=True)
            raise EncodingError(f"stream ended inside a UTF-8 sequence: {e}") from e
        if tail:
            log.debug("Draining %d buffered character(s)", len(tail))
            self._run(list(tail), draining=True)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.finalize()
