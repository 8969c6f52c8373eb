from __future__ import annotations

import io

import pytest

from htmltex.latex_writer import LatexWriter


class RecordingSink(io.BytesIO):
    def __init__(self) -> None:
        super().__init__()
        self.flushes = 0

    def flush(self) -> None:
        self.flushes += 1
        super().flush()


class BrokenSink:
    def __init__(self, *, fail_on: str = "write") -> None:
        self.fail_on = fail_on
        self.data = bytearray()

    def write(self, b) -> int:
        if self.fail_on == "write":
            raise OSError("disk full")
        self.data.extend(b)
        return len(b)

    def flush(self) -> None:
        if self.fail_on == "flush":
            raise OSError("broken pipe")


def escape(*chunks: str | bytes) -> str:
    sink = io.BytesIO()
    w = LatexWriter(sink)
    for chunk in chunks:
        w.write(chunk)
    w.finalize()
    return sink.getvalue().decode("utf-8")


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
