"""
MiniLang - Diagnostics
Side channel for problems reported by the lexer, parser and evaluator.

None of the pipeline stages raise on bad input. They report a Diagnostic
here and carry on with a fallback value (or stop, for a failed parse).
"""

import sys
from dataclasses import dataclass
from typing import Iterator, List, Optional, TextIO


STAGES = ("Lexer", "Parse", "Runtime")


@dataclass(frozen=True)
class Diagnostic:
    stage: str
    message: str
    line: int = 0

    def __str__(self):
        return f"[{self.stage}Error] Line {self.line}: {self.message}"


class Diagnostics:
    """
    Ordered collector of Diagnostic records, optionally echoed to a stream.

    With ``record=False`` reports are counted and echoed but not kept, so a
    program that fails inside an endless loop runs in constant memory.
    """

    def __init__(self, echo: bool = False, stream: Optional[TextIO] = None, record: bool = True):
        self.echo = echo
        self.record = record
        self.count = 0
        self._stream = stream
        self._items: List[Diagnostic] = []

    def report(self, stage: str, message: str, line: int = 0) -> Diagnostic:
        if stage not in STAGES:
            raise ValueError(f"Unknown diagnostic stage: {stage!r}")
        diag = Diagnostic(stage, message, line)
        self.count += 1
        if self.record:
            self._items.append(diag)
        if self.echo:
            print(str(diag), file=self._stream or sys.stderr)
        return diag

    def by_stage(self, stage: str) -> List[Diagnostic]:
        return [d for d in self._items if d.stage == stage]

    def clear(self) -> None:
        self.count = 0
        self._items.clear()

    def __len__(self):
        return self.count

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self._items)

    def __bool__(self):
        return self.count > 0


def default_diagnostics(diagnostics: Optional[Diagnostics]) -> Diagnostics:
    """Return *diagnostics*, or a fresh non-recording collector that echoes to stderr."""
    if diagnostics is None:
        return Diagnostics(echo=True, record=False)
    return diagnostics
