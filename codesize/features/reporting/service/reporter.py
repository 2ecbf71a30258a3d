import sys
from typing import Dict, Iterable, List, Optional, TextIO, Tuple

from ..data.formatter import render_largest, render_totals

class Reporter:
    """
    Writes rendered report lines to a text sink (stdout unless injected).
    The whole report is rendered before anything is written.
    """

    def __init__(self, sink: Optional[TextIO] = None):
        self.sink = sink if sink is not None else sys.stdout

    def report_totals(self, totals: Dict[str, int], base: Optional[int] = None) -> None:
        self._write(render_totals(totals, base))

    def report_largest(self, retained: Dict[str, Iterable[Tuple[int, str]]], base: Optional[int] = None) -> None:
        self._write(render_largest(retained, base))

    def _write(self, lines: List[str]) -> None:
        if not lines:
            return
        self.sink.write("".join(f"{line}\n" for line in lines))
        self.sink.flush()
