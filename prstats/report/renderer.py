from __future__ import annotations

import sys
from typing import List, Optional, TextIO, Tuple


class LogBlock:
    """
    A titled block of report lines. Labelled rows are aligned on the widest
    label in the block; plain rows are printed after them as-is.
    """

    def __init__(self, title: str):
        self.title = title
        self.rows: List[Tuple[str, Tuple[object, ...]]] = []
        self.plain_rows: List[Tuple[object, ...]] = []

    def log(self, label: str, *values: object) -> None:
        self.rows.append((label, values))

    def log_plain(self, *values: object) -> None:
        self.plain_rows.append(values)

    def lines(self) -> List[str]:
        width = max((len(label) for label, _ in self.rows), default=0)
        out = ["", f"{self.title}:"]
        for label, values in self.rows:
            out.append("  " + " ".join([label.ljust(width), "=>", *map(str, values)]))
        for values in self.plain_rows:
            out.append("  " + " ".join(map(str, values)))
        out.append("")
        return out

    def render(self, out: Optional[TextIO] = None) -> None:
        out = out or sys.stdout
        for line in self.lines():
            print(line, file=out)
