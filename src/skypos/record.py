"""Tabular output rows: fields joined by single blanks, written one line at a time."""

from __future__ import annotations

from typing import TextIO

from skypos.angle_utils import dms_string


class Record:
    """Row buffer for ephemeris tables: append fields, then write the line."""

    def __init__(self, max_length: int = 4096) -> None:
        """Allocate a row of at most max_length characters."""
        self._fields: list[str] = []
        self._max_length = max_length

    def __len__(self) -> int:
        return len(self.get_line())

    def clear(self) -> None:
        """Drop all fields."""
        self._fields = []

    def append(self, text: str) -> None:
        """Append a field, truncated so the row never exceeds max_length."""
        used = len(' '.join(self._fields))
        remaining = self._max_length - used - (1 if self._fields else 0)
        if remaining <= 0:
            return
        self._fields.append(text[:remaining])

    def append_float(self, value: float, width: int, decimals: int) -> None:
        """Append a fixed-point number right-aligned in ``width`` characters."""
        self.append(f'{value:{width}.{decimals}f}')

    def append_hours(self, value: float, ndecimal: int = 2) -> None:
        """Append decimal hours as ``HHhMMmSS.SSs``."""
        self.append(dms_string(value, 'hms', ndecimal))

    def append_degrees(self, value: float, ndecimal: int = 1) -> None:
        """Append decimal degrees as ``+DDdMMmSS.Ss``."""
        self.append(dms_string(value, 'dms', ndecimal))

    def get_line(self) -> str:
        """Return the current row without writing or clearing it."""
        return ' '.join(self._fields).rstrip()

    def write(self, stream: TextIO) -> None:
        """Write the current row (if not blank) and clear the buffer."""
        line = self.get_line()
        if line:
            stream.write(line + '\n')
        self.clear()
