"""Play-field dimensions handed from the host to an engine."""

from __future__ import annotations

from dataclasses import dataclass

# Rows/cols consumed by the chrome around the play field:
# a 3-row help panel on top plus the canvas border.
HELP_ROWS: int = 3
BORDER: int = 1


class InvalidViewport(ValueError):
    """Raised when the terminal is too small to hold a usable play field."""


@dataclass(frozen=True)
class Viewport:
    cols: int
    rows: int

    def __post_init__(self) -> None:
        if self.cols < 1 or self.rows < 1:
            raise InvalidViewport(
                f"play field must be at least 1x1, got {self.cols}x{self.rows}"
            )

    @classmethod
    def from_terminal(cls, term_rows: int, term_cols: int) -> Viewport:
        """Size of the canvas interior for a terminal of the given size."""
        return cls(
            cols=term_cols - 2 * BORDER,
            rows=term_rows - HELP_ROWS - 2 * BORDER,
        )

    @property
    def cells(self) -> int:
        return self.cols * self.rows
