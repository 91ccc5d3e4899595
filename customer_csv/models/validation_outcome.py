from __future__ import annotations

"""ValidationOutcome: accumulated result of one validation call."""

__all__ = [
    "ValidationOutcome",
]


class ValidationOutcome:
    """Validity flag plus ordered error messages for one row (optionally one column).

    Starts valid. ``add_error`` flips validity to False and there is no way back:
    a fresh outcome must be constructed instead.
    """

    def __init__(self, row_number: int, column_number: int | None = None) -> None:
        self.row_number = row_number
        self.column_number = column_number
        self._errors: list[str] = []
        self._valid = True

    @property
    def is_valid(self) -> bool:
        return self._valid

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    def add_error(self, message: str) -> None:
        self._valid = False
        self._errors.append(message)

    def merge(self, other: ValidationOutcome) -> None:
        """Append every message of ``other`` (validity follows)."""
        for message in other.errors:
            self.add_error(message)

    def __repr__(self) -> str:  # pragma: no cover (debug aid)
        return (
            f"ValidationOutcome(valid={self._valid}, row={self.row_number}, "
            f"column={self.column_number}, errors={self._errors!r})"
        )
