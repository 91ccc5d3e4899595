from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display over configured CSV sources (tqdm, TTY only).

In non-TTY environments (CI, pytest capture) the bar is disabled so that no
ANSI control sequences end up in captured output.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """One tqdm bar advancing once per parsed source file."""

    def __init__(self, total_files: int, *, description: str = "Parsing files") -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_name: str) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_name})")

    def finish_file(self, records: int = 0, errors: int = 0) -> None:
        if self.pbar is not None:
            self.pbar.set_postfix(records=records, errors=errors)
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
