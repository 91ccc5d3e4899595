from __future__ import annotations

from unittest.mock import patch

from customer_csv.services.progress import ProgressTracker, is_tty_enabled


def test_is_tty_enabled_returns_stdout_isatty():
    with patch("sys.stdout.isatty", return_value=True):
        assert is_tty_enabled() is True
    with patch("sys.stdout.isatty", return_value=False):
        assert is_tty_enabled() is False


class TestProgressTracker:
    def test_tty_creates_bar(self):
        with patch("customer_csv.services.progress.is_tty_enabled", return_value=True), \
             patch("customer_csv.services.progress.tqdm") as mock_tqdm:
            tracker = ProgressTracker(3, description="Parsing")
            assert tracker.enabled is True
            mock_tqdm.assert_called_once_with(
                total=3, desc="Parsing", unit="file", leave=True, ncols=80, ascii=True
            )

            tracker.start_file("a.csv")
            tracker.finish_file(records=2, errors=1)
            bar = mock_tqdm.return_value
            bar.set_description.assert_any_call("Parsing (a.csv)")
            bar.set_postfix.assert_called_once_with(records=2, errors=1)
            bar.update.assert_called_once_with(1)
            assert tracker.current_file == 1

            tracker.close()
            bar.close.assert_called_once()
            assert tracker.pbar is None

    def test_non_tty_is_noop(self):
        with patch("customer_csv.services.progress.is_tty_enabled", return_value=False), \
             patch("customer_csv.services.progress.tqdm") as mock_tqdm:
            with ProgressTracker(2) as tracker:
                tracker.start_file("a.csv")
                tracker.finish_file()
            mock_tqdm.assert_not_called()
            assert tracker.pbar is None
            assert tracker.current_file == 1

    def test_context_manager_closes(self):
        with patch("customer_csv.services.progress.is_tty_enabled", return_value=True), \
             patch("customer_csv.services.progress.tqdm") as mock_tqdm:
            with ProgressTracker(1):
                pass
            mock_tqdm.return_value.close.assert_called_once()
