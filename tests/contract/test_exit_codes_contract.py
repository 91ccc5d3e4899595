from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from customer_csv.cli import main as cli_main
from customer_csv.services.orchestrator import ProcessingError

"""Exit code contract: 0 = no errors, 2 = errors recorded, 1 = fatal."""


def test_exit_code_fatal_startup(temp_workdir: Path, capsys):
    # config/sources.yml 無し → exit 1
    code = cli_main([])
    assert code == 1
    assert "ERROR config:" in capsys.readouterr().out


def test_exit_code_invalid_config(write_config: Path, capsys):
    write_config.write_text("source_directory: ./data\n", encoding="utf-8")
    assert cli_main([]) == 1
    assert "config validation failed" in capsys.readouterr().out


def test_exit_code_all_success(write_config, sample_csv_files, capsys):
    assert cli_main([]) == 0


def test_exit_code_partial_failure(write_config, sample_csv_files, capsys):
    with open(sample_csv_files[0], "a", encoding="utf-8") as fh:
        fh.write("CUST003,Bad Email,not-an-email,,100\n")
    assert cli_main([]) == 2
    assert "partial=1" in capsys.readouterr().out


def test_exit_code_all_failed(write_config, sample_csv_files, capsys):
    for f in sample_csv_files:
        f.write_text("Unrelated\nvalue\n", encoding="utf-8")
    assert cli_main([]) == 2
    assert "failed=3" in capsys.readouterr().out


def test_exit_code_processing_error(write_config, sample_csv_files, capsys):
    with patch("customer_csv.cli.app.process_all", side_effect=ProcessingError("boom")):
        code = cli_main([])
    assert code == 1
    assert "ERROR processing: boom" in capsys.readouterr().out
