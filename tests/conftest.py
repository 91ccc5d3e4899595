# Shared pytest fixtures
from __future__ import annotations

from pathlib import Path

import pytest

from customer_csv.logging.error_log import ErrorSink
from customer_csv.logging.init import reset_logging
from customer_csv.transformation.customer_transformer import CustomerTransformer
from customer_csv.transformation.phone_lookup import SimulatedPhoneLookup
from customer_csv.validation.customer_validator import CustomerValidator

TYPE_A_CSV = """CustomerID,Full Name,Email,Phone,Salary
CUST001,John Doe,john.doe@example.com,+15551234567,55000
CUST002,jane smith,Jane.Smith@Example.com,,62000.50
"""

TYPE_B_CSV = """ID,Name,Surname,CorporateEmail,PersonalEmail,Salary
EMP001,Alice,Walker,alice.walker@corp.com,alice@gmail.com,71000
"""

TYPE_C_CSV = """EmployeeID,FirstName,LastName,WorkEmail,MobileNumber,AnnualSalary,Department
STF201,David,Lee,david.lee@company.com,+14155550101,83000,Engineering
"""


@pytest.fixture(autouse=True)
def _clean_logging():
    # handler は作成時点の sys.stdout を掴むため capsys ごとに作り直す
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(tmp_path: Path, monkeypatch) -> Path:
    (tmp_path / "config").mkdir()
    (tmp_path / "data").mkdir()
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DISABLE_PHONE_LOOKUP", raising=False)
    monkeypatch.delenv("PHONE_LOOKUP_DELAY_MS", raising=False)
    return tmp_path


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
sources:
  - file: customers.csv
    format: TypeA
  - file: employees.csv
    format: TypeB
  - file: staff.csv
    format: TypeC
enrichment:
  enabled: true
  delay_ms: 0
  phone_prefix: "+1-555-"
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "sources.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def sample_csv_files(temp_workdir: Path) -> list[Path]:
    files = []
    for name, text in [
        ("customers.csv", TYPE_A_CSV),
        ("employees.csv", TYPE_B_CSV),
        ("staff.csv", TYPE_C_CSV),
    ]:
        f = temp_workdir / "data" / name
        f.write_text(text, encoding="utf-8")
        files.append(f)
    return files


@pytest.fixture()
def write_csv(tmp_path: Path):
    """Write ``text`` to ``tmp_path/name`` and return the path."""

    def _write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def sink() -> ErrorSink:
    return ErrorSink()


@pytest.fixture()
def validator() -> CustomerValidator:
    return CustomerValidator()


@pytest.fixture()
def lookup() -> SimulatedPhoneLookup:
    return SimulatedPhoneLookup(delay_seconds=0)


@pytest.fixture()
def transformer(lookup: SimulatedPhoneLookup) -> CustomerTransformer:
    return CustomerTransformer(lookup)
