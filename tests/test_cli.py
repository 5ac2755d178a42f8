"""
Tests for CLI interface.
"""
from pathlib import Path

import yaml
from typer.testing import CliRunner

from cli import app
from gainsreport.ledger import Ledger

# Default CliRunner mixes stderr and stdout into the .output attribute,
# which is what we want for testing console output.
runner = CliRunner()

EXPORT_CSV = """\
"Realized Gain/Loss - Lot Details"
Symbol,Name,Quantity
AAPL,Apple Inc,10,01/01/2023,02/15/2023,1500.00,1000.00,500.00,0,x
MSFT,Microsoft,5,01/01/2022,05/10/2023,800.00,900.00,0,-100.00,x
,,,,,,,,,
"Total",,,,,"$2,300.00"
"""


def create_export(tmp_path: Path, content: str = EXPORT_CSV) -> Path:
    """Creates a temporary brokerage export for testing."""
    csv_path = tmp_path / "export.csv"
    csv_path.write_text(content, encoding="utf-8")
    return csv_path


def test_cli_help() -> None:
    """Test CLI --help flag."""
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "capital gains report" in result.output


def test_cli_missing_argument() -> None:
    """Running without a CSV path is a usage error."""
    result = runner.invoke(app, [])
    assert result.exit_code == 2
    assert "Missing argument" in result.output


def test_cli_missing_csv_file() -> None:
    """Test that the command exits if the CSV file does not exist."""
    result = runner.invoke(app, ["nope.csv"])
    assert result.exit_code == 2
    assert "does not exist" in result.output


def test_cli_prints_report(tmp_path: Path) -> None:
    csv_path = create_export(tmp_path)
    result = runner.invoke(app, [str(csv_path)])

    assert result.exit_code == 0, f"CLI exited with error: {result.output}"
    assert "ALL TRANSACTIONS SORTED BY SALE DATE, SPLIT BY QUARTER" in result.output
    assert "Sold 10.0 shares of AAPL on 02/15/2023 for a short term gain of 500.00 USD" in result.output
    assert "Sold 5.0 shares of MSFT on 05/10/2023 for a long term loss of -100.00 USD" in result.output
    assert "End of Quarter 1 || Short Term Net: 500.00, Long Term Net: 0.00" in result.output
    assert "End of Quarter 2 || Short Term Net: 0.00, Long Term Net: -100.00" in result.output
    assert "End of Quarter 4 || Short Term Net: 0.00, Long Term Net: 0.00" in result.output
    assert result.output.index("AAPL on") < result.output.index("End of Quarter 1")
    assert result.output.index("End of Quarter 1") < result.output.index("MSFT on")


def test_cli_malformed_value_aborts(tmp_path: Path) -> None:
    """A transaction row with an unreadable date stops the run before any report."""
    content = EXPORT_CSV.replace("05/10/2023", "13/40/2023")
    csv_path = create_export(tmp_path, content)
    result = runner.invoke(app, [str(csv_path)])

    assert result.exit_code == 1
    assert "date_sold" in result.output
    assert "ALL TRANSACTIONS" not in result.output
    assert "Sold" not in result.output


def test_cli_csv_framing_error(tmp_path: Path) -> None:
    csv_path = create_export(tmp_path, 'AAPL,"Apple" Inc,10\n')
    result = runner.invoke(app, [str(csv_path)])

    assert result.exit_code == 1
    assert "Error reading CSV" in result.output
    assert "ALL TRANSACTIONS" not in result.output


def test_cli_totals_flag(tmp_path: Path) -> None:
    csv_path = create_export(tmp_path)
    result = runner.invoke(app, [str(csv_path), "--totals"])

    assert result.exit_code == 0, f"CLI exited with error: {result.output}"
    assert "Realized totals (USD)" in result.output
    assert "Short term" in result.output
    assert "Long term" in result.output


def test_cli_config_file(tmp_path: Path) -> None:
    """A config file can enable totals and accept extra placeholder tokens."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({
        "parsing": {"placeholders": ["--", "N/A"]},
        "report": {"show_totals": True},
    }))
    csv_path = create_export(tmp_path, EXPORT_CSV.replace("500.00,0,x", "500.00,N/A,x"))

    result = runner.invoke(app, [str(csv_path), "--config", str(config_path)])

    assert result.exit_code == 0, f"CLI exited with error: {result.output}"
    assert "short term gain of 500.00 USD" in result.output
    assert "Realized totals (USD)" in result.output


def test_cli_invalid_config(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"parsing": {"expected_fields": 3}}))
    csv_path = create_export(tmp_path)

    result = runner.invoke(app, [str(csv_path), "-c", str(config_path)])

    assert result.exit_code == 1
    assert "Configuration Error" in result.output


def test_cli_non_string_date_format_is_a_config_error(tmp_path: Path) -> None:
    """A wrongly typed date format is reported as a configuration error, not a crash."""
    config_path = tmp_path / "config.yaml"
    config_path.write_text(yaml.dump({"parsing": {"date_format": 123}}))
    csv_path = create_export(tmp_path)

    result = runner.invoke(app, [str(csv_path), "-c", str(config_path)])

    assert result.exit_code == 1
    assert "Configuration Error" in result.output
    assert "ALL TRANSACTIONS" not in result.output


def test_cli_missing_config_file(tmp_path: Path) -> None:
    """A config path that does not exist is a usage error."""
    csv_path = create_export(tmp_path)
    result = runner.invoke(app, [str(csv_path), "-c", "nope.yaml"])
    assert result.exit_code == 2
    assert "does not exist" in result.output


def test_cli_passes_rows_through_pipeline(mocker, tmp_path: Path) -> None:
    """Tests that the command hands the file's rows to the ledger builder."""
    m_read = mocker.patch("cli.read_rows", return_value=[["row"]])
    m_build = mocker.patch("cli.build_ledger", return_value=Ledger())
    csv_path = create_export(tmp_path)

    result = runner.invoke(app, [str(csv_path)])

    assert result.exit_code == 0, f"CLI exited with error: {result.output}"
    m_read.assert_called_once_with(csv_path)
    m_build.assert_called_once_with([["row"]], mocker.ANY)
    assert result.output.count("End of Quarter") == 4
