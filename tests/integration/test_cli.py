"""Integration tests for the command-line interface."""

import json

import pytest

from bakery_ledger import cli


@pytest.fixture
def run_cli(test_db, monkeypatch, capsys):
    """Run CLI commands against the test database and return (code, stdout)."""
    monkeypatch.setattr(cli, "initialize_app_database", lambda: None)

    def _run(*argv):
        code = cli.main(list(argv))
        return code, capsys.readouterr().out

    return _run


class TestCli:
    """Tests for CLI commands."""

    def test_no_command_prints_help(self, run_cli):
        code, out = run_cli()
        assert code == 1
        assert "usage:" in out

    def test_seed_then_summary(self, run_cli):
        code, out = run_cli("seed")
        assert code == 0
        assert "Seeded 5 ingredients, 2 products, 1 orders" in out

        code, out = run_cli("summary")
        assert code == 0
        assert "Effectiveness:      100%" in out
        assert "Pending orders:     1" in out

    def test_seed_twice_refused(self, run_cli):
        run_cli("seed")
        code, out = run_cli("seed")
        assert code == 1
        assert "ERROR" in out

    def test_low_stock(self, run_cli):
        run_cli("seed")
        code, out = run_cli("low-stock")
        assert code == 0
        assert "Sugar" in out
        assert "Chocolate" in out
        assert "Flour" not in out

    def test_restock_persists(self, run_cli):
        run_cli("seed")
        code, out = run_cli("restock", "1", "10", "kg", "--cost", "2.10")
        assert code == 0
        assert "Flour: 60 kg at $1.60/kg" in out

    def test_set_status_reports_usage(self, run_cli):
        run_cli("seed")
        code, out = run_cli("set-status", "o1", "Completed")
        assert code == 0
        assert "Pending -> Completed" in out
        assert "used 1.1 kg of Flour" in out

        code, out = run_cli("requirements")
        assert "No open orders" in out

    def test_service_error_exit_code(self, run_cli):
        run_cli("seed")
        code, out = run_cli("set-status", "missing", "Completed")
        assert code == 1
        assert "ERROR: Order with ID 'missing' not found" in out

    def test_export_and_import(self, run_cli, tmp_path):
        run_cli("seed")
        backup = tmp_path / "backup.json"
        code, _ = run_cli("export", str(backup))
        assert code == 0
        data = json.loads(backup.read_text(encoding="utf-8"))
        assert [p["name"] for p in data["products"]] == ["Chocolate Cake", "Dozen Croissants"]

        run_cli("set-status", "o1", "Cancelled")
        code, _ = run_cli("import", str(backup))
        assert code == 0
        code, out = run_cli("summary")
        assert "Loss:               $0.00" in out

    def test_restock_unit_is_case_insensitive(self, run_cli):
        run_cli("seed")
        code, out = run_cli("restock", "4", "2", "l")
        assert code == 0
        assert "Milk: 14 L" in out

    def test_restock_unknown_unit_rejected(self, run_cli):
        run_cli("seed")
        with pytest.raises(SystemExit) as excinfo:
            run_cli("restock", "4", "2", "cup")
        assert excinfo.value.code == 2

    def test_import_missing_file(self, run_cli, tmp_path):
        code, out = run_cli("import", str(tmp_path / "nope.json"))
        assert code == 1
        assert "ERROR: Cannot read" in out

    def test_import_malformed_json_keeps_store(self, run_cli, tmp_path):
        run_cli("seed")
        broken = tmp_path / "broken.json"
        broken.write_text("{not json", encoding="utf-8")
        code, out = run_cli("import", str(broken))
        assert code == 1
        assert "ERROR: Invalid JSON" in out

        code, out = run_cli("summary")
        assert "Pending orders:     1" in out

    def test_export_to_missing_directory(self, run_cli, tmp_path):
        run_cli("seed")
        code, out = run_cli("export", str(tmp_path / "missing" / "backup.json"))
        assert code == 1
        assert "ERROR" in out
