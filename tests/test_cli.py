# tests/test_cli.py
import json

import pytest

from floorrota.cli.main import main
from floorrota.io.workers_loader import load_workers

WORKERS = """
[[workers]]
id = "worker-001"
name = "Alice"
initial_shift = "morning"

[[workers]]
id = "worker-002"
name = "Bob"
initial_shift = "night"
rotation_enabled = false
"""


def test_show_json(write_toml, capsys):
    path = write_toml(WORKERS)
    rc = main(["-w", str(path), "show", "--week", "2026-01-28", "--json"])
    assert rc == 0
    docs = json.loads(capsys.readouterr().out)
    assert set(docs) == {"worker-001_2026-01-25", "worker-002_2026-01-25"}
    assert docs["worker-001_2026-01-25"]["assignedShift"] == "night"
    assert docs["worker-002_2026-01-25"]["assignedShift"] == "night"


def test_show_table_and_xlsx(write_toml, tmp_path, capsys):
    path = write_toml(WORKERS)
    out = tmp_path / "week.xlsx"
    rc = main(["-w", str(path), "show", "--week", "2026-01-18", "--sort", "shift", "-x", str(out)])
    assert rc == 0
    assert out.exists()
    assert "Week of 2026-01-18" in capsys.readouterr().out


def test_regenerate_writes_documents(write_toml, tmp_path):
    path = write_toml(WORKERS)
    out = tmp_path / "schedules.json"
    rc = main(["-w", str(path), "regenerate", "--start", "2026-01-18", "--end", "2026-01-31", "-o", str(out)])
    assert rc == 0
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["count"] == 4
    assert data["weekStarts"] == ["2026-01-18", "2026-01-25"]
    assert data["failures"] == {}


def test_override_set_and_reset(write_toml, capsys):
    path = write_toml(WORKERS)
    assert main(["-w", str(path), "override", "set", "worker-001", "2026-01-20", "--status", "off"]) == 0
    (alice, _) = load_workers(str(path))
    assert alice.manual_overrides["2026-01-20"].to_dict() == {"status": "off"}

    assert main(["-w", str(path), "override", "reset", "worker-001", "2026-01-20"]) == 0
    (alice, _) = load_workers(str(path))
    assert alice.manual_overrides == {}
    assert main(["-w", str(path), "override", "reset", "worker-001", "2026-01-20"]) == 0
    assert "No override" in capsys.readouterr().out


def test_errors_exit_with_status_1(write_toml, tmp_path, capsys):
    path = write_toml(WORKERS)
    assert main(["-w", str(tmp_path / "missing.toml"), "show"]) == 1
    assert main(["-w", str(path), "override", "set", "nobody", "2026-01-20", "--status", "off"]) == 1
    assert main(["-w", str(path), "regenerate", "--start", "2026-02-01", "--end", "2026-01-01"]) == 1
    assert "Error" in capsys.readouterr().err


def test_invalid_date_argument_is_rejected(write_toml):
    path = write_toml(WORKERS)
    with pytest.raises(SystemExit):
        main(["-w", str(path), "show", "--week", "01/28/2026"])
