"""Tests for the tour script CLI."""

from __future__ import annotations

import json

from cli import tour_script


def test_text_output_lists_steps_in_order(capsys):
    rc = tour_script.main(["--role", "lab_technician"])
    out = capsys.readouterr().out
    assert rc == 0
    assert out.startswith("Tour for role: lab_technician")
    assert out.index("1. Dashboard") < out.index("2. Lab Orders") < out.index("3. Lab Results")
    assert "Target: [data-tour=\"lab-orders\"]" in out


def test_json_output(capsys):
    rc = tour_script.main(["--role", "researcher", "--json"])
    payload = json.loads(capsys.readouterr().out)
    assert rc == 0
    assert payload["resolved_role"] == "researcher"
    assert [s["id"] for s in payload["steps"]] == ["dashboard", "research"]


def test_unknown_role_reports_fallback(capsys):
    tour_script.main(["--role", "janitor"])
    out = capsys.readouterr().out
    assert out.splitlines()[0] == "Tour for role: janitor (using admin)"


def test_list_roles(capsys):
    tour_script.main(["--list-roles", "--json"])
    roles = json.loads(capsys.readouterr().out)
    assert "nurse" in roles and "admin" in roles
