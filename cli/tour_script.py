"""Tour script CLI.

Prints the narration script of a role's guided tour (overview followed by the
ordered steps) so content can be reviewed without launching the GUI. Roles
without a tour show the default role's script, as the application does.

Example:
  tour-script --role nurse
  tour-script --role doctor --json
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict

from config.settings import DEFAULT_ROLE
from gui.design.onboarding_tour import get_config, has_config, list_roles


def script_payload(role: str) -> Dict[str, Any]:
    config = get_config(role)
    return {
        "role": role,
        "resolved_role": role if has_config(role) else DEFAULT_ROLE,
        "overview": config.overview_narration,
        "steps": [
            {
                "index": i,
                "id": step.id,
                "title": step.title,
                "description": step.description,
                "target": step.target_selector,
                "narration": step.narration_text,
            }
            for i, step in enumerate(config.steps)
        ],
    }


def format_text(payload: Dict[str, Any]) -> str:
    lines = [f"Tour for role: {payload['role']}"]
    if payload["resolved_role"] != payload["role"]:
        lines[0] += f" (using {payload['resolved_role']})"
    lines.append("")
    lines.append("Overview:")
    lines.append(f"  {payload['overview']}")
    for step in payload["steps"]:
        lines.append("")
        lines.append(f"{step['index'] + 1}. {step['title']} [{step['id']}]")
        lines.append(f"   {step['description']}")
        lines.append(f"   Narration: {step['narration']}")
        if step["target"]:
            lines.append(f"   Target: {step['target']}")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Print a role's guided tour script")
    ap.add_argument("--role", default=DEFAULT_ROLE, help="Viewer role")
    ap.add_argument("--json", action="store_true", help="Emit JSON")
    ap.add_argument("--list-roles", action="store_true", help="List roles with a tour")
    args = ap.parse_args(argv)

    if args.list_roles:
        roles = list_roles()
        print(json.dumps(roles) if args.json else "\n".join(roles))  # noqa: T201
        return 0
    payload = script_payload(args.role)
    if args.json:
        print(json.dumps(payload, indent=2))  # noqa: T201
    else:
        print(format_text(payload))  # noqa: T201
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
