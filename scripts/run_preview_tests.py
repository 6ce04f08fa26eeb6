#!/usr/bin/env python3
"""Render every example model through the viewer and the snapshot command."""

from __future__ import annotations

import json
import os
import subprocess
import sys
from datetime import datetime, timezone
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
DIST_DIR = PROJECT_ROOT / "dist" / "preview-tests"
RESULTS_FILE = DIST_DIR / "results.json"

CASES = [
    {"name": "box", "module": "docs/examples/box_example.py", "args": []},
    {"name": "box-half-turn", "module": "docs/examples/box_example.py", "args": ["--rotate-y", "180"]},
    {"name": "pyramid", "module": "docs/examples/pyramid_example.py", "args": ["--cam-translate-z", "-2"]},
    {"name": "polyhedron", "module": "docs/examples/polyhedron_example.py", "args": ["--fov", "60"]},
]


def run(cmd: list[str]) -> subprocess.CompletedProcess:
    env = os.environ.copy()
    env.setdefault("PYVISTA_OFF_SCREEN", "true")
    return subprocess.run(cmd, cwd=PROJECT_ROOT, env=env, capture_output=True, text=True)


def run_case(case: dict) -> dict:
    snapshot = DIST_DIR / f"{case['name']}.png"
    screenshot = DIST_DIR / f"{case['name']}-viewer.png"
    snap = run(
        ["wireview", "snapshot", case["module"], "--output", str(snapshot), "--overwrite", *case["args"]]
    )
    view = run(["wireview", "view", case["module"], "--no-table", "--screenshot", str(screenshot)])
    return {
        "name": case["name"],
        "module": case["module"],
        "returncode": snap.returncode or view.returncode,
        "stdout": (snap.stdout + view.stdout).strip(),
        "stderr": (snap.stderr + view.stderr).strip(),
        "snapshot": str(snapshot.relative_to(PROJECT_ROOT)),
        "screenshot": str(screenshot.relative_to(PROJECT_ROOT)),
    }


def main() -> int:
    DIST_DIR.mkdir(parents=True, exist_ok=True)
    results = [run_case(case) for case in CASES]
    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "cases": results,
    }
    RESULTS_FILE.write_text(json.dumps(payload, indent=2))
    failures = [case for case in results if case["returncode"] != 0]
    for case in failures:
        print(f"[FAIL] {case['name']} ({case['module']})", file=sys.stderr)
    print(f"Wrote results to {RESULTS_FILE}")
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
