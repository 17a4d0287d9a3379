from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def run_demo(*args: str) -> subprocess.CompletedProcess:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(p for p in (str(ROOT / "src"), env.get("PYTHONPATH")) if p)
    cmd = [sys.executable, str(ROOT / "scripts" / "demo.py"), *args]
    return subprocess.run(cmd, check=False, capture_output=True, text=True, env=env)


def test_demo_scenarios_offline() -> None:
    result = run_demo()
    assert result.returncode == 0, result.stderr
    assert "S1 quote: 10 XRP -> 4.000000 RLUSD" in result.stdout
    assert '"TransactionType": "Payment"' in result.stdout
    assert '"TransactionType": "OfferCreate"' in result.stdout
    assert '"value": "12.3456789"' in result.stdout


def test_demo_single_quote() -> None:
    result = run_demo("--amount", "10")
    assert result.returncode == 0, result.stderr
    assert result.stdout.strip() == "4.000000"

    result = run_demo("--amount", "10", "--revert")
    assert result.stdout.strip() == "25.000000"


def test_demo_no_quote_exit_code() -> None:
    result = run_demo("--amount", "0")
    assert result.returncode == 1
    assert "(no quote)" in result.stdout
