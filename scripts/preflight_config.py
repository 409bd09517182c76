#!/usr/bin/env python3
# -*- coding: utf-8 -*-

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

REPO_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from coursewatch.config import CourseWatchConfig
from coursewatch.preflight import run_preflight


def _fmt_issue(i) -> str:
    kp = i.key_path or "-"
    return f"{i.level} {i.code} [{kp}] {i.message}"


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Static config preflight (no network access).")
    parser.add_argument("-c", "--config", required=True, help="Path to config.ini to validate.")
    parser.add_argument("--strict", action="store_true", help="Treat WARN as failure (exit 1).")
    args = parser.parse_args(argv)

    cfg = Path(args.config).expanduser().resolve()
    if not cfg.is_file():
        print("[ERROR] config not found:", cfg)
        return 2

    try:
        config = CourseWatchConfig(str(cfg))
    except Exception as e:
        print("[ERROR] Failed to load config:", e)
        return 2

    issues = run_preflight(config)
    errors = [i for i in issues if i.level == "ERROR"]
    warns = [i for i in issues if i.level == "WARN"]

    print("=== coursewatch preflight ===")
    print("config:", str(cfg))
    print("captcha.provider:", config.captcha_provider or "(empty)")
    print("strict:", "true" if args.strict else "false")
    print("")

    print("ERRORS (%d):" % len(errors))
    for i in errors:
        print(" -", _fmt_issue(i))
    print("WARNINGS (%d):" % len(warns))
    for i in warns:
        print(" -", _fmt_issue(i))

    if errors:
        return 2
    if warns and args.strict:
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
