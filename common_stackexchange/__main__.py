#!/usr/bin/env python3
"""Module entrypoint for `common_stackexchange`.

Usage (from the repo root):
  - `python3 -m common_stackexchange questions --sort votes`
"""

from __future__ import annotations

from .cli import _cli


if __name__ == "__main__":
    raise SystemExit(_cli())
