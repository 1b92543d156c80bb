"""
CLI wrapper for common_stackexchange.

Usage (from the repo root):
  python3 -m common_stackexchange questions --sort votes --pagesize 5
  python3 -m common_stackexchange question-answers --ids 11227809,927358
  python3 -m common_stackexchange /questions/{ids}/comments --ids 11227809 --json
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Sequence

import argparse
import dataclasses
import json
import logging

from . import Params, StackExchangeAPIClient, join_ids
from .config import load_config
from .constants import NAMED_PATHS, SORTS, STACK_OVERFLOW
from .exceptions import StackExchangeError

logger = logging.getLogger(__name__)


def _parse_ids(text: str) -> List[int]:
    out: List[int] = []
    for part in str(text or "").replace(";", ",").split(","):
        part = part.strip()
        if not part:
            continue
        try:
            out.append(int(part))
        except ValueError:
            raise argparse.ArgumentTypeError(f"not an integer id: {part!r}")
    return out


def _item_summary(item: Any) -> str:
    if not isinstance(item, dict):
        return json.dumps(item)
    # Answers also carry question_id; most specific first.
    for id_key in ("comment_id", "answer_id", "question_id"):
        if id_key in item:
            break
    else:
        id_key = ""
    ident = f"{id_key}={item.get(id_key)}" if id_key else ""
    score = f"score={item.get('score')}" if "score" in item else ""
    title = str(item.get("title") or "")
    return "  ".join(s for s in (ident, score, title) if s)


def _cli(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Query the Stack Exchange API and print the items plus paging/quota info.",
        epilog="Known paths:\n" + "\n".join(f"  {k:<18} {v}" for k, v in NAMED_PATHS.items()),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", help="Known path name (see below) or a literal template like /questions/{ids}")
    parser.add_argument("--site", default="", help=f"Site (default: config/env, else {STACK_OVERFLOW})")
    parser.add_argument("--sort", default="", help=f"Sort order ({', '.join(SORTS)})")
    parser.add_argument("--order", default="", help="Sort direction (asc/desc)")
    parser.add_argument("--page", type=int, default=0, help="Page number (1-based)")
    parser.add_argument("--pagesize", type=int, default=0, help="Items per page")
    parser.add_argument("--filter", default="", help="Filter token")
    parser.add_argument("--tagged", default="", help="Tags, ';'-separated")
    parser.add_argument("--ids", type=_parse_ids, default=None, help="IDs for {ids}, comma or ';' separated")
    parser.add_argument("--config", default=None, help="Config file (default: ~/.config/stackexchange.yml)")
    parser.add_argument("--timeout", type=float, default=30.0, help="Request timeout in seconds (default: 30)")
    parser.add_argument("--json", action="store_true", help="Print items as JSON instead of one line per item")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging on stderr (includes the request URL, credentials masked)")
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    cfg = load_config(site=args.site or None, path=Path(args.config).expanduser() if args.config else None)
    # stdout carries only items; the request URL goes to the DEBUG log on stderr.
    client = StackExchangeAPIClient.from_config(config=cfg, timeout=float(args.timeout))

    path = NAMED_PATHS.get(args.path, args.path)
    params = Params(
        site=cfg.site or STACK_OVERFLOW,
        sort=args.sort,
        order=args.order,
        page=int(args.page),
        page_size=int(args.pagesize),
        filter=args.filter,
        tagged=args.tagged,
        args=[join_ids(args.ids)] if args.ids else [],
    )

    items: List[Any] = []
    try:
        wrapper = client.do(path, items, params)
    except StackExchangeError as e:
        logger.error("ERROR: %s", e)
        return 2

    if wrapper.error:
        logger.error("API error %d (%s): %s", wrapper.error.id, wrapper.error.name, wrapper.error.message)
        return 1

    if args.json:
        print(json.dumps(items, indent=2))
    else:
        for item in items:
            print(_item_summary(item))
    summary = {k: v for k, v in dataclasses.asdict(wrapper).items() if k != "error"}
    logger.info("page=%(page)s page_size=%(page_size)s has_more=%(has_more)s quota=%(quota_remaining)s/%(quota_max)s", summary)
    if wrapper.backoff:
        logger.info("backoff=%ds", wrapper.backoff)
    return 0
