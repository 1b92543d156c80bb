# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Request building for the Stack Exchange API.

Everything here is pure string formatting: no I/O, no clock, no randomness, so
the same inputs always produce the same URL.

Example:
    params = Params(site=STACK_OVERFLOW, sort=SORT_SCORE, args=[join_ids([1, 2, 3])])
    build_url(PATH_QUESTION_ANSWERS, params)
    # https://api.stackexchange.com/2.1/questions/1;2;3/answers?site=stackoverflow&sort=votes
"""

from __future__ import annotations

import urllib.parse
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional, Sequence

from .constants import ROOT

if TYPE_CHECKING:
    from . import StackExchangeAPIClient


@dataclass
class Params:
    """Common set of arguments sent with an API request.

    `args` substitute the `{...}` placeholders of the path, in order.
    """

    site: str = ""

    sort: str = ""
    order: str = ""
    page: int = 0
    page_size: int = 0

    filter: str = ""

    tagged: str = ""

    args: List[str] = field(default_factory=list)

    def values(self) -> Dict[str, str]:
        """Query parameters for this request; zero/empty fields are left out, `site` never is."""
        vals: Dict[str, str] = {"site": str(self.site or "")}
        if self.sort:
            vals["sort"] = str(self.sort)
        if self.order:
            vals["order"] = str(self.order)
        if self.page:
            vals["page"] = str(int(self.page))
        if self.page_size:
            vals["pagesize"] = str(int(self.page_size))
        if self.filter:
            vals["filter"] = str(self.filter)
        if self.tagged:
            vals["tagged"] = str(self.tagged)
        return vals


def query_values(params: Optional[Params], client: Optional["StackExchangeAPIClient"] = None) -> Dict[str, str]:
    """Params.values() plus the client's credentials (access_token, key) when configured."""
    vals = (params or Params()).values()
    if client is not None and client.access_token:
        vals["access_token"] = str(client.access_token)
    if client is not None and client.key:
        vals["key"] = str(client.key)
    return vals


def fill_placeholders(path: str, args: Sequence[str]) -> str:
    """Replace `{...}` spans in `path` with `args`, left to right.

    Extra args are ignored. When args run out, the remaining text (including any
    unfilled `{...}`) is copied unchanged. An unterminated `{` ends substitution.
    """
    if not path or not args:
        return path

    out: List[str] = []
    rest = path
    arg_idx = 0
    while arg_idx < len(args) and rest:
        i = rest.find("{")
        if i == -1:
            break
        out.append(rest[:i])
        rest = rest[i:]
        j = rest.find("}")
        if j == -1:
            break
        out.append(str(args[arg_idx]))
        rest = rest[j + 1:]
        arg_idx += 1
    out.append(rest)
    return "".join(out)


def join_ids(ids: Iterable[int]) -> str:
    """Build a semicolon-separated ID list (the `{ids}` placeholder format)."""
    return ";".join(str(int(i)) for i in ids)


def encode_query(vals: Dict[str, str]) -> str:
    """Form-encode with keys sorted, so output is stable regardless of insertion order."""
    return urllib.parse.urlencode(sorted(vals.items()))


def build_url(path: str, params: Optional[Params] = None, client: Optional["StackExchangeAPIClient"] = None) -> str:
    """Assemble `<root><filled path>?<sorted query>`.

    `client=None` means the defaults: ROOT and no credentials.
    """
    root = ROOT
    if client is not None and client.root:
        root = str(client.root)
    args = params.args if params is not None else []
    return root + fill_placeholders(path, args) + "?" + encode_query(query_values(params, client))
