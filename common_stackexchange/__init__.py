# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Stack Exchange 2.1 API client.

Layout:
- `constants.py`  API root, sites, sort orders, path templates
- `params.py`     Params + URL building (pure)
- `envelope.py`   response envelope decoding (Wrapper, APIError)
- `types.py`      dataclass item types (Question, Answer, Comment, ShallowUser)
- `config.py`     token/key/site discovery (args > env > ~/.config/stackexchange.yml)
- `cli.py`        `python3 -m common_stackexchange ...`

Example:
    questions: List[Question] = []
    w = do(PATH_QUESTIONS, questions, Params(site=STACK_OVERFLOW, args=[join_ids([11227809])]), item_type=Question)
    if w.error:
        ...  # API-level error, e.g. w.error.name == "bad_parameter"

Paging is left to the caller: re-issue with `page + 1` while `w.has_more`.
`w.backoff` / `w.quota_remaining` are reported, never enforced.
"""

from __future__ import annotations

import contextlib
import logging
import urllib.parse
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Optional, Type

import requests

from .config import StackExchangeConfig, load_config
from .constants import (
    NAMED_PATHS,
    ORDER_ASC,
    ORDER_DESC,
    PATH_ALL_ANSWERS,
    PATH_ALL_QUESTIONS,
    PATH_ANSWER_COMMENTS,
    PATH_ANSWERS,
    PATH_QUESTION_ANSWERS,
    PATH_QUESTION_COMMENTS,
    PATH_QUESTIONS,
    ROOT,
    SORT_ACTIVITY,
    SORT_CREATION_DATE,
    SORT_HOT,
    SORT_MONTH,
    SORT_SCORE,
    SORT_WEEK,
    SORTS,
    STACK_OVERFLOW,
    VERSION,
)
from .envelope import APIError, Wrapper, parse_response
from .exceptions import (
    StackExchangeDecodeError,
    StackExchangeError,
    StackExchangeRequestError,
    StackExchangeResponseError,
)
from .params import Params, build_url, fill_placeholders, join_ids, query_values

_logger = logging.getLogger(__name__)

_CREDENTIAL_KEYS = ("access_token", "key")


def _redact_url(url: str) -> str:
    """Mask credential query values for log output."""
    parts = urllib.parse.urlsplit(url)
    if not parts.query:
        return url
    q = [
        (k, "***" if k in _CREDENTIAL_KEYS else v)
        for k, v in urllib.parse.parse_qsl(parts.query, keep_blank_values=True)
    ]
    return urllib.parse.urlunsplit(parts._replace(query=urllib.parse.urlencode(q)))


@dataclass(frozen=True)
class StackExchangeAPIClient:
    """Client identity for API requests.

    All fields are optional; an all-default client talks to ROOT through
    `requests.get` with no credentials. Instances are immutable, so one client
    can serve many concurrent requests.

    Attributes:
        session: Transport override; anything with a requests-compatible
                 `get(url, timeout=...)` (e.g. a configured `requests.Session`).
        root: API root override (default: constants.ROOT).
        access_token: OAuth 2.0 access token (obtained elsewhere).
        key: Application key registered on stackapps.com.
        verbose: Print each request URL to stdout before sending it.
        timeout: Passed through to the transport; None means no timeout.
    """

    session: Optional[Any] = None
    root: str = ""
    access_token: str = ""
    key: str = ""
    verbose: bool = False
    timeout: Optional[float] = None

    @classmethod
    def from_config(
        cls,
        *,
        config: Optional[StackExchangeConfig] = None,
        config_path: Optional[Path] = None,
        session: Optional[Any] = None,
        verbose: bool = False,
        timeout: Optional[float] = None,
    ) -> "StackExchangeAPIClient":
        """Build a client from explicit config, or discover one (see config.load_config)."""
        cfg = config if config is not None else load_config(path=config_path)
        return cls(
            session=session,
            root=cfg.root,
            access_token=cfg.access_token,
            key=cfg.key,
            verbose=verbose,
            timeout=timeout,
        )

    def has_credentials(self) -> bool:
        return bool(self.access_token or self.key)

    def build_url(self, path: str, params: Optional[Params] = None) -> str:
        return build_url(path, params, self)

    def do(
        self,
        path: str,
        items: Optional[List[Any]] = None,
        params: Optional[Params] = None,
        *,
        item_type: Optional[Type[Any]] = None,
    ) -> Wrapper:
        """Perform one API request and decode its envelope.

        Args:
            path: Path template (e.g. PATH_QUESTION_ANSWERS); `{...}` filled from params.args.
            items: Destination list, replaced in place with the response `items`.
            params: Query parameters; `site` is always sent.
            item_type: Optional dataclass for each element (see types.py).

        Returns:
            The envelope metadata. Check `wrapper.error` for API-level errors.

        Raises:
            StackExchangeRequestError: the GET failed; nothing is retried.
            StackExchangeDecodeError: the body could not be decoded into the destination.
        """
        url = build_url(path, params, self)
        if self.verbose:
            print(url, flush=True)
        _logger.debug("Stack Exchange GET %s", _redact_url(url))

        transport = self.session if self.session is not None else requests
        try:
            resp = transport.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise StackExchangeRequestError(url=url, message=f"Stack Exchange API request failed for {path}: {e}") from e

        with contextlib.closing(resp):
            try:
                body = resp.content
            except requests.exceptions.RequestException as e:
                raise StackExchangeRequestError(
                    url=url, message=f"Stack Exchange API response read failed for {path}: {e}"
                ) from e
            wrapper = parse_response(body, items, item_type)

        _logger.debug(
            "Stack Exchange %s: page=%d has_more=%s quota=%d/%d",
            path,
            wrapper.page,
            wrapper.has_more,
            wrapper.quota_remaining,
            wrapper.quota_max,
        )
        if wrapper.backoff:
            _logger.warning("Stack Exchange API asked to back off %ds before calling %s again", wrapper.backoff, path)
        if wrapper.error:
            _logger.debug(
                "Stack Exchange API error %d (%s): %s", wrapper.error.id, wrapper.error.name, wrapper.error.message
            )
        return wrapper


# Default identity: ROOT, requests.get, no credentials.
DEFAULT_CLIENT = StackExchangeAPIClient()


def do(
    path: str,
    items: Optional[List[Any]] = None,
    params: Optional[Params] = None,
    *,
    item_type: Optional[Type[Any]] = None,
    client: Optional[StackExchangeAPIClient] = None,
) -> Wrapper:
    """Perform an API request with `client`, or DEFAULT_CLIENT when None."""
    return (client if client is not None else DEFAULT_CLIENT).do(path, items, params, item_type=item_type)


__all__ = [
    "NAMED_PATHS",
    "ORDER_ASC",
    "ORDER_DESC",
    "PATH_ALL_ANSWERS",
    "PATH_ALL_QUESTIONS",
    "PATH_ANSWER_COMMENTS",
    "PATH_ANSWERS",
    "PATH_QUESTION_ANSWERS",
    "PATH_QUESTION_COMMENTS",
    "PATH_QUESTIONS",
    "ROOT",
    "SORT_ACTIVITY",
    "SORT_CREATION_DATE",
    "SORT_HOT",
    "SORT_MONTH",
    "SORT_SCORE",
    "SORT_WEEK",
    "SORTS",
    "STACK_OVERFLOW",
    "VERSION",
    "APIError",
    "DEFAULT_CLIENT",
    "Params",
    "StackExchangeAPIClient",
    "StackExchangeConfig",
    "StackExchangeDecodeError",
    "StackExchangeError",
    "StackExchangeRequestError",
    "StackExchangeResponseError",
    "Wrapper",
    "build_url",
    "do",
    "fill_placeholders",
    "join_ids",
    "load_config",
    "parse_response",
    "query_values",
]
