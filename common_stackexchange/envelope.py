# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Response envelope decoding.

Every Stack Exchange API response is the same JSON object shape:

    {
        "items": [ {...}, {...} ],
        "has_more": true,
        "page": 1,
        "page_size": 30,
        "quota_max": 300,
        "quota_remaining": 296,
        "backoff": 10,              # only when the server wants us to slow down
        "error_id": 400,            # only on errors
        "error_name": "bad_parameter",
        "error_message": "site is required",
        "total": 12,                # only with filters that include it
        "type": "question"          # only with filters that include it
    }

Decoding is done in two steps over one document read: the whole body is parsed,
the metadata goes into a `Wrapper`, then the raw `items` value is validated into
the caller's list with pydantic in strict mode (optionally converting each
element into a dataclass).
"""

from __future__ import annotations

import functools
import json
import typing
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple, Type, Union

from pydantic import TypeAdapter, ValidationError

from .exceptions import StackExchangeDecodeError, StackExchangeResponseError


@dataclass
class APIError:
    """Application-level error descriptor; all zero/empty on success."""

    id: int = 0
    name: str = ""
    message: str = ""

    def __bool__(self) -> bool:
        return bool(self.id or self.name or self.message)


@dataclass
class Wrapper:
    """Envelope metadata returned alongside the decoded items."""

    error: APIError = field(default_factory=APIError)

    page: int = 0
    page_size: int = 0
    has_more: bool = False

    backoff: int = 0
    quota_max: int = 0
    quota_remaining: int = 0

    total: int = 0
    type: str = ""

    def raise_for_error(self) -> None:
        """Raise StackExchangeResponseError if the API reported an error in this envelope."""
        if self.error:
            raise StackExchangeResponseError(self)


_INT = TypeAdapter(int)
_STR = TypeAdapter(str)
_BOOL = TypeAdapter(bool)

# JSON key -> (attribute on Wrapper or APIError, validator)
_ERROR_FIELDS: Tuple[Tuple[str, str, TypeAdapter], ...] = (
    ("error_id", "id", _INT),
    ("error_name", "name", _STR),
    ("error_message", "message", _STR),
)
_WRAPPER_FIELDS: Tuple[Tuple[str, str, TypeAdapter], ...] = (
    ("page", "page", _INT),
    ("page_size", "page_size", _INT),
    ("has_more", "has_more", _BOOL),
    ("backoff", "backoff", _INT),
    ("quota_max", "quota_max", _INT),
    ("quota_remaining", "quota_remaining", _INT),
    ("total", "total", _INT),
    ("type", "type", _STR),
)


@functools.lru_cache(maxsize=None)
def _items_adapter(item_type: Optional[Type[Any]]) -> TypeAdapter:
    return TypeAdapter(List[item_type] if item_type is not None else List[Any])


def _json_type_name(value: Any) -> str:
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _json_path(prefix: str, loc: Sequence[Union[int, str]]) -> str:
    """(1, 'owner', 'user_id') style pydantic locations -> $.items[1].owner.user_id."""
    out = prefix
    for part in loc:
        out += f"[{part}]" if isinstance(part, int) else f".{part}"
    return out


def _validation_message(e: ValidationError, prefix: str) -> str:
    first = e.errors()[0]
    return f"{first.get('msg', 'invalid value')} at {_json_path(prefix, first.get('loc', ()))}"


def _read_body(body: Union[bytes, bytearray, str, typing.IO[Any]]) -> str:
    raw = body if isinstance(body, (bytes, bytearray, str)) else body.read()
    if isinstance(raw, (bytes, bytearray)):
        raw = bytes(raw).decode("utf-8")
    return raw


def parse_response(
    body: Union[bytes, bytearray, str, typing.IO[Any]],
    items: Optional[List[Any]] = None,
    item_type: Optional[Type[Any]] = None,
) -> Wrapper:
    """Decode one response envelope.

    Args:
        body: Response body (bytes/str or a readable stream). Only the first JSON
              value is read; anything after it is ignored.
        items: Destination list; its contents are replaced by the decoded `items`.
               None means the caller does not want the items.
        item_type: Optional element type (usually a dataclass from `types.py`).
                   Without it, elements are kept as plain JSON values.

    Returns:
        The envelope metadata. An API-level error (error_id/error_name/...) is
        returned in `wrapper.error`, it is not raised here.

    Raises:
        StackExchangeDecodeError: malformed or too deeply nested JSON, a
            non-object document, or a value that does not fit its destination.
            `exc.wrapper` carries whatever was decoded; the error fields on it
            are safe to read.
    """
    wrapper = Wrapper()
    try:
        doc, _ = json.JSONDecoder().raw_decode(_read_body(body).lstrip())
    except ValueError as e:
        raise StackExchangeDecodeError(f"invalid JSON response: {e}", wrapper=wrapper) from e
    except RecursionError as e:
        raise StackExchangeDecodeError("invalid JSON response: nested too deeply", wrapper=wrapper) from e
    if not isinstance(doc, dict):
        raise StackExchangeDecodeError(
            f"cannot decode {_json_type_name(doc)} into response envelope", wrapper=wrapper
        )

    # Keep going past a bad field so the others still decode; report the first problem.
    first_error: Optional[str] = None
    for fields_, target in ((_ERROR_FIELDS, wrapper.error), (_WRAPPER_FIELDS, wrapper)):
        for key, attr, adapter in fields_:
            raw = doc.get(key)
            if raw is None:
                continue
            try:
                setattr(target, attr, adapter.validate_python(raw, strict=True))
            except ValidationError as e:
                first_error = first_error or _validation_message(e, f"$.{key}")

    raw_items = doc.get("items")
    if items is not None and raw_items is not None:
        adapter = _items_adapter(item_type)
        try:
            if item_type is None:
                decoded = adapter.validate_python(raw_items, strict=True)
            else:
                # Strict dataclass validation takes JSON input, not dicts.
                decoded = adapter.validate_json(json.dumps(raw_items), strict=True)
        except ValidationError as e:
            first_error = first_error or _validation_message(e, "$.items")
        except RecursionError:
            first_error = first_error or "items nested too deeply at $.items"
        else:
            items[:] = decoded

    if first_error is not None:
        raise StackExchangeDecodeError(first_error, wrapper=wrapper)
    return wrapper
