# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Stack Exchange API error types.

Kept in their own module so `envelope.py` and the client can both raise them
without importing each other.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .envelope import Wrapper


class StackExchangeError(Exception):
    pass


class StackExchangeRequestError(StackExchangeError):
    """The GET itself failed (DNS, connection, TLS, timeout...)."""

    def __init__(self, *, url: str, message: str):
        super().__init__(message)
        self.url = str(url or "")


class StackExchangeDecodeError(StackExchangeError):
    """The body was not a JSON object, or a value did not fit its destination.

    `wrapper` holds whatever envelope fields decoded before/around the failure.
    Only its error descriptor should be relied on.
    """

    def __init__(self, message: str, *, wrapper: Optional["Wrapper"] = None):
        super().__init__(message)
        self.wrapper = wrapper


class StackExchangeResponseError(StackExchangeError):
    """The API answered with an error envelope (error_id/error_name/error_message)."""

    def __init__(self, wrapper: "Wrapper"):
        err = wrapper.error
        super().__init__(f"Stack Exchange API error {err.id} ({err.name}): {err.message}")
        self.wrapper = wrapper
        self.error_id = int(err.id)
        self.error_name = str(err.name)
