# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Item types for the paths in `constants.py`.

Pass one of these as `item_type` to decode `items` into dataclasses instead of
plain dicts. Only the fields returned by the default filter are declared; any
other key in the JSON is ignored. Dates are Unix epoch seconds, as the API
sends them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional


def _epoch_to_datetime(ts: int) -> Optional[datetime]:
    if not ts:
        return None
    return datetime.fromtimestamp(int(ts), tz=timezone.utc)


@dataclass
class ShallowUser:
    user_id: int = 0
    display_name: str = ""
    reputation: int = 0
    user_type: str = ""
    accept_rate: int = 0
    profile_image: str = ""
    link: str = ""


@dataclass
class Question:
    question_id: int = 0
    title: str = ""
    link: str = ""
    tags: List[str] = field(default_factory=list)
    owner: Optional[ShallowUser] = None

    is_answered: bool = False
    accepted_answer_id: int = 0
    answer_count: int = 0
    view_count: int = 0
    score: int = 0

    creation_date: int = 0
    last_activity_date: int = 0
    last_edit_date: int = 0
    closed_date: int = 0
    closed_reason: str = ""

    body: str = ""

    @property
    def created_at(self) -> Optional[datetime]:
        return _epoch_to_datetime(self.creation_date)

    @property
    def last_activity_at(self) -> Optional[datetime]:
        return _epoch_to_datetime(self.last_activity_date)


@dataclass
class Answer:
    answer_id: int = 0
    question_id: int = 0
    owner: Optional[ShallowUser] = None

    is_accepted: bool = False
    score: int = 0

    creation_date: int = 0
    last_activity_date: int = 0
    last_edit_date: int = 0

    body: str = ""

    @property
    def created_at(self) -> Optional[datetime]:
        return _epoch_to_datetime(self.creation_date)


@dataclass
class Comment:
    comment_id: int = 0
    post_id: int = 0
    owner: Optional[ShallowUser] = None
    reply_to_user: Optional[ShallowUser] = None

    edited: bool = False
    score: int = 0
    creation_date: int = 0

    body: str = ""

    @property
    def created_at(self) -> Optional[datetime]:
        return _epoch_to_datetime(self.creation_date)
