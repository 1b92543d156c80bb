# SPDX-FileCopyrightText: Copyright (c) 2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
"""Stack Exchange API constants: root, sites, sort orders and path templates.

Paths and sort values are part of the remote API contract; do not edit them.
"""

from __future__ import annotations

from typing import Dict

# API version identifier (embedded in ROOT).
VERSION = "2.1"

# Default API root. Paths are appended verbatim (they start with "/").
ROOT = "https://api.stackexchange.com/" + VERSION

# Well-known sites
STACK_OVERFLOW = "stackoverflow"

# Sort orders (sent verbatim as `sort=`)
SORT_ACTIVITY = "activity"
SORT_CREATION_DATE = "creation"
SORT_HOT = "hot"
SORT_WEEK = "week"
SORT_MONTH = "month"
SORT_SCORE = "votes"

# Sort directions (sent verbatim as `order=`)
ORDER_DESC = "desc"
ORDER_ASC = "asc"

# API paths; `{ids}` is filled from Params.args (see params.join_ids)
PATH_ALL_ANSWERS = "/answers"
PATH_ANSWERS = "/answers/{ids}"
PATH_ANSWER_COMMENTS = "/answers/{ids}/comments"

PATH_ALL_QUESTIONS = "/questions"
PATH_QUESTIONS = "/questions/{ids}"
PATH_QUESTION_ANSWERS = "/questions/{ids}/answers"
PATH_QUESTION_COMMENTS = "/questions/{ids}/comments"

# Short names for the CLI.
NAMED_PATHS: Dict[str, str] = {
    "answers": PATH_ALL_ANSWERS,
    "answers-by-id": PATH_ANSWERS,
    "answer-comments": PATH_ANSWER_COMMENTS,
    "questions": PATH_ALL_QUESTIONS,
    "questions-by-id": PATH_QUESTIONS,
    "question-answers": PATH_QUESTION_ANSWERS,
    "question-comments": PATH_QUESTION_COMMENTS,
}

SORTS = (SORT_ACTIVITY, SORT_CREATION_DATE, SORT_HOT, SORT_WEEK, SORT_MONTH, SORT_SCORE)
