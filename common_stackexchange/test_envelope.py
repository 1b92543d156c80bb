"""
Pytest tests for common_stackexchange/envelope.py (response decoding).

Run from the repo root:
    pytest common_stackexchange/test_envelope.py -v
"""

import io
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import pytest

# Set up path for imports
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

from common_stackexchange.envelope import APIError, Wrapper, parse_response
from common_stackexchange.exceptions import StackExchangeDecodeError, StackExchangeResponseError
from common_stackexchange.types import Answer, Question, ShallowUser


@dataclass
class _IDOnly:
    id: int = 0


# Trimmed from a real /questions response.
QUESTIONS_BODY = b"""{
  "items": [
    {
      "tags": ["python", "json"],
      "owner": {"reputation": 1234, "user_id": 99, "user_type": "registered", "display_name": "someone"},
      "is_answered": true,
      "view_count": 4521,
      "accepted_answer_id": 11227902,
      "answer_count": 3,
      "score": 25,
      "last_activity_date": 1700000000,
      "creation_date": 1340900000,
      "question_id": 11227809,
      "link": "https://stackoverflow.com/questions/11227809/example",
      "title": "Example question"
    }
  ],
  "has_more": true,
  "page": 1,
  "page_size": 30,
  "quota_max": 300,
  "quota_remaining": 297
}"""


# ============================================================================
# parse_response(): happy paths
# ============================================================================

def test_parse_single_field_struct():
    items: List[_IDOnly] = []
    w = parse_response(b'{"items":[{"id":1}],"page":1,"has_more":false}', items, _IDOnly)
    assert items == [_IDOnly(id=1)]
    assert w.page == 1
    assert w.has_more is False
    assert not w.error


def test_parse_questions_into_dataclasses():
    items: List[Question] = []
    w = parse_response(QUESTIONS_BODY, items, Question)

    assert len(items) == 1
    q = items[0]
    assert q.question_id == 11227809
    assert q.tags == ["python", "json"]
    assert q.is_answered is True
    assert isinstance(q.owner, ShallowUser)
    assert q.owner.display_name == "someone"
    assert q.owner.accept_rate == 0
    assert q.created_at is not None and q.created_at.year == 2012
    assert q.last_edit_date == 0

    assert w == Wrapper(page=1, page_size=30, has_more=True, quota_max=300, quota_remaining=297)


def test_parse_plain_dicts_without_item_type():
    items: List[Dict[str, Any]] = []
    parse_response(QUESTIONS_BODY, items)
    assert items[0]["question_id"] == 11227809
    assert items[0]["owner"]["user_id"] == 99


def test_parse_replaces_destination_contents():
    items: List[Any] = ["stale"]
    parse_response(b'{"items":[1,2]}', items)
    assert items == [1, 2]


def test_parse_none_destination_ignores_items():
    w = parse_response(b'{"items":[{"id":"not an int"}],"quota_remaining":5}', None, _IDOnly)
    assert w.quota_remaining == 5


def test_parse_missing_items_leaves_destination():
    items: List[Any] = ["kept"]
    w = parse_response(b'{"quota_max":300}', items)
    assert items == ["kept"]
    assert w.quota_max == 300


def test_parse_all_envelope_fields():
    body = (
        b'{"items":[],"error_id":0,"page":4,"page_size":100,"has_more":true,"backoff":10,'
        b'"quota_max":10000,"quota_remaining":9876,"total":1234,"type":"answer","unknown_field":[1,2]}'
    )
    w = parse_response(body, [])
    assert w == Wrapper(
        page=4,
        page_size=100,
        has_more=True,
        backoff=10,
        quota_max=10000,
        quota_remaining=9876,
        total=1234,
        type="answer",
    )


def test_parse_accepts_stream_and_str():
    items: List[_IDOnly] = []
    w = parse_response(io.BytesIO(b'{"items":[{"id":7}],"page":2}'), items, _IDOnly)
    assert items == [_IDOnly(id=7)] and w.page == 2
    w = parse_response('{"page":3}')
    assert w.page == 3


# ============================================================================
# Application-level API errors
# ============================================================================

def test_api_error_is_not_a_decode_error():
    body = b'{"error_id":400,"error_name":"bad_parameter","error_message":"x"}'
    w = parse_response(body, [])
    assert w.error == APIError(id=400, name="bad_parameter", message="x")
    assert bool(w.error) is True


def test_raise_for_error():
    w = parse_response(b'{"error_id":502,"error_name":"throttle_violation","error_message":"too many requests"}')
    with pytest.raises(StackExchangeResponseError) as ei:
        w.raise_for_error()
    assert ei.value.error_id == 502
    assert ei.value.error_name == "throttle_violation"
    assert ei.value.wrapper is w

    parse_response(b'{"items":[]}').raise_for_error()


def test_api_error_falsy_on_success():
    assert not APIError()
    assert APIError(name="x")


# ============================================================================
# Decode errors
# ============================================================================

@pytest.mark.parametrize(
    "body",
    [
        b'{"items":[{"id":1}],"page":1',
        b"",
        b"<html>502 Bad Gateway</html>",
    ],
)
def test_malformed_json_raises(body):
    with pytest.raises(StackExchangeDecodeError) as ei:
        parse_response(body, [], _IDOnly)
    assert isinstance(ei.value.wrapper, Wrapper)


def test_non_object_document_raises():
    with pytest.raises(StackExchangeDecodeError, match="array"):
        parse_response(b"[1,2,3]", [])


def test_item_type_mismatch_raises_and_keeps_metadata():
    items: List[_IDOnly] = []
    body = b'{"items":[{"id":1},{"id":"two"}],"page":2,"error_id":0,"quota_remaining":17}'
    with pytest.raises(StackExchangeDecodeError, match=r"\$\.items\[1\]\.id") as ei:
        parse_response(body, items, _IDOnly)
    assert ei.value.wrapper.page == 2
    assert ei.value.wrapper.quota_remaining == 17
    assert not ei.value.wrapper.error
    assert items == []


def test_items_not_an_array_raises():
    with pytest.raises(StackExchangeDecodeError):
        parse_response(b'{"items":{"id":1}}', [], _IDOnly)


def test_envelope_field_mismatch_other_fields_still_decoded():
    body = b'{"page":"one","has_more":true,"error_id":400,"error_name":"bad_parameter","error_message":"m"}'
    with pytest.raises(StackExchangeDecodeError, match=r"\$\.page") as ei:
        parse_response(body)
    w = ei.value.wrapper
    assert w.page == 0
    assert w.has_more is True
    assert w.error == APIError(id=400, name="bad_parameter", message="m")


def test_nested_array_too_deep_raises_decode_error():
    body = b'{"items":' + b"[" * 100000 + b"]" * 100000 + b"}"
    with pytest.raises(StackExchangeDecodeError) as ei:
        parse_response(body, [])
    assert isinstance(ei.value.wrapper, Wrapper)


def test_nested_object_too_deep_with_item_type_raises_decode_error():
    body = b'{"error_id":400,"items":[' + b'{"a":' * 100000 + b"1" + b"}" * 100000 + b"]}"
    with pytest.raises(StackExchangeDecodeError):
        parse_response(body, [], _IDOnly)


def test_trailing_data_after_envelope_ignored():
    items: List[_IDOnly] = []
    w = parse_response(b'  {"items":[{"id":3}],"page":5}\n{"second":"document"}', items, _IDOnly)
    assert items == [_IDOnly(id=3)]
    assert w.page == 5


# ============================================================================
# Item types written with PEP 604 unions and builtin generics
# ============================================================================

@dataclass
class _OwnedScore:
    owner: "ShallowUser | None" = None
    score: "int | None" = None


@dataclass
class _Tagged:
    tag_ids: list[int] | None = None
    counts: dict[str, int] | None = None


def test_pep604_item_type_decodes_nested_dataclass():
    items: List[_OwnedScore] = []
    parse_response(b'{"items":[{"owner":{"user_id":5},"score":3},{"owner":null}]}', items, _OwnedScore)
    assert isinstance(items[0].owner, ShallowUser)
    assert items[0].owner.user_id == 5
    assert items[0].score == 3
    assert items[1] == _OwnedScore()


def test_pep604_item_type_rejects_wrong_scalar():
    items: List[_OwnedScore] = []
    with pytest.raises(StackExchangeDecodeError, match="score"):
        parse_response(b'{"items":[{"owner":{"user_id":5},"score":"high"}]}', items, _OwnedScore)
    assert items == []


def test_pep604_item_type_rejects_wrong_nested_field():
    with pytest.raises(StackExchangeDecodeError, match="user_id"):
        parse_response(b'{"items":[{"owner":{"user_id":"5"}}]}', [], _OwnedScore)


def test_builtin_generic_item_type():
    items: List[_Tagged] = []
    parse_response(b'{"items":[{"tag_ids":[1,2],"counts":{"python":7}}]}', items, _Tagged)
    assert items == [_Tagged(tag_ids=[1, 2], counts={"python": 7})]

    with pytest.raises(StackExchangeDecodeError, match=r"\$\.items\[0\]\.tag_ids\[1\]"):
        parse_response(b'{"items":[{"tag_ids":[1,"2"]}]}', [], _Tagged)


# ============================================================================
# Strict scalar rules
# ============================================================================

@pytest.mark.parametrize(
    "body, match",
    [
        (b'{"page":true}', r"\$\.page"),
        (b'{"page":1.5}', r"\$\.page"),
        (b'{"has_more":1}', r"\$\.has_more"),
        (b'{"type":5}', r"\$\.type"),
        (b'{"error_id":"400"}', r"\$\.error_id"),
    ],
)
def test_envelope_scalars_are_strict(body, match):
    with pytest.raises(StackExchangeDecodeError, match=match):
        parse_response(body)


def test_item_fields_strict_and_unknown_keys_ignored():
    items: List[Answer] = []
    parse_response(
        b'{"items":[{"answer_id":5,"owner":null,"is_accepted":true,"body_markdown":"ignored"}]}', items, Answer
    )
    assert items == [Answer(answer_id=5, is_accepted=True)]

    with pytest.raises(StackExchangeDecodeError, match=r"\$\.items\[0\]\.is_accepted"):
        parse_response(b'{"items":[{"answer_id":5,"is_accepted":1}]}', [], Answer)
    with pytest.raises(StackExchangeDecodeError, match=r"\$\.items\[0\]\.score"):
        parse_response(b'{"items":[{"answer_id":5,"score":true}]}', [], Answer)
