"""Tests for groups.io data types."""

from typing import Any

import pytest

from src.groupsio.types import MessageRecord, PageResponse, SearchTarget, Session


class TestSearchTarget:
    def test_group_id_target(self) -> None:
        target = SearchTarget(query="oil", group_id=42)
        assert target.params(1) == {"q": "oil", "page": 1, "group_id": 42}
        assert target.group_label == "42"

    def test_group_name_target(self) -> None:
        target = SearchTarget(query="oil", group_name="sailboats")
        assert target.params(2) == {"q": "oil", "page": 2, "group_name": "sailboats"}
        assert target.group_label == "sailboats"

    def test_neither_group_raises(self) -> None:
        with pytest.raises(ValueError):
            SearchTarget(query="oil")

    def test_both_groups_raise(self) -> None:
        with pytest.raises(ValueError):
            SearchTarget(query="oil", group_id=1, group_name="sailboats")


class TestSession:
    def test_headers_carry_cookie(self) -> None:
        assert Session("a=1; b=2").headers() == {"Cookie": "a=1; b=2"}


class TestMessageRecord:
    def test_known_fields(self, sample_message: dict[str, Any]) -> None:
        record = MessageRecord.from_dict(sample_message)
        assert record.subject == "Westerbeke 30 raw water impeller"
        assert record.sender == "skipper@example.com"
        assert record.date == "2023-06-01T10:00:00Z"
        assert record.body.startswith("The impeller failed")
        assert record.raw["group_id"] == 36599

    def test_unknown_fields_preserved(self) -> None:
        record = MessageRecord.from_dict({"id": 9, "attachments": [1, 2]})
        assert record.raw == {"id": 9, "attachments": [1, 2]}

    def test_missing_fields_are_empty(self) -> None:
        record = MessageRecord.from_dict({})
        assert (record.subject, record.sender, record.date, record.body) == ("", "", "", "")

    def test_none_body_is_empty(self) -> None:
        assert MessageRecord.from_dict({"body": None}).body == ""

    def test_from_dict_copies_input(self) -> None:
        data = {"body": "x"}
        record = MessageRecord.from_dict(data)
        data["body"] = "changed"
        assert record.body == "x"


class TestPageResponse:
    def test_missing_total_is_zero(self) -> None:
        assert PageResponse.from_dict({"data": []}).total_count == 0

    def test_non_dict_items_skipped(self) -> None:
        page = PageResponse.from_dict({"data": [{"body": "a"}, "junk", None], "total_count": 3})
        assert len(page.records) == 1
        assert page.total_count == 3

    def test_string_total_is_parsed(self) -> None:
        assert PageResponse.from_dict({"data": [], "total_count": "25"}).total_count == 25
