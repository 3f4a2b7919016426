# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for Cursor validation."""

from __future__ import annotations

import pytest

from pycriteria.criteria.cursor import Cursor
from pycriteria.criteria.filter import UNSET
from pycriteria.criteria.operators import FilterOperator
from pycriteria.criteria.order import OrderDirection
from pycriteria.kernel.exceptions import CursorError


class TestCursorValid:
    def test_single_field(self) -> None:
        cursor = Cursor([{"field": "created_at", "value": "2024-01-01"}], ">", "ASC", 7)
        assert cursor.fields == ("created_at",)
        assert cursor.operator is FilterOperator.GREATER_THAN
        assert cursor.order is OrderDirection.ASC
        assert cursor.sequence_id == 7

    def test_two_fields_build_filters_with_operator(self) -> None:
        cursor = Cursor(
            [{"field": "created_at", "value": "t0"}, {"field": "uuid", "value": "i0"}],
            FilterOperator.LESS_THAN,
            OrderDirection.DESC,
            1,
        )
        assert [(f.field, f.operator, f.value) for f in cursor.filters] == [
            ("created_at", FilterOperator.LESS_THAN, "t0"),
            ("uuid", FilterOperator.LESS_THAN, "i0"),
        ]

    def test_none_value_is_accepted(self) -> None:
        cursor = Cursor([{"field": "created_at", "value": None}], ">", "ASC", 1)
        assert cursor.filters[0].value is None

    def test_direction_is_case_insensitive(self) -> None:
        assert Cursor([{"field": "a", "value": 1}], "<", "desc", 1).order is OrderDirection.DESC


class TestCursorInvalid:
    @pytest.mark.parametrize("count", [0, 3])
    def test_wrong_field_count(self, count: int) -> None:
        fields = [{"field": f"f{i}", "value": i} for i in range(count)]
        with pytest.raises(CursorError):
            Cursor(fields, ">", "ASC", 1)

    def test_missing_value(self) -> None:
        with pytest.raises(CursorError):
            Cursor([{"field": "created_at"}], ">", "ASC", 1)

    def test_unset_value(self) -> None:
        with pytest.raises(CursorError):
            Cursor([{"field": "created_at", "value": UNSET}], ">", "ASC", 1)

    def test_missing_field_name(self) -> None:
        with pytest.raises(CursorError):
            Cursor([{"value": 1}], ">", "ASC", 1)

    def test_duplicate_fields(self) -> None:
        with pytest.raises(CursorError) as exc_info:
            Cursor([{"field": "uuid", "value": 1}, {"field": "uuid", "value": 2}], ">", "ASC", 1)
        assert exc_info.value.code == "CURSOR"

    @pytest.mark.parametrize("operator", ["=", ">=", "LIKE", "nope"])
    def test_operator_must_be_strict_comparison(self, operator: str) -> None:
        with pytest.raises(CursorError):
            Cursor([{"field": "uuid", "value": 1}], operator, "ASC", 1)

    def test_invalid_direction(self) -> None:
        with pytest.raises(CursorError):
            Cursor([{"field": "uuid", "value": 1}], ">", "UP", 1)

    def test_fields_must_be_a_list(self) -> None:
        with pytest.raises(CursorError):
            Cursor({"field": "uuid", "value": 1}, ">", "ASC", 1)  # type: ignore[arg-type]

    @pytest.mark.parametrize("operator", [[">"], None, 1])
    def test_operator_must_be_a_string(self, operator: object) -> None:
        with pytest.raises(CursorError) as exc_info:
            Cursor([{"field": "uuid", "value": 1}], operator, "ASC", 1)  # type: ignore[arg-type]
        assert exc_info.value.code == "CURSOR"

    @pytest.mark.parametrize("value", [[1, 2], {"a": 1}, (1,)])
    def test_value_must_be_scalar(self, value: object) -> None:
        with pytest.raises(CursorError) as exc_info:
            Cursor([{"field": "created_at", "value": value}], ">", "ASC", 1)
        assert exc_info.value.context["field"] == "created_at"

    def test_direction_must_be_a_string(self) -> None:
        with pytest.raises(CursorError):
            Cursor([{"field": "uuid", "value": 1}], ">", None, 1)  # type: ignore[arg-type]


class TestCursorValidate:
    def test_returns_names_operator_and_direction(self) -> None:
        names, operator, direction = Cursor.validate(
            [{"field": "created_at", "value": "t0"}, {"field": "uuid", "value": "i0"}], "<", "desc"
        )
        assert names == ("created_at", "uuid")
        assert operator is FilterOperator.LESS_THAN
        assert direction is OrderDirection.DESC

    def test_raises_cursor_error(self) -> None:
        with pytest.raises(CursorError):
            Cursor.validate([{"field": "uuid", "value": [1]}], ">", "ASC")
