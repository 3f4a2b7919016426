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
"""Filter: one atomic condition (field, operator, value).

Each operator accepts one value shape, checked when the filter is built:

* comparison operators take a scalar (``None`` included);
* pattern operators take a string;
* membership operators take a list of non-null scalars;
* range operators take a ``[min, max]`` pair;
* null checks take no value;
* array operators take a list of scalars, or a single-key mapping
  ``{path: [...]}`` scoping the check to a nested path;
* JSON operators take a mapping of JSON-shaped values.
"""

from __future__ import annotations

import datetime
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Final

from pycriteria.criteria.operators import FilterOperator
from pycriteria.kernel.exceptions import FilterValueError

if TYPE_CHECKING:
    from pycriteria.criteria.ports.translator import CriteriaVisitor


class _Unset:
    """Marker for a filter value that was never given."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = _Unset()

_SCALAR_TYPES = (str, int, float, Decimal, bool, datetime.date)


def is_scalar(value: Any) -> bool:
    """Whether *value* is a primitive scalar (``None`` included)."""
    return value is None or isinstance(value, _SCALAR_TYPES)


def _is_scalar_list(value: Any, allow_none: bool = False) -> bool:
    if not isinstance(value, (list, tuple)):
        return False
    return all(is_scalar(v) and (allow_none or v is not None) for v in value)


def _is_json_value(value: Any) -> bool:
    if is_scalar(value):
        return True
    if isinstance(value, (list, tuple)):
        return all(_is_json_value(v) for v in value)
    if isinstance(value, Mapping):
        return all(isinstance(k, str) and _is_json_value(v) for k, v in value.items())
    return False


def _single_path(value: Any) -> Any:
    """Return the inner value of a ``{path: value}`` mapping, or UNSET."""
    if isinstance(value, Mapping) and len(value) == 1:
        key, inner = next(iter(value.items()))
        if isinstance(key, str):
            return inner
    return UNSET


# ---------------------------------------------------------------------------
# Value shape checks
# ---------------------------------------------------------------------------


def _check_scalar(value: Any) -> bool:
    return value is not UNSET and is_scalar(value)


def _check_string(value: Any) -> bool:
    return isinstance(value, str)


def _check_list(value: Any) -> bool:
    return _is_scalar_list(value)


def _check_range(value: Any) -> bool:
    return _is_scalar_list(value) and len(value) == 2


def _check_absent(value: Any) -> bool:
    return value is UNSET or value is None


def _check_array_element(value: Any) -> bool:
    if _check_scalar(value):
        return True
    inner = _single_path(value)
    return inner is not UNSET and is_scalar(inner)


def _check_array_list(value: Any) -> bool:
    if _is_scalar_list(value):
        return True
    return _is_scalar_list(_single_path(value))


def _check_json_path(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and len(value) > 0
        and all(isinstance(k, str) and is_scalar(v) for k, v in value.items())
    )


def _check_json(value: Any) -> bool:
    return isinstance(value, Mapping) and len(value) > 0 and _is_json_value(value)


_Shape = tuple[Callable[[Any], bool], str]

_SCALAR: _Shape = (_check_scalar, "a primitive scalar (string, number, boolean, date or None)")
_STRING: _Shape = (_check_string, "a string")
_LIST: _Shape = (_check_list, "a list of non-null scalars")
_RANGE: _Shape = (_check_range, "a [min, max] pair of non-null scalars")
_ABSENT: _Shape = (_check_absent, "absent")
_ARRAY_ELEMENT: _Shape = (_check_array_element, "a scalar or a single-key mapping {path: scalar}")
_ARRAY_LIST: _Shape = (_check_array_list, "a list of scalars or a single-key mapping {path: [scalars]}")
_JSON_PATH: _Shape = (_check_json_path, "a mapping of path to scalar")
_JSON: _Shape = (_check_json, "a mapping of JSON-shaped values")

_O = FilterOperator

_VALUE_SHAPES: dict[FilterOperator, _Shape] = {
    _O.EQUALS: _SCALAR,
    _O.NOT_EQUALS: _SCALAR,
    _O.GREATER_THAN: _SCALAR,
    _O.GREATER_THAN_OR_EQUALS: _SCALAR,
    _O.LESS_THAN: _SCALAR,
    _O.LESS_THAN_OR_EQUALS: _SCALAR,
    _O.LIKE: _STRING,
    _O.NOT_LIKE: _STRING,
    _O.ILIKE: _STRING,
    _O.NOT_ILIKE: _STRING,
    _O.CONTAINS: _STRING,
    _O.NOT_CONTAINS: _STRING,
    _O.STARTS_WITH: _STRING,
    _O.ENDS_WITH: _STRING,
    _O.MATCHES_REGEX: _STRING,
    _O.SET_CONTAINS: _STRING,
    _O.SET_NOT_CONTAINS: _STRING,
    _O.IN: _LIST,
    _O.NOT_IN: _LIST,
    _O.SET_CONTAINS_ANY: _LIST,
    _O.SET_NOT_CONTAINS_ANY: _LIST,
    _O.SET_CONTAINS_ALL: _LIST,
    _O.SET_NOT_CONTAINS_ALL: _LIST,
    _O.BETWEEN: _RANGE,
    _O.NOT_BETWEEN: _RANGE,
    _O.IS_NULL: _ABSENT,
    _O.IS_NOT_NULL: _ABSENT,
    _O.ARRAY_CONTAINS_ELEMENT: _ARRAY_ELEMENT,
    _O.ARRAY_NOT_CONTAINS_ELEMENT: _ARRAY_ELEMENT,
    _O.ARRAY_CONTAINS_ANY_ELEMENT: _ARRAY_LIST,
    _O.ARRAY_NOT_CONTAINS_ANY_ELEMENT: _ARRAY_LIST,
    _O.ARRAY_CONTAINS_ALL_ELEMENTS: _ARRAY_LIST,
    _O.ARRAY_NOT_CONTAINS_ALL_ELEMENTS: _ARRAY_LIST,
    _O.ARRAY_EQUALS: _ARRAY_LIST,
    _O.ARRAY_NOT_EQUALS: _ARRAY_LIST,
    _O.ARRAY_EQUALS_STRICT: _ARRAY_LIST,
    _O.ARRAY_NOT_EQUALS_STRICT: _ARRAY_LIST,
    _O.JSON_PATH_VALUE_EQUALS: _JSON_PATH,
    _O.JSON_PATH_VALUE_NOT_EQUALS: _JSON_PATH,
    _O.JSON_CONTAINS: _JSON,
    _O.JSON_NOT_CONTAINS: _JSON,
    _O.JSON_CONTAINS_ANY: _JSON,
    _O.JSON_NOT_CONTAINS_ANY: _JSON,
    _O.JSON_CONTAINS_ALL: _JSON,
    _O.JSON_NOT_CONTAINS_ALL: _JSON,
}


def coerce_operator(operator: FilterOperator | str) -> FilterOperator:
    """Turn an operator string into a :class:`FilterOperator`."""
    try:
        return FilterOperator(operator)
    except ValueError:
        raise FilterValueError(operator, "one of the known filter operators") from None


# ---------------------------------------------------------------------------
# Filter
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Filter:
    """A single condition on one field of a criteria node.

    The field is checked against the owning schema by the node, not here;
    the filter itself only checks that *value* fits *operator*.
    """

    field: str
    operator: FilterOperator
    value: Any = UNSET

    def __post_init__(self) -> None:
        operator = coerce_operator(self.operator)
        object.__setattr__(self, "operator", operator)
        check, expected = _VALUE_SHAPES[operator]
        if not check(self.value):
            raise FilterValueError(operator, expected)

    def to_primitive(self) -> dict[str, Any]:
        """Plain-dict form: ``{"field", "operator", "value"}``."""
        return {"field": self.field, "operator": str(self.operator), "value": self.value}

    @classmethod
    def from_primitive(cls, data: Mapping[str, Any]) -> Filter:
        return cls(data["field"], data["operator"], data.get("value", UNSET))

    def accept(self, visitor: CriteriaVisitor[Any], current_alias: str, context: Any) -> Any:
        return visitor.visit_filter(self, current_alias, context)
