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
"""Filter and logical operators understood by the criteria engine."""

from __future__ import annotations

from enum import StrEnum


class FilterOperator(StrEnum):
    """Operators a :class:`~pycriteria.criteria.filter.Filter` may apply to a field."""

    # Equality / comparison
    EQUALS = "="
    NOT_EQUALS = "!="
    GREATER_THAN = ">"
    GREATER_THAN_OR_EQUALS = ">="
    LESS_THAN = "<"
    LESS_THAN_OR_EQUALS = "<="

    # Pattern matching on strings
    LIKE = "LIKE"
    NOT_LIKE = "NOT LIKE"
    ILIKE = "ILIKE"
    NOT_ILIKE = "NOT_ILIKE"
    CONTAINS = "CONTAINS"
    NOT_CONTAINS = "NOT_CONTAINS"
    STARTS_WITH = "STARTS_WITH"
    ENDS_WITH = "ENDS_WITH"
    MATCHES_REGEX = "MATCHES_REGEX"

    # Membership
    IN = "IN"
    NOT_IN = "NOT IN"

    # Null checks
    IS_NULL = "IS_NULL"
    IS_NOT_NULL = "IS_NOT_NULL"

    # Ranges (inclusive, [min, max])
    BETWEEN = "BETWEEN"
    NOT_BETWEEN = "NOT_BETWEEN"

    # Structured documents, value is {path: json}
    JSON_PATH_VALUE_EQUALS = "JSON_PATH_VALUE_EQUALS"
    JSON_PATH_VALUE_NOT_EQUALS = "JSON_PATH_VALUE_NOT_EQUALS"
    JSON_CONTAINS = "JSON_CONTAINS"
    JSON_NOT_CONTAINS = "JSON_NOT_CONTAINS"
    JSON_CONTAINS_ANY = "JSON_CONTAINS_ANY"
    JSON_NOT_CONTAINS_ANY = "JSON_NOT_CONTAINS_ANY"
    JSON_CONTAINS_ALL = "JSON_CONTAINS_ALL"
    JSON_NOT_CONTAINS_ALL = "JSON_NOT_CONTAINS_ALL"

    # Array columns, value may be scoped to a nested path with {path: value}
    ARRAY_CONTAINS_ELEMENT = "ARRAY_CONTAINS_ELEMENT"
    ARRAY_NOT_CONTAINS_ELEMENT = "ARRAY_NOT_CONTAINS_ELEMENT"
    ARRAY_CONTAINS_ANY_ELEMENT = "ARRAY_CONTAINS_ANY_ELEMENT"
    ARRAY_NOT_CONTAINS_ANY_ELEMENT = "ARRAY_NOT_CONTAINS_ANY_ELEMENT"
    ARRAY_CONTAINS_ALL_ELEMENTS = "ARRAY_CONTAINS_ALL_ELEMENTS"
    ARRAY_NOT_CONTAINS_ALL_ELEMENTS = "ARRAY_NOT_CONTAINS_ALL_ELEMENTS"
    ARRAY_EQUALS = "ARRAY_EQUALS"
    ARRAY_NOT_EQUALS = "ARRAY_NOT_EQUALS"
    ARRAY_EQUALS_STRICT = "ARRAY_EQUALS_STRICT"
    ARRAY_NOT_EQUALS_STRICT = "ARRAY_NOT_EQUALS_STRICT"

    # Set-like columns (e.g. MySQL SET, comma-delimited text)
    SET_CONTAINS = "SET_CONTAINS"
    SET_NOT_CONTAINS = "SET_NOT_CONTAINS"
    SET_CONTAINS_ANY = "SET_CONTAINS_ANY"
    SET_NOT_CONTAINS_ANY = "SET_NOT_CONTAINS_ANY"
    SET_CONTAINS_ALL = "SET_CONTAINS_ALL"
    SET_NOT_CONTAINS_ALL = "SET_NOT_CONTAINS_ALL"


class LogicalOperator(StrEnum):
    """Operators combining the items of a filter group."""

    AND = "AND"
    OR = "OR"


CURSOR_OPERATORS: frozenset[FilterOperator] = frozenset(
    {FilterOperator.GREATER_THAN, FilterOperator.LESS_THAN}
)
