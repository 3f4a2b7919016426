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
"""Unified exception hierarchy for PyCriteria.

All library exceptions inherit from PyCriteriaException, enabling unified
error handling across modules.

Categories:
- CriteriaException: the criteria was built from invalid input (unknown
  field, malformed filter value, bad join, bad cursor, bad pagination).
- TranslationError: a translator could not express a well-formed criteria
  in its target query language.
"""

from __future__ import annotations

from typing import Any


class PyCriteriaException(Exception):
    """Base exception for all PyCriteria errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SCHEMA_FIELD").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# ---------------------------------------------------------------------------
# Criteria construction
# ---------------------------------------------------------------------------


class CriteriaException(PyCriteriaException):
    """A criteria, schema, or one of their parts was built from invalid input."""


class SchemaDefinitionError(CriteriaException):
    """A schema descriptor is malformed."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="SCHEMA_DEFINITION", context=context)


class SchemaFieldError(CriteriaException):
    """A field that is not declared on the schema was referenced."""

    def __init__(self, field: Any, source_name: str) -> None:
        super().__init__(
            f"The field '{field}' is not defined in the schema '{source_name}'.",
            code="SCHEMA_FIELD",
            context={"field": field, "source_name": source_name},
        )
        self.field = field
        self.source_name = source_name


class FilterValueError(CriteriaException):
    """A filter value does not have the shape its operator requires."""

    def __init__(self, operator: Any, expected: str) -> None:
        super().__init__(
            f"Filter value for operator {operator} must be {expected}",
            code="FILTER_VALUE",
            context={"operator": str(operator), "expected": expected},
        )
        self.operator = operator
        self.expected = expected


class RelationNotFoundError(CriteriaException):
    """The relation alias is not declared on the parent schema."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="RELATION_NOT_FOUND", context=context)


class RelationShapeError(CriteriaException):
    """Join linkage data does not match the declared relation kind."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="RELATION_SHAPE", context=context)


class CursorError(CriteriaException):
    """A cursor definition is malformed."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="CURSOR", context=context)


class PaginationError(CriteriaException):
    """A take or skip value is invalid."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="PAGINATION", context=context)


# ---------------------------------------------------------------------------
# Translation
# ---------------------------------------------------------------------------


class TranslationError(PyCriteriaException):
    """A translator cannot express part of a criteria in its target language."""
