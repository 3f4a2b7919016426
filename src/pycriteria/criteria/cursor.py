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
"""Cursor: a keyset-pagination boundary on one or two fields."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pycriteria.criteria.filter import UNSET, Filter, is_scalar
from pycriteria.criteria.operators import CURSOR_OPERATORS, FilterOperator
from pycriteria.criteria.order import OrderDirection
from pycriteria.kernel.exceptions import CursorError


class Cursor:
    """Boundary ``(field, value)`` pairs compared with ``>`` or ``<``.

    A translator turns a one-field cursor into ``(f1 op v1)`` and a
    two-field cursor into ``(f1 op v1) OR (f1 = v1 AND f2 op v2)``, and
    places the cursor fields first in the final ordering.

    Args:
        fields: One or two mappings ``{"field": name, "value": value}``.
            ``None`` is a valid value; a missing value is not.
        operator: ``>`` or ``<``.
        order: Direction the cursor fields are sorted in.
        sequence_id: Declaration tag shared with :class:`Order`.
    """

    def __init__(
        self,
        fields: Sequence[Mapping[str, Any]],
        operator: FilterOperator | str,
        order: OrderDirection | str,
        sequence_id: int,
    ) -> None:
        names, cursor_operator, direction = self.validate(fields, operator, order)
        self._operator = cursor_operator
        self._order = direction
        self._sequence_id = sequence_id
        self._filters = tuple(
            Filter(name, cursor_operator, entry["value"]) for name, entry in zip(names, fields)
        )

    @staticmethod
    def validate(
        fields: Sequence[Mapping[str, Any]],
        operator: FilterOperator | str,
        order: OrderDirection | str,
    ) -> tuple[tuple[str, ...], FilterOperator, OrderDirection]:
        """Check a cursor definition without building it.

        Returns:
            The field names, the operator and the direction.

        Raises:
            CursorError: If any part of the definition is malformed.
        """
        if isinstance(fields, (str, bytes, Mapping)) or not isinstance(fields, Sequence):
            raise CursorError("Cursor fields must be a list of {field, value} mappings")
        if len(fields) not in (1, 2):
            raise CursorError(
                f"Cursor must have one or two fields, got {len(fields)}",
                context={"count": len(fields)},
            )

        names: list[str] = []
        for entry in fields:
            if not isinstance(entry, Mapping) or not isinstance(entry.get("field"), str) or not entry["field"]:
                raise CursorError("Every cursor entry must name a field", context={"entry": entry})
            value = entry.get("value", UNSET)
            if value is UNSET:
                raise CursorError(
                    f"Cursor value for field '{entry['field']}' must be given (None is allowed)",
                    context={"field": entry["field"]},
                )
            if not is_scalar(value):
                raise CursorError(
                    f"Cursor value for field '{entry['field']}' must be a scalar, got {type(value).__name__}",
                    context={"field": entry["field"], "value": value},
                )
            names.append(entry["field"])

        if len(names) == 2 and names[0] == names[1]:
            raise CursorError(
                f"Cursor fields must be distinct, got '{names[0]}' twice",
                context={"field": names[0]},
            )

        if not isinstance(operator, str) or operator not in CURSOR_OPERATORS:
            raise CursorError(
                "Cursor operator must be '>' or '<'",
                context={"operator": repr(operator)},
            )

        if not isinstance(order, str):
            raise CursorError(f"Invalid cursor direction: {order!r}", context={"order": repr(order)})
        try:
            direction = OrderDirection(order.upper())
        except ValueError:
            raise CursorError(f"Invalid cursor direction: {order!r}", context={"order": order}) from None

        return tuple(names), FilterOperator(operator), direction

    @property
    def filters(self) -> tuple[Filter, ...]:
        return self._filters

    @property
    def fields(self) -> tuple[str, ...]:
        return tuple(f.field for f in self._filters)

    @property
    def operator(self) -> FilterOperator:
        return self._operator

    @property
    def order(self) -> OrderDirection:
        return self._order

    @property
    def sequence_id(self) -> int:
        return self._sequence_id

    def __repr__(self) -> str:
        pairs = ", ".join(f"{f.field}={f.value!r}" for f in self._filters)
        return f"Cursor({pairs}, operator={self._operator}, order={self._order})"
