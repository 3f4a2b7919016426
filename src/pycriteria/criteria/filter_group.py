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
"""FilterGroup: the normalized AND/OR tree behind ``where`` calls.

A group is rebuilt, never mutated, on every logical change, and is
normalized as it is built:

1. bare filters inside an OR group are wrapped into single-filter AND
   groups, so every OR branch is an AND group;
2. empty child groups are dropped;
3. a child group with the parent's operator is flattened into the parent;
4. a group left with a single child group is replaced by that child.

A single filter stays wrapped in its group (``AND(a)``), and a group with
no items is the empty AND group.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Union

from pycriteria.criteria.filter import Filter
from pycriteria.criteria.operators import LogicalOperator
from pycriteria.kernel.exceptions import FilterValueError

if TYPE_CHECKING:
    from pycriteria.criteria.ports.translator import CriteriaVisitor

FilterItem = Union[Filter, "FilterGroup"]

_VISIT_METHODS: dict[LogicalOperator, str] = {
    LogicalOperator.AND: "visit_and_group",
    LogicalOperator.OR: "visit_or_group",
}


def _normalize(
    operator: LogicalOperator, items: Sequence[FilterItem]
) -> tuple[LogicalOperator, tuple[FilterItem, ...]]:
    flat: list[FilterItem] = []
    for item in items:
        if isinstance(item, FilterGroup):
            if not item.items:
                continue
            if item.logical_operator is operator:
                flat.extend(item.items)
            else:
                flat.append(item)
        elif isinstance(item, Filter):
            if operator is LogicalOperator.OR:
                flat.append(FilterGroup(LogicalOperator.AND, (item,)))
            else:
                flat.append(item)
        else:
            raise TypeError(f"FilterGroup items must be Filter or FilterGroup, got {type(item).__name__}")

    if not flat:
        return LogicalOperator.AND, ()
    if len(flat) == 1 and isinstance(flat[0], FilterGroup):
        return flat[0].logical_operator, flat[0].items
    return operator, tuple(flat)


@dataclass(frozen=True)
class FilterGroup:
    """An AND/OR combination of filters and nested groups."""

    logical_operator: LogicalOperator = LogicalOperator.AND
    items: tuple[FilterItem, ...] = ()

    def __post_init__(self) -> None:
        try:
            operator = LogicalOperator(self.logical_operator)
        except ValueError:
            raise FilterValueError(self.logical_operator, "AND or OR") from None
        operator, items = _normalize(operator, self.items)
        object.__setattr__(self, "logical_operator", operator)
        object.__setattr__(self, "items", items)

    @classmethod
    def create_initial(cls, filter: Filter) -> FilterGroup:
        """Start a fresh tree: ``AND(filter)``."""
        return cls(LogicalOperator.AND, (filter,))

    @property
    def is_empty(self) -> bool:
        return not self.items

    # ------------------------------------------------------------------
    # Logical changes
    # ------------------------------------------------------------------

    def add_and(self, filter: Filter) -> FilterGroup:
        """Extend the branch currently being built with *filter*.

        On an AND group the filter is appended. On an OR group it joins the
        last AND branch.
        """
        if self.logical_operator is LogicalOperator.AND:
            return FilterGroup(LogicalOperator.AND, (*self.items, filter))

        last = self.items[-1] if self.items else None
        if isinstance(last, FilterGroup) and last.logical_operator is LogicalOperator.AND:
            branch = FilterGroup(LogicalOperator.AND, (*last.items, filter))
            return FilterGroup(LogicalOperator.OR, (*self.items[:-1], branch))
        return FilterGroup(LogicalOperator.OR, (*self.items, FilterGroup.create_initial(filter)))

    def add_or(self, filter: Filter) -> FilterGroup:
        """Open a new OR branch holding only *filter*.

        An AND group becomes ``OR(AND(current items), AND(filter))``; an OR
        group gains one more ``AND(filter)`` branch.
        """
        branch = FilterGroup.create_initial(filter)
        if self.logical_operator is LogicalOperator.AND:
            current = (FilterGroup(LogicalOperator.AND, self.items),) if self.items else ()
            return FilterGroup(LogicalOperator.OR, (*current, branch))
        return FilterGroup(LogicalOperator.OR, (*self.items, branch))

    # ------------------------------------------------------------------
    # Primitive form
    # ------------------------------------------------------------------

    def to_primitive(self) -> dict[str, Any]:
        return {
            "logical_operator": str(self.logical_operator),
            "items": [item.to_primitive() for item in self.items],
        }

    @classmethod
    def from_primitive(cls, data: Mapping[str, Any]) -> FilterGroup:
        items: list[FilterItem] = []
        for item in data.get("items", ()):
            if "logical_operator" in item:
                items.append(cls.from_primitive(item))
            else:
                items.append(Filter.from_primitive(item))
        return cls(data.get("logical_operator", LogicalOperator.AND), tuple(items))

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def accept(self, visitor: CriteriaVisitor[Any], current_alias: str, context: Any) -> Any:
        visit = getattr(visitor, _VISIT_METHODS[self.logical_operator])
        return visit(self, current_alias, context)
