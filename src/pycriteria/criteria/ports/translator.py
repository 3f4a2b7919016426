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
"""Traversal contract between criteria graphs and translators.

A translator walks a criteria graph by double dispatch: it calls
``criteria.accept(self, context)`` and the node calls back the matching
``visit_*`` method. Translators follow one traversal order:

* root: selection, joins (declaration order, recursively), root filter
  group, cursor and order consolidation, pagination;
* join: join clause, join-local filter group, join-local selection and
  orders, nested joins.

Type Parameters:
    C: The translation context threaded through every visit.
    R: What :meth:`CriteriaTranslator.translate` produces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, Protocol, TypeVar, runtime_checkable

from pycriteria.criteria.filter import Filter
from pycriteria.criteria.operators import FilterOperator
from pycriteria.criteria.order import Order, OrderDirection

if TYPE_CHECKING:
    from pycriteria.criteria.criteria import Criteria
    from pycriteria.criteria.cursor import Cursor
    from pycriteria.criteria.filter_group import FilterGroup
    from pycriteria.criteria.join import PivotJoin, SimpleJoin

C = TypeVar("C")
R = TypeVar("R")


@runtime_checkable
class CriteriaVisitor(Protocol[C]):
    """The callbacks a criteria graph invokes on whoever walks it."""

    def visit_root(self, criteria: Criteria, context: C) -> Any: ...
    def visit_inner_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: C) -> Any: ...
    def visit_left_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: C) -> Any: ...
    def visit_outer_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: C) -> Any: ...
    def visit_filter(self, filter: Filter, current_alias: str, context: C) -> Any: ...
    def visit_and_group(self, group: FilterGroup, current_alias: str, context: C) -> Any: ...
    def visit_or_group(self, group: FilterGroup, current_alias: str, context: C) -> Any: ...


class CriteriaTranslator(ABC, Generic[C, R]):
    """Base class for translators turning a root criteria into a native query."""

    @abstractmethod
    def translate(self, criteria: Criteria, source: C) -> R: ...

    @abstractmethod
    def visit_root(self, criteria: Criteria, context: C) -> Any: ...

    @abstractmethod
    def visit_inner_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: C) -> Any: ...

    @abstractmethod
    def visit_left_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: C) -> Any: ...

    @abstractmethod
    def visit_outer_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: C) -> Any: ...

    @abstractmethod
    def visit_filter(self, filter: Filter, current_alias: str, context: C) -> Any: ...

    @abstractmethod
    def visit_and_group(self, group: FilterGroup, current_alias: str, context: C) -> Any: ...

    @abstractmethod
    def visit_or_group(self, group: FilterGroup, current_alias: str, context: C) -> Any: ...


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class OrderingTerm:
    """One term of the final, graph-wide ordering."""

    alias: str
    field: str
    direction: OrderDirection
    nulls_first: bool = False


def merge_orders(
    collected_orders: Iterable[tuple[str, Order]],
    cursors: Iterable[tuple[str, Cursor]] = (),
) -> list[OrderingTerm]:
    """Merge the orders and cursors collected from a whole graph.

    Cursor fields come first, cursors taken by ``sequence_id`` and their
    fields in declaration order, sorted in the cursor's direction. Declared
    orders follow by ``sequence_id``, skipping any ``(alias, field)`` a
    cursor already covers.

    Args:
        collected_orders: ``(alias, order)`` pairs from every visited node.
        cursors: ``(alias, cursor)`` pairs from every visited node.
    """
    terms: list[OrderingTerm] = []
    covered: set[tuple[str, str]] = set()

    for alias, cursor in sorted(cursors, key=lambda pair: pair[1].sequence_id):
        for cursor_filter in cursor.filters:
            key = (alias, cursor_filter.field)
            if key in covered:
                continue
            covered.add(key)
            terms.append(OrderingTerm(alias, cursor_filter.field, cursor.order, False))

    for alias, order in sorted(collected_orders, key=lambda pair: pair[1].sequence_id):
        key = (alias, order.field)
        if key in covered:
            continue
        terms.append(OrderingTerm(alias, order.field, order.direction, order.nulls_first))

    return terms


def cursor_boundary(cursor: Cursor) -> list[list[Filter]]:
    """The boundary condition of *cursor* as OR-ed branches of AND-ed filters.

    One field gives ``[[f1 op v1]]``; two fields give
    ``[[f1 op v1], [f1 = v1, f2 op v2]]``.
    """
    first, *rest = cursor.filters
    branches = [[first]]
    if rest:
        second = rest[0]
        branches.append([Filter(first.field, FilterOperator.EQUALS, first.value), second])
    return branches
