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
"""RecordingVisitor: a translator that records the traversal it performs.

Useful to translator authors for checking what a criteria graph hands to
each ``visit_*`` method, and in which order.
"""

from __future__ import annotations

from typing import Any

from pycriteria.criteria.criteria import Criteria
from pycriteria.criteria.filter import Filter
from pycriteria.criteria.filter_group import FilterGroup
from pycriteria.criteria.join import PivotJoin, SimpleJoin
from pycriteria.criteria.ports.translator import CriteriaTranslator, merge_orders

Event = tuple[Any, ...]


class RecordingVisitor(CriteriaTranslator[list[Event], list[Event]]):
    """Walks a graph in traversal order and records one event per step.

    Events:
        ``("root", alias)``, ``("join", kind, relation_alias, source_name)``,
        ``("select", alias, fields)``, ``("and", alias, size)``,
        ``("or", alias, size)``, ``("filter", alias, field, operator, value)``,
        ``("orders", [(alias, field, direction, nulls_first), ...])``,
        ``("pagination", take, skip)``.
    """

    def __init__(self) -> None:
        self._orders: list[tuple[str, Any]] = []
        self._cursors: list[tuple[str, Any]] = []

    def translate(self, criteria: Criteria, source: list[Event] | None = None) -> list[Event]:
        events: list[Event] = source if source is not None else []
        self._orders = []
        self._cursors = []
        criteria.accept(self, events)
        return events

    def visit_root(self, criteria: Criteria, context: list[Event]) -> None:
        context.append(("root", criteria.alias))
        context.append(("select", criteria.alias, criteria.select))
        for detail in criteria.joins:
            detail.criteria.accept(self, context, detail.parameters)
        if not criteria.root_filter_group.is_empty:
            criteria.root_filter_group.accept(self, criteria.alias, context)
        self._collect(criteria, criteria.alias)
        terms = merge_orders(self._orders, self._cursors)
        context.append(("orders", [(t.alias, t.field, str(t.direction), t.nulls_first) for t in terms]))
        context.append(("pagination", criteria.take, criteria.skip))

    def visit_inner_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: list[Event]) -> None:
        self._visit_join(criteria, parameters, context)

    def visit_left_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: list[Event]) -> None:
        self._visit_join(criteria, parameters, context)

    def visit_outer_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: list[Event]) -> None:
        self._visit_join(criteria, parameters, context)

    def _visit_join(self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: list[Event]) -> None:
        alias = parameters.relation_alias
        context.append(("join", str(criteria.kind), alias, criteria.source_name))
        if not criteria.root_filter_group.is_empty:
            criteria.root_filter_group.accept(self, alias, context)
        if parameters.with_select:
            context.append(("select", alias, criteria.select))
        self._collect(criteria, alias)
        for detail in criteria.joins:
            detail.criteria.accept(self, context, detail.parameters)

    def visit_filter(self, filter: Filter, current_alias: str, context: list[Event]) -> None:
        context.append(("filter", current_alias, filter.field, str(filter.operator), filter.value))

    def visit_and_group(self, group: FilterGroup, current_alias: str, context: list[Event]) -> None:
        self._visit_group("and", group, current_alias, context)

    def visit_or_group(self, group: FilterGroup, current_alias: str, context: list[Event]) -> None:
        self._visit_group("or", group, current_alias, context)

    def _visit_group(self, name: str, group: FilterGroup, current_alias: str, context: list[Event]) -> None:
        context.append((name, current_alias, len(group.items)))
        for item in group.items:
            item.accept(self, current_alias, context)

    def _collect(self, criteria: Criteria, alias: str) -> None:
        self._orders.extend((alias, order) for order in criteria.orders)
        if criteria.cursor is not None:
            self._cursors.append((alias, criteria.cursor))
