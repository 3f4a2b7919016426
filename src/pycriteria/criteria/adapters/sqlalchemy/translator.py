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
"""SQLAlchemy Core translator: criteria graph to a ``Select`` statement.

The translator only builds the statement; executing it is up to the
caller::

    stmt = SqlAlchemyCriteriaTranslator().translate(criteria)
    rows = session.execute(stmt).mappings().all()

Selected columns are labelled ``{alias}_{field}``. The root table is
aliased by the criteria alias, joined tables by their relation alias and
pivot tables by ``{parent_alias}_{relation_alias}_pivot``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import structlog
from sqlalchemy import Select, and_, column, or_, select, table
from sqlalchemy.sql.expression import ColumnElement, FromClause

from pycriteria.criteria.criteria import Criteria, CriteriaKind
from pycriteria.criteria.cursor import Cursor
from pycriteria.criteria.filter import Filter
from pycriteria.criteria.filter_group import FilterGroup
from pycriteria.criteria.join import PivotJoin, SimpleJoin
from pycriteria.criteria.operators import FilterOperator
from pycriteria.criteria.order import Order, OrderDirection
from pycriteria.criteria.ports.translator import CriteriaTranslator, cursor_boundary, merge_orders
from pycriteria.criteria.schema import SelectType
from pycriteria.kernel.exceptions import TranslationError

logger = structlog.get_logger("pycriteria.adapters.sqlalchemy")

_O = FilterOperator

_FILTER_HANDLERS: dict[FilterOperator, Callable[[Any, Any], ColumnElement[Any]]] = {
    _O.EQUALS: lambda col, v: col == v,
    _O.NOT_EQUALS: lambda col, v: col != v,
    _O.GREATER_THAN: lambda col, v: col > v,
    _O.GREATER_THAN_OR_EQUALS: lambda col, v: col >= v,
    _O.LESS_THAN: lambda col, v: col < v,
    _O.LESS_THAN_OR_EQUALS: lambda col, v: col <= v,
    _O.LIKE: lambda col, v: col.like(v),
    _O.NOT_LIKE: lambda col, v: col.not_like(v),
    _O.ILIKE: lambda col, v: col.ilike(v),
    _O.NOT_ILIKE: lambda col, v: col.not_ilike(v),
    _O.CONTAINS: lambda col, v: col.contains(v, autoescape=True),
    _O.NOT_CONTAINS: lambda col, v: ~col.contains(v, autoescape=True),
    _O.STARTS_WITH: lambda col, v: col.startswith(v, autoescape=True),
    _O.ENDS_WITH: lambda col, v: col.endswith(v, autoescape=True),
    _O.MATCHES_REGEX: lambda col, v: col.regexp_match(v),
    _O.IN: lambda col, v: col.in_(list(v)),
    _O.NOT_IN: lambda col, v: col.not_in(list(v)),
    _O.IS_NULL: lambda col, _v: col.is_(None),
    _O.IS_NOT_NULL: lambda col, _v: col.is_not(None),
    _O.BETWEEN: lambda col, v: col.between(v[0], v[1]),
    _O.NOT_BETWEEN: lambda col, v: ~col.between(v[0], v[1]),
}

_JOIN_FLAGS: dict[CriteriaKind, dict[str, bool]] = {
    CriteriaKind.INNER_JOIN: {},
    CriteriaKind.LEFT_JOIN: {"isouter": True},
    CriteriaKind.OUTER_JOIN: {"full": True},
}


@dataclass
class SelectParts:
    """Mutable translation state for one :meth:`translate` call."""

    tables: dict[str, FromClause] = field(default_factory=dict)
    columns: list[ColumnElement[Any]] = field(default_factory=list)
    from_clause: FromClause | None = None
    conditions: list[ColumnElement[Any]] = field(default_factory=list)
    orders: list[tuple[str, Order]] = field(default_factory=list)
    cursors: list[tuple[str, Cursor]] = field(default_factory=list)
    parents: list[str] = field(default_factory=list)
    statement: Select[Any] | None = None


class SqlAlchemyCriteriaTranslator(CriteriaTranslator[SelectParts, Select[Any]]):
    """Builds a SQLAlchemy Core ``Select`` from a root criteria."""

    def translate(self, criteria: Criteria, source: SelectParts | None = None) -> Select[Any]:
        if criteria.is_join:
            raise TranslationError(
                "Only root criteria can be translated",
                code="TRANSLATION_ROOT",
                context={"source_name": criteria.source_name, "kind": str(criteria.kind)},
            )
        parts = source if source is not None else SelectParts()
        statement = criteria.accept(self, parts)
        logger.debug(
            "criteria_translated",
            source_name=criteria.source_name,
            tables=list(parts.tables),
        )
        return statement

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def visit_root(self, criteria: Criteria, context: SelectParts) -> Select[Any]:
        alias = criteria.alias
        root_table = self._register_table(context, alias, criteria.source_name, criteria.schema.fields)
        context.from_clause = root_table

        context.columns.extend(self._labelled(root_table, alias, criteria.select))

        context.parents.append(alias)
        for detail in criteria.joins:
            detail.criteria.accept(self, context, detail.parameters)
        context.parents.pop()

        if not criteria.root_filter_group.is_empty:
            context.conditions.append(criteria.root_filter_group.accept(self, alias, context))

        context.orders.extend((alias, order) for order in criteria.orders)
        if criteria.cursor is not None:
            context.cursors.append((alias, criteria.cursor))
        for cursor_alias, cursor in sorted(context.cursors, key=lambda pair: pair[1].sequence_id):
            context.conditions.append(self._cursor_condition(cursor, cursor_alias, context))

        stmt = select(*context.columns).select_from(context.from_clause)
        if context.conditions:
            stmt = stmt.where(and_(*context.conditions))
        for term in merge_orders(context.orders, context.cursors):
            col = context.tables[term.alias].c[term.field]
            expr = col.desc() if term.direction is OrderDirection.DESC else col.asc()
            stmt = stmt.order_by(expr.nulls_first() if term.nulls_first else expr.nulls_last())
        if criteria.take > 0:
            stmt = stmt.limit(criteria.take)
        if criteria.skip > 0:
            stmt = stmt.offset(criteria.skip)

        context.statement = stmt
        return stmt

    def visit_inner_join(
        self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: SelectParts
    ) -> None:
        self._apply_join(criteria, parameters, context)

    def visit_left_join(
        self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: SelectParts
    ) -> None:
        self._apply_join(criteria, parameters, context)

    def visit_outer_join(
        self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: SelectParts
    ) -> None:
        self._apply_join(criteria, parameters, context)

    def _apply_join(
        self, criteria: Criteria, parameters: SimpleJoin | PivotJoin, context: SelectParts
    ) -> None:
        parent_alias = context.parents[-1]
        parent_table = context.tables[parent_alias]
        alias = parameters.relation_alias
        if alias in context.tables:
            alias = f"{parent_alias}_{alias}"
        target = self._register_table(context, alias, criteria.source_name, criteria.schema.fields)
        flags = _JOIN_FLAGS[criteria.kind]

        if isinstance(parameters, PivotJoin):
            pivot_alias = f"{parent_alias}_{parameters.relation_alias}_pivot"
            pivot = self._register_table(
                context,
                pivot_alias,
                parameters.pivot_source_name,
                (parameters.local_field.pivot_field, parameters.relation_field.pivot_field),
            )
            context.from_clause = context.from_clause.join(  # type: ignore[union-attr]
                pivot,
                parent_table.c[parameters.local_field.reference] == pivot.c[parameters.local_field.pivot_field],
                **flags,
            )
            on_clause = pivot.c[parameters.relation_field.pivot_field] == target.c[parameters.relation_field.reference]
        else:
            on_clause = parent_table.c[parameters.local_field] == target.c[parameters.relation_field]

        if not criteria.root_filter_group.is_empty:
            on_clause = and_(on_clause, criteria.root_filter_group.accept(self, alias, context))
        context.from_clause = context.from_clause.join(target, on_clause, **flags)  # type: ignore[union-attr]

        context.columns.extend(self._labelled(target, alias, self._join_selection(criteria, parameters)))
        context.orders.extend((alias, order) for order in criteria.orders)
        if criteria.cursor is not None:
            context.cursors.append((alias, criteria.cursor))

        context.parents.append(alias)
        for detail in criteria.joins:
            detail.criteria.accept(self, context, detail.parameters)
        context.parents.pop()

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def visit_filter(self, filter: Filter, current_alias: str, context: SelectParts) -> ColumnElement[Any]:
        handler = _FILTER_HANDLERS.get(filter.operator)
        if handler is None:
            raise TranslationError(
                f"Operator {filter.operator} is not supported by the SQLAlchemy translator",
                code="UNSUPPORTED_OPERATOR",
                context={"operator": str(filter.operator), "field": filter.field},
            )
        return handler(context.tables[current_alias].c[filter.field], filter.value)

    def visit_and_group(self, group: FilterGroup, current_alias: str, context: SelectParts) -> ColumnElement[Any]:
        return and_(*(item.accept(self, current_alias, context) for item in group.items))

    def visit_or_group(self, group: FilterGroup, current_alias: str, context: SelectParts) -> ColumnElement[Any]:
        return or_(*(item.accept(self, current_alias, context) for item in group.items))

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _register_table(
        context: SelectParts, alias: str, source_name: str, fields: tuple[str, ...]
    ) -> FromClause:
        aliased = table(source_name, *(column(f) for f in fields)).alias(alias)
        context.tables[alias] = aliased
        return aliased

    @staticmethod
    def _labelled(source: FromClause, alias: str, fields: list[str]) -> list[ColumnElement[Any]]:
        return [source.c[f].label(f"{alias}_{f}") for f in fields]

    @staticmethod
    def _join_selection(criteria: Criteria, parameters: SimpleJoin | PivotJoin) -> list[str]:
        if not parameters.with_select or parameters.select is SelectType.NO_SELECTION:
            return []
        if parameters.select is SelectType.ID_ONLY:
            return [criteria.identifier_field]
        return criteria.select

    def _cursor_condition(self, cursor: Cursor, alias: str, context: SelectParts) -> ColumnElement[Any]:
        branches = [
            and_(*(self.visit_filter(f, alias, context) for f in branch))
            for branch in cursor_boundary(cursor)
        ]
        return or_(*branches)
