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
"""Criteria: one node of a data-source-agnostic query description.

A criteria node is bound to one :class:`CriteriaSchema` and holds the
selection, filters, orders, cursor, pagination and joins for that entity.
Join nodes hang off their parent through :meth:`Criteria.join`, forming a
tree that a translator walks through :meth:`Criteria.accept`.

Every fluent method validates its input before touching any state, so a
failed call leaves the node exactly as it was.

Example::

    users = CriteriaFactory.get_criteria(user_schema)
    posts = CriteriaFactory.get_inner_join_criteria(post_schema)

    users.where("email", "LIKE", "%@example.com").join(
        "posts", posts.where("title", "IS_NOT_NULL")
    ).order_by("created_at", "DESC").set_take(20)
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pycriteria.criteria.context import CriteriaContext
from pycriteria.criteria.cursor import Cursor
from pycriteria.criteria.filter import UNSET, Filter
from pycriteria.criteria.filter_group import FilterGroup
from pycriteria.criteria.join import JoinDetails, PivotJoin, RelationResolver, SimpleJoin
from pycriteria.criteria.operators import FilterOperator
from pycriteria.criteria.order import Order, OrderDirection, coerce_direction
from pycriteria.criteria.schema import CriteriaSchema, SelectType
from pycriteria.kernel.exceptions import (
    CriteriaException,
    PaginationError,
    RelationShapeError,
)

if TYPE_CHECKING:
    from pycriteria.criteria.ports.translator import CriteriaVisitor


class CriteriaKind(StrEnum):
    ROOT = "ROOT"
    INNER_JOIN = "INNER_JOIN"
    LEFT_JOIN = "LEFT_JOIN"
    OUTER_JOIN = "OUTER_JOIN"


_JOIN_VISIT_METHODS: dict[CriteriaKind, str] = {
    CriteriaKind.INNER_JOIN: "visit_inner_join",
    CriteriaKind.LEFT_JOIN: "visit_left_join",
    CriteriaKind.OUTER_JOIN: "visit_outer_join",
}


class Criteria:
    """A root or join node of a query description."""

    def __init__(
        self,
        schema: CriteriaSchema,
        kind: CriteriaKind | str = CriteriaKind.ROOT,
        *,
        context: CriteriaContext | None = None,
    ) -> None:
        if not isinstance(schema, CriteriaSchema):
            raise CriteriaException(
                f"Criteria requires a CriteriaSchema, got {type(schema).__name__}",
                code="CRITERIA_SCHEMA",
            )
        try:
            self._kind = CriteriaKind(kind)
        except ValueError:
            raise CriteriaException(
                f"Unknown criteria kind: {kind!r}",
                code="CRITERIA_KIND",
                context={"kind": kind},
            ) from None
        self._schema = schema
        self._context = context if context is not None else CriteriaContext.default()
        self._parent: Criteria | None = None
        self._init_state()

    def _init_state(self) -> None:
        for detail in getattr(self, "_joins", {}).values():
            detail.criteria._parent = None
        self._root_filter_group = FilterGroup()
        self._select: tuple[str, ...] | None = None
        self._orders: list[Order] = []
        self._cursor: Cursor | None = None
        self._take = 0
        self._skip = 0
        self._joins: dict[str, JoinDetails] = {}

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    @property
    def kind(self) -> CriteriaKind:
        return self._kind

    @property
    def is_join(self) -> bool:
        return self._kind is not CriteriaKind.ROOT

    @property
    def schema(self) -> CriteriaSchema:
        return self._schema

    @property
    def context(self) -> CriteriaContext:
        return self._context

    @property
    def source_name(self) -> str:
        return self._schema.source_name

    @property
    def alias(self) -> str:
        return self._schema.alias  # type: ignore[return-value]

    @property
    def identifier_field(self) -> str:
        return self._schema.identifier_field

    @property
    def schema_metadata(self) -> Mapping[str, Any]:
        return self._schema.metadata

    @property
    def select(self) -> list[str]:
        """Fields to select: the explicit selection, or every schema field."""
        if self._select is None:
            return list(self._schema.fields)
        return list(self._select)

    @property
    def select_all(self) -> bool:
        return self._select is None

    @property
    def take(self) -> int:
        return self._take

    @property
    def skip(self) -> int:
        return self._skip

    @property
    def orders(self) -> tuple[Order, ...]:
        return tuple(self._orders)

    @property
    def joins(self) -> tuple[JoinDetails, ...]:
        """Joins in declaration order."""
        return tuple(self._joins.values())

    @property
    def root_filter_group(self) -> FilterGroup:
        return self._root_filter_group

    @property
    def cursor(self) -> Cursor | None:
        return self._cursor

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def _build_filter(self, field: str, operator: FilterOperator | str, value: Any) -> Filter:
        self._schema.assert_field(field)
        return Filter(field, operator, value)  # type: ignore[arg-type]

    def where(self, field: str, operator: FilterOperator | str, value: Any = UNSET) -> Criteria:
        """Replace every previous filter with ``AND(field operator value)``."""
        self._root_filter_group = FilterGroup.create_initial(self._build_filter(field, operator, value))
        return self

    def and_where(self, field: str, operator: FilterOperator | str, value: Any = UNSET) -> Criteria:
        """Add a filter to the branch currently being built."""
        self._root_filter_group = self._root_filter_group.add_and(self._build_filter(field, operator, value))
        return self

    def or_where(self, field: str, operator: FilterOperator | str, value: Any = UNSET) -> Criteria:
        """Open a new OR branch starting with this filter."""
        self._root_filter_group = self._root_filter_group.add_or(self._build_filter(field, operator, value))
        return self

    # ------------------------------------------------------------------
    # Joins
    # ------------------------------------------------------------------

    def join(
        self,
        relation_alias: str,
        child: Criteria,
        with_select: bool = True,
        select: SelectType | str | None = None,
    ) -> Criteria:
        """Join *child* through the relation *relation_alias* of this schema.

        Joining an alias again replaces the previous join for that alias.
        A join node belongs to exactly one parent and must share the
        parent's :class:`CriteriaContext`.

        Raises:
            RelationShapeError: If *child* is a root criteria, uses another
                context, is already joined elsewhere, would create a cycle,
                or the relation linkage does not match its kind.
            RelationNotFoundError: If the alias is unknown or *child* is built
                on a different schema than the relation targets.
            SchemaFieldError: If a linkage field is missing from its schema.
        """
        if not isinstance(child, Criteria) or not child.is_join:
            raise RelationShapeError(
                f"Only join criteria can be joined; '{relation_alias}' received a root criteria",
                context={"relation_alias": relation_alias},
            )
        parameters = RelationResolver.resolve(
            self._schema, relation_alias, child, with_select=with_select, select=select
        )
        self._check_ownership(relation_alias, child)

        replaced = self._joins.get(relation_alias)
        if replaced is not None and replaced.criteria is not child:
            replaced.criteria._parent = None
        self._joins[relation_alias] = JoinDetails(parameters=parameters, criteria=child)
        child._parent = self
        return self

    def _check_ownership(self, relation_alias: str, child: Criteria) -> None:
        error_context = {"relation_alias": relation_alias, "source_name": child.source_name}
        if child.context is not self._context:
            raise RelationShapeError(
                f"Join criteria for '{relation_alias}' uses a different CriteriaContext than its parent",
                context=error_context,
            )
        if child._parent is not None and child._parent is not self:
            raise RelationShapeError(
                f"Join criteria for '{relation_alias}' is already joined to another criteria",
                context=error_context,
            )
        for alias, detail in self._joins.items():
            if detail.criteria is child and alias != relation_alias:
                raise RelationShapeError(
                    f"Join criteria for '{relation_alias}' is already joined as '{alias}'",
                    context=error_context,
                )
        node: Criteria | None = self
        while node is not None:
            if node is child:
                raise RelationShapeError(
                    f"Joining '{relation_alias}' would make the criteria graph cyclic",
                    context=error_context,
                )
            node = node._parent

    # ------------------------------------------------------------------
    # Ordering and pagination
    # ------------------------------------------------------------------

    def order_by(self, field: str, direction: OrderDirection | str, nulls_first: bool = False) -> Criteria:
        self._schema.assert_field(field)
        order_direction = coerce_direction(direction)
        self._orders.append(
            Order(
                field=field,
                direction=order_direction,
                nulls_first=bool(nulls_first),
                sequence_id=self._context.next_sequence_id(),
            )
        )
        return self

    def set_cursor(
        self,
        fields: Sequence[Mapping[str, Any]],
        operator: FilterOperator | str,
        direction: OrderDirection | str,
    ) -> Criteria:
        """Set the keyset-pagination boundary.

        Args:
            fields: One or two ``{"field": name, "value": value}`` mappings.
            operator: ``>`` or ``<``.
            direction: Sort direction of the cursor fields.
        """
        names, cursor_operator, cursor_order = Cursor.validate(fields, operator, direction)
        for name in names:
            self._schema.assert_field(name)
        self._cursor = Cursor(fields, cursor_operator, cursor_order, self._context.next_sequence_id())
        return self

    def set_take(self, amount: int) -> Criteria:
        """Limit the number of results; 0 means unbounded."""
        self._take = self._check_count("take", amount)
        return self

    def set_skip(self, amount: int) -> Criteria:
        """Skip results before the first one returned; 0 means none."""
        self._skip = self._check_count("skip", amount)
        return self

    @staticmethod
    def _check_count(name: str, amount: Any) -> int:
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise PaginationError(
                f"{name} must be an integer, got {type(amount).__name__}",
                context={name: amount},
            )
        if amount < 0:
            raise PaginationError(f"{name} must be >= 0, got {amount}", context={name: amount})
        return amount

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def set_select(self, fields: Iterable[str]) -> Criteria:
        """Select only *fields*; the identifier field is always included."""
        selection = list(dict.fromkeys(fields))
        for name in selection:
            self._schema.assert_field(name)
        if self.identifier_field not in selection:
            selection.append(self.identifier_field)
        self._select = tuple(selection)
        return self

    def reset_select(self) -> Criteria:
        """Go back to selecting every field."""
        self._select = None
        return self

    def reset(self) -> Criteria:
        """Drop all filters, joins, orders, cursor, pagination and selection."""
        self._init_state()
        return self

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def accept(
        self,
        visitor: CriteriaVisitor[Any],
        context: Any,
        parameters: SimpleJoin | PivotJoin | None = None,
    ) -> Any:
        """Hand this node to the matching ``visit_*`` method of *visitor*."""
        if self._kind is CriteriaKind.ROOT:
            return visitor.visit_root(self, context)
        if parameters is None:
            raise RelationShapeError(
                f"{self._kind} criteria on '{self.source_name}' must be visited with its join parameters",
                context={"source_name": self.source_name, "kind": str(self._kind)},
            )
        visit = getattr(visitor, _JOIN_VISIT_METHODS[self._kind])
        return visit(self, parameters, context)

    def __repr__(self) -> str:
        return f"Criteria(kind={self._kind}, source_name={self.source_name!r}, joins={list(self._joins)})"
