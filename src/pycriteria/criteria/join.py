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
"""Join descriptors and the resolver that builds them from schema relations."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from pycriteria.criteria.schema import (
    CriteriaSchema,
    PivotField,
    RelationConfig,
    RelationKind,
    SelectType,
)
from pycriteria.kernel.exceptions import RelationNotFoundError, RelationShapeError

if TYPE_CHECKING:
    from pycriteria.criteria.criteria import Criteria

logger = structlog.get_logger("pycriteria.criteria.join")


@dataclass(frozen=True, kw_only=True)
class JoinParameters:
    """What every resolved join carries, whatever its linkage shape."""

    relation_kind: RelationKind
    relation_alias: str
    target_source_name: str
    parent_source_name: str
    parent_alias: str
    parent_identifier: str
    with_select: bool = True
    select: SelectType | None = None
    parent_schema_metadata: Mapping[str, Any] = field(default_factory=dict)
    join_metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, kw_only=True)
class SimpleJoin(JoinParameters):
    """One-to-one, one-to-many or many-to-one join on two fields.

    ``local_field`` belongs to the parent schema, ``relation_field`` to the
    joined one.
    """

    local_field: str
    relation_field: str


@dataclass(frozen=True, kw_only=True)
class PivotJoin(JoinParameters):
    """Many-to-many join through a pivot source."""

    pivot_source_name: str
    local_field: PivotField
    relation_field: PivotField


@dataclass(frozen=True)
class JoinDetails:
    """A join stored on a criteria node: its descriptor and the joined node."""

    parameters: SimpleJoin | PivotJoin
    criteria: Criteria


def _join_select(relation_alias: str, value: SelectType | str | None) -> SelectType | None:
    if value is None:
        return None
    try:
        return SelectType(value)
    except ValueError:
        raise RelationShapeError(
            f"Unknown select type for join '{relation_alias}': {value!r}",
            context={"relation_alias": relation_alias, "select": value, "allowed": [s.value for s in SelectType]},
        ) from None


def _is_pivot_field(value: Any) -> bool:
    return (
        isinstance(value, PivotField)
        and isinstance(value.pivot_field, str)
        and bool(value.pivot_field)
        and isinstance(value.reference, str)
    )


class RelationResolver:
    """Turns a relation alias declared on a schema into a join descriptor."""

    @staticmethod
    def resolve(
        parent_schema: CriteriaSchema,
        relation_alias: str,
        child: Criteria,
        *,
        with_select: bool = True,
        select: SelectType | str | None = None,
    ) -> SimpleJoin | PivotJoin:
        """Resolve *relation_alias* on *parent_schema* against *child*.

        Raises:
            RelationNotFoundError: If the alias is not declared, or *child* is
                not built on the relation's target schema.
            RelationShapeError: If the linkage does not match the relation kind.
            SchemaFieldError: If a linkage field is missing from its schema.
        """
        relation = parent_schema.get_relation(relation_alias)
        if relation is None:
            raise RelationNotFoundError(
                f"Relation '{relation_alias}' is not defined in the schema '{parent_schema.source_name}'",
                context={
                    "relation_alias": relation_alias,
                    "source_name": parent_schema.source_name,
                    "available": list(parent_schema.relation_map),
                },
            )
        if child.source_name != relation.target_source_name:
            raise RelationNotFoundError(
                f"Relation '{relation_alias}' targets '{relation.target_source_name}', "
                f"but the joined criteria is built on '{child.source_name}'",
                context={
                    "relation_alias": relation_alias,
                    "target_source_name": relation.target_source_name,
                    "source_name": child.source_name,
                },
            )

        common: dict[str, Any] = {
            "relation_kind": relation.relation_kind,
            "relation_alias": relation.relation_alias,
            "target_source_name": relation.target_source_name,
            "parent_source_name": parent_schema.source_name,
            "parent_alias": parent_schema.alias,
            "parent_identifier": parent_schema.identifier_field,
            "with_select": bool(with_select),
            "select": _join_select(relation_alias, select) or relation.default_select,
            "parent_schema_metadata": dict(parent_schema.metadata),
            "join_metadata": dict(relation.metadata),
        }

        parameters: SimpleJoin | PivotJoin
        if relation.is_pivot:
            parameters = RelationResolver._resolve_pivot(parent_schema, relation, child, common)
        else:
            parameters = RelationResolver._resolve_simple(parent_schema, relation, child, common)

        logger.debug(
            "relation_resolved",
            parent=parent_schema.source_name,
            relation_alias=relation_alias,
            relation_kind=str(relation.relation_kind),
            target=relation.target_source_name,
        )
        return parameters

    @staticmethod
    def _resolve_pivot(
        parent_schema: CriteriaSchema,
        relation: RelationConfig,
        child: Criteria,
        common: dict[str, Any],
    ) -> PivotJoin:
        if not relation.pivot_source_name:
            raise RelationShapeError(
                f"Relation '{relation.relation_alias}' is many_to_many but declares no pivot_source_name",
                context={"relation_alias": relation.relation_alias},
            )
        if not (_is_pivot_field(relation.local_field) and _is_pivot_field(relation.relation_field)):
            raise RelationShapeError(
                f"Relation '{relation.relation_alias}' is many_to_many; local_field and relation_field "
                "must both be {pivot_field, reference} pairs",
                context={"relation_alias": relation.relation_alias},
            )
        local_field: PivotField = relation.local_field  # type: ignore[assignment]
        relation_field: PivotField = relation.relation_field  # type: ignore[assignment]
        parent_schema.assert_field(local_field.reference)
        child.schema.assert_field(relation_field.reference)

        return PivotJoin(
            **common,
            pivot_source_name=relation.pivot_source_name,
            local_field=local_field,
            relation_field=relation_field,
        )

    @staticmethod
    def _resolve_simple(
        parent_schema: CriteriaSchema,
        relation: RelationConfig,
        child: Criteria,
        common: dict[str, Any],
    ) -> SimpleJoin:
        if relation.pivot_source_name is not None:
            raise RelationShapeError(
                f"Relation '{relation.relation_alias}' is {relation.relation_kind} and cannot use a pivot source",
                context={"relation_alias": relation.relation_alias, "pivot_source_name": relation.pivot_source_name},
            )
        if not (isinstance(relation.local_field, str) and isinstance(relation.relation_field, str)):
            raise RelationShapeError(
                f"Relation '{relation.relation_alias}' is {relation.relation_kind}; local_field and "
                "relation_field must both be field names",
                context={"relation_alias": relation.relation_alias},
            )
        parent_schema.assert_field(relation.local_field)
        child.schema.assert_field(relation.relation_field)

        return SimpleJoin(
            **common,
            local_field=relation.local_field,
            relation_field=relation.relation_field,
        )
