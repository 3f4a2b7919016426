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
"""Schema descriptors: the static description of one queryable entity.

A :class:`CriteriaSchema` names a source (table, collection, ...), its
fields, its identifier field and the relations it can be joined through.
Schemas are created once, usually at application start, and shared
read-only by every criteria node built from them.

Example::

    users = CriteriaSchema(
        source_name="user",
        alias="users",
        fields=("uuid", "email", "created_at"),
        identifier_field="uuid",
        relations=(
            RelationConfig(
                relation_alias="posts",
                target_source_name="post",
                relation_kind=RelationKind.ONE_TO_MANY,
                local_field="uuid",
                relation_field="user_uuid",
            ),
        ),
    )
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from functools import cached_property
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from pycriteria.kernel.exceptions import SchemaDefinitionError, SchemaFieldError
from pycriteria.validation.helpers import validate_model


class RelationKind(StrEnum):
    ONE_TO_ONE = "one_to_one"
    ONE_TO_MANY = "one_to_many"
    MANY_TO_ONE = "many_to_one"
    MANY_TO_MANY = "many_to_many"


class SelectType(StrEnum):
    """How much of a joined entity a translator should select by default."""

    FULL_ENTITY = "FULL_ENTITY"
    ID_ONLY = "ID_ONLY"
    NO_SELECTION = "NO_SELECTION"


def coerce_select_type(value: SelectType | str | None) -> SelectType | None:
    if value is None:
        return None
    try:
        return SelectType(value)
    except ValueError:
        raise SchemaDefinitionError(
            f"Unknown select type: {value!r}",
            context={"select": value, "allowed": [s.value for s in SelectType]},
        ) from None


@dataclass(frozen=True)
class PivotField:
    """One side of a many-to-many linkage.

    Attributes:
        pivot_field: Column of the pivot source holding the foreign key.
        reference: Field of the linked schema that *pivot_field* points at.
    """

    pivot_field: str
    reference: str


Linkage = str | PivotField


def _coerce_linkage(value: Any) -> Any:
    if isinstance(value, Mapping):
        return PivotField(pivot_field=value.get("pivot_field"), reference=value.get("reference"))
    return value


@dataclass(frozen=True)
class RelationConfig:
    """A named relation from one schema to another.

    Linkage fields are plain field names for one-to-one, one-to-many and
    many-to-one relations, and :class:`PivotField` pairs plus a
    ``pivot_source_name`` for many-to-many relations. Whether the linkage
    matches the kind is checked when the relation is joined.
    """

    relation_alias: str
    target_source_name: str
    relation_kind: RelationKind
    local_field: Linkage
    relation_field: Linkage
    pivot_source_name: str | None = None
    default_select: SelectType | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        try:
            kind = RelationKind(self.relation_kind)
        except ValueError:
            raise SchemaDefinitionError(
                f"Unknown relation kind {self.relation_kind!r} for relation '{self.relation_alias}'",
                context={"relation_alias": self.relation_alias, "relation_kind": self.relation_kind},
            ) from None
        object.__setattr__(self, "relation_kind", kind)
        object.__setattr__(self, "default_select", coerce_select_type(self.default_select))
        object.__setattr__(self, "local_field", _coerce_linkage(self.local_field))
        object.__setattr__(self, "relation_field", _coerce_linkage(self.relation_field))
        object.__setattr__(self, "metadata", dict(self.metadata or {}))

    @property
    def is_pivot(self) -> bool:
        return self.relation_kind is RelationKind.MANY_TO_MANY


@dataclass(frozen=True)
class CriteriaSchema:
    """Static description of one entity: fields, identifier and relations."""

    source_name: str
    fields: tuple[str, ...]
    identifier_field: str
    relations: tuple[RelationConfig, ...] = ()
    alias: str | None = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.source_name:
            raise SchemaDefinitionError("Schema source_name must not be empty")

        fields = tuple(self.fields)
        if not fields:
            raise SchemaDefinitionError(
                f"Schema '{self.source_name}' must declare at least one field",
                context={"source_name": self.source_name},
            )
        duplicates = sorted({f for f in fields if fields.count(f) > 1})
        if duplicates:
            raise SchemaDefinitionError(
                f"Schema '{self.source_name}' declares duplicate fields: {duplicates}",
                context={"source_name": self.source_name, "duplicates": duplicates},
            )
        if self.identifier_field not in fields:
            raise SchemaDefinitionError(
                f"Identifier field '{self.identifier_field}' is not one of the fields of schema '{self.source_name}'",
                context={"source_name": self.source_name, "identifier_field": self.identifier_field},
            )

        relations = tuple(self.relations)
        aliases = [r.relation_alias for r in relations]
        duplicate_aliases = sorted({a for a in aliases if aliases.count(a) > 1})
        if duplicate_aliases:
            raise SchemaDefinitionError(
                f"Schema '{self.source_name}' declares duplicate relation aliases: {duplicate_aliases}",
                context={"source_name": self.source_name, "duplicates": duplicate_aliases},
            )

        object.__setattr__(self, "fields", fields)
        object.__setattr__(self, "relations", relations)
        object.__setattr__(self, "alias", self.alias or self.source_name)
        object.__setattr__(self, "metadata", dict(self.metadata or {}))

    @cached_property
    def relation_map(self) -> Mapping[str, RelationConfig]:
        """Relations keyed by alias, in declaration order."""
        return {r.relation_alias: r for r in self.relations}

    def get_relation(self, relation_alias: str) -> RelationConfig | None:
        return self.relation_map.get(relation_alias)

    def has_field(self, name: str) -> bool:
        return name in self.fields

    def assert_field(self, name: str) -> str:
        """Return *name* if it is a field of this schema.

        Raises:
            SchemaFieldError: If it is not.
        """
        if not isinstance(name, str) or name not in self.fields:
            raise SchemaFieldError(name, self.source_name)
        return name

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CriteriaSchema:
        """Build a schema from a plain mapping, e.g. one parsed from YAML.

        Raises:
            SchemaDefinitionError: If the document is malformed.
        """
        document = validate_model(SchemaDocument, data)
        return document.to_schema()


# ---------------------------------------------------------------------------
# Declarative documents
# ---------------------------------------------------------------------------


class PivotFieldDocument(BaseModel):
    model_config = ConfigDict(extra="forbid")

    pivot_field: str
    reference: str


class RelationDocument(BaseModel):
    """A relation as written in a configuration file."""

    model_config = ConfigDict(extra="forbid")

    relation_alias: str = Field(min_length=1)
    target_source_name: str = Field(min_length=1)
    relation_kind: RelationKind
    local_field: str | PivotFieldDocument
    relation_field: str | PivotFieldDocument
    pivot_source_name: str | None = None
    default_select: SelectType | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_config(self) -> RelationConfig:
        def linkage(value: str | PivotFieldDocument) -> Linkage:
            if isinstance(value, PivotFieldDocument):
                return PivotField(pivot_field=value.pivot_field, reference=value.reference)
            return value

        return RelationConfig(
            relation_alias=self.relation_alias,
            target_source_name=self.target_source_name,
            relation_kind=self.relation_kind,
            local_field=linkage(self.local_field),
            relation_field=linkage(self.relation_field),
            pivot_source_name=self.pivot_source_name,
            default_select=self.default_select,
            metadata=self.metadata,
        )


class SchemaDocument(BaseModel):
    """A schema as written in a configuration file.

    ``fields`` is read into ``field_names`` to keep clear of pydantic's own
    model attributes.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    source_name: str = Field(min_length=1)
    alias: str | None = None
    field_names: list[str] = Field(alias="fields", min_length=1)
    identifier_field: str
    relations: list[RelationDocument] = Field(default_factory=list)
    metadata: dict[str, Any] = Field(default_factory=dict)

    def to_schema(self) -> CriteriaSchema:
        return CriteriaSchema(
            source_name=self.source_name,
            alias=self.alias,
            fields=tuple(self.field_names),
            identifier_field=self.identifier_field,
            relations=tuple(r.to_config() for r in self.relations),
            metadata=self.metadata,
        )
