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
"""SchemaRegistry: schemas by source name, optionally loaded from config.

Configuration layout::

    pycriteria:
      criteria:
        validate_relations: true
        schemas:
          - source_name: user
            fields: [uuid, email]
            identifier_field: uuid
            relations:
              - relation_alias: posts
                target_source_name: post
                relation_kind: one_to_many
                local_field: uuid
                relation_field: user_uuid
"""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import structlog

from pycriteria.config.properties.criteria import CriteriaProperties
from pycriteria.core.config import Config
from pycriteria.criteria.schema import CriteriaSchema
from pycriteria.kernel.exceptions import SchemaDefinitionError

logger = structlog.get_logger("pycriteria.criteria.registry")


class SchemaRegistry:
    """Holds the schemas of an application, keyed by ``source_name``."""

    def __init__(self) -> None:
        self._schemas: dict[str, CriteriaSchema] = {}

    def register(self, schema: CriteriaSchema) -> CriteriaSchema:
        if schema.source_name in self._schemas:
            raise SchemaDefinitionError(
                f"Schema '{schema.source_name}' is already registered",
                context={"source_name": schema.source_name},
            )
        self._schemas[schema.source_name] = schema
        logger.debug(
            "schema_registered",
            source_name=schema.source_name,
            alias=schema.alias,
            relations=[r.relation_alias for r in schema.relations],
        )
        return schema

    def get(self, source_name: str) -> CriteriaSchema:
        try:
            return self._schemas[source_name]
        except KeyError:
            raise SchemaDefinitionError(
                f"No schema registered for '{source_name}'",
                context={"source_name": source_name, "registered": sorted(self._schemas)},
            ) from None

    def __contains__(self, source_name: object) -> bool:
        return source_name in self._schemas

    def __iter__(self) -> Iterator[CriteriaSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)

    def validate_relations(self) -> None:
        """Check every relation points at a registered schema.

        Raises:
            SchemaDefinitionError: Listing every dangling relation.
        """
        dangling = [
            f"{schema.source_name}.{relation.relation_alias} -> {relation.target_source_name}"
            for schema in self._schemas.values()
            for relation in schema.relations
            if relation.target_source_name not in self._schemas
        ]
        if dangling:
            raise SchemaDefinitionError(
                f"Relations target unregistered schemas: {', '.join(dangling)}",
                context={"dangling": dangling},
            )

    @classmethod
    def from_config(cls, config: Config) -> SchemaRegistry:
        """Build a registry from ``pycriteria.criteria.schemas``."""
        properties = config.bind(CriteriaProperties)
        registry = cls()
        for document in properties.schemas:
            registry.register(CriteriaSchema.from_dict(document))
        if properties.validate_relations:
            registry.validate_relations()
        logger.debug("schema_registry_loaded", schemas=len(registry))
        return registry

    @classmethod
    def from_file(cls, path: str | Path, active_profiles: list[str] | None = None) -> SchemaRegistry:
        """Build a registry from a YAML or TOML configuration file."""
        return cls.from_config(Config.from_file(path, active_profiles=active_profiles))
