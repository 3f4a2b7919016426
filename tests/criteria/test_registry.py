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
"""Tests for SchemaRegistry: registration, relation checks and config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from pycriteria.core.config import Config
from pycriteria.criteria.registry import SchemaRegistry
from pycriteria.criteria.schema import CriteriaSchema
from pycriteria.kernel.exceptions import SchemaDefinitionError

USER_DOC = {
    "source_name": "user",
    "fields": ["uuid", "email"],
    "identifier_field": "uuid",
    "relations": [
        {
            "relation_alias": "posts",
            "target_source_name": "post",
            "relation_kind": "one_to_many",
            "local_field": "uuid",
            "relation_field": "user_uuid",
        }
    ],
}
POST_DOC = {"source_name": "post", "fields": ["uuid", "user_uuid"], "identifier_field": "uuid"}


class TestSchemaRegistry:
    def test_register_and_get(self, user_schema: CriteriaSchema) -> None:
        registry = SchemaRegistry()
        registry.register(user_schema)
        assert registry.get("user") is user_schema
        assert "user" in registry
        assert len(registry) == 1
        assert list(registry) == [user_schema]

    def test_duplicate_registration_raises(self, user_schema: CriteriaSchema) -> None:
        registry = SchemaRegistry()
        registry.register(user_schema)
        with pytest.raises(SchemaDefinitionError):
            registry.register(user_schema)

    def test_get_unknown_raises(self) -> None:
        with pytest.raises(SchemaDefinitionError):
            SchemaRegistry().get("user")

    def test_validate_relations_lists_dangling(self, user_schema: CriteriaSchema) -> None:
        registry = SchemaRegistry()
        registry.register(user_schema)
        with pytest.raises(SchemaDefinitionError) as exc_info:
            registry.validate_relations()
        assert "user.posts -> post" in exc_info.value.context["dangling"]

    def test_validate_relations_passes_when_complete(
        self,
        user_schema: CriteriaSchema,
        post_schema: CriteriaSchema,
        comment_schema: CriteriaSchema,
        permission_schema: CriteriaSchema,
        address_schema: CriteriaSchema,
    ) -> None:
        registry = SchemaRegistry()
        for schema in (user_schema, post_schema, comment_schema, permission_schema, address_schema):
            registry.register(schema)
        registry.validate_relations()


class TestSchemaRegistryFromConfig:
    def test_from_config(self) -> None:
        config = Config({"pycriteria": {"criteria": {"schemas": [USER_DOC, POST_DOC]}}})
        registry = SchemaRegistry.from_config(config)
        assert len(registry) == 2
        assert registry.get("user").get_relation("posts") is not None

    def test_from_config_validates_relations(self) -> None:
        config = Config({"pycriteria": {"criteria": {"schemas": [USER_DOC]}}})
        with pytest.raises(SchemaDefinitionError):
            SchemaRegistry.from_config(config)

    def test_relation_validation_can_be_disabled(self) -> None:
        config = Config({"pycriteria": {"criteria": {"schemas": [USER_DOC], "validate_relations": False}}})
        assert len(SchemaRegistry.from_config(config)) == 1

    def test_empty_config(self) -> None:
        assert len(SchemaRegistry.from_config(Config({}))) == 0

    def test_from_yaml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "pycriteria.yaml"
        path.write_text(
            """
pycriteria:
  criteria:
    schemas:
      - source_name: user
        alias: users
        fields: [uuid, email]
        identifier_field: uuid
        relations:
          - relation_alias: posts
            target_source_name: post
            relation_kind: one_to_many
            local_field: uuid
            relation_field: user_uuid
      - source_name: post
        fields: [uuid, user_uuid]
        identifier_field: uuid
"""
        )
        registry = SchemaRegistry.from_file(path)
        assert registry.get("user").alias == "users"
        assert "post" in registry

    def test_from_toml_file(self, tmp_path: Path) -> None:
        path = tmp_path / "pycriteria.toml"
        path.write_text(
            """
[[pycriteria.criteria.schemas]]
source_name = "post"
fields = ["uuid", "title"]
identifier_field = "uuid"
"""
        )
        registry = SchemaRegistry.from_file(path)
        assert registry.get("post").fields == ("uuid", "title")
