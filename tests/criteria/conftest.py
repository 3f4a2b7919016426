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
"""Shared schemas for criteria tests: users, posts, comments, permissions, addresses."""

from __future__ import annotations

import pytest

from pycriteria.criteria.context import CriteriaContext
from pycriteria.criteria.schema import CriteriaSchema, PivotField, RelationConfig, RelationKind

USER_SCHEMA = CriteriaSchema(
    source_name="user",
    alias="users",
    fields=("uuid", "email", "username", "created_at"),
    identifier_field="uuid",
    relations=(
        RelationConfig(
            relation_alias="permissions",
            target_source_name="permission",
            relation_kind=RelationKind.MANY_TO_MANY,
            pivot_source_name="permission_user",
            local_field=PivotField(pivot_field="user_uuid", reference="uuid"),
            relation_field=PivotField(pivot_field="permission_uuid", reference="uuid"),
        ),
        RelationConfig(
            relation_alias="addresses",
            target_source_name="address",
            relation_kind=RelationKind.ONE_TO_MANY,
            local_field="uuid",
            relation_field="user_uuid",
        ),
        RelationConfig(
            relation_alias="posts",
            target_source_name="post",
            relation_kind=RelationKind.ONE_TO_MANY,
            local_field="uuid",
            relation_field="user_uuid",
        ),
    ),
)

POST_SCHEMA = CriteriaSchema(
    source_name="post",
    alias="posts",
    fields=("uuid", "categories", "title", "body", "user_uuid", "created_at", "metadata"),
    identifier_field="uuid",
    metadata={"engine": "innodb"},
    relations=(
        RelationConfig(
            relation_alias="comments",
            target_source_name="post_comment",
            relation_kind=RelationKind.ONE_TO_MANY,
            local_field="uuid",
            relation_field="post_uuid",
        ),
        RelationConfig(
            relation_alias="publisher",
            target_source_name="user",
            relation_kind=RelationKind.MANY_TO_ONE,
            local_field="user_uuid",
            relation_field="uuid",
            metadata={"hint": "publisher"},
        ),
    ),
)

COMMENT_SCHEMA = CriteriaSchema(
    source_name="post_comment",
    alias="comments",
    fields=("uuid", "comment_text", "user_uuid", "post_uuid", "created_at"),
    identifier_field="uuid",
    relations=(
        RelationConfig(
            relation_alias="post",
            target_source_name="post",
            relation_kind=RelationKind.MANY_TO_ONE,
            local_field="post_uuid",
            relation_field="uuid",
        ),
        RelationConfig(
            relation_alias="user",
            target_source_name="user",
            relation_kind=RelationKind.MANY_TO_ONE,
            local_field="user_uuid",
            relation_field="uuid",
        ),
    ),
)

PERMISSION_SCHEMA = CriteriaSchema(
    source_name="permission",
    alias="permissions",
    fields=("uuid", "name", "created_at"),
    identifier_field="uuid",
    relations=(
        RelationConfig(
            relation_alias="users",
            target_source_name="user",
            relation_kind=RelationKind.MANY_TO_MANY,
            pivot_source_name="permission_user",
            local_field=PivotField(pivot_field="permission_uuid", reference="uuid"),
            relation_field=PivotField(pivot_field="user_uuid", reference="uuid"),
        ),
    ),
)

ADDRESS_SCHEMA = CriteriaSchema(
    source_name="address",
    alias="addresses",
    fields=("uuid", "direction", "user_uuid", "created_at"),
    identifier_field="uuid",
    relations=(
        RelationConfig(
            relation_alias="user",
            target_source_name="user",
            relation_kind=RelationKind.MANY_TO_ONE,
            local_field="user_uuid",
            relation_field="uuid",
        ),
    ),
)


@pytest.fixture
def user_schema() -> CriteriaSchema:
    return USER_SCHEMA


@pytest.fixture
def post_schema() -> CriteriaSchema:
    return POST_SCHEMA


@pytest.fixture
def comment_schema() -> CriteriaSchema:
    return COMMENT_SCHEMA


@pytest.fixture
def permission_schema() -> CriteriaSchema:
    return PERMISSION_SCHEMA


@pytest.fixture
def address_schema() -> CriteriaSchema:
    return ADDRESS_SCHEMA


@pytest.fixture
def context() -> CriteriaContext:
    """A fresh sequence counter, isolated from the process-wide one."""
    return CriteriaContext()
