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
"""Tests for the configuration system."""

from dataclasses import dataclass
from pathlib import Path

import pytest
from pydantic import BaseModel

from pycriteria.config.properties import CriteriaProperties, LoggingProperties
from pycriteria.core.config import Config, config_properties


class TestConfig:
    def test_get_nested_value(self):
        config = Config({"pycriteria": {"logging": {"format": "json"}}})
        assert config.get("pycriteria.logging.format") == "json"

    def test_get_with_default(self):
        assert Config({}).get("missing.key", "default") == "default"

    def test_get_section(self):
        config = Config({"pycriteria": {"criteria": {"schemas": []}}})
        assert config.get_section("pycriteria.criteria") == {"schemas": []}
        assert config.get_section("pycriteria.missing") == {}

    def test_env_var_override(self, monkeypatch):
        monkeypatch.setenv("PYCRITERIA_LOGGING_FORMAT", "json")
        config = Config({"pycriteria": {"logging": {"format": "console"}}})
        assert config.get("pycriteria.logging.format") == "json"

    def test_to_dict_is_a_copy(self):
        config = Config({"a": 1})
        config.to_dict()["a"] = 2
        assert config.get("a") == 1


class TestConfigFromFile:
    def test_library_defaults_are_loaded(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "missing.yaml")
        assert config.get("pycriteria.logging.format") == "console"
        assert config.get("pycriteria.criteria.validate_relations") is True
        assert config.loaded_sources == ["pycriteria-defaults.yaml (library defaults)"]

    def test_defaults_can_be_skipped(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "missing.yaml", load_defaults=False)
        assert config.to_dict() == {}

    def test_yaml_overrides_defaults(self, tmp_path: Path):
        path = tmp_path / "pycriteria.yaml"
        path.write_text("pycriteria:\n  logging:\n    format: json\n")
        config = Config.from_file(path)
        assert config.get("pycriteria.logging.format") == "json"
        assert config.get("pycriteria.logging.level.root") == "INFO"

    def test_toml_file(self, tmp_path: Path):
        path = tmp_path / "pycriteria.toml"
        path.write_text('[pycriteria.logging]\nformat = "json"\n')
        assert Config.from_file(path).get("pycriteria.logging.format") == "json"

    def test_profile_overlay(self, tmp_path: Path):
        base = tmp_path / "pycriteria.yaml"
        base.write_text("pycriteria:\n  logging:\n    format: console\n")
        (tmp_path / "pycriteria-prod.yaml").write_text("pycriteria:\n  logging:\n    format: json\n")

        config = Config.from_file(base, active_profiles=["prod", "missing"])
        assert config.get("pycriteria.logging.format") == "json"
        assert len(config.loaded_sources) == 3


class TestBind:
    def test_bind_logging_properties(self):
        config = Config({"pycriteria": {"logging": {"level": {"root": "DEBUG", "pycriteria.criteria": "WARNING"}}}})
        props = config.bind(LoggingProperties)
        assert props.format == "console"
        assert props.level == {"root": "DEBUG", "pycriteria.criteria": "WARNING"}

    def test_bind_coerces_strings(self):
        config = Config({"pycriteria": {"criteria": {"validate_relations": "false"}}})
        assert config.bind(CriteriaProperties).validate_relations is False

    def test_bind_pydantic_model(self):
        @config_properties(prefix="pycriteria.translator")
        class TranslatorSettings(BaseModel):
            dialect: str = "sqlite"
            max_depth: int = 4

        config = Config({"pycriteria": {"translator": {"max_depth": "8"}}})
        settings = config.bind(TranslatorSettings)
        assert settings.dialect == "sqlite"
        assert settings.max_depth == 8

    def test_bind_pydantic_validation_error(self):
        @config_properties(prefix="pycriteria.translator")
        class TranslatorSettings(BaseModel):
            max_depth: int

        with pytest.raises(ValueError, match="Configuration validation failed"):
            Config({}).bind(TranslatorSettings)

    def test_bind_requires_decorator(self):
        @dataclass
        class Plain:
            value: int = 1

        with pytest.raises(ValueError):
            Config({}).bind(Plain)
