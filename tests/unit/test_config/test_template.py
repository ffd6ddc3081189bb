"""Tests for the starter config template."""

import json
from pathlib import Path

import yaml

from impact_analyzer.config.loader import load_config
from impact_analyzer.config.template import render_template, template_filename


class TestRenderTemplate:
    """Test starter config rendering."""

    def test_yaml_template_loads(self, tmp_path: Path) -> None:
        path = tmp_path / template_filename("yaml")
        path.write_text(render_template("yaml"))

        config = load_config(path)

        assert config.repos[0].name == "frontend"
        assert config.relations == []

    def test_json_template_loads(self, tmp_path: Path) -> None:
        path = tmp_path / template_filename("json")
        path.write_text(render_template("json"))

        config = load_config(path)

        assert config.output.formats == ["json", "markdown"]

    def test_templates_agree(self) -> None:
        from_yaml = yaml.safe_load(render_template("yaml"))
        from_json = json.loads(render_template("json"))

        assert from_yaml["repos"] == from_json["repos"]

    def test_filenames(self) -> None:
        assert template_filename("yaml") == "impact.config.yaml"
        assert template_filename("json") == "impact.config.json"
