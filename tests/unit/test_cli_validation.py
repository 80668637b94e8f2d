"""
Tests for the customizer CLI.

These tests verify that screen definitions are checked before rendering and
that every command reports failures through its exit code.
"""

import json

import pytest
import yaml

from customizer.cli import CustomizerCLI, create_parser, main
from customizer.manager import CustomizeManager


class TestCheck:
    """Test problems reported for a built manager"""

    @pytest.fixture
    def cli(self):
        """Create CLI instance for testing"""
        return CustomizerCLI()

    def test_clean_manager(self, cli, manager):
        manager.add_control("blogname")
        manager.add_control("accent_color", type="color")

        errors, warnings = cli.check(manager)

        assert errors == []
        assert warnings == []

    def test_unknown_setting_is_error(self, cli, manager):
        manager.add_control("site", settings={"default": "blogname", "extra": "nope"})

        errors, _ = cli.check(manager)

        assert errors == ["Control 'site' is bound to unknown settings: extra"]

    def test_choices_missing(self, cli, manager):
        manager.add_control("layout", type="radio")
        _, warnings = cli.check(manager)
        assert "Control 'layout' has no choices and will render nothing" in warnings

    def test_unknown_type(self, cli, manager):
        manager.add_control("layout", type="slider")
        _, warnings = cli.check(manager)
        assert any("unknown type 'slider'" in warning for warning in warnings)

    def test_input_types_are_known(self, cli, manager):
        manager.add_control("blogname", type="email")
        _, warnings = cli.check(manager)
        assert warnings == []

    def test_dropdown_pages_without_pages(self, cli):
        manager = CustomizeManager()
        manager.add_setting("page_on_front")
        manager.add_control("page_on_front", type="dropdown-pages")

        _, warnings = cli.check(manager)

        assert warnings == ["Control 'page_on_front' lists pages but no pages are defined"]

    def test_no_controls(self, cli):
        _, warnings = cli.check(CustomizeManager())
        assert warnings == ["No controls defined"]


class TestValidateCommand:
    """Test the validate command"""

    def test_valid_config(self, config_file, capsys):
        result = main(["validate", str(config_file)])

        assert result == 0
        assert "Configuration is valid" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, capsys):
        result = main(["validate", str(tmp_path / "missing.yaml")])

        assert result == 1
        assert "Configuration not found" in capsys.readouterr().out

    def test_invalid_yaml(self, tmp_path, capsys):
        bad = tmp_path / "bad.yaml"
        bad.write_text("controls: [unclosed")

        result = main(["validate", str(bad)])

        assert result == 1
        assert "Validation FAILED" in capsys.readouterr().out

    def test_unknown_setting_fails(self, tmp_path, capsys):
        config_path = tmp_path / "theme.yaml"
        config_path.write_text(
            yaml.dump({"settings": {"blogname": {}}, "controls": {"tagline": {"label": "Tagline"}}})
        )

        result = main(["validate", str(config_path)])

        output = capsys.readouterr().out
        assert result == 1
        assert "ERROR: Control 'tagline' is bound to unknown settings: default" in output

    def test_warnings_do_not_fail(self, tmp_path, capsys):
        config_path = tmp_path / "theme.yaml"
        config_path.write_text(yaml.dump({"settings": {"layout": {}}, "controls": {"layout": {"type": "select"}}}))

        result = main(["validate", str(config_path)])

        output = capsys.readouterr().out
        assert result == 0
        assert "WARNING: Control 'layout' has no choices" in output


class TestOutputCommands:
    """Test render, json and templates"""

    def test_render(self, config_file, capsys):
        assert main(["render", str(config_file)]) == 0

        output = capsys.readouterr().out
        assert '<li id="customize-control-blogname"' in output
        assert 'value="Hello World"' in output
        assert "_wpCustomizeHeader" in output

    def test_json(self, config_file, capsys):
        assert main(["json", "--indent", "0", str(config_file)]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["settings"]["blogname"]["value"] == "Hello World"
        assert data["controls"]["accent_color"]["defaultValue"] == "#1e73be"

    def test_templates(self, config_file, capsys):
        assert main(["templates", str(config_file)]) == 0

        output = capsys.readouterr().out
        assert 'id="tmpl-customize-control-color-content"' in output
        assert 'id="tmpl-customize-control-upload-content"' in output

    def test_missing_file_returns_error(self, tmp_path):
        assert main(["render", str(tmp_path / "missing.yaml")]) == 1

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage: customizer" in capsys.readouterr().out


class TestParser:
    """Test argument parsing"""

    def test_log_level_default(self):
        args = create_parser().parse_args(["render", "theme.yaml"])
        assert args.log_level == "WARNING"
        assert args.config == "theme.yaml"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["--log-level", "TRACE", "render", "theme.yaml"])
