"""
Unit Tests for the Config File Locator

Tests that the bootstrap options are found wherever they appear among
arguments the locator doesn't know about.

Author: Blockstore Ingester Project
License: MIT
"""

import pytest

from blockstore_ingester.config.locator import BootstrapOptions, parse_config_file_parameter


class TestParseConfigFileParameter:
    """Test suite for parse_config_file_parameter."""

    def test_empty_arguments(self):
        """Test that no arguments gives empty options."""
        assert parse_config_file_parameter([]) == BootstrapOptions(config_file="", expand_env=False)

    def test_only_unknown_arguments(self):
        """Test arguments without bootstrap options."""
        options = parse_config_file_parameter(["--server.http-listen-port", "80", "-target=ingester"])

        assert options.config_file == ""
        assert options.expand_env is False

    @pytest.mark.parametrize("args", [
        ["--config.file", "cfg.yaml", "--config.expand-env"],
        ["--config.file=cfg.yaml", "--unknown", "x", "--config.expand-env"],
        ["--unknown", "--config.file", "cfg.yaml", "positional", "--config.expand-env"],
        ["positional", "--other=1", "--config.expand-env", "-x", "--config.file", "cfg.yaml"],
        ["-config.file", "cfg.yaml", "-config.expand-env", "trailing"],
        ["--a", "--b", "--c", "--config.expand-env", "--d", "--config.file=cfg.yaml"],
    ])
    def test_finds_options_at_any_position(self, args):
        """Test recovery of both options among unrelated arguments."""
        options = parse_config_file_parameter(args)

        assert options.config_file == "cfg.yaml"
        assert options.expand_env is True

    def test_config_file_without_expand_env(self):
        """Test that expand_env defaults to False."""
        options = parse_config_file_parameter(["--log.level", "DEBUG", "--config.file", "/etc/ingester.yaml"])

        assert options.config_file == "/etc/ingester.yaml"
        assert options.expand_env is False

    def test_expand_env_without_config_file(self):
        """Test the switch alone."""
        options = parse_config_file_parameter(["--config.expand-env"])

        assert options.config_file == ""
        assert options.expand_env is True

    def test_last_occurrence_wins(self):
        """Test repeated config file option."""
        options = parse_config_file_parameter(["--config.file", "a.yaml", "--config.file", "b.yaml"])

        assert options.config_file == "b.yaml"

    def test_explicit_true_value(self):
        """Test --config.expand-env=true."""
        options = parse_config_file_parameter(["--config.file", "c.yaml", "--config.expand-env=true"])

        assert options.config_file == "c.yaml"
        assert options.expand_env is True

    def test_explicit_false_overrides_earlier_switch(self):
        """Test that a later =false turns expansion off."""
        options = parse_config_file_parameter(["--config.expand-env", "--other", "--config.expand-env=false"])

        assert options.expand_env is False

    def test_single_dash_explicit_value(self):
        options = parse_config_file_parameter(["-config.expand-env=1", "-config.file=c.yaml"])

        assert options == BootstrapOptions(config_file="c.yaml", expand_env=True)

    def test_missing_value_is_ignored(self):
        """Test that a dangling option doesn't raise."""
        options = parse_config_file_parameter(["--config.file"])

        assert options.config_file == ""

    def test_empty_path_is_not_specified(self):
        """Test that an empty path means no config file."""
        options = parse_config_file_parameter(["--config.file="])

        assert options.config_file == ""

    def test_help_is_not_handled(self, capsys):
        """Test that -h neither exits nor prints."""
        options = parse_config_file_parameter(["-h", "--config.file", "cfg.yaml"])

        assert options.config_file == "cfg.yaml"
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_arguments_not_mutated(self):
        """Test that the input list is left untouched."""
        args = ["--x", "--config.file", "cfg.yaml"]
        parse_config_file_parameter(args)

        assert args == ["--x", "--config.file", "cfg.yaml"]
