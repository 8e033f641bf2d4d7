"""
Unit tests for startup configuration: validation of merged settings, the
TOML loader and settings precedence.
"""

import pytest

from stayfocused.config import (
    DEFAULT_SETTINGS,
    load_monitor_settings,
    merge_settings,
    validate_monitor_config,
)
from stayfocused.models import ResourceKind
from stayfocused.validation import ConfigurationError, ValidationError


@pytest.mark.unit
class TestMonitorConfigValidation:
    """Building MonitorConfig from raw settings."""

    def test_module_configuration(self, sample_settings):
        config = validate_monitor_config(sample_settings)

        assert config.resource_kind is ResourceKind.MODULE
        assert config.resource_name == "uvcvideo"
        assert config.check_interval == 60.0
        assert config.refocus_interval == 10.0
        assert config.session_lifetime == 50.0
        assert config.corrective_command == ("/usr/local/bin/refocus", "--camera", "0")

    def test_process_takes_priority_over_module(self, sample_settings):
        sample_settings["process"] = "/opt/zoom/aomhost"

        config = validate_monitor_config(sample_settings)

        assert config.resource_kind is ResourceKind.PROCESS
        assert config.resource_name == "/opt/zoom/aomhost"

    @pytest.mark.parametrize("process, module", [("", ""), (None, None), ("  ", "")])
    def test_missing_resource_is_rejected(self, sample_settings, process, module):
        sample_settings["process"] = process
        sample_settings["module"] = module

        with pytest.raises(ConfigurationError, match="Either process or module is required"):
            validate_monitor_config(sample_settings)

    def test_missing_command_is_rejected(self, sample_settings):
        sample_settings["command"] = []

        with pytest.raises(ConfigurationError, match="refocus command is required"):
            validate_monitor_config(sample_settings)

    def test_v4l2_builds_command_from_device(self, sample_settings):
        sample_settings.update(v4l2=True, device="/dev/video1", command=[])

        config = validate_monitor_config(sample_settings)

        assert list(config.corrective_command) == [
            "v4l2-ctl", "-d", "/dev/video1", "--set-ctrl", "focus_automatic_continuous=1",
        ]

    def test_v4l2_wins_over_positional_command(self, sample_settings):
        sample_settings["v4l2"] = True

        config = validate_monitor_config(sample_settings)

        assert config.corrective_command[0] == "v4l2-ctl"

    @pytest.mark.parametrize("field", ["check", "refocus"])
    @pytest.mark.parametrize("value", [0, -1, "soon", None, True])
    def test_intervals_must_be_positive_numbers(self, sample_settings, field, value):
        sample_settings[field] = value

        with pytest.raises(ConfigurationError) as exc_info:
            validate_monitor_config(sample_settings)

        assert exc_info.value.field_name == field

    @pytest.mark.parametrize("check, refocus", [(1, 60), (1, 90), (0.5, 30)])
    def test_refocus_not_shorter_than_check_is_rejected(self, sample_settings, check, refocus):
        sample_settings.update(check=check, refocus=refocus)

        with pytest.raises(ConfigurationError, match="must be shorter than the check interval"):
            validate_monitor_config(sample_settings)

    def test_fractional_intervals(self, sample_settings):
        sample_settings.update(check=0.5, refocus=2.5)

        config = validate_monitor_config(sample_settings)

        assert config.check_interval == 30.0
        assert config.refocus_interval == 2.5

    def test_command_must_be_strings(self, sample_settings):
        sample_settings["command"] = ["refocus", 3]

        with pytest.raises(ConfigurationError):
            validate_monitor_config(sample_settings)

    def test_configuration_error_is_a_validation_error(self, sample_settings):
        sample_settings.update(v4l2=True, device="")

        with pytest.raises(ValidationError) as exc_info:
            validate_monitor_config(sample_settings)

        assert exc_info.value.field_name == "device"

    @pytest.mark.parametrize("device", ["", None])
    def test_device_not_required_with_explicit_command(self, sample_settings, device):
        sample_settings["device"] = device

        config = validate_monitor_config(sample_settings)

        assert config.corrective_command == ("/usr/local/bin/refocus", "--camera", "0")
        assert config.device == ""
        assert "Device:" not in config.describe()

    def test_config_is_immutable(self, sample_settings):
        config = validate_monitor_config(sample_settings)

        with pytest.raises(AttributeError):
            config.check_interval = 1

    def test_describe_mentions_resource_and_command(self, sample_settings):
        description = validate_monitor_config(sample_settings).describe()

        assert "Watching module for use: uvcvideo" in description
        assert "Checking if in use every: 1m" in description
        assert "Refocus command: /usr/local/bin/refocus --camera 0" in description
        assert "Will run refocus command every: 10s" in description


@pytest.mark.unit
class TestSettingsLoading:
    """TOML config file and settings precedence."""

    def test_load_monitor_table(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[monitor]\nprocess = "zoom"\ncheck = 5\ncommand = ["refocus", "-x"]\n'
        )

        assert load_monitor_settings(path) == {"process": "zoom", "check": 5, "command": ["refocus", "-x"]}

    def test_unknown_keys_are_ignored(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text('[monitor]\nmodule = "uvcvideo"\ncolour = "blue"\n')

        assert load_monitor_settings(path) == {"module": "uvcvideo"}
        assert "colour" in caplog.text

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="not found"):
            load_monitor_settings(tmp_path / "nope.toml")

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[monitor\nmodule = ")

        with pytest.raises(ConfigurationError, match="Error parsing"):
            load_monitor_settings(path)

    def test_monitor_must_be_a_table(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('monitor = "uvcvideo"\n')

        with pytest.raises(ConfigurationError):
            load_monitor_settings(path)

    def test_defaults(self):
        merged = merge_settings(None, {})

        assert merged == DEFAULT_SETTINGS
        assert merged["module"] == "uvcvideo"
        assert merged["device"] == "/dev/video0"
        assert merged["check"] == 1
        assert merged["refocus"] == 10

    def test_cli_overrides_file_overrides_defaults(self):
        file_settings = {"module": "gspca", "check": 5, "command": ["from-file"]}
        cli_settings = {"module": None, "check": 2, "refocus": None, "command": []}

        merged = merge_settings(file_settings, cli_settings)

        assert merged["module"] == "gspca"
        assert merged["check"] == 2
        assert merged["refocus"] == 10
        assert merged["command"] == ["from-file"]

    def test_cli_command_replaces_file_command(self):
        merged = merge_settings({"command": ["from-file"]}, {"command": ["from-cli", "--now"]})

        assert merged["command"] == ["from-cli", "--now"]
