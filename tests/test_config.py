"""
Tests for settings resolution.
"""

from pathlib import Path

import pytest

from dcl.core.config import Settings, load_settings, read_config_file
from dcl.core.errors import ConfigError


def test_missing_config_file_gives_defaults(isolated_config):
    settings = load_settings()
    assert settings.verbose is False
    assert settings.link_dir is None
    assert settings.config_file == isolated_config


def test_yaml_values_are_used(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("verbose: true\nlink_dir: /opt/dcl/bin\n")
    settings = load_settings()
    assert settings.verbose is True
    assert settings.link_dir == Path("/opt/dcl/bin")


def test_environment_overrides_yaml(isolated_config, monkeypatch):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("pager: true\ndebug: 1\n")
    monkeypatch.setenv("DCL_PAGER", "false")
    settings = load_settings()
    assert settings.pager is False
    assert settings.debug == 1


def test_bad_yaml_is_a_config_error(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("verbose: [unclosed\n")
    with pytest.raises(ConfigError):
        load_settings()


def test_non_mapping_yaml_is_a_config_error(tmp_path):
    path = tmp_path / "rc"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        read_config_file(path)


def test_invalid_value_is_a_config_error(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("debug: lots\n")
    with pytest.raises(ConfigError):
        load_settings()


def test_link_dir_and_target_default_to_invocation_directory():
    settings = Settings()
    assert settings.resolve_link_dir("/usr/local/bin/upcase") == Path("/usr/local/bin")
    assert settings.resolve_target("/usr/local/bin/upcase") == Path("/usr/local/bin/dcl")


def test_explicit_target():
    settings = Settings(link_dir=Path("/links"), target=Path("/opt/dcl"))
    assert settings.resolve_link_dir("/anywhere/copy") == Path("/links")
    assert settings.resolve_target("/anywhere/copy") == Path("/opt/dcl")
