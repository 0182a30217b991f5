# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab


from dataclasses import dataclass, field

import pytest

from dirzip_lib.core.config import Config, _dict_to_dataclass


def test_dict_to_dataclass_nested_conversion():
    @dataclass
    class Inner:
        value: int = 0

    @dataclass
    class Outer:
        inner: Inner = field(default_factory=Inner)
        name: str = "default"

    data = {"inner": {"value": 99}, "name": "outer"}
    result = _dict_to_dataclass(Outer, data)

    assert isinstance(result.inner, Inner)
    assert result.inner.value == 99
    assert result.name == "outer"


def test_dict_to_dataclass_extra_fields_ignored():
    @dataclass
    class Simple:
        valid: str = "default"

    result = _dict_to_dataclass(Simple, {"valid": "value", "invalid": "ignored"})

    assert result.valid == "value"
    assert not hasattr(result, "invalid")


def test_get_config_path_env_variable_highest_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "custom_config.toml"
    config_file.write_text("")
    (tmp_path / "dirzip_config.toml").write_text("")

    monkeypatch.setenv("DZ_CONFIG", str(config_file))
    monkeypatch.chdir(tmp_path)

    assert Config._get_config_path() == config_file


def test_get_config_path_current_directory_second_priority(tmp_path, monkeypatch):
    config_file = tmp_path / "dirzip_config.toml"
    config_file.write_text("")

    xdg_config = tmp_path / "config"
    (xdg_config / "dirzip").mkdir(parents=True)
    (xdg_config / "dirzip" / "config.toml").write_text("")

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DZ_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))

    assert Config._get_config_path() == config_file


def test_get_config_path_xdg_config_home_third_priority(tmp_path, monkeypatch):
    xdg_config = tmp_path / "config"
    (xdg_config / "dirzip").mkdir(parents=True)
    config_file = xdg_config / "dirzip" / "config.toml"
    config_file.write_text("")

    other_dir = tmp_path / "other"
    other_dir.mkdir()

    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg_config))
    monkeypatch.chdir(other_dir)
    monkeypatch.delenv("DZ_CONFIG", raising=False)

    assert Config._get_config_path() == config_file


def test_get_config_path_returns_none_when_no_config_exists(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DZ_CONFIG", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "nonexistent"))

    assert Config._get_config_path() is None


def test_load_with_explicit_path(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("""
binary_name = "dz"
archive_suffix = ".dz"

[archiver]
compress_level = 9
remove_partial_archive = false

[extractor]
chunk_size = 4096

[exit_codes]
default = 100
""")

    config = Config.load(config_file)

    assert config.binary_name == "dz"
    assert config.archive_suffix == ".dz"
    assert config.archiver.compress_level == 9
    assert config.archiver.remove_partial_archive is False
    assert config.extractor.chunk_size == 4096
    assert config.exit_codes.default == 100

    # non-overriden values
    assert config.archiver.chunk_size == 1024 * 1024
    assert config.archiver.file_mode == 0o644
    assert config.exit_codes.unexpected_error == 99


def test_load_returns_defaults_when_file_missing(tmp_path):
    assert Config.load(tmp_path / "does_not_exist.toml") == Config()


def test_load_empty_config_file_uses_all_defaults(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("")

    assert Config.load(config_file) == Config()


def test_load_without_path_searches_standard_locations(tmp_path, monkeypatch):
    (tmp_path / "dirzip_config.toml").write_text('binary_name = "dz"\n')

    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DZ_CONFIG", raising=False)

    assert Config.load().binary_name == "dz"


def test_load_invalid_toml_raises_value_error(tmp_path):
    config_file = tmp_path / "config.toml"
    config_file.write_text("[archiver\ncompress_level = ")

    with pytest.raises(ValueError, match="Could not read dirzip config"):
        Config.load(config_file)
