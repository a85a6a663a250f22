from datetime import time

import pytest

from kimai_cli.config import Config, load_config
from kimai_cli.exceptions import ConfigError


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "kimai.toml"
    path.write_text('endpoint = "https://kimai.example.com"\ntoken = "file-token"\n')
    return path


def test_loads_file_with_default_start_time(config_file):
    assert load_config(str(config_file), environ={}) == Config(
        endpoint="https://kimai.example.com", token="file-token", default_start_time=time(9, 0)
    )


def test_environment_overrides_file(config_file):
    config = load_config(
        str(config_file),
        environ={"KIMAI_TOKEN": "env-token", "KIMAI_DEFAULT_START_TIME": "08:30"},
    )
    assert config.endpoint == "https://kimai.example.com"
    assert config.token == "env-token"
    assert config.default_start_time == time(8, 30)


def test_environment_alone_is_enough(tmp_path):
    config = load_config(
        str(tmp_path / "missing.toml"),
        environ={"KIMAI_ENDPOINT": "https://k.example.com", "KIMAI_TOKEN": "t"},
    )
    assert config == Config(endpoint="https://k.example.com", token="t")


def test_config_path_from_environment(config_file):
    config = load_config(environ={"KIMAI_CONFIG": str(config_file)})
    assert config.token == "file-token"


def test_default_file_in_working_directory(config_file, monkeypatch):
    monkeypatch.chdir(config_file.parent)
    assert load_config(environ={}).endpoint == "https://kimai.example.com"


def test_toml_local_time(tmp_path):
    path = tmp_path / "kimai.toml"
    path.write_text('endpoint = "e"\ntoken = "t"\ndefault_start_time = 07:45:00\n')
    assert load_config(str(path), environ={}).default_start_time == time(7, 45)


@pytest.mark.parametrize("missing", ["endpoint", "token"])
def test_missing_required_field(tmp_path, missing):
    values = {"endpoint": "e", "token": "t"}
    del values[missing]
    path = tmp_path / "kimai.toml"
    path.write_text("".join(f'{k} = "{v}"\n' for k, v in values.items()))

    with pytest.raises(ConfigError, match=missing):
        load_config(str(path), environ={})


def test_empty_token_is_missing(config_file):
    with pytest.raises(ConfigError, match="token"):
        load_config(str(config_file), environ={"KIMAI_TOKEN": ""})


def test_wrong_type(tmp_path):
    path = tmp_path / "kimai.toml"
    path.write_text('endpoint = "e"\ntoken = 42\n')
    with pytest.raises(ConfigError, match="must be a string"):
        load_config(str(path), environ={})


def test_malformed_toml(tmp_path):
    path = tmp_path / "kimai.toml"
    path.write_text("endpoint = \n")
    with pytest.raises(ConfigError, match="Failed to load configuration"):
        load_config(str(path), environ={})


def test_invalid_start_time(config_file):
    with pytest.raises(ConfigError, match="default_start_time"):
        load_config(str(config_file), environ={"KIMAI_DEFAULT_START_TIME": "25:99"})


def test_start_time_with_offset_is_rejected(config_file):
    with pytest.raises(ConfigError, match="without offset"):
        load_config(str(config_file), environ={"KIMAI_DEFAULT_START_TIME": "09:00+02:00"})
