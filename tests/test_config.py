import argparse
import dataclasses

import pytest

from serving.config import ServerConfig, parse_args, parse_bool, root_url


def test_defaults():
    config = parse_args([], environ={})
    assert config == ServerConfig(port=3000, directory=".", disable_cache=False)
    assert config.open_browser is True


def test_go_style_flags():
    config = parse_args(["-dir", "./fixtures", "-port", "9001", "-disable-cache=true"], environ={})
    assert config.port == 9001
    assert config.directory == "./fixtures"
    assert config.disable_cache is True


def test_bare_bool_flags_mean_true():
    config = parse_args(["-disable-cache", "-port", "8080"], environ={})
    assert config.disable_cache is True
    assert config.port == 8080


def test_open_can_be_turned_off():
    assert parse_args(["-open=false"], environ={}).open_browser is False


def test_environment_supplies_defaults_and_flags_win():
    env = {"PORT": "4000", "SERVE_DIR": "/srv", "DISABLE_CACHE": "yes"}
    config = parse_args([], environ=env)
    assert (config.port, config.directory, config.disable_cache) == (4000, "/srv", True)

    config = parse_args(["-port", "5000", "-disable-cache=false"], environ=env)
    assert config.port == 5000
    assert config.disable_cache is False


def test_bad_port_exits_with_usage_error():
    with pytest.raises(SystemExit) as exc:
        parse_args(["-port", "abc"], environ={})
    assert exc.value.code == 2


@pytest.mark.parametrize("raw,expected", [("1", True), ("T", True), ("on", True),
                                          ("0", False), ("False", False), ("no", False)])
def test_parse_bool(raw, expected):
    assert parse_bool(raw) is expected


def test_parse_bool_rejects_garbage():
    with pytest.raises(argparse.ArgumentTypeError):
        parse_bool("maybe")


def test_config_is_immutable():
    config = ServerConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.port = 1


def test_root_url():
    assert root_url(9001) == "http://localhost:9001"
