# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from unittest.mock import MagicMock, patch

import pytest
import yaml
from rich.console import Console

from ys_lib.core.common import (
    get_current_user,
    get_panel_width,
    load_yaml_dumper,
    load_yaml_loader,
    split_key_value,
)


@pytest.mark.parametrize(
    "string, expected",
    [
        ("key=value", ("key", "value")),
        (" key = value ", ("key", "value")),
        ("env.java.opts.all=-DappName=foobar", ("env.java.opts.all", "-DappName=foobar")),
        ("pekko.ask.timeout=5 min", ("pekko.ask.timeout", "5 min")),
        ("key=", ("key", "")),
    ],
)
def test_split_key_value(string, expected):
    assert split_key_value(string) == expected


@pytest.mark.parametrize("string", ["novalue", "", "=value", "  =value"])
def test_split_key_value_invalid(string):
    assert split_key_value(string) is None


def test_get_current_user():
    with patch("ys_lib.core.common.getpass.getuser", return_value="alice"):
        assert get_current_user() == "alice"


@pytest.mark.parametrize(
    "term_width,factor,expected",
    [
        (100, 2, 50),
        (120, 3, 40),
        (81, 2, 40),
    ],
)
def test_get_panel_width_basic_division(term_width, factor, expected):
    console = MagicMock(spec=Console)
    console.size.width = term_width

    assert get_panel_width(console, factor, None, None) == expected


@pytest.mark.parametrize(
    "term_width,factor,min_width,max_width,expected",
    [
        (100, 4, 10, 40, 25),  # within range
        (100, 10, 20, 40, 20),  # below min
        (100, 2, 10, 30, 30),  # above max
    ],
)
def test_get_panel_width_with_min_and_max(
    term_width, factor, min_width, max_width, expected
):
    console = MagicMock(spec=Console)
    console.size.width = term_width

    assert get_panel_width(console, factor, min_width, max_width) == expected


def test_load_yaml_dumper_returns_dumper():
    dumper = load_yaml_dumper()

    assert issubclass(dumper, (yaml.Dumper, getattr(yaml, "CDumper", yaml.Dumper)))
    assert yaml.dump({"a": 1}, Dumper=dumper) == "a: 1\n"


def test_load_yaml_loader_returns_safe_loader():
    loader = load_yaml_loader()

    assert yaml.load("a: 1", Loader=loader) == {"a": 1}
    with pytest.raises(yaml.YAMLError):
        yaml.load("!!python/object:os.system {}", Loader=loader)
