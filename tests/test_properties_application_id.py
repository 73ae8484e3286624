# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

import pytest

from ys_lib.core.error import YSError
from ys_lib.properties.application_id import ApplicationId


def test_from_string_valid():
    app_id = ApplicationId.fromString("application_1700000000000_0042")

    assert app_id.cluster_timestamp == 1700000000000
    assert app_id.sequence == 42


def test_from_string_strips_whitespace():
    assert ApplicationId.fromString(" application_1_0001 \n") == ApplicationId(1, 1)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "application_1",
        "application_x_0001",
        "app_1700000000000_0042",
        "application_1700000000000_0042_extra",
        "22.33.44.55:asf6655",
    ],
)
def test_from_string_invalid(text):
    with pytest.raises(YSError, match="Invalid application ID"):
        ApplicationId.fromString(text)


@pytest.mark.parametrize(
    "app_id, expected",
    [
        (ApplicationId(1700000000000, 42), "application_1700000000000_0042"),
        (ApplicationId(1700000000000, 12345), "application_1700000000000_12345"),
    ],
)
def test_str(app_id, expected):
    assert str(app_id) == expected
    assert ApplicationId.fromString(expected) == app_id
