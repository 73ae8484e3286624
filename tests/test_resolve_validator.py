# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from pathlib import Path
from unittest.mock import patch

import pytest

from ys_lib.core.error import ShipFileNotFound
from ys_lib.resolve.validator import ShipFileValidator


def test_validate_returns_absolute_paths_in_order(tmp_path):
    file = tmp_path / "file.txt"
    file.write_text("content")
    directory = tmp_path / "lib"
    directory.mkdir()

    result = ShipFileValidator().validate([str(directory), file])

    assert result == [directory.resolve(), file.resolve()]
    assert all(p.is_absolute() for p in result)


def test_validate_resolves_relative_paths_against_base_dir(tmp_path):
    (tmp_path / "file.txt").write_text("content")

    result = ShipFileValidator(tmp_path).validate(["file.txt"])

    assert result == [(tmp_path / "file.txt").resolve()]


def test_validate_resolves_relative_paths_against_cwd(tmp_path, monkeypatch):
    (tmp_path / "file.txt").write_text("content")
    monkeypatch.chdir(tmp_path)

    assert ShipFileValidator().validate(["file.txt"]) == [
        (tmp_path / "file.txt").resolve()
    ]


def test_validate_empty():
    assert ShipFileValidator().validate([]) == []


def test_validate_second_path_missing(tmp_path):
    file = tmp_path / "file.txt"
    file.write_text("content")

    with pytest.raises(ShipFileNotFound) as e:
        ShipFileValidator(tmp_path).validate([str(file), "missing.file"])

    assert e.value.path == "missing.file"
    assert str(e.value) == "Ship file 'missing.file' does not exist."


def test_validate_stops_at_first_missing_path(tmp_path):
    with (
        patch.object(Path, "exists", return_value=False) as mock_exists,
        pytest.raises(ShipFileNotFound) as e,
    ):
        ShipFileValidator(tmp_path).validate(["first.missing", "second.missing"])

    assert e.value.path == "first.missing"
    mock_exists.assert_called_once()


@pytest.mark.parametrize("path", ["", "   "])
def test_validate_empty_path(tmp_path, path):
    with pytest.raises(ShipFileNotFound) as e:
        ShipFileValidator(tmp_path).validate([path])

    assert e.value.path == path


def test_validate_unknown_home_directory(tmp_path):
    with pytest.raises(ShipFileNotFound) as e:
        ShipFileValidator(tmp_path).validate(["~nosuchuser_ys_test/file"])

    assert e.value.path == "~nosuchuser_ys_test/file"
    assert isinstance(e.value.__cause__, RuntimeError)


def test_validate_unresolvable_path(tmp_path):
    with (
        patch.object(Path, "resolve", side_effect=OSError("loop")),
        pytest.raises(ShipFileNotFound) as e,
    ):
        ShipFileValidator(tmp_path).validate(["file.txt"])

    assert e.value.path == "file.txt"
