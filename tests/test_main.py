"""
Tests for the flatdb command line.
"""

from pathlib import Path

import pytest

from flatdb.__main__ import main, parse_value
from flatdb.core.codec import Float32, Int32, Int64, String


@pytest.fixture
def store_path(tmp_path: Path) -> str:
    return str(tmp_path / "cli.flatdb")


@pytest.mark.parametrize(
    "type_name, text, expected",
    [
        pytest.param("int32", "-5", Int32(-5), id="int32"),
        pytest.param("int64", "0x10", Int64(16), id="int64-hex"),
        pytest.param("float32", "1.5", Float32(1.5), id="float32"),
        pytest.param("string", "hello world", String("hello world"), id="string"),
    ],
)
def test_parse_value(type_name: str, text: str, expected: object) -> None:
    assert parse_value(type_name, text) == expected


def test_set_then_get(store_path: str, capsys: pytest.CaptureFixture[str]) -> None:
    """
    Test a set followed by a get in a separate invocation.

    Given: An empty store file
    When: A key is set and then read through two CLI calls
    Then: Both succeed and the get prints the type and value
    """

    # ACT
    set_status = main([store_path, "set", "a", "int32", "-5"])
    get_status = main([store_path, "get", "a"])

    # ASSERT
    assert set_status == 0
    assert get_status == 0
    assert capsys.readouterr().out == "OK\nint32 -5\n"


def test_keys_lists_file_order(store_path: str, capsys: pytest.CaptureFixture[str]) -> None:
    main([store_path, "set", "b", "string", "x"])
    main([store_path, "set", "a", "float64", "2.5"])
    capsys.readouterr()

    assert main([store_path, "keys"]) == 0
    assert capsys.readouterr().out == "b\na\n"


@pytest.mark.parametrize(
    "argv",
    [
        pytest.param(["get", "missing"], id="missing-key"),
        pytest.param(["set", "k", "int32", "abc"], id="bad-number"),
        pytest.param(["set", "k", "int32", str(2**31)], id="out-of-range"),
        pytest.param(["set", "k" * 51, "string", "v"], id="long-key"),
    ],
)
def test_errors_exit_with_status_one(store_path: str, capsys: pytest.CaptureFixture[str], argv: list[str]) -> None:
    assert main([store_path, *argv]) == 1
    assert capsys.readouterr().err.startswith("Error: ")
