"""Unit tests for typed environment accessors."""

import pytest

from common.config.env import get_env_bool, get_env_float, get_env_int, get_env_list, get_env_str


def test_unset_and_blank_values_use_default(monkeypatch):
    monkeypatch.delenv("QL_TEST_VALUE", raising=False)
    assert get_env_str("QL_TEST_VALUE", "d") == "d"
    monkeypatch.setenv("QL_TEST_VALUE", "   ")
    assert get_env_int("QL_TEST_VALUE", 7) == 7


def test_typed_parsing(monkeypatch):
    monkeypatch.setenv("QL_INT", " 42 ")
    monkeypatch.setenv("QL_FLOAT", "0.25")
    monkeypatch.setenv("QL_BOOL", "Yes")
    monkeypatch.setenv("QL_LIST", "a, b,,c")
    assert get_env_int("QL_INT") == 42
    assert get_env_float("QL_FLOAT") == 0.25
    assert get_env_bool("QL_BOOL") is True
    assert get_env_list("QL_LIST") == ["a", "b", "c"]


@pytest.mark.parametrize(
    "getter, raw",
    [(get_env_int, "1.5"), (get_env_float, "abc"), (get_env_bool, "maybe")],
)
def test_malformed_values_raise(monkeypatch, getter, raw):
    monkeypatch.setenv("QL_BAD", raw)
    with pytest.raises(ValueError) as exc_info:
        getter("QL_BAD")
    assert "QL_BAD" in str(exc_info.value)
