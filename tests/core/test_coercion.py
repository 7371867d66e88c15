import pytest

from discord_entities.core.coercion import (
    SNOWFLAKE_MAX,
    coerce_bool,
    coerce_int,
    coerce_snowflake,
    coerce_snowflake_list,
    coerce_str_list,
    require_mapping,
    require_snowflake,
    require_str,
)
from discord_entities.core.errors import PayloadError


class TestCoerceInt:
    def test_accepts_ints_and_numeric_strings(self) -> None:
        assert coerce_int(5) == 5
        assert coerce_int("42") == 42
        assert coerce_int("3.0") == 3
        assert coerce_int(2.9) == 2

    def test_rejects_bools_by_default(self) -> None:
        assert coerce_int(True) is None
        assert coerce_int(True, reject_bool=False) == 1

    def test_falls_back_to_default(self) -> None:
        assert coerce_int(None, default=7) == 7
        assert coerce_int("abc", default=-1) == -1
        assert coerce_int(float("inf"), default=0) == 0


class TestCoerceSnowflake:
    def test_string_and_int_forms(self) -> None:
        assert coerce_snowflake("175928847299117063") == 175928847299117063
        assert coerce_snowflake(175928847299117063) == 175928847299117063

    def test_out_of_range_and_garbage(self) -> None:
        assert coerce_snowflake(-1) is None
        assert coerce_snowflake(SNOWFLAKE_MAX + 1) is None
        assert coerce_snowflake("12a") is None
        assert coerce_snowflake(False) is None
        assert coerce_snowflake(1.5) is None

    def test_rejects_non_ascii_digits(self) -> None:
        assert coerce_snowflake("１２") is None
        assert coerce_snowflake("١٢٣") is None
        assert coerce_snowflake(" 12 ") == 12

    def test_list_skips_invalid_items(self) -> None:
        assert coerce_snowflake_list(["1", 2, "x", None]) == (1, 2)
        assert coerce_snowflake_list("1") == ()


def test_coerce_bool_only_accepts_real_bools() -> None:
    assert coerce_bool(True) is True
    assert coerce_bool("true") is False
    assert coerce_bool(None, default=True) is True


def test_coerce_str_list_filters_non_strings() -> None:
    assert coerce_str_list(["a", 1, "b"]) == ("a", "b")


def test_require_helpers_raise_payload_errors() -> None:
    with pytest.raises(PayloadError):
        require_mapping([], kind="guild")
    with pytest.raises(PayloadError) as excinfo:
        require_snowflake({"id": "nope"}, "id")
    assert excinfo.value.key == "id"
    with pytest.raises(PayloadError):
        require_str({"name": 3}, "name")
