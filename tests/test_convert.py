import math

import pytest

from gamesrv.convert import (
    make_key,
    make_uint32_key,
    parse_bool,
    parse_float32,
    parse_float64,
    parse_int32,
    parse_int64,
    parse_uint32,
    parse_uint64,
    to_string,
)


def test_parse_uint32_bounds():
    assert parse_uint32(str(2**32 - 1)) == 2**32 - 1
    assert parse_uint32(str(2**32)) == 0


@pytest.mark.parametrize("text", ["", "abc", "-1", "+1", "1.5", " 1", "1_0"])
def test_parse_uint32_invalid_is_zero(text):
    assert parse_uint32(text) == 0


def test_parse_int32_bounds_and_sign():
    assert parse_int32(str(-(2**31))) == -(2**31)
    assert parse_int32(str(2**31 - 1)) == 2**31 - 1
    assert parse_int32(str(2**31)) == 0
    assert parse_int32("+7") == 7
    assert parse_int32("x7") == 0


def test_parse_64_bit_bounds():
    assert parse_uint64(str(2**64 - 1)) == 2**64 - 1
    assert parse_uint64(str(2**64)) == 0
    assert parse_int64(str(-(2**63))) == -(2**63)
    assert parse_int64(str(2**63)) == 0


def test_parse_float64():
    assert parse_float64("1.5") == 1.5
    assert parse_float64("-2e3") == -2e3
    assert parse_float64("1e400") == 0.0
    assert parse_float64("abc") == 0.0
    assert parse_float64("0x1p-2") == 0.25
    assert parse_float64("inf") == math.inf
    assert math.isnan(parse_float64("NaN"))


def test_parse_float32_rounds_to_single_precision():
    value = parse_float32("0.1")
    assert value != 0.1
    assert abs(value - 0.1) < 1e-7
    assert parse_float32("1e39") == 0.0
    assert parse_float32("2.5") == 2.5


@pytest.mark.parametrize("text", ["1", "t", "T", "TRUE", "true", "True"])
def test_parse_bool_true_words(text):
    assert parse_bool(text) is True


@pytest.mark.parametrize("text", ["0", "f", "F", "FALSE", "false", "False", "yes", ""])
def test_parse_bool_false_words(text):
    assert parse_bool(text) is False


@pytest.mark.parametrize("number", [0, 1, -1, 2**31, -(2**63), 2**64 - 1])
def test_to_string_int_round_trip(number):
    assert parse_int64(to_string(number)) == number or parse_uint64(to_string(number)) == number


def test_to_string_bool_and_str():
    assert to_string(True) == "true"
    assert to_string(False) == "false"
    assert to_string("abc") == "abc"


def test_to_string_float_has_no_exponent():
    text = to_string(1e20)
    assert "e" not in text
    assert parse_float64(text) == 1e20
    assert to_string(2.5) == "2.5"
    assert to_string(3.0) == "3"


def test_to_string_unknown_type_is_empty():
    assert to_string(object()) == ""
    assert to_string(None) == ""


def test_make_key_joins_with_commas():
    assert make_key(1, "a", True) == "1,a,true"
    assert make_key() == ""


def test_make_uint32_key_truncates():
    assert make_uint32_key(5) == 5
    assert make_uint32_key(2**32 + 5) == make_uint32_key(5)
    assert make_uint32_key(-1) == 2**32 - 1
    assert make_uint32_key(1.5) == 0
    assert make_uint32_key("5") == 0