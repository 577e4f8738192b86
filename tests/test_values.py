import math

from difflogpack.core.values import canonical_dump, to_float, value_kind, values_equal


def test_value_kind_distinguishes_bool_from_number() -> None:
    assert value_kind(True) == "bool"
    assert value_kind(1) == "number"
    assert value_kind(1.5) == "number"
    assert value_kind(None) == "null"
    assert value_kind("x") == "string"
    assert value_kind([1]) == "array"
    assert value_kind((1,)) == "array"
    assert value_kind({"a": 1}) == "object"
    assert value_kind(object()) == "other"


def test_values_equal_is_structural() -> None:
    assert values_equal({"a": [1, {"b": None}]}, {"a": [1.0, {"b": None}]})
    assert values_equal([1, 2], (1, 2))
    assert not values_equal({"a": 1}, {"a": 1, "b": 2})
    assert not values_equal({"a": 1}, {"b": 1})
    assert not values_equal([1, 2], [2, 1])
    assert not values_equal(True, 1)
    assert not values_equal(0, False)
    assert not values_equal(None, {})


def test_nan_equals_itself() -> None:
    assert values_equal(math.nan, float("nan"))
    assert values_equal({"x": [math.nan]}, {"x": [math.nan]})


def test_to_float_clamps_out_of_range_integers() -> None:
    assert to_float(3) == 3.0
    assert to_float(10**400) == math.inf
    assert to_float(-(10**400)) == -math.inf


def test_canonical_dump_is_flat_and_sorted() -> None:
    assert canonical_dump({"b": 1, "a": [True, None, "é"]}) == '{"a":[true,null,"é"],"b":1}'
    assert canonical_dump(None) == "null"
    assert canonical_dump("text") == '"text"'
    assert canonical_dump(43) == "43"
    assert canonical_dump((1, 2)) == "[1,2]"
