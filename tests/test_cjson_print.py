import math

import pytest

from nanoedge.cjson_parse import parse
from nanoedge.cjson_print import dumps, format_number, minify
from nanoedge.cjson_tree import JsonObject, compare


def test_literals():
    assert dumps(None) == "null"
    assert dumps(True) == "true"
    assert dumps(False, formatted=False) == "false"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_non_finite_numbers_print_null(value):
    assert format_number(value) == "null"


def test_simple_numbers():
    assert format_number(1) == "1"
    assert format_number(0.5) == "0.5"
    assert format_number(-3) == "-3"


@pytest.mark.parametrize("value", [1 / 3, 0.1, 2.0 / 7.0, 1e300, -5e-310, 123456789.123])
def test_number_round_trips(value):
    text = format_number(value)
    assert float(text) == value
    assert len(text) <= 25


def test_format_number_rejects_non_numbers():
    with pytest.raises(TypeError):
        format_number("1")
    with pytest.raises(TypeError):
        format_number(True)


def test_string_escapes():
    assert dumps('a"b\\c\n') == '"a\\"b\\\\c\\n"'
    assert dumps("\x01") == '"\\u0001"'
    assert dumps("\b\f\r\t") == '"\\b\\f\\r\\t"'


def test_non_ascii_is_kept():
    assert dumps("héllo") == '"héllo"'


def test_string_stops_at_nul():
    assert dumps("ab\0cd") == '"ab"'


def test_object_unformatted():
    obj = JsonObject([("a", 1), ("b", [True, None])])
    assert dumps(obj, formatted=False) == '{"a":1,"b":[true,null]}'


def test_object_formatted():
    obj = JsonObject([("a", 1)])
    assert dumps(obj) == '{\n\t"a":\t1\n}'


def test_empty_containers():
    assert dumps(JsonObject()) == "{\n}"
    assert dumps(JsonObject(), formatted=False) == "{}"
    assert dumps([]) == "[]"


def test_array_separators():
    assert dumps([1, 2]) == "[1, 2]"
    assert dumps([1, 2], formatted=False) == "[1,2]"


def test_arrays_count_towards_indent_depth():
    text = dumps([JsonObject([("a", 1)])])
    assert text.startswith("[{\n\t\t")
    assert text.endswith("\n\t}]")


def test_mapping_accepted():
    assert dumps({"k": "v"}, formatted=False) == '{"k":"v"}'


def test_duplicate_keys_kept():
    obj = JsonObject([("a", 1), ("a", 2)])
    assert dumps(obj, formatted=False) == '{"a":1,"a":2}'


def test_non_json_value_rejected():
    with pytest.raises(TypeError):
        dumps(object())
    with pytest.raises(TypeError):
        dumps({1: 2})


def test_self_containing_list_rejected():
    items = []
    items.append(items)
    with pytest.raises(ValueError):
        dumps(items)


def test_same_list_twice_is_fine():
    shared = [1]
    assert dumps([shared, shared], formatted=False) == "[[1],[1]]"


def test_deep_nesting():
    value = []
    for _ in range(999):
        value = [value]
    assert dumps(value, formatted=False) == "[" * 1000 + "]" * 1000


@pytest.mark.parametrize("formatted", [True, False])
def test_round_trip_through_parser(formatted):
    original = JsonObject(
        [
            ("name", "sensor \"one\"\n"),
            ("values", [1, 2.5, -1e-7, None, True, False]),
            ("nested", JsonObject([("deep", [JsonObject([("x", "y")])])])),
            ("empty", JsonObject()),
            ("list", []),
        ]
    )
    again = parse(dumps(original, formatted))
    assert compare(original, again)


def test_nan_round_trips_as_null():
    assert parse(dumps([math.nan])) == [None]


def test_minify_removes_whitespace_and_comments():
    assert minify('{ "a" : 1 } // c\n') == '{"a":1}'
    assert minify("[1, /* x */ 2]") == "[1,2]"


def test_minify_keeps_string_contents():
    assert minify('{"a b": "c d"}') == '{"a b":"c d"}'
    assert minify('["x \\" y"]') == '["x \\" y"]'


def test_minify_drops_lone_slash_and_unterminated_comments():
    assert minify("1/2") == "12"
    assert minify("[1] /* never closed") == "[1]"
    assert minify("[1] // to the end") == "[1]"


def test_minify_stops_at_nul():
    assert minify("[1]\0[2]") == "[1]"


def test_minify_of_formatted_output_matches_compact():
    obj = JsonObject([("a", [1, 2]), ("b", JsonObject([("c", "d e")]))])
    assert minify(dumps(obj)) == dumps(obj, formatted=False)