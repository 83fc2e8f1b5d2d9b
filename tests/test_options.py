import pytest

from nanoedge.options import (
    AmbiguousOption,
    InvalidOption,
    MissingArgument,
    OptionError,
    OptSpec,
    parse_options,
)

SPECS = [
    OptSpec("help", "help", short="h"),
    OptSpec("verbose", "verbose", short="v"),
    OptSpec("url", "url", takes_arg=True),
    OptSpec("topic", "topic", short="t", takes_arg=True),
    OptSpec("will-msg", "will_msg", takes_arg=True),
    OptSpec("will-qos", "will_qos", takes_arg=True),
    OptSpec("will-retain", "will_retain"),
]


def test_empty_argv():
    assert parse_options([], SPECS) == ([], [])


def test_flags_and_arguments_in_order():
    parsed, rest = parse_options(
        ["-v", "--url", "mqtt-tcp://localhost:1883", "-t", "a/b"], SPECS
    )
    assert parsed == [
        ("verbose", None),
        ("url", "mqtt-tcp://localhost:1883"),
        ("topic", "a/b"),
    ]
    assert rest == []


def test_inline_arguments():
    parsed, _ = parse_options(["--topic=x/y", "-tz"], SPECS)
    assert parsed == [("topic", "x/y"), ("topic", "z")]


def test_unique_prefix_is_accepted():
    parsed, _ = parse_options(["--verb", "--ur", "u"], SPECS)
    assert parsed == [("verbose", None), ("url", "u")]


def test_ambiguous_prefix():
    with pytest.raises(AmbiguousOption) as info:
        parse_options(["--will"], SPECS)
    assert info.value.option == "--will"


def test_unknown_long_option():
    with pytest.raises(InvalidOption) as info:
        parse_options(["--nope"], SPECS)
    assert info.value.option == "--nope"


def test_unknown_short_option():
    with pytest.raises(InvalidOption):
        parse_options(["-x"], SPECS)


def test_flag_with_inline_value_is_invalid():
    with pytest.raises(InvalidOption):
        parse_options(["--help=yes"], SPECS)
    with pytest.raises(InvalidOption):
        parse_options(["-hv"], SPECS)


def test_missing_argument():
    with pytest.raises(MissingArgument) as info:
        parse_options(["-v", "--url"], SPECS)
    assert info.value.option == "--url"
    with pytest.raises(MissingArgument):
        parse_options(["-t"], SPECS)


def test_errors_share_base_class():
    with pytest.raises(OptionError):
        parse_options(["--bogus"], SPECS)


def test_stops_at_positional_and_double_dash():
    parsed, rest = parse_options(["-v", "start", "-h"], SPECS)
    assert parsed == [("verbose", None)]
    assert rest == ["start", "-h"]
    parsed, rest = parse_options(["--", "-h"], SPECS)
    assert parsed == []
    assert rest == ["-h"]


def test_lone_dash_is_positional():
    parsed, rest = parse_options(["-", "-v"], SPECS)
    assert parsed == []
    assert rest == ["-", "-v"]