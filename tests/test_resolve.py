import pytest

from argot import (
    BadParameterValueError,
    MissingOptionValueError,
    MissingParameterError,
    Parser,
    Token,
    UnknownOptionError,
    UnusedTokensError,
)
from argot._resolve import resolve_tokens
from argot.types import Int


@pytest.mark.parametrize(
    "cmd",
    [
        "--name value",
        "--name=value",
        "-n value",
        "-nvalue",
    ],
)
def test_option_forms(parser, cmd):
    name = parser.option("-n", "--name")
    assert parser.parse(cmd)[name] == "value"


def test_option_value_may_contain_equals(parser):
    name = parser.option("--name")
    assert parser.parse("--name=a=b")[name] == "a=b"


def test_option_empty_value(parser):
    name = parser.option("--name")
    assert parser.parse(["--name="])[name] == ""


def test_flags(parser):
    verbose = parser.option("-v", "--verbose", flag=True)
    assert parser.parse("")[verbose] is False
    assert parser.parse("-v")[verbose] is True
    assert parser.parse("--verbose")[verbose] is True
    assert parser.parse("--verbose=false")[verbose] is False
    assert parser.parse("-v=no")[verbose] is False


def test_combined_short_flags(parser):
    a = parser.option("-a", flag=True)
    b = parser.option("-b", flag=True)
    c = parser.option("-c", converter=Int())

    result = parser.parse("-ab")
    assert (result[a], result[b], result[c]) == (True, True, None)

    result = parser.parse("-bc5")
    assert (result[a], result[b], result[c]) == (False, True, 5)

    result = parser.parse("-ac 7")
    assert (result[a], result[b], result[c]) == (True, False, 7)


def test_combined_short_unknown(parser):
    parser.option("-a", flag=True)

    with pytest.raises(UnknownOptionError) as e:
        parser.parse("-az")
    assert str(e.value) == 'Unknown option: "-z".'


def test_unknown_long_option(parser):
    parser.option("--verbose", flag=True)

    with pytest.raises(UnknownOptionError) as e:
        parser.parse("--verbos")
    assert str(e.value) == 'Unknown option: "--verbos". Did you mean "--verbose"?'


def test_unknown_long_option_with_value(parser):
    with pytest.raises(UnknownOptionError) as e:
        parser.parse("--bogus=3")
    assert str(e.value) == 'Unknown option: "--bogus".'


@pytest.mark.parametrize("cmd", ["--name", "-n", "--other x --name"])
def test_missing_option_value(parser, cmd):
    parser.option("-n", "--name")
    parser.option("--other")

    with pytest.raises(MissingOptionValueError) as e:
        parser.parse(cmd)
    assert str(e.value) == f'Option "{cmd.split()[-1]}" requires a value.'


@pytest.mark.parametrize(
    "cmd, expected",
    [
        ("--pattern -foo.txt", "-foo.txt"),
        ("-p -foo.txt", "-foo.txt"),
        ("--pattern --verbose", "--verbose"),
        ("--pattern --", "--"),
    ],
)
def test_option_value_may_look_like_an_option(parser, cmd, expected):
    pattern = parser.option("-p", "--pattern")
    verbose = parser.option("--verbose", flag=True)

    result = parser.parse(cmd)

    assert result[pattern] == expected
    assert result[verbose] is False


def test_short_option_attached_value_keeps_equals(parser):
    x = parser.option("-x")
    assert parser.parse(["-x=5"])[x] == "=5"


def test_empty_value_with_empty_delimiter():
    parser = Parser(end_of_options_delimiter="")
    name = parser.option("--name")
    assert parser.parse(["--name", ""])[name] == ""

def test_negative_number_is_a_value(parser):
    offset = parser.option("--offset", converter=Int())
    value = parser.argument("value", Int())

    result = parser.parse("--offset -3 -7")

    assert result[offset] == -3
    assert result[value] == -7


def test_end_of_options_delimiter(parser):
    verbose = parser.option("-v", flag=True)
    args = parser.argument("args", nargs="*")

    result = parser.parse("-v -- -v --foo @bar")

    assert result[verbose] is True
    assert result[args] == ["-v", "--foo", "@bar"]


def test_positional_interleaved_with_options(parser):
    foo = parser.option("--foo")
    src = parser.argument("src")
    dst = parser.argument("dst")

    result = parser.parse("a --foo 1 b")

    assert (result[foo], result[src], result[dst]) == ("1", "a", "b")


def test_repeated_option_last_wins(parser):
    foo = parser.option("--foo")
    assert parser.parse("--foo 1 --foo 2")[foo] == "2"


def test_multiple_option(parser):
    include = parser.option("-I", "--include", multiple=True)

    assert parser.parse("")[include] == []
    assert parser.parse("-Ia --include b -I c")[include] == ["a", "b", "c"]


def test_required_option_missing(parser):
    parser.option("-o", "--output", required=True)

    with pytest.raises(MissingParameterError) as e:
        parser.parse("")
    assert str(e.value) == 'Missing option "--output".'


def test_required_argument_missing(parser):
    parser.argument("src")
    parser.argument("dst", metavar="DEST")

    with pytest.raises(MissingParameterError) as e:
        parser.parse("a")
    assert str(e.value) == 'Missing argument "DEST".'


def test_one_or_more_argument(parser):
    files = parser.argument("files", nargs="+")

    assert parser.parse("a b")[files] == ["a", "b"]
    with pytest.raises(MissingParameterError):
        parser.parse("")


def test_argument_default(parser):
    src = parser.argument("src", default="-")
    files = parser.argument("files", nargs="*", default=("x",))

    result = parser.parse("")
    assert result[src] == "-"
    assert result[files] == ("x",)

    result = parser.parse("a b")
    assert result[src] == "a"
    assert result[files] == ["b"]


def test_optional_argument_greedy(parser):
    first = parser.argument("first", nargs="?")
    second = parser.argument("second", nargs="?")

    result = parser.parse("a")
    assert (result[first], result[second]) == ("a", None)


def test_unused_tokens(parser):
    parser.argument("src")

    with pytest.raises(UnusedTokensError) as e:
        parser.parse("a b c")
    assert e.value.unused_tokens == ["b", "c"]
    assert str(e.value) == 'Unexpected extra arguments: "b", "c".'


def test_unused_token_no_arguments(parser):
    with pytest.raises(UnusedTokensError) as e:
        parser.parse("a")
    assert str(e.value) == 'Unexpected extra argument: "a".'


def test_env_var_fallback(parser, monkeypatch):
    monkeypatch.setenv("ARGOT_TEST_COUNT", "5")
    monkeypatch.delenv("ARGOT_TEST_UNSET", raising=False)
    count = parser.option("--count", converter=Int(), env_var=["ARGOT_TEST_UNSET", "ARGOT_TEST_COUNT"], default=1)

    result = parser.parse("")
    assert result[count] == 5
    assert result.tokens(count) == (Token(keyword="ARGOT_TEST_COUNT", value="5", source="env"),)

    # Command line takes priority.
    assert parser.parse("--count 3")[count] == 3


def test_env_var_conversion_error(parser, monkeypatch):
    monkeypatch.setenv("ARGOT_TEST_COUNT", "five")
    parser.option("--count", converter=Int(), env_var="ARGOT_TEST_COUNT")

    with pytest.raises(BadParameterValueError) as e:
        parser.parse("")
    assert str(e.value) == 'Invalid value for "ARGOT_TEST_COUNT": five is not a valid integer'


def test_env_var_multiple_splits_on_whitespace(parser, monkeypatch):
    monkeypatch.setenv("ARGOT_TEST_INCLUDE", " a  b c ")
    include = parser.option("--include", multiple=True, env_var="ARGOT_TEST_INCLUDE")

    assert parser.parse("")[include] == ["a", "b", "c"]


def test_env_var_flag(parser, monkeypatch):
    monkeypatch.setenv("ARGOT_TEST_VERBOSE", "yes")
    verbose = parser.option("--verbose", flag=True, env_var="ARGOT_TEST_VERBOSE")

    assert parser.parse("")[verbose] is True


def test_resolve_tokens_explicit_environ(parser):
    count = parser.option("--count", converter=Int(), env_var="COUNT")

    result = resolve_tokens(parser.options, parser.arguments, [], environ={"COUNT": "9"})

    assert result[count] == 9


def test_every_parameter_resolved_once(parser):
    foo = parser.option("--foo")
    bar = parser.option("--bar", flag=True)
    arg = parser.argument("arg", nargs="?")

    result = parser.parse("")

    assert list(result) == [foo, bar, arg]
    assert result.as_dict() == {"foo": None, "bar": False, "arg": None}
    assert result.is_default(foo)


def test_result_lookup_by_name(parser):
    dry_run = parser.option("--dry-run", flag=True)

    result = parser.parse("--dry-run")

    assert result["dry_run"] is result[dry_run] is True
    assert "dry_run" in result
    assert "nope" not in result
    with pytest.raises(KeyError):
        result["nope"]
