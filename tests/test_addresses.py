import pytest

from dbremote.core.addresses import MAX_ADDRESSES, expand
from dbremote.core.errors import AddressLimitExceeded, ErrorKind, GrammarError


def test_expand_splits_on_separator():
    assert expand("host1,host2", ",") == ["host1", "host2"]


def test_expand_numeric_range_is_ascending():
    assert expand("abc{8..10}def", ",") == ["abc8def", "abc9def", "abc10def"]


def test_expand_numeric_range_drops_zero_padding():
    assert expand("abc{08..10}def", ",") == ["abc8def", "abc9def", "abc10def"]


def test_expand_alternatives_at_current_separator():
    assert expand("abc{x,yy,z}def", ",") == ["abcxdef", "abcyydef", "abczdef"]
    assert expand("abc{x|yy|z}def", "|") == ["abcxdef", "abcyydef", "abczdef"]


def test_expand_keeps_other_separator_group_verbatim():
    assert expand("abc{x|yy|z}def", ",") == ["abc{x|yy|z}def"]


def test_expand_cartesian_product_order():
    result = expand("abc{1..9}de{f,g,h}", ",")

    assert len(result) == 27
    assert result[:4] == ["abc1def", "abc1deg", "abc1deh", "abc2def"]
    assert result[-1] == "abc9deh"


def test_expand_nested_groups():
    assert expand("a{b{1..2},c}", ",") == ["ab1", "ab2", "ac"]
    assert expand("{x,{y|z}}", ",") == ["x", "{y|z}"]


def test_expand_empty_input_is_single_empty_string():
    assert expand("", ",") == [""]


def test_expand_skips_empty_alternatives():
    assert expand("a,,b,", ",") == ["a", "b"]
    assert expand(",", ",") == []


def test_expand_single_value_range():
    assert expand("{5..5}", ",") == ["5"]


def test_expand_is_deterministic():
    descriptor = "n{1..4}-{a,b}|m{0..2}"

    assert expand(descriptor, ",") == expand(descriptor, ",")
    assert expand(descriptor, "|") == expand(descriptor, "|")


@pytest.mark.parametrize(
    "descriptor",
    ["{10..5}", "{a..5}", "{1..b}", "{..5}", "{1..}", "{1...3}", "{1..2..3}"],
)
def test_expand_rejects_malformed_ranges(descriptor: str):
    with pytest.raises(GrammarError) as excinfo:
        expand(descriptor, ",")

    assert excinfo.type is GrammarError
    assert excinfo.value.kind == ErrorKind.GRAMMAR
    assert excinfo.value.fragment == descriptor


def test_expand_rejects_range_bound_overflow():
    with pytest.raises(GrammarError, match="right number") as excinfo:
        expand("{1..9999999999999999}", ",")

    assert excinfo.type is GrammarError


@pytest.mark.parametrize("descriptor", ["abc{1..2", "{{1..2}", "a}b", "x{a,b}}"])
def test_expand_rejects_unbalanced_braces(descriptor: str):
    with pytest.raises(GrammarError) as excinfo:
        expand(descriptor, ",")

    assert excinfo.value.position is not None


def test_expand_error_message_names_fragment_and_position():
    with pytest.raises(GrammarError, match=r"'\{7\.\.3\}' at position 4"):
        expand("host{7..3}", ",")


def test_expand_allows_exactly_max_addresses():
    assert len(expand("h{1..200}", ",")) == MAX_ADDRESSES


@pytest.mark.parametrize(
    "descriptor,count",
    [
        ("h{1..201}", 201),
        ("h{1..1000000000000000}", 1000000000000000),
        ("h{1..20}-{1..11}", 220),
        ("a{1..100},b{1..101}", 201),
    ],
)
def test_expand_enforces_address_limit(descriptor: str, count: int):
    with pytest.raises(AddressLimitExceeded) as excinfo:
        expand(descriptor, ",")

    assert excinfo.value.count == count
    assert excinfo.value.limit == MAX_ADDRESSES
    assert excinfo.value.kind == ErrorKind.ADDRESS_LIMIT


@pytest.mark.parametrize("separator", ["", ",|", "{", "}", "."])
def test_expand_rejects_invalid_separator(separator: str):
    with pytest.raises(ValueError, match="separator"):
        expand("host", separator)
