import pytest

from obfuscate import (
    InvalidConfiguration,
    PrefixChain,
    all_characters,
    none,
    portion,
    with_fixed_length,
    with_fixed_value,
)

DIGITS = "0123456789ABCDEF"


def _prefixes():
    return [DIGITS[:n] for n in range(1, len(DIGITS) + 1)]


def test_none_until_4_then_all_until_12_then_none():
    obfuscator = none().until_length(4).then(all_characters()).until_length(12).then(none())
    for s in _prefixes():
        head, middle, tail = s[:4], s[4:12], s[12:]
        assert obfuscator.obfuscate(s) == head + "*" * len(middle) + tail
    assert obfuscator.obfuscate(DIGITS) == "0123********CDEF"
    assert obfuscator.obfuscate("") == ""


def test_none_until_4_then_fixed_length():
    obfuscator = none().until_length(4).then(with_fixed_length(3))
    assert obfuscator.obfuscate("0") == "0"
    assert obfuscator.obfuscate("0123") == "0123"
    assert obfuscator.obfuscate("01234") == "0123***"
    assert obfuscator.obfuscate(DIGITS) == "0123***"


def test_fixed_length_until_4_then_none():
    obfuscator = with_fixed_length(3).until_length(4).then(none())
    assert obfuscator.obfuscate("0") == "***"
    assert obfuscator.obfuscate("0123") == "***"
    assert obfuscator.obfuscate("01234") == "***4"
    assert obfuscator.obfuscate(DIGITS) == "***456789ABCDEF"


def test_fixed_length_until_4_then_fixed_value():
    obfuscator = with_fixed_length(3).until_length(4).then(with_fixed_value("xxx"))
    assert obfuscator.obfuscate("012") == "***"
    assert obfuscator.obfuscate("01234") == "***xxx"
    assert obfuscator.obfuscate(DIGITS) == "***xxx"


def test_chain_with_portion():
    obfuscator = none().until_length(4).then(portion().keep_at_end(4).at_least_from_start(8).build())
    assert obfuscator.obfuscate("12345678901234") == "1234********34"


def test_second_rule_may_be_a_chain():
    rest = all_characters().until_length(2).then(none())
    obfuscator = none().until_length(2).then(rest)
    assert obfuscator.obfuscate("abcdef") == "ab**ef"


def test_min_prefix_length_is_tracked_per_node():
    fresh = none()
    assert fresh.min_prefix_length == 1
    chain = fresh.until_length(4).then(all_characters())
    assert isinstance(chain, PrefixChain)
    assert chain.min_prefix_length == 5
    longer = chain.until_length(12).then(none())
    assert longer.min_prefix_length == 13
    # Building a longer chain leaves the existing one untouched
    assert chain.min_prefix_length == 5
    assert chain.until_length(5).then(none()).obfuscate("0123456") == "0123*56"


def test_invalid_prefix_lengths():
    with pytest.raises(InvalidConfiguration, match="prefix_length: 0 < 1"):
        none().until_length(0)

    obfuscator = none().until_length(1).then(all_characters())
    with pytest.raises(InvalidConfiguration, match="prefix_length: 1 < 2"):
        obfuscator.until_length(1)

    obfuscator = none().until_length(1).then(all_characters()).until_length(2).then(none())
    with pytest.raises(InvalidConfiguration, match="prefix_length: 2 < 3"):
        obfuscator.until_length(2)

    obfuscator = obfuscator.until_length(3).then(all_characters())
    with pytest.raises(InvalidConfiguration, match="prefix_length: 3 < 4"):
        obfuscator.until_length(3)


def test_deep_chain():
    chain = all_characters()
    for n in range(1, 1200):
        chain = chain.until_length(n).then(none())
    assert chain.obfuscate("x" * 1300) == "*" + "x" * 1299
    assert chain.obfuscate("") == ""
