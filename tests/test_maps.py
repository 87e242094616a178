from obfuscate import maps, portion, with_fixed_length


def _obfuscator():
    return maps({
        "key1": with_fixed_length(3),
        "KEY2": portion().keep_at_end(2).build(),
    })


def test_obfuscate_map():
    result = _obfuscator().obfuscate_map({
        "key0": "value0",
        "key1": "value1",
        "key2": "value2",
        "KEY0": "VALUE0",
        "KEY1": "VALUE1",
        "KEY2": "VALUE2",
    })
    # Keys are matched exactly
    assert result == {
        "key0": "value0",
        "key1": "***",
        "key2": "value2",
        "KEY0": "VALUE0",
        "KEY1": "VALUE1",
        "KEY2": "****E2",
    }


def test_obfuscate_none_map():
    assert _obfuscator().obfuscate_map(None) == {}
    assert _obfuscator().obfuscate_multi_map(None) == {}


def test_obfuscate_multi_map():
    result = _obfuscator().obfuscate_multi_map({
        "key0": ["value00", "value01"],
        "key1": ["value10", "value11"],
        "KEY2": ["VALUE20", "VALUE21"],
    })
    assert result == {
        "key0": ["value00", "value01"],
        "key1": ["***", "***"],
        "KEY2": ["*****20", "*****21"],
    }


def test_non_string_keys():
    obfuscator = maps({1: with_fixed_length(3)})
    assert obfuscator.obfuscate_map({1: "secret", 2: "public"}) == {1: "***", 2: "public"}


def test_map_obfuscator_is_hashable():
    assert hash(_obfuscator()) == hash(_obfuscator())
