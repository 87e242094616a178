from obfuscate import HttpHeaderObfuscator, all_characters, http_headers, portion, with_fixed_length


def _obfuscator():
    return http_headers({
        "authorization": with_fixed_length(3),
        "MultiValued": portion().keep_at_end(2).build(),
    })


def test_obfuscate_header_value():
    obfuscator = _obfuscator()
    assert obfuscator.obfuscate_header_value("Content-Type", "application/json") == "application/json"
    assert obfuscator.obfuscate_header_value("Content-Length", "13") == "13"
    assert obfuscator.obfuscate_header_value("Authorization", "Bearer someToken") == "***"
    assert obfuscator.obfuscate_header_value("AUTHORIZATION", "Bearer someToken") == "***"


def test_obfuscate_header_values():
    obfuscator = _obfuscator()
    assert obfuscator.obfuscate_header_values("Content-Type", ["application/json"]) == ["application/json"]
    assert obfuscator.obfuscate_header_values("Authorization", ["Bearer someToken"]) == ["***"]
    assert obfuscator.obfuscate_header_values("multivalued", ["value1", "value2"]) == ["****e1", "****e2"]


def test_obfuscate_header_values_returns_new_list():
    values = ["application/json"]
    result = _obfuscator().obfuscate_header_values("Content-Type", values)
    assert result == values
    assert result is not values


def test_obfuscate_header_map():
    headers = {
        "Content-Type": "application/json",
        "Content-Length": "13",
        "Authorization": "Bearer someToken",
    }
    result = _obfuscator().obfuscate_header_map(headers)
    assert result == {
        "Content-Type": "application/json",
        "Content-Length": "13",
        "Authorization": "***",
    }
    # Input untouched
    assert headers["Authorization"] == "Bearer someToken"


def test_obfuscate_header_multi_map():
    result = _obfuscator().obfuscate_header_multi_map({
        "Content-Type": ["application/json"],
        "Authorization": ["Bearer someToken"],
        "MultiValued": ["value1", "value2"],
    })
    assert result == {
        "Content-Type": ["application/json"],
        "Authorization": ["***"],
        "MultiValued": ["****e1", "****e2"],
    }


def test_obfuscate_missing_maps():
    obfuscator = http_headers({"Authorization": all_characters()})
    assert obfuscator.obfuscate_header_map(None) == {}
    assert obfuscator.obfuscate_header_multi_map(None) == {}


def test_direct_construction_matches_any_case():
    obfuscator = HttpHeaderObfuscator({"Authorization": all_characters()})
    assert obfuscator.obfuscate_header_value("Authorization", "Bearer t") == "********"
    assert obfuscator.obfuscate_header_value("authorization", "Bearer t") == "********"
    assert obfuscator.obfuscate_header_map({"AUTHORIZATION": "abc"}) == {"AUTHORIZATION": "***"}


def test_header_obfuscator_is_hashable():
    obfuscator = http_headers({"Authorization": all_characters()})
    assert hash(obfuscator) == hash(http_headers({"authorization": all_characters()}))
    assert obfuscator == http_headers({"authorization": all_characters()})
