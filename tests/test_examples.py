"""End-to-end scenarios, as shown in the package docstring."""

import pytest

import obfuscate
from obfuscate import InvalidConfiguration


def test_keep_start_and_end():
    obfuscator = obfuscate.portion().keep_at_start(4).keep_at_end(4).build()
    assert obfuscator("hello world") == "hell***orld"
    assert obfuscator("1234567890123456") == "1234********3456"
    # Too short to hide anything
    assert obfuscator("12345678") == "12345678"


def test_postcode():
    obfuscator = obfuscate.portion().keep_at_start(6).build()
    assert obfuscator("SW1A 2AA") == "SW1A 2**"


def test_fixed_total_length_hides_length():
    obfuscator = obfuscate.portion().keep_at_start(2).keep_at_end(2).fixed_total_length(6).build()
    assert obfuscator("Hello world") == "He**ld"
    assert obfuscator("foo") == "fo**oo"

    obfuscator = obfuscate.portion().keep_at_start(4).fixed_total_length(9).build()
    assert obfuscator("") == "*********"
    assert obfuscator("foo") == "foo******"


def test_at_least_wins_over_keep():
    obfuscator = obfuscate.portion().keep_at_start(4).at_least_from_end(4).build()
    assert obfuscator("foo") == "***"
    assert obfuscator("foobarbaz") == "foob*****"


def test_package_docstring_examples():
    card = obfuscate.portion().keep_at_start(4).keep_at_end(4).build()
    assert card("1234567890123456") == "1234********3456"

    chain = obfuscate.none().until_length(4).then(obfuscate.all_characters())
    assert chain("123456") == "1234**"

    email = obfuscate.at_first("@").split_to(obfuscate.all_characters(), obfuscate.none())
    assert email("test@example.org") == "****@example.org"


def test_prefix_lengths_must_increase():
    chain = obfuscate.none().until_length(4).then(obfuscate.all_characters())
    with pytest.raises(InvalidConfiguration, match="prefix_length: 4 < 5"):
        chain.until_length(4)
    with pytest.raises(InvalidConfiguration, match="prefix_length: 0 < 1"):
        obfuscate.none().until_length(0)


def test_request_logging():
    headers = obfuscate.http_headers({"Authorization": obfuscate.with_fixed_length(3)})
    params = obfuscate.http_parameters({"password": obfuscate.with_fixed_length(3)})
    fields = obfuscate.maps({"ssn": obfuscate.portion().keep_at_end(4).build()})

    assert headers.obfuscate_header_map({"authorization": "Basic dXNlcjpwYXNz"}) == {
        "authorization": "***"
    }
    assert params("user=admin&password=hunter2") == "user=admin&password=***"
    assert fields.obfuscate_map({"ssn": "123-45-6789"}) == {"ssn": "*******6789"}
