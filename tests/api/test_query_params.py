"""
Tests for query-string expansion.
"""

import pytest

from src.api.query_params import expand_query_params


class TestExpandQueryParams:
    """Bracket notation, repeats and JSON values."""

    def test_brackets(self):
        payload = expand_query_params(
            [("priceRange[]", "1"), ("priceRange[]", "9"), ("stops[direct]", "true")]
        )
        assert payload == {"priceRange": ["1", "9"], "stops": {"direct": True}}

    def test_plain_values_stay_strings(self):
        assert expand_query_params([("from", "DEL"), ("maxPrice", "6000")]) == {
            "from": "DEL",
            "maxPrice": "6000",
        }

    def test_repeated_keys_become_lists(self):
        payload = expand_query_params([("airlineList", "IndiGo"), ("airlineList", "Vistara")])
        assert payload == {"airlineList": ["IndiGo", "Vistara"]}

    def test_indexed_keys_become_lists(self):
        payload = expand_query_params([("priceRange[1]", "9"), ("priceRange[0]", "1")])
        assert payload == {"priceRange": ["1", "9"]}

    def test_nested_map(self):
        payload = expand_query_params(
            [("airlines[airindia]", "true"), ("airlines[indigo]", "false")]
        )
        assert payload == {"airlines": {"airindia": True, "indigo": False}}

    def test_json_values_decoded(self):
        payload = expand_query_params(
            [("priceRange", "[100, 200]"), ("stops", '{"direct": true}')]
        )
        assert payload == {"priceRange": [100, 200], "stops": {"direct": True}}

    @pytest.mark.parametrize("value", ["[oops", "{bad json"])
    def test_invalid_json_kept_as_text(self, value):
        assert expand_query_params([("priceRange", value)]) == {"priceRange": value}

    def test_unbalanced_brackets_used_verbatim(self):
        assert expand_query_params([("odd]key", "x")]) == {"odd]key": "x"}

    def test_empty(self):
        assert expand_query_params([]) == {}
