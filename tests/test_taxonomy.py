"""Tests for the magnitude decoder and the event-type normalizer.

These two functions decide which bucket every dollar and every casualty
lands in, so they get tested directly rather than only through the
pipeline.
"""

import numpy as np
import pytest


# ── Test 1: Magnitude decoder ────────────────────────────────────
class TestDecodeMagnitude:
    """decode_magnitude maps H/K/M/B to 2/3/6/9 and anything else to 0."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("H", 2),
            ("h", 2),
            ("K", 3),
            ("k", 3),
            ("M", 6),
            ("m", 6),
            ("B", 9),
            ("b", 9),
        ],
    )
    def test_known_codes(self, code, expected):
        from storm_impact.taxonomy import decode_magnitude

        assert decode_magnitude(code) == expected

    @pytest.mark.parametrize("code", ["", " ", "X", "5", "0", "+", "-", "?", "KB"])
    def test_unknown_codes_are_unscaled(self, code):
        from storm_impact.taxonomy import decode_magnitude

        assert decode_magnitude(code) == 0

    def test_missing_codes_are_unscaled(self):
        from storm_impact.taxonomy import decode_magnitude

        assert decode_magnitude(np.nan) == 0
        assert decode_magnitude(None) == 0

    def test_case_insensitive(self):
        from storm_impact.taxonomy import decode_magnitude

        assert decode_magnitude("K") == decode_magnitude("k") == 3
        assert decode_magnitude("") == decode_magnitude("X") == 0

    def test_result_is_always_a_known_exponent(self):
        from storm_impact.taxonomy import decode_magnitude

        codes = ["H", "k", "M", "b", "", "?", "7", "Z", None, np.nan, 3.0]
        assert {decode_magnitude(c) for c in codes} <= {0, 2, 3, 6, 9}

    def test_code_table_is_read_only(self):
        from storm_impact.taxonomy import MAGNITUDE_EXPONENTS

        with pytest.raises(TypeError):
            MAGNITUDE_EXPONENTS["T"] = 12


# ── Test 2: Event-type normalizer ────────────────────────────────
class TestNormalizeEventType:
    """Raw EVTYPE labels must always land on one of the 48 canonical types."""

    def test_canonical_set_has_48_labels(self):
        from storm_impact.taxonomy import CANONICAL_EVENT_TYPES

        assert len(CANONICAL_EVENT_TYPES) == 48
        assert len(set(CANONICAL_EVENT_TYPES)) == 48

    def test_tstm_abbreviation_expanded(self):
        from storm_impact.taxonomy import normalize_event_type

        assert normalize_event_type("TSTM WIND") == "Thunderstorm Wind"

    def test_first_alternative_wins(self):
        from storm_impact.taxonomy import normalize_event_type

        assert normalize_event_type("FLOOD/FLASH FLOOD") == "Flood"
        assert normalize_event_type("TSTM WIND/HAIL") == "Thunderstorm Wind"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("TORNADO", "Tornado"),
            ("tornado", "Tornado"),
            ("EXCESSIVE HEAT", "Excessive Heat"),
            ("HEAT", "Heat"),
            ("THUNDERSTORM WINDS", "Thunderstorm Wind"),
            ("RIP CURRENTS", "Rip Current"),
            ("HIGH WINDS", "High Wind"),
            ("FLASH FLOODING", "Flash Flood"),
            ("LAKE-EFFECT SNOW", "Lake-Effect Snow"),
            ("WINTER WEATHER/MIX", "Winter Weather"),
            (" TSTM WIND", "Thunderstorm Wind"),
        ],
    )
    def test_common_spellings(self, raw, expected):
        from storm_impact.taxonomy import normalize_event_type

        assert normalize_event_type(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        ["", "?", "SUMMARY OF MAY 26 AM", "NONE", "12345", "/", "APACHE COUNTY", np.nan],
    )
    def test_garbage_still_maps_to_a_canonical_label(self, raw):
        from storm_impact.taxonomy import CANONICAL_EVENT_TYPES, normalize_event_type

        assert normalize_event_type(raw) in CANONICAL_EVENT_TYPES

    def test_deterministic(self):
        from storm_impact.taxonomy import normalize_event_type

        labels = ["HURRICANE/TYPHOON", "WILD/FOREST FIRE", "URBAN/SML STREAM FLD"]
        first = [normalize_event_type(label) for label in labels]
        second = [normalize_event_type(label) for label in labels]
        assert first == second

    def test_tie_goes_to_first_canonical_label(self):
        """'A' is one edit from both 'Aa' and 'Ab': enumeration order decides."""
        from storm_impact.taxonomy import normalize_event_types

        assert normalize_event_types(["A"], canonical=("Aa", "Ab")) == ["Aa"]
        assert normalize_event_types(["A"], canonical=("Ab", "Aa")) == ["Ab"]

    def test_vectorised_matches_scalar_and_keeps_order(self):
        from storm_impact.taxonomy import normalize_event_type, normalize_event_types

        labels = ["TSTM WIND", "FLOOD", "TSTM WIND", "HEAT", "FLOOD/FLASH FLOOD"]
        assert normalize_event_types(labels) == [normalize_event_type(x) for x in labels]

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("DON'T KNOW", "Don't Know"),
            ("TSTM WIND 65", "Thunderstorm Wind 65"),
            ("HAIL 1.75)", "Hail 1.75)"),
            (" TSTM WIND", " Thunderstorm Wind"),
            ("FLOOD/FLASH FLOOD", "Flood"),
        ],
    )
    def test_only_word_initials_are_capitalised(self, raw, expected):
        from storm_impact.taxonomy import _preprocess_label

        assert _preprocess_label(raw) == expected

    def test_empty_input(self):
        from storm_impact.taxonomy import normalize_event_types

        assert normalize_event_types([]) == []

    def test_empty_canonical_set_is_a_configuration_error(self):
        from storm_impact.taxonomy import normalize_event_types

        with pytest.raises(ValueError, match="empty"):
            normalize_event_types(["TORNADO"], canonical=())
