"""Unit tests for model detection."""

from __future__ import annotations

from conftest import put_field

from odo_tool.eeprom.detect import RULES, detect_model, no_evidence
from odo_tool.eeprom.map import MODELS


class TestRules:

    def test_rule_order(self):
        assert [r.model_id for r in RULES] == ["biz2018", "crosser150", "cb500x2023", "titan160"]

    def test_last_rule_is_unconditional(self):
        assert RULES[-1].test is no_evidence
        assert RULES[-1].test(b"", MODELS["titan160"])


class TestHeuristic:

    def test_biz(self, zero_image, stamp):
        assert detect_model(bytes(stamp(zero_image, "biz2018", 12345))) == "biz2018"

    def test_biz_beats_fallback(self, ff_image, stamp):
        image = stamp(ff_image, "biz2018", 1)
        stamp(image, "crosser150", 1)
        assert detect_model(bytes(image)) == "biz2018"

    def test_one_bad_biz_field_falls_through(self, zero_image, stamp):
        image = stamp(zero_image, "biz2018", 12345)
        put_field(image, 0x60, 382, 0)
        assert detect_model(bytes(image)) == "titan160"

    def test_crosser(self, zero_image, stamp):
        assert detect_model(bytes(stamp(zero_image, "crosser150", 9000))) == "crosser150"

    def test_cb500x_positive_values(self, zero_image):
        put_field(zero_image, 0x100, 1, 0)
        put_field(zero_image, 0x104, 7, 0)
        assert detect_model(bytes(zero_image)) == "cb500x2023"

    def test_cb500x_needs_both_leading_values(self, zero_image):
        put_field(zero_image, 0x100, 1)
        assert detect_model(bytes(zero_image)) == "titan160"

    def test_cb500x_window_past_end(self):
        image = bytearray(b"\xff" * 0x106)
        assert detect_model(bytes(image)) == "titan160"

    def test_erased_image_looks_like_cb500x(self, ff_image):
        assert detect_model(bytes(ff_image)) == "cb500x2023"

    def test_fallback_without_evidence(self, zero_image):
        assert detect_model(bytes(zero_image)) == "titan160"

    def test_empty_image(self):
        assert detect_model(b"") == "titan160"

    def test_titan_slots_overlap_crosser(self, zero_image, stamp):
        # every crosser150 slot is also a titan160 slot
        assert detect_model(bytes(stamp(zero_image, "titan160", 5000))) == "crosser150"


class TestHint:

    def test_hint_wins_over_content(self, zero_image, stamp):
        image = bytes(stamp(zero_image, "biz2018", 12345))
        assert detect_model(image, "titan160") == "titan160"
        assert detect_model(image, "cb500x2023") == "cb500x2023"

    def test_hint_on_garbage(self):
        assert detect_model(b"\x00", "crosser150") == "crosser150"

    def test_unknown_hint_ignored(self, zero_image, stamp):
        image = bytes(stamp(zero_image, "biz2018", 12345))
        assert detect_model(image, "vespa") == "biz2018"

    def test_empty_hint_ignored(self, zero_image):
        assert detect_model(bytes(zero_image), "") == "titan160"
