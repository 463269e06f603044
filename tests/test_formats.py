"""Format resolver tests."""

import pytest

from manabase.data.formats import (
    detect_format,
    land_range_warning,
    list_presets,
    parse_format_name,
    resolve_format,
)
from manabase.errors import InvalidTarget, UnknownFormat
from manabase.models.format import Format, FormatTarget


class TestResolveFormat:
    """Test preset and custom resolution."""

    @pytest.mark.parametrize(
        "name, cards, lands",
        [
            ("commander", 100, 38),
            ("standard", 60, 24),
            ("modern", 60, 24),
            ("limited", 40, 17),
            ("custom", 60, 24),
        ],
    )
    def test_presets(self, name, cards, lands):
        target = resolve_format(name)

        assert target.total_cards == cards
        assert target.target_lands == lands
        assert target.format is Format(name)

    @pytest.mark.parametrize(
        "alias, expected",
        [("EDH", Format.COMMANDER), ("draft", Format.LIMITED), (" Sealed ", Format.LIMITED)],
    )
    def test_aliases(self, alias, expected):
        assert resolve_format(alias).format is expected

    def test_custom_pair(self):
        target = resolve_format((80, 30))

        assert target == FormatTarget(80, 30, Format.CUSTOM)
        assert target.spell_slots == 50

    def test_preset_override(self):
        target = resolve_format("limited", target_lands=16)

        assert target.total_cards == 40
        assert target.target_lands == 16
        assert target.format is Format.LIMITED

    def test_format_enum(self):
        assert resolve_format(Format.COMMANDER).target_lands == 38

    def test_existing_target_passes_through(self):
        target = FormatTarget(40, 17, Format.LIMITED)

        assert resolve_format(target) is target

    def test_unknown_format(self):
        with pytest.raises(UnknownFormat) as exc_info:
            resolve_format("pauper")

        assert "commander" in exc_info.value.valid
        assert isinstance(exc_info.value, InvalidTarget)

    @pytest.mark.parametrize("cards, lands", [(60, 61), (60, -1), (0, 0), (-5, 0)])
    def test_invalid_numbers(self, cards, lands):
        with pytest.raises(InvalidTarget):
            resolve_format((cards, lands))

    def test_invalid_target_carries_values(self):
        with pytest.raises(InvalidTarget) as exc_info:
            resolve_format("standard", target_lands=70)

        assert exc_info.value.target_lands == 70
        assert exc_info.value.total_cards == 60

    def test_non_integer_rejected(self):
        with pytest.raises(InvalidTarget):
            resolve_format("standard", target_lands=24.5)

    def test_zero_lands_allowed(self):
        assert resolve_format((60, 0)).target_lands == 0


class TestDetectFormat:
    """Test format detection heuristics."""

    @pytest.mark.parametrize(
        "cards, expected",
        [(100, Format.COMMANDER), (99, Format.COMMANDER), (40, Format.LIMITED), (45, Format.LIMITED), (60, Format.STANDARD)],
    )
    def test_by_deck_size(self, cards, expected):
        assert detect_format(cards) is expected

    def test_hint_wins(self):
        assert detect_format(60, "Commander precon") is Format.COMMANDER
        assert detect_format(60, "Sealed pool") is Format.LIMITED
        assert detect_format(40, "modern burn") is Format.MODERN

    def test_unmatched_hint_falls_back(self):
        assert detect_format(40, "kitchen table") is Format.LIMITED

    def test_parse_format_name(self):
        assert parse_format_name("Modern") is Format.MODERN


class TestLandRangeWarning:
    """Test recommended land range checks."""

    def test_inside_range(self):
        assert land_range_warning(resolve_format("limited")) is None

    def test_outside_range(self):
        warning = land_range_warning(resolve_format("commander", target_lands=30))

        assert "30 lands is outside the recommended 36-40" in warning

    def test_custom_range_scales_with_deck_size(self):
        # 20-30 per 60 cards -> 40-60 per 120
        assert land_range_warning(FormatTarget(120, 45)) is None
        assert land_range_warning(FormatTarget(120, 30)) is not None


class TestPresets:
    """Test preset listing."""

    def test_list_presets(self):
        presets = list_presets()

        assert [p.format for p in presets] == list(Format)
        assert presets[0].recommended_range == (36, 40)

    def test_target_str(self):
        assert str(FormatTarget(40, 17, Format.LIMITED)) == "Limited (40 cards, 17 lands)"
