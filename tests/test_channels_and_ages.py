import pytest

from core.domain.models import AgeAudience, ChannelSelection, Rejection
from core.services.tag_fields import (
    add_channel,
    add_range,
    choose_primary,
    parse_range,
    parse_ranges,
    remove_channel,
    remove_range,
    selection_from_fields,
    set_all_ages,
    take_range,
    toggle_channel,
)


def test_primary_channel_follows_activation_and_removal():
    selection = toggle_channel(ChannelSelection(), "a").value
    selection = toggle_channel(selection, "b").value
    assert selection.channels == ("a", "b")
    assert selection.primary == "a"

    selection = toggle_channel(selection, "a").value
    assert selection.primary == "b"

    selection = toggle_channel(selection, "b").value
    assert selection == ChannelSelection()
    assert selection.primary == ""


def test_primary_uses_insertion_order_not_alphabetical():
    selection = toggle_channel(ChannelSelection(), "tiktok").value
    selection = toggle_channel(selection, "facebook").value
    assert selection.primary == "tiktok"


def test_removing_non_primary_keeps_primary():
    selection = ChannelSelection(channels=("instagram", "tiktok"), primary="tiktok")
    assert remove_channel(selection, "instagram").primary == "tiktok"


def test_add_blank_channel_is_rejected():
    selection = ChannelSelection(channels=("instagram",), primary="instagram")
    outcome = add_channel(selection, "  ")
    assert outcome.rejection is Rejection.EMPTY_VALUE
    assert outcome.value is selection


def test_toggle_blank_channel_is_rejected():
    assert toggle_channel(ChannelSelection(), None).rejection is Rejection.EMPTY_VALUE


def test_selection_from_fields_repairs_stale_primary():
    selection = selection_from_fields("instagram, facebook", "tiktok")
    assert selection.primary == "instagram"
    assert selection_from_fields("", "tiktok") == ChannelSelection()
    assert selection_from_fields("instagram, facebook", "facebook").primary == "facebook"


def test_choose_primary_ignores_inactive_channel():
    selection = ChannelSelection(channels=("instagram", "tiktok"), primary="instagram")
    assert choose_primary(selection, "tiktok").primary == "tiktok"
    assert choose_primary(selection, "facebook") is selection


def test_add_range_from_all_ages_starts_fresh():
    audience = AgeAudience(all_ages=True, ranges=("25-34", "35-44"))
    outcome = add_range(audience, 18, 24)
    assert outcome.accepted
    assert outcome.value.all_ages is False
    assert outcome.value.ranges == ("18-24",)


def test_add_range_appends_and_dedupes():
    audience = add_range(AgeAudience(), "18", "24").value
    audience = add_range(audience, 25, 34).value
    audience = add_range(audience, 18, 24).value
    assert audience.ranges == ("18-24", "25-34")


@pytest.mark.parametrize(
    "minimum,maximum",
    [(None, 24), (18, None), (-1, 5), (30, 20), ("", "24"), ("abc", "24"), (True, 5), (1.5, 3)],
)
def test_add_range_rejects_invalid_bounds(minimum, maximum):
    audience = AgeAudience(ranges=("18-24",))
    outcome = add_range(audience, minimum, maximum)
    assert outcome.rejection is Rejection.INVALID_RANGE
    assert outcome.value is audience


def test_add_range_accepts_equal_bounds():
    assert add_range(AgeAudience(), 30, 30).value.ranges == ("30-30",)


def test_all_ages_flag_makes_ranges_inert_but_keeps_them():
    audience = AgeAudience(ranges=("18-24",))
    on = set_all_ages(audience, True)
    assert on.effective_ranges == ()
    assert on.ranges == ("18-24",)

    off = set_all_ages(on, False)
    assert off.effective_ranges == ("18-24",)


def test_remove_range():
    audience = AgeAudience(ranges=("18-24", "25-34"))
    assert remove_range(audience, "18-24").ranges == ("25-34",)
    assert remove_range(audience, "99-100").ranges == ("18-24", "25-34")


def test_take_range_returns_bounds_for_editing():
    audience, bounds = take_range(AgeAudience(ranges=("18-24", "25-34")), "25-34")
    assert bounds == (25, 34)
    assert audience.ranges == ("18-24",)


def test_parse_range():
    assert parse_range(" 18-24 ") == (18, 24)
    assert parse_range("65+") is None
    assert parse_range("40-30") is None


def test_parse_ranges_drops_malformed_and_normalizes():
    assert parse_ranges("018-24, 65+, 18-24, 25 - 34, 35-44") == ("18-24", "35-44")


def test_age_ranges_only_accept_ascii_digits():
    assert parse_range("١٨-٢٤") is None
    assert parse_ranges("١٨-٢٤, 25-34") == ("25-34",)
