import pytest
from pydantic import ValidationError

from core.domain.brand import BrandTone, CoverageArea, VisualStyle
from core.services.base_config import BaseConfig, InvalidBaseConfig, load_base_config


def _form(**overrides):
    form = {
        "years_in_market": "5",
        "country": " Chile ",
        "city": "",
        "coverage_area": "nacional",
        "brand_tone": "cercano",
        "brand_personality": "ignored",
        "brand_personality_hidden": "cercana, alegre, cercana",
        "allowed_emojis": "on",
        "forbidden_words": "barato,  gratis ",
        "target_audience_all_ages": "off",
        "target_audience_age_ranges": "18-24, 25-34, basura",
        "active_channels_hidden": "instagram, tiktok",
        "main_channel": "facebook",
        "visual_style": "",
        "brand_colors_hidden": "FF0000, #0f0, nada",
    }
    form.update(overrides)
    return form


def test_load_normalizes_every_field_kind():
    config = load_base_config(_form())

    assert config.years_in_market == 5
    assert config.country == "Chile"
    assert config.city is None
    assert config.coverage_area is CoverageArea.NACIONAL
    assert config.brand_tone is BrandTone.CERCANO
    assert config.visual_style is None
    assert config.brand_personality == ("cercana", "alegre")
    assert config.allowed_emojis is True
    assert config.forbidden_words == ("barato", "gratis")
    assert config.audience.all_ages is False
    assert config.audience.ranges == ("18-24", "25-34")
    assert config.channels.channels == ("instagram", "tiktok")
    assert config.channels.primary == "instagram"
    assert config.brand_colors == ("#ff0000", "#00ff00")


def test_hidden_field_wins_even_when_empty():
    config = load_base_config(_form(brand_personality="visible", brand_personality_hidden=""))
    assert config.brand_personality == ()


def test_visible_field_used_without_hidden():
    form = _form(brand_personality="visible, otra")
    del form["brand_personality_hidden"]
    assert load_base_config(form).brand_personality == ("visible", "otra")


def test_unknown_enum_values_fail_with_field_errors():
    with pytest.raises(InvalidBaseConfig) as excinfo:
        load_base_config(_form(brand_tone="sarcastico", visual_style="retro"))
    assert set(excinfo.value.errors) == {"brand_tone", "visual_style"}
    assert "profesional" in excinfo.value.errors["brand_tone"]


def test_enum_values_are_case_insensitive():
    assert load_base_config(_form(visual_style=" Moderno ")).visual_style is VisualStyle.MODERNO


@pytest.mark.parametrize("raw,expected", [("on", True), ("true", True), (True, True), ("off", False), (None, False), ("", False)])
def test_checkbox_coercion(raw, expected):
    assert load_base_config(_form(target_audience_all_ages=raw)).audience.all_ages is expected


@pytest.mark.parametrize("raw,expected", [("abc", None), ("", None), ("12", 12), (7, 7), ("3.5", None)])
def test_years_in_market(raw, expected):
    assert load_base_config(_form(years_in_market=raw)).years_in_market == expected


def test_legacy_single_age_range_field():
    form = _form(target_age_range="30-45")
    del form["target_audience_age_ranges"]
    assert load_base_config(form).audience.ranges == ("30-45",)


def test_to_form_renders_canonical_wire_strings():
    form = load_base_config(_form()).to_form()
    assert form["brand_colors"] == "#ff0000, #00ff00"
    assert form["active_channels"] == "instagram, tiktok"
    assert form["main_channel"] == "instagram"
    assert form["target_audience_all_ages"] is False
    assert form["target_audience_age_ranges"] == "18-24, 25-34"
    assert form["coverage_area"] == "nacional"
    assert form["visual_style"] is None


def test_to_form_round_trips_through_load():
    config = load_base_config(_form())
    assert load_base_config(config.to_form()) == config


def test_empty_form_gives_defaults():
    assert load_base_config({}) == BaseConfig()


def test_invalid_form_errors_come_from_pydantic_validation():
    with pytest.raises(InvalidBaseConfig) as excinfo:
        load_base_config(_form(coverage_area="galactica"))
    assert isinstance(excinfo.value.__cause__, ValidationError)
    assert list(excinfo.value.errors) == ["coverage_area"]


def test_model_validate_accepts_form_columns_directly():
    assert BaseConfig.model_validate(_form()) == load_base_config(_form())
