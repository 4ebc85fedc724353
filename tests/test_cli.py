import json

import pytest
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    # Keep user/project .env files out of the CLI tests.
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("PLANNER_DEFAULT_LANGUAGE", "en")


def _last_json_line(output):
    lines = [line for line in output.splitlines() if line.startswith("{")]
    return json.loads(lines[-1])


def test_token_prints_expected_string():
    result = runner.invoke(app, ["token", "Café & Co."])
    assert result.exit_code == 0
    assert result.stdout.strip() == "eliminar_cafe_co"


def test_token_respects_configured_prefix(monkeypatch):
    monkeypatch.setenv("PLANNER_CONFIRMATION_PREFIX", "borrar_")
    result = runner.invoke(app, ["token", "Tienda"])
    assert result.stdout.strip() == "borrar_tienda"


def test_token_without_valid_slug_fails():
    result = runner.invoke(app, ["token", "***"])
    assert result.exit_code == 1


def test_confirm_is_case_sensitive():
    assert runner.invoke(app, ["confirm", "Café & Co.", "eliminar_cafe_co"]).exit_code == 0
    assert runner.invoke(app, ["confirm", "Café & Co.", "Eliminar_cafe_co"]).exit_code == 1


def test_delete_business_with_confirmation_flag():
    result = runner.invoke(app, ["delete-business", "b1", "Café & Co.", "--confirm", "eliminar_cafe_co"])
    assert result.exit_code == 0
    assert _last_json_line(result.stdout)["status"] == "DELETED"


def test_delete_business_prompts_when_flag_missing():
    result = runner.invoke(app, ["delete-business", "b1", "Tienda"], input="eliminar_otra\n")
    assert result.exit_code == 1


def test_tags_commands():
    assert runner.invoke(app, ["tags", "parse", " a, b ,a,,c"]).stdout.strip() == "a, b, c"
    assert runner.invoke(app, ["tags", "parse", "FF0000, #abc", "--color"]).stdout.strip() == "#ff0000, #aabbcc"
    assert runner.invoke(app, ["tags", "add", "#ff0000", "00FF00", "--color"]).stdout.strip() == "#ff0000, #00ff00"
    assert runner.invoke(app, ["tags", "remove", "a, b", "a"]).stdout.strip() == "b"
    result = runner.invoke(app, ["tags", "replace", "#ff0000, #00ff00", "#ff0000", "#00ff00"])
    assert result.stdout.strip() == "#00ff00"


def test_tags_add_rejection_exits_with_error():
    result = runner.invoke(app, ["tags", "add", "#ff0000", "not-a-color", "--color"])
    assert result.exit_code == 1


def test_channels_toggle_outputs_selection():
    result = runner.invoke(app, ["channels", "toggle", "instagram, tiktok", "instagram", "--primary", "instagram"])
    assert result.exit_code == 0
    assert _last_json_line(result.stdout) == {"active_channels": "tiktok", "main_channel": "tiktok"}


def test_channels_show_renders_table():
    result = runner.invoke(app, ["channels", "show", "tiktok"])
    assert result.exit_code == 0
    assert "instagram" in result.stdout


def test_ages_add_leaves_all_ages_mode():
    result = runner.invoke(app, ["ages", "add", "25-34", "18", "24", "--all-ages"])
    assert result.exit_code == 0
    assert _last_json_line(result.stdout) == {
        "target_audience_all_ages": False,
        "target_audience_age_ranges": "18-24",
    }


def test_ages_add_rejects_inverted_range():
    assert runner.invoke(app, ["ages", "add", "", "40", "30"]).exit_code == 1


def test_normalize_exports_canonical_json(tmp_path):
    form_path = tmp_path / "form.json"
    form_path.write_text(
        json.dumps({"brand_colors_hidden": "FF0000", "active_channels_hidden": "tiktok", "brand_tone": "serio"}),
        encoding="utf-8",
    )
    out_path = tmp_path / "out" / "config.json"

    result = runner.invoke(app, ["normalize", str(form_path), "--json", "--output", str(out_path)])
    assert result.exit_code == 0
    exported = json.loads(out_path.read_text(encoding="utf-8"))
    assert exported["brand_colors"] == "#ff0000"
    assert exported["main_channel"] == "tiktok"
    assert exported["brand_tone"] == "serio"


def test_normalize_reports_invalid_form(tmp_path):
    form_path = tmp_path / "form.json"
    form_path.write_text(json.dumps({"brand_tone": "sarcastico"}), encoding="utf-8")
    assert runner.invoke(app, ["normalize", str(form_path)]).exit_code == 1
    assert runner.invoke(app, ["normalize", str(tmp_path / "missing.json")]).exit_code == 1


def test_doctor_run():
    result = runner.invoke(app, ["doctor", "run"])
    assert result.exit_code == 0


def test_doctor_configure_writes_user_env(tmp_path):
    result = runner.invoke(app, ["doctor", "configure"], input="borrar_\ninstagram, x\nes\n")
    assert result.exit_code == 0
    env_text = (tmp_path / "config" / "content-planner" / ".env").read_text(encoding="utf-8")
    assert "PLANNER_CONFIRMATION_PREFIX=borrar_" in env_text
    assert 'PLANNER_CHANNEL_OPTIONS=["instagram", "x"]' in env_text


def test_tags_remove_canonicalizes_colors():
    result = runner.invoke(app, ["tags", "remove", "FF0000, #0f0", "#F00", "--color"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "#00ff00"


def test_doctor_configure_rejects_invalid_prefix(tmp_path):
    result = runner.invoke(app, ["doctor", "configure"], input="Borrar X\ninstagram\nes\n")
    assert result.exit_code != 0
    assert not (tmp_path / "config" / "content-planner" / ".env").exists()


def test_doctor_configure_rejects_unknown_language(tmp_path):
    result = runner.invoke(app, ["doctor", "configure"], input="borrar_\ninstagram\nfr\n")
    assert result.exit_code != 0
    assert not (tmp_path / "config" / "content-planner" / ".env").exists()
