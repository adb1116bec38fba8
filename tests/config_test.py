import textwrap
import warnings

import pytest
from pydantic import ValidationError

from ttc_headsigns.config import AgencySettings, get_settings, load_settings


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "missing.yaml")
    assert settings == AgencySettings()
    assert settings.name == "TTC"
    assert settings.color == "DA251D"
    assert settings.route_type == 3
    assert settings.direction_splitter_routes == [101]


def test_load_settings_merges_env_and_call_overrides(tmp_path, monkeypatch):
    cfg = tmp_path / "agency.yaml"
    cfg.write_text(
        textwrap.dedent(
            """
            agency:
              language: fr
              direction_splitter_routes: [101, 12]
            """
        )
    )
    monkeypatch.setenv("AGENCY__COLOR", "FF0000")
    monkeypatch.setenv("OTHER__COLOR", "000000")

    settings = load_settings(cfg)
    assert settings.language == "fr"
    assert settings.direction_splitter_routes == [101, 12]
    assert settings.color == "FF0000"

    assert load_settings(cfg, overrides={"language": "en"}).language == "en"


def test_env_values_are_yaml_coerced(tmp_path, monkeypatch):
    monkeypatch.setenv("AGENCY__DIRECTION_SPLITTER_ROUTES", "[7, 8]")
    assert load_settings(tmp_path / "missing.yaml").direction_splitter_routes == [7, 8]


def test_unknown_key_emits_warning(tmp_path):
    cfg = tmp_path / "agency.yaml"
    cfg.write_text("agency:\n  colour: red\n")
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        settings = load_settings(cfg)

    assert [w.message.args[0] for w in caught] == ["Unknown agency settings: colour"]
    assert settings.color == "DA251D"


def test_known_keys_do_not_warn(tmp_path):
    cfg = tmp_path / "agency.yaml"
    cfg.write_text("agency:\n  name: TTC Blue Night\n")
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        load_settings(cfg)
    assert not caught


@pytest.mark.parametrize("body", ["- a\n- b\n", "agency: [1, 2]\n"])
def test_non_mapping_config_raises(tmp_path, body):
    cfg = tmp_path / "agency.yaml"
    cfg.write_text(body)
    with pytest.raises(TypeError):
        load_settings(cfg)


def test_invalid_values_raise(tmp_path):
    cfg = tmp_path / "agency.yaml"
    cfg.write_text("agency:\n  route_type: bus\n")
    with pytest.raises(ValidationError):
        load_settings(cfg)


def test_settings_are_frozen():
    with pytest.raises(ValidationError):
        AgencySettings().language = "fr"


def test_get_settings_reads_config_env(fresh_settings):
    (fresh_settings / "agency.yaml").write_text("agency:\n  language: fr\n")
    assert get_settings().language == "fr"
    assert get_settings() is get_settings()
