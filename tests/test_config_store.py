"""Tests for the panel configuration loader."""

import logging

import pytest

from controlpanel.low_level import config_store
from controlpanel.low_level.models import ControlKind


def test_load_object_layout(write_config, panel_doc):
    cfg = config_store.load(write_config(panel_doc))

    assert cfg.status_url == "http://status.local/values"
    assert [c.name for c in cfg.controls] == ["porch-light", "lamp", "fan"]
    assert cfg.controls[0].kind is ControlKind.BUTTON
    assert cfg.controls[1].kind is ControlKind.SLIDER
    assert cfg.controls[1].range == (0, 100)
    assert cfg.controls[0].icon == "bulb"
    assert all(c.value == 0 for c in cfg.controls)


def test_load_bare_array_layout(write_config):
    path = write_config([{"name": "porch-light", "type": "button", "url": "http://x/on"}])
    cfg = config_store.load(path)

    assert cfg.status_url is None
    assert len(cfg.controls) == 1
    assert cfg.controls[0].url == "http://x/on"


def test_load_reads_fresh_every_time(write_config):
    path = write_config([{"name": "a", "type": "button", "url": "http://x/a"}])
    assert [c.name for c in config_store.load(path).controls] == ["a"]

    write_config([{"name": "b", "type": "slider", "url": "http://x/b"}])
    assert [c.name for c in config_store.load(path).controls] == ["b"]


def test_missing_file_is_io_error(tmp_path):
    with pytest.raises(config_store.ConfigIOError):
        config_store.load(tmp_path / "nope.json")


def test_invalid_json_is_format_error(write_config):
    with pytest.raises(config_store.ConfigFormatError):
        config_store.load(write_config("{not json"))


@pytest.mark.parametrize(
    "doc",
    [
        "just a string",
        {"controls": {"name": "x"}},
        [{"type": "button", "url": "http://x"}],
        [{"name": "x", "type": "knob", "url": "http://x"}],
        [{"name": "x", "url": "http://x"}],
        [{"name": "x", "type": "button"}],
        [{"name": "x", "type": "slider", "url": "http://x", "min": "low"}],
        [{"name": "x", "type": "slider", "url": "http://x", "max": True}],
        {"status_url": 5, "controls": []},
    ],
)
def test_wrong_shape_is_format_error(write_config, doc):
    with pytest.raises(config_store.ConfigFormatError):
        config_store.load(write_config(doc))


def test_config_errors_share_base_class(tmp_path):
    with pytest.raises(config_store.ConfigError):
        config_store.load(tmp_path / "missing.json")


def test_type_is_case_insensitive(write_config):
    cfg = config_store.load(write_config([{"name": "x", "type": "Slider", "url": "http://x"}]))
    assert cfg.controls[0].is_slider


def test_blank_status_url_becomes_none(write_config):
    cfg = config_store.load(write_config({"status_url": "  ", "controls": []}))
    assert cfg.status_url is None


def test_placeholder_text_is_kept_literally(write_config, monkeypatch):
    monkeypatch.delenv("ID", raising=False)
    monkeypatch.setenv("HOST", "elsewhere")
    doc = {
        "status_url": "http://${HOST}/values",
        "controls": [{"name": "lamp ${ID}", "type": "slider", "url": "http://x/set?x=${ID}"}],
    }
    cfg = config_store.load(write_config(doc))

    assert cfg.controls[0].url == "http://x/set?x=${ID}"
    assert cfg.controls[0].name == "lamp ${ID}"
    assert cfg.status_url == "http://${HOST}/values"


def test_duplicate_names_first_wins_and_warns(write_config, caplog):
    path = write_config(
        [
            {"name": "dup", "type": "button", "url": "http://x/first"},
            {"name": "dup", "type": "slider", "url": "http://x/second"},
        ]
    )
    with caplog.at_level(logging.WARNING):
        cfg = config_store.load(path)

    assert cfg.find("dup").url == "http://x/first"
    assert cfg.duplicate_names() == ["dup"]
    assert "Duplicate control names" in caplog.text


def test_default_path_from_environment(monkeypatch):
    monkeypatch.setenv("CONTROLPANEL_CONFIG", "/etc/panel.json")
    assert config_store.default_config_path() == "/etc/panel.json"
    monkeypatch.delenv("CONTROLPANEL_CONFIG")
    assert config_store.default_config_path() == "config.json"
