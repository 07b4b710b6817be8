from __future__ import annotations

import logging

from signature_assist.settings import (
    default_settings,
    normalize_completion_settings,
    normalize_signature_settings,
)


def test_defaults():
    settings = normalize_signature_settings(None)

    assert settings.enabled is True
    assert settings.max_lines == 4
    assert settings.close_characters == (")",)
    assert default_settings()["completion"]["label_extra"] == "auto"


def test_max_lines_is_clamped():
    assert normalize_signature_settings({"max_lines": 0}).max_lines == 1
    assert normalize_signature_settings({"max_lines": "500"}).max_lines == 50


def test_invalid_max_lines_falls_back(caplog):
    with caplog.at_level(logging.WARNING):
        settings = normalize_signature_settings({"max_lines": "many"})

    assert settings.max_lines == 4
    assert "'many'" in caplog.text


def test_close_characters_accept_string_and_dedupe():
    assert normalize_signature_settings({"close_characters": ")]"}).close_characters == (")", "]")
    assert normalize_signature_settings({"close_characters": [")", ")"]}).close_characters == (")",)


def test_enabled_accepts_text():
    assert normalize_signature_settings({"enabled": "off"}).enabled is False


def test_unknown_label_extra_degrades_to_empty(caplog):
    with caplog.at_level(logging.WARNING):
        settings = normalize_completion_settings({"label_extra": "fancy"})

    assert settings.label_extra == ""
    assert "'fancy'" in caplog.text
