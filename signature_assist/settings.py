from __future__ import annotations

import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Mapping

logger = logging.getLogger(__name__)

LABEL_EXTRA_CHOICES: tuple[str, ...] = ("detail", "type", "source", "auto")

_SIGNATURE_DEFAULTS: dict[str, Any] = {
    "enabled": True,
    "max_lines": 4,
    "close_characters": [")"],
}
_COMPLETION_DEFAULTS: dict[str, Any] = {
    "label_extra": "auto",
}


def default_settings() -> dict[str, Any]:
    return {
        "signature": deepcopy(_SIGNATURE_DEFAULTS),
        "completion": deepcopy(_COMPLETION_DEFAULTS),
    }


def deep_merge_defaults(value: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    merged = deepcopy(dict(defaults))
    for key, item in value.items():
        if isinstance(item, Mapping) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge_defaults(item, merged[key])
        else:
            merged[key] = deepcopy(item)
    return merged


@dataclass(frozen=True)
class SignatureSettings:
    enabled: bool = True
    max_lines: int = 4
    close_characters: tuple[str, ...] = (")",)


@dataclass(frozen=True)
class CompletionSettings:
    label_extra: str = "auto"


def _coerce_bool(value: object, *, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    text = str(value or "").strip().lower()
    if text in {"1", "true", "yes", "on", "y"}:
        return True
    if text in {"0", "false", "no", "off", "n"}:
        return False
    return default


def normalize_signature_settings(raw: object, *, log: logging.Logger | None = None) -> SignatureSettings:
    log = log or logger
    data = deep_merge_defaults(raw if isinstance(raw, Mapping) else {}, _SIGNATURE_DEFAULTS)

    try:
        max_lines = max(1, min(50, int(data.get("max_lines", 4))))
    except (TypeError, ValueError):
        log.warning("Invalid signature max_lines setting %r, using 4", data.get("max_lines"))
        max_lines = 4

    raw_close = data.get("close_characters")
    if isinstance(raw_close, str):
        raw_close = list(raw_close)
    if not isinstance(raw_close, (list, tuple)):
        log.warning("Invalid signature close_characters setting %r, using none", raw_close)
        raw_close = []
    close_characters: list[str] = []
    for item in raw_close:
        text = str(item or "")
        if text and text not in close_characters:
            close_characters.append(text)

    return SignatureSettings(
        enabled=_coerce_bool(data.get("enabled"), default=True),
        max_lines=max_lines,
        close_characters=tuple(close_characters),
    )


def normalize_completion_settings(raw: object, *, log: logging.Logger | None = None) -> CompletionSettings:
    log = log or logger
    data = deep_merge_defaults(raw if isinstance(raw, Mapping) else {}, _COMPLETION_DEFAULTS)
    label_extra = str(data.get("label_extra") or "").strip().lower()
    if label_extra not in LABEL_EXTRA_CHOICES:
        log.warning("label_extra does not match any of the expected values: %r", data.get("label_extra"))
        label_extra = ""
    return CompletionSettings(label_extra=label_extra)
