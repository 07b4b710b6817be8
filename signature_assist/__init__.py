"""Client-side LSP signature help: request correlation and Markdown rendering."""

from ._logging import setup_logging
from .settings import SignatureSettings, default_settings, normalize_signature_settings

__all__ = [
    "SignatureSettings",
    "default_settings",
    "normalize_signature_settings",
    "setup_logging",
]
