"""Signature help: triggering, response correlation and Markdown rendering."""

from .controller import AssistanceController
from .correlator import (
    SIGNATURE_POPUP_CLASS,
    SIGNATURE_POPUP_ID,
    CorrelatorState,
    Disposition,
    DispositionAction,
    RequestCorrelator,
    RequestSession,
)
from .highlight import highlight_parameter_html
from .markdown import FormattedBlock, extract_lead, format_signature, format_signature_help
from .triggers import EditorChange, last_character, should_request

__all__ = [
    "AssistanceController",
    "CorrelatorState",
    "Disposition",
    "DispositionAction",
    "EditorChange",
    "FormattedBlock",
    "RequestCorrelator",
    "RequestSession",
    "SIGNATURE_POPUP_CLASS",
    "SIGNATURE_POPUP_ID",
    "extract_lead",
    "format_signature",
    "format_signature_help",
    "highlight_parameter_html",
    "last_character",
    "should_request",
]
