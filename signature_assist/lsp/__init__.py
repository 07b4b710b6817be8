from .transport import (
    SIGNATURE_HELP_CLIENT_CAPABILITIES,
    LspSignatureTransport,
    SignatureHelpCapabilities,
)
from .types import (
    EditorPosition,
    Markdown,
    PlainText,
    Position,
    ResponseSignal,
    RootPosition,
    SignatureDescription,
    SignatureResponse,
    VirtualPosition,
    parse_signature_help,
)

__all__ = [
    "EditorPosition",
    "LspSignatureTransport",
    "Markdown",
    "PlainText",
    "Position",
    "ResponseSignal",
    "RootPosition",
    "SIGNATURE_HELP_CLIENT_CAPABILITIES",
    "SignatureDescription",
    "SignatureHelpCapabilities",
    "SignatureResponse",
    "VirtualPosition",
    "parse_signature_help",
]
