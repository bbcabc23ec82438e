"""Simple redaction helpers for logs and diagnostics."""

from __future__ import annotations

import re

_URL_USERINFO_RE = re.compile(r"([a-z][a-z0-9+.-]*://)([^@/]+)@", re.IGNORECASE)
_QUERY_SECRET_RE = re.compile(
    r"(?i)(token|secret|password|signature|credential|x-amz-security-token|x-amz-signature)=([^&\s]+)"
)


def redact_secrets(text: str) -> str:
    """Redact userinfo and signing parameters from a log string."""
    if not text:
        return text
    redacted = _URL_USERINFO_RE.sub(r"\1***@", text)
    return _QUERY_SECRET_RE.sub(r"\1=***", redacted)
