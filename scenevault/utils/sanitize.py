"""
Security utility for sanitizing sensitive data in logs
Prevents API keys and upload tokens from being exposed in logs
"""

import re

SENSITIVE_PATTERNS = [
    (re.compile(r'(sv_[a-zA-Z0-9_\-]{16,})'), 'sv_***REDACTED***'),  # SceneVault API keys
    (re.compile(r'(Bearer\s+[a-zA-Z0-9_\-\.]+)'), 'Bearer ***REDACTED***'),  # Bearer tokens
    (re.compile(r'(/storage/uploads/)[^/\s?]+'), r'\1***REDACTED***'),  # Upload tokens in paths
]


def sanitize_string(text: str) -> str:
    """
    Remove sensitive patterns from string

    Args:
        text: String that may contain sensitive data

    Returns:
        Sanitized string with patterns redacted
    """
    if not isinstance(text, str):
        return text

    sanitized = text
    for pattern, replacement in SENSITIVE_PATTERNS:
        sanitized = pattern.sub(replacement, sanitized)

    return sanitized


def get_safe_api_key_display(api_key: str) -> str:
    """
    Get safe display version of API key (first 8 chars only)

    Args:
        api_key: Full API key

    Returns:
        Truncated API key safe for display
    """
    if not api_key or len(api_key) < 8:
        return "***"

    return f"{api_key[:8]}..."
