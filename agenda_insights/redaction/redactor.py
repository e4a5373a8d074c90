"""Regex-based scrubbing of personal data before text leaves the trust boundary.

This is a best-effort filter, not a compliance control. It only knows three
shapes of personal data (email addresses, North American phone numbers and
SSN-like ``NNN-NN-NNNN`` groups); names, street addresses and anything else
pass through untouched.

Each category is replaced by a fixed sentinel containing no digits or ``@``.
Substitution is repeated until nothing matches, so ``redact`` is idempotent.
"""

import re
from typing import ClassVar

from agenda_insights.logging.logger import Log

EMAIL_SENTINEL = "[REDACTED_EMAIL]"
PHONE_SENTINEL = "[REDACTED_PHONE]"
SSN_SENTINEL = "[REDACTED_SSN]"


class Redactor:
    """Replaces email, SSN and phone patterns with category sentinels."""

    _EMAIL_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}",
        re.IGNORECASE,
    )
    _SSN_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"\b\d{3}-\d{2}-\d{4}\b",
    )
    # Optional +1 country code, optional parenthesised area code, and
    # space, dash or dot separators between the 3-3-4 groups.
    _PHONE_RE: ClassVar[re.Pattern[str]] = re.compile(
        r"(\+?1[\s\-.]?)?(\(?\d{3}\)?[\s\-.]?)\d{3}[\s\-.]?\d{4}",
    )

    # SSN runs before phone so a phone match never eats part of an SSN.
    _RULES: ClassVar[list[tuple[str, re.Pattern[str], str]]] = [
        ("EMAIL", _EMAIL_RE, EMAIL_SENTINEL),
        ("SSN", _SSN_RE, SSN_SENTINEL),
        ("PHONE", _PHONE_RE, PHONE_SENTINEL),
    ]

    def redact(self, text: str) -> str:
        """Return *text* with every known PII pattern replaced. Never fails."""
        if not text:
            return text

        counts: dict[str, int] = {}
        # Repeat until stable: removing a phone number can expose a fresh
        # word boundary in front of an SSN-like group. Every substitution
        # removes digits or an "@", so this terminates.
        while True:
            replaced_this_pass = 0
            for category, pattern, sentinel in self._RULES:
                text, replaced = pattern.subn(sentinel, text)
                if replaced:
                    counts[category] = counts.get(category, 0) + replaced
                    replaced_this_pass += replaced
            if not replaced_this_pass:
                break

        if counts:
            summary = ", ".join(f"{name}={count}" for name, count in counts.items())
            Log.info(f"Redacted potential PII: {summary}")
        return text
