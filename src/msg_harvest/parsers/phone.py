"""Signature phone number heuristics."""

import re

from ..config import DEFAULT_CONFIG, HarvestConfig

# Labeled number in a signature block: "M: 0412 345 678", "Tel. +61 (2) 9999 0000".
# The capture must start with +, a digit or "(" so a label followed only by
# whitespace falls through to the loose pattern instead of yielding "".
LABELED_PHONE_PATTERN = re.compile(
    r"(?:M|P|T|Mob|Mobile|Ph|Tel)[.:\s]+([+\d(][+\d\s().\-]{7,19})(?:\s|$|<)",
    re.IGNORECASE,
)


def build_loose_pattern(prefixes: tuple[str, ...]) -> re.Pattern[str] | None:
    """Compile the unlabeled fallback pattern for the given number prefixes.

    The group layout (2 + 3 + 3-4 digits) follows Australian numbering; the
    prefixes are policy and come from configuration.
    """
    if not prefixes:
        return None
    alternatives = "|".join(re.escape(p) for p in prefixes)
    return re.compile(rf"(?:{alternatives})\d{{2}}[-. ]?\d{{3}}[-. ]?\d{{3,4}}\b")


class SignaturePhoneExtractor:
    """Find a sender phone number in the trailing signature window of a body."""

    def __init__(self, config: HarvestConfig | None = None):
        self.config = config or DEFAULT_CONFIG
        self.loose_pattern = build_loose_pattern(self.config.phone_prefixes)

    def signature_window(self, body: str) -> str:
        """Return the slice of the body assumed to contain the signature."""
        window = self.config.signature_window
        if len(body) > window:
            return body[-window:]
        return body

    def extract(self, body: str | None) -> str:
        """Extract a phone number, or "" if nothing phone-like is found."""
        if not body:
            return ""

        text = self.signature_window(body)

        labeled = LABELED_PHONE_PATTERN.search(text)
        if labeled:
            return labeled.group(1).strip()

        if self.loose_pattern is not None:
            loose = self.loose_pattern.search(text)
            if loose:
                return loose.group(0).strip()

        return ""


def extract_signature_phone(body: str | None, config: HarvestConfig | None = None) -> str:
    """Convenience wrapper around SignaturePhoneExtractor.extract()."""
    return SignaturePhoneExtractor(config).extract(body)
