"""Identity normalization: directory identifiers, addresses and display names.

Exchange-style mail stores often populate address fields with a legacy
directory distinguished name (DN) such as
``/O=EXCHANGELABS/OU=.../CN=RECIPIENTS/CN=3f2a...-jane.doe`` instead of a
routable SMTP address. The helpers here recognize those strings, keep them
out of address fields, and recover a readable name from them.
"""

import re

# Email address pattern
EMAIL_PATTERN = re.compile(r"([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})")

# Address strictly inside angle brackets (e.g., "Jane Doe <jane@example.com>")
BRACKETED_EMAIL_PATTERN = re.compile(r"<([a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,})>")

# Segment marker separating common-name parts of a directory identifier
CN_SEGMENT_PATTERN = re.compile(r"/cn=", re.IGNORECASE)

# Hex object-id prefix on the last segment (e.g., "3948593485-john.doe")
HEX_PREFIX_PATTERN = re.compile(r"^[0-9a-fA-F]{10,}-(.+)$", re.DOTALL)

MAILTO_PREFIX = "mailto:"


def is_directory_identifier(text: str | None) -> bool:
    """Check whether text is a directory identifier rather than an address."""
    if not text:
        return False
    upper = text.upper()
    return upper.startswith("/O=") or upper.startswith("/CN=") or "/O=EXCHANGELABS" in upper


def clean_display_name(text: str | None) -> str:
    """Recover a readable name from a directory identifier.

    Non-identifier text is returned unchanged.

    Example:
        >>> clean_display_name("/o=Org/ou=Admin/cn=Recipients/cn=3f2a9b8c7d6e-john.doe")
        'john.doe'
    """
    if not text:
        return ""
    if not is_directory_identifier(text):
        return text

    parts = CN_SEGMENT_PATTERN.split(text)
    if len(parts) < 2:
        return text

    name = parts[-1]
    hex_match = HEX_PREFIX_PATTERN.match(name)
    if hex_match:
        name = hex_match.group(1)
    return name


def extract_email(text: str | None) -> str | None:
    """Extract a routable email address from free text.

    Args:
        text: Raw field value (address, "Name <address>", mailto link, DN...)

    Returns:
        The first acceptable address, or None. Directory identifiers are
        never returned.
    """
    if not text:
        return None

    clean_text = text.strip()
    if clean_text.lower().startswith(MAILTO_PREFIX):
        clean_text = clean_text[len(MAILTO_PREFIX) :]

    # A bare DN is never an address
    if is_directory_identifier(clean_text) and "@" not in clean_text:
        return None

    for pattern in (BRACKETED_EMAIL_PATTERN, EMAIL_PATTERN):
        match = pattern.search(clean_text)
        if match and not is_directory_identifier(match.group(1)):
            return match.group(1)

    return None


def is_plausible_address(text: str | None) -> bool:
    """Looser check used when no pattern match was found: has '@', not a DN."""
    return bool(text) and "@" in text and not is_directory_identifier(text)
