"""Field-level parsers for identities and signature data."""

from .identity import clean_display_name, extract_email, is_directory_identifier
from .phone import SignaturePhoneExtractor, extract_signature_phone

__all__ = [
    "SignaturePhoneExtractor",
    "clean_display_name",
    "extract_email",
    "extract_signature_phone",
    "is_directory_identifier",
]
