"""Decoder boundary: typed message view and the .msg adapter."""

from .message import ATTACH_BY_VALUE, DecodedMessage, MessageDecoder, RawAttachment, RawRecipient

__all__ = [
    "ATTACH_BY_VALUE",
    "DecodedMessage",
    "MessageDecoder",
    "RawAttachment",
    "RawRecipient",
]
