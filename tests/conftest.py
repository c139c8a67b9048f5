"""Shared fixtures: fake decoder and message builders."""

from datetime import datetime

import pytest

from msg_harvest.decoder.message import ATTACH_BY_VALUE, DecodedMessage, RawAttachment
from msg_harvest.pipeline.resolve import SourceFile

FILE_MTIME = datetime(2024, 3, 1, 9, 30, 0)


class FakeDecoder:
    """Decoder returning canned results keyed by the raw bytes.

    A value that is an exception instance is raised instead of returned.
    """

    def __init__(self, results: dict[bytes, DecodedMessage | Exception | None]):
        self.results = results
        self.calls: list[bytes] = []

    def decode(self, data: bytes) -> DecodedMessage | None:
        self.calls.append(data)
        result = self.results[data]
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def fake_decoder():
    """Factory for FakeDecoder instances."""
    return FakeDecoder


@pytest.fixture
def make_source():
    """Factory for in-memory source files."""

    def _make(name: str = "message.msg", data: bytes = b"msg", last_modified=FILE_MTIME):
        return SourceFile.from_bytes(name, data, last_modified)

    return _make


@pytest.fixture
def make_attachment():
    """Factory for embedded-data attachment descriptors."""

    def _make(short_name: str | None, content: bytes = b"payload", **kwargs):
        kwargs.setdefault("method", ATTACH_BY_VALUE)
        return RawAttachment(short_name=short_name, reader=lambda: content, **kwargs)

    return _make
