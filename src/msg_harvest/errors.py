"""Error kinds raised across the decode, resolve and export boundaries."""


class HarvestError(Exception):
    """Base class for msg-harvest errors."""


class DecodeFailure(HarvestError):
    """The byte buffer could not be interpreted as a message container."""


class AttachmentExtractionFailure(HarvestError):
    """A single attachment's payload could not be retrieved."""

    def __init__(self, message: str, attachment_name: str | None = None):
        super().__init__(message)
        self.attachment_name = attachment_name


class ExportPrecondition(HarvestError):
    """Export was requested with nothing to export.

    Callers check ``reason`` to tell an empty session apart from a session
    whose messages carry no attachments.
    """

    NO_RECORDS = "no_records"
    NO_ATTACHMENTS = "no_attachments"

    def __init__(self, reason: str, message: str | None = None):
        if message is None:
            message = {
                self.NO_RECORDS: "No processed messages to export.",
                self.NO_ATTACHMENTS: "No attachments found in the processed emails.",
            }.get(reason, reason)
        super().__init__(message)
        self.reason = reason
