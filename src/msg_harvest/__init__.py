"""msg-harvest: normalize Outlook .msg messages into analysis-ready records."""

__version__ = "0.1.0"
