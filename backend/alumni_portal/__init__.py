"""Alumni Portal backend - universities, alumni accounts, feed, events and directory."""

__version__ = "1.0.0"
