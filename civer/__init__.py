"""civer - resolve the version of a CI build from its triggering event."""

__version__ = "0.1.0"
