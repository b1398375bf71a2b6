"""Command dispatch and tab routing layer of a multi-server IRC client."""

__version__ = "0.3.0"
