"""Parsers for host build metadata."""

from .response_file import (
    MalformedOptionError,
    ResponseFileParser,
    parse_response_file,
    tokenize,
)

__all__ = [
    "MalformedOptionError",
    "ResponseFileParser",
    "parse_response_file",
    "tokenize",
]
