"""Compiler response file (``.rsp``) parsing."""

from __future__ import annotations

import re
from typing import Callable, Dict, Iterable, List, Optional

from ..logging import get_logger
from ..models import ResponseFileOptions

_OPTION_PREFIXES = ("-", "/")
_LIST_SPLIT = re.compile(r"[;,]")


class MalformedOptionError(ValueError):
    """Raised when a value-bearing option is given without a usable value."""

    def __init__(self, token: str, reason: str = "missing value") -> None:
        super().__init__(f"Malformed compiler option '{token}': {reason}")
        self.token = token
        self.reason = reason


def tokenize(text: str) -> List[str]:
    """Split response file text into argument tokens.

    Whitespace separates tokens except inside double quotes; the quotes
    themselves are dropped. Lines starting with ``#`` are comments.
    """
    tokens: List[str] = []
    for line in text.splitlines():
        if line.lstrip().startswith("#"):
            continue
        current: List[str] = []
        in_quote = False
        has_token = False
        for char in line:
            if char == '"':
                in_quote = not in_quote
                has_token = True
                continue
            if char.isspace() and not in_quote:
                if has_token:
                    tokens.append("".join(current))
                    current = []
                    has_token = False
                continue
            current.append(char)
            has_token = True
        if has_token:
            tokens.append("".join(current))
    return tokens


class ResponseFileParser:
    """Turns response file text into :class:`ResponseFileOptions`."""

    def __init__(self) -> None:
        self.logger = get_logger("parsing.response_file")
        self._handlers: Dict[str, Callable[[ResponseFileOptions, str, str], None]] = {
            "a": self._analyzer,
            "analyzer": self._analyzer,
            "additionalfile": self._additional_file,
            "ruleset": self._ruleset,
            "doc": self._doc,
            "w": self._warning_level,
            "warn": self._warning_level,
            "nowarn": self._nowarn,
            "langversion": self._langversion,
            "d": self._define,
            "define": self._define,
            "r": self._reference,
            "reference": self._reference,
        }

    def parse(self, text: str, *, source: str | None = None) -> ResponseFileOptions:
        """Parse a whole response file; malformed options are skipped."""
        options = ResponseFileOptions()
        for token in tokenize(text):
            try:
                self.parse_token(options, token)
            except MalformedOptionError as exc:
                options.malformed.append(token)
                self.logger.warning(
                    "Skipping option in %s: %s", source or "response file", exc
                )
        return options

    def parse_token(self, options: ResponseFileOptions, token: str) -> None:
        """Apply a single token to ``options``.

        Unknown tokens are ignored. Raises :class:`MalformedOptionError` for a
        value-bearing option without a value.
        """
        if len(token) < 2 or token[0] not in _OPTION_PREFIXES:
            return
        body = token[1:]
        key, separator, value = body.partition(":")
        key = key.lower()

        if key.startswith("warnaserror"):
            self._warnaserror(options, token, key[len("warnaserror"):], separator, value)
            return
        if key.startswith("unsafe"):
            self._unsafe(options, key[len("unsafe"):])
            return
        if key.startswith("nullable"):
            self._nullable(options, token, key[len("nullable"):], separator, value)
            return

        handler = self._handlers.get(key)
        if handler is None:
            return
        value = value.strip()
        if not value:
            raise MalformedOptionError(token)
        handler(options, token, value)

    # ------------------------------------------------------------------
    # Option handlers

    def _analyzer(self, options: ResponseFileOptions, token: str, value: str) -> None:
        _extend_unique(options.analyzer_paths, _split_paths(value))

    def _additional_file(self, options: ResponseFileOptions, token: str, value: str) -> None:
        _extend_unique(options.additional_file_paths, _split_paths(value))

    def _ruleset(self, options: ResponseFileOptions, token: str, value: str) -> None:
        options.ruleset_paths.append(value)

    def _doc(self, options: ResponseFileOptions, token: str, value: str) -> None:
        options.documentation_paths.append(value)

    def _warning_level(self, options: ResponseFileOptions, token: str, value: str) -> None:
        try:
            options.warning_level = int(value)
        except ValueError as exc:
            raise MalformedOptionError(token, "warning level must be an integer") from exc

    def _nowarn(self, options: ResponseFileOptions, token: str, value: str) -> None:
        _extend_unique(options.no_warn_codes, _split_codes(value))

    def _langversion(self, options: ResponseFileOptions, token: str, value: str) -> None:
        options.lang_version = value

    def _define(self, options: ResponseFileOptions, token: str, value: str) -> None:
        _extend_unique(options.defines, _split_codes(value))

    def _reference(self, options: ResponseFileOptions, token: str, value: str) -> None:
        _extend_unique(options.full_path_references, _split_codes(value))

    def _warnaserror(
        self,
        options: ResponseFileOptions,
        token: str,
        sigil: str,
        separator: str,
        value: str,
    ) -> None:
        if sigil not in ("", "+", "-"):
            return
        if not separator:
            if sigil == "+":
                options.treat_all_warnings_as_errors = True
            elif sigil == "-":
                options.treat_all_warnings_as_errors = False
            return
        codes = _split_codes(value)
        if not codes:
            raise MalformedOptionError(token)
        if sigil == "-":
            options.warn_as_error_codes[:] = [
                code for code in options.warn_as_error_codes if code not in codes
            ]
        else:
            _extend_unique(options.warn_as_error_codes, codes)

    def _unsafe(self, options: ResponseFileOptions, sigil: str) -> None:
        if sigil in ("", "+"):
            options.unsafe = True
        elif sigil == "-":
            options.unsafe = False

    def _nullable(
        self,
        options: ResponseFileOptions,
        token: str,
        sigil: str,
        separator: str,
        value: str,
    ) -> None:
        if separator:
            if sigil or not value.strip():
                raise MalformedOptionError(token)
            options.nullable = value.strip()
        elif sigil in ("", "+"):
            options.nullable = "enable"
        elif sigil == "-":
            options.nullable = "disable"


def _split_paths(value: str) -> List[str]:
    return [part.strip() for part in value.split(";") if part.strip()]


def _split_codes(value: str) -> List[str]:
    return [part.strip() for part in _LIST_SPLIT.split(value) if part.strip()]


def _extend_unique(target: List[str], values: Iterable[str]) -> None:
    for value in values:
        if value not in target:
            target.append(value)


def parse_response_file(text: str, *, source: Optional[str] = None) -> ResponseFileOptions:
    """Convenience wrapper around :class:`ResponseFileParser`."""
    return ResponseFileParser().parse(text, source=source)


__all__ = [
    "MalformedOptionError",
    "ResponseFileParser",
    "parse_response_file",
    "tokenize",
]
