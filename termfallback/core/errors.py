"""Exception taxonomy for fallback chain resolution.

- ``InvalidLanguageCode``: a code failed validation.  Raised to the
  caller, never recovered locally.
- ``FallbackGraphConfigurationError``: the language graph is cyclic or
  malformed.  Fatal; surfaces as a startup/configuration error.
- ``ConversionError``: a variant conversion failed.  Chain extraction
  treats it as "no value for this step" and moves on.
"""

from __future__ import annotations


class TermFallbackError(Exception):
    """Base class for all errors raised by this package."""


class InvalidLanguageCode(TermFallbackError, ValueError):
    """Raised when a language code is empty or malformed.

    Attributes:
        code: The offending input, verbatim.
    """

    def __init__(self, code: object, reason: str = "invalid language code") -> None:
        self.code = code
        super().__init__(f"{reason}: {code!r}")


class FallbackGraphConfigurationError(TermFallbackError, RuntimeError):
    """Raised when the language graph cannot produce a bounded chain."""


class ConversionError(TermFallbackError):
    """Raised by a ``Conversion`` that cannot convert a value."""

    def __init__(self, from_code: str, to_code: str, reason: str = "no conversion available") -> None:
        self.from_code = from_code
        self.to_code = to_code
        super().__init__(f"{reason}: {from_code} -> {to_code}")
