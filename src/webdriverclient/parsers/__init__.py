"""Per-dialect response parsers.

Pure functions from a decoded response body to a CommandResult holding
either a domain value or an UnexpectedResponseFormatError.
"""

from . import jwp_response_parser, w3c_response_parser

__all__ = ["jwp_response_parser", "w3c_response_parser"]
