"""
Custom exceptions.

The lobby layer (server admission, pairing, selection) never raises for "nothing found" situations, those are returned as None.
These exceptions belong to the boundary: invalid requests, unknown addresses and broken configuration.
"""


class MatchmakingError(Exception):
    """Top-level exception for anything raised by this package."""


class InvalidRequestError(MatchmakingError):
    """Request data could not be validated."""


class UnknownServerError(MatchmakingError):
    """No server with the requested address is part of the directory."""


class ConfigurationError(MatchmakingError):
    """Settings could not be parsed or are inconsistent."""
