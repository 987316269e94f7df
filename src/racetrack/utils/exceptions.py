"""Custom exceptions for racetrack construction and queries."""


class RaceTrackError(Exception):
    """Base exception for racetrack errors."""


class ConfigurationError(RaceTrackError):
    """Raised when track-building configuration is invalid."""


class TrackDataError(RaceTrackError):
    """Raised when track data cannot be parsed, generated, or validated."""


class InstructionError(TrackDataError):
    """Raised when a segment instruction is malformed or unknown."""
