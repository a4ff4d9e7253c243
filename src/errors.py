"""Exception hierarchy for skillgap."""

from typing import Optional


class SkillGapError(Exception):
    """Base exception for skillgap errors."""
    pass


class ConfigurationError(SkillGapError):
    """Raised for fatal setup problems: bad config, malformed catalog, unknown track."""
    pass


class UnknownTrack(ConfigurationError):
    """Raised when a track is not one of the recognized tracks."""

    def __init__(self, track: str):
        self.track = track
        super().__init__(f"Invalid track: {track}. Must be one of: frontend, backend, fullstack")


class EvidenceUnavailable(SkillGapError):
    """Raised by a demand source when a provider lookup fails.

    Callers enriching a batch convert this into zero evidence for the
    affected skill instead of letting it escape.
    """

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        self.provider = provider
        self.status_code = status_code
        super().__init__(message)
