class DetectionError(Exception):
    """Base class for every failure surfaced to a caller."""


class InvalidInputError(DetectionError):
    """Missing or unparseable image URL."""


class FetchError(DetectionError):
    """The image could not be downloaded or is not an image."""


class AnalysisError(DetectionError):
    """The vision model call failed."""


class ConfigError(DetectionError):
    """The configuration file is missing or malformed."""
