"""
Exception hierarchy for tag rendering.

Hard errors (validation, encoding, serialization) propagate to the HTTP
boundary. ResourceMissing is soft: it is raised by resource probes and
absorbed by their callers, which fall back to built-in defaults.
"""


class TagServiceError(Exception):
    """Base class for all tag service errors."""


class TagValidationError(TagServiceError):
    """A required tag field is missing or blank."""


class RenderError(TagServiceError):
    """The tag could not be rendered."""


class EncodingError(RenderError):
    """Barcode generation failed after all fallback attempts."""


class SerializationError(RenderError):
    """Final PDF assembly failed."""


class ResourceMissing(TagServiceError):
    """A font or template file is absent or unusable."""
