"""
Exception types shared by the analysis pipeline, the store and the routers.
"""


class AnalysisError(Exception):
    """Base class for failures surfaced to the caller of analyze()."""


class UserInputError(AnalysisError):
    """Bad upload or request content. Not retried."""


class UnsupportedFormatError(UserInputError):
    pass


class EmptyDocumentError(UserInputError):
    pass


class ExtractionFailure(AnalysisError):
    """The document could not be parsed (corrupt or truncated file)."""


class AIUnavailable(Exception):
    """The AI report could not be produced. Always recovered by the fallback."""


class StoreFailure(Exception):
    """A persistence or query error in the entity store."""


class DuplicateApplication(Exception):
    """The candidate already applied to this job."""
