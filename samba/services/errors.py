"""Exception taxonomy for backend and storage failures."""


class SambaError(Exception):
    """Base class for all application errors."""


class ResolutionError(SambaError):
    """A query could not be turned into an Entry."""


class SynthesisError(SambaError):
    """Speech generation failed."""


class CompositionError(SambaError):
    """Story generation failed or its precondition was not met."""


class ChatError(SambaError):
    """The tutor chat backend did not answer."""


class PersistenceError(SambaError):
    """A stored blob exists but does not decode into the expected shape."""


class ProviderError(SambaError):
    """An AI provider returned an error status or an unusable reply."""
