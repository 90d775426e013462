"""Exception types raised by the rendering pipeline."""


class ChromagenError(Exception):
    """Base class for all pipeline errors."""


class SetupError(ChromagenError):
    """Shared setup failed (output directory missing or not writable); aborts the run."""


class EmptyInputError(ChromagenError, ValueError):
    """A render request had nothing to work with, e.g. zero frames for a model."""
