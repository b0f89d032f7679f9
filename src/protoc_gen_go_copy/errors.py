from __future__ import annotations


class GenerationError(Exception):
    """Base class for errors that abort a generation run."""


class RegistrationError(GenerationError):
    """Raised when a type is looked up before the file declaring it was registered."""


class DescriptorError(GenerationError):
    """Raised when a file descriptor cannot be mapped to Go naming."""


class ParameterError(GenerationError):
    """Raised for an invalid plugin parameter string."""


class FormatError(GenerationError):
    """Raised when the formatter rejects generated Go source.

    The unformatted text is kept for diagnostics.
    """

    def __init__(self, message: str, unformatted: str):
        super().__init__(message)
        self.unformatted = unformatted
