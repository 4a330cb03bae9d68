"""Error taxonomy for the review pipeline.

Every stage raises a subclass of ContractGuardError; the surfaces (API,
Streamlit, CLI) catch the base class and show the message.
"""


class ContractGuardError(Exception):
    """Base class for all pipeline failures."""


class ConfigurationError(ContractGuardError):
    """The LLM credential is missing."""


class UnsupportedFormatError(ContractGuardError):
    """Declared file type cannot be read, or the document is corrupt."""


class PdfNotSupportedError(UnsupportedFormatError, NotImplementedError):
    """PDF input is rejected outright; the user must convert it first."""


class ReadError(ContractGuardError):
    """Local I/O or decoding failure while reading an upload."""


class InsufficientTextError(ContractGuardError):
    """Extracted text is too short to be worth analysing."""


class EmptyResponseError(ContractGuardError):
    """The completion came back without any message content."""


class UpstreamError(ContractGuardError):
    """Transport or provider failure from the LLM API."""

    def __init__(self, message: str, original: Exception | None = None):
        super().__init__(message)
        self.original = original


class MalformedResponseError(ContractGuardError):
    """The model's reply was not parseable JSON of the expected shape."""
