"""exceptions.py
Defines custom exceptions for this project.

The parsing / merging / scoring core never raises on malformed text. These
exceptions cover invalid wiring (configuration) and invalid external payloads,
which the orchestration layer catches and recovers from.
"""
from typing import Optional, List, Any

# ------------------------ Draft Payload Errors ------------------------
class DraftPayloadError(Exception):
    """
    Raised when an externally generated draft payload is missing required
    structure (e.g. no `sections` object) or carries malformed fields.

    Attributes:
        message (str): Human-readable description of the error.
        errors (list | None): Optional validation error details (as produced by pydantic).
    """

    def __init__(
        self,
        message: str = "Invalid external draft payload",
        errors: Optional[List[Any]] = None,
    ):
        self.message = message
        self.errors = errors
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        """Construct the complete error message including validation details."""
        if not self.errors:
            return self.message
        details = "\n".join(f"- {error}" for error in self.errors)
        return f"{self.message}\n\nValidation Errors:\n{details}"

# ------------------------ Section Parser Errors ------------------------
class SectionParserConfigError(Exception):
    """
    Raised when a SectionParser instance is configured incorrectly.

    Attributes:
        section_type (str | None): The section type the parser was asked to handle.
        message (str): Human-readable description of the error.
    """
    def __init__(self, section_type: str | None = None, message: str = "Invalid section parser configuration"):
        self.section_type = section_type
        self.message = message
        super().__init__(self.full_message)

    @property
    def full_message(self) -> str:
        if self.section_type:
            return f"{self.message}: {self.section_type}"
        return self.message

# ------------------------ Parser Map Errors ------------------------
class ParserMapConfigError(Exception):
    """
    Raised when the parser_map configuration is invalid.
    Provides a clear message about what went wrong.
    """
    def __init__(self, message: str):
        super().__init__(f"ParserMapConfigError: {message}")

# ------------------------ ResumeDraftFramework Errors ------------------------
class ResumeDraftFrameworkConfigError(Exception):
    """
    Raised when the ResumeDraftFramework configuration is invalid.
    """
    def __init__(self, message: str):
        super().__init__(f"ResumeDraftFrameworkConfigError: {message}")
