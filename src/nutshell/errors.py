"""Exceptions raised at the external-tool seam.

Query and conversion operations never raise; they report absence through
``NotFound`` or an empty result.
"""


class NutshellError(Exception):
    """Base class for nutshell errors."""


class ToolNotFoundError(NutshellError):
    """A required external tool could not be located."""

    def __init__(self, name: str) -> None:
        super().__init__(f"required tool not available: {name}")
        self.name = name


class BackendError(NutshellError):
    """A text backend is unknown or its tool failed unexpectedly."""
