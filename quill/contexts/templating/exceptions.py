"""Custom exceptions for templating context."""

from pathlib import Path
from typing import Optional


class UnknownTemplateError(LookupError):
    """
    Raised when a document names a template with no registered projection.

    The document model only admits the closed TemplateType set, so reaching
    this means a projection was left out of the registry.
    """

    def __init__(self, template):
        self.template = template
        super().__init__(f"No projection registered for template {template!r}")


class TemplateRenderError(Exception):
    """
    Exception raised when HTML template rendering fails.

    Attributes:
        message: Error description
        template_name: Name of the Jinja2 template being rendered
        template_path: Path to the template file
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_name: Optional[str] = None,
        template_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_name = template_name
        self.template_path = template_path
        self.original_error = original_error

        parts = [message]

        if template_name and template_path:
            parts.append(f"\nTemplate: {template_path}")
            parts.append(f"Name: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))
