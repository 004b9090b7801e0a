"""Custom exceptions for templating context with template references."""

from typing import Optional


class TemplateRenderError(Exception):
    """
    Exception raised when a Jinja2 template fails to render.

    Attributes:
        message: Error description
        template_id: Visual template being rendered (e.g., 'modern')
        template_name: Jinja2 template file that failed
        original_error: The original Jinja2 error
    """

    def __init__(
        self,
        message: str,
        template_id: Optional[str] = None,
        template_name: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.template_id = template_id
        self.template_name = template_name
        self.original_error = original_error

        # Build enhanced error message
        parts = [message]

        if template_id:
            parts.append(f"\nTemplate: {template_id}")
        if template_name:
            parts.append(f"File: {template_name}")

        if original_error:
            parts.append(f"\nOriginal error: {str(original_error)}")

        super().__init__("\n".join(parts))


class MissingResumeDataError(ValueError):
    """
    Exception raised when composition is requested without a résumé.

    Missing optional fields never raise; only an absent root aggregate does.
    """

    pass
