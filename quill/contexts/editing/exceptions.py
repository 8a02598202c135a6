"""Custom exceptions for the editing context.

All of them are caller contract violations raised at the mutation boundary,
so they subclass ValueError.
"""

from typing import Iterable, Optional


class InvalidTemplateError(ValueError):
    """Raised when a template value is not one of the known templates."""

    def __init__(self, value, valid: Iterable[str]):
        self.value = value
        self.valid = tuple(valid)
        super().__init__(f"Unknown template {value!r}. Valid templates: {list(self.valid)}")


class InvalidFieldError(ValueError):
    """Raised when a field name is not part of the edited record."""

    def __init__(self, field_name: str, valid: Iterable[str], record: str = "record"):
        self.field_name = field_name
        self.valid = tuple(valid)
        super().__init__(
            f"Unknown {record} field {field_name!r}. Valid fields: {list(self.valid)}"
        )


class ReorderError(ValueError):
    """
    Raised when a reorder request cannot be applied as a whole.

    Attributes:
        message: Error description
        source_index: Index the drag started from (if index-based)
        destination_index: Index the drag ended on (if index-based)
    """

    def __init__(
        self,
        message: str,
        source_index: Optional[int] = None,
        destination_index: Optional[int] = None,
    ):
        self.message = message
        self.source_index = source_index
        self.destination_index = destination_index

        parts = [message]
        if source_index is not None or destination_index is not None:
            parts.append(f"(source={source_index}, destination={destination_index})")

        super().__init__(" ".join(parts))


class DuplicateIdError(ValueError):
    """Raised when a container would hold two entries with the same id."""

    pass


class InvalidResumeYAMLError(ValueError):
    """
    Raised when a resume YAML file does not have the expected document shape.

    The file must hold a top-level 'document' mapping with 'personal_info'
    and 'sections' (see default_resume.yaml).
    """

    pass
