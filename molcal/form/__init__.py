"""Form state and keyboard handling.

Example:
    >>> from molcal.form import FormController
    >>> controller = FormController()
    >>> controller.handle_key("Enter")
    'blocked'
"""

from .controller import (
    EDITABLE_FIELDS,
    FormController,
    IncompleteLimitingReactantError,
)

__all__ = [
    "EDITABLE_FIELDS",
    "FormController",
    "IncompleteLimitingReactantError",
]
