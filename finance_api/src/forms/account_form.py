"""
Account form presentation model.

Holds the state of the create/edit account form: current values, field
errors and the disabled flag. Submitting validates locally against the
account form schema before the submit callback runs. No network I/O happens
here; the callbacks decide what to do with the values.
"""

import structlog
from typing import Any, Callable, Dict, List, Mapping, Optional

from finance_api.src.models.schemas import account_form_schema
from finance_api.src.validation import validate

logger = structlog.get_logger(__name__)


class AccountForm:
    """
    Create/edit form for a single account.

    Example:
        >>> form = AccountForm(on_submit=print)
        >>> form.set_value("name", "Savings")
        >>> form.submit()
        {'name': 'Savings'}
        True
    """

    schema = account_form_schema

    def __init__(
        self,
        on_submit: Callable[[Dict[str, Any]], None],
        id: Optional[str] = None,
        default_values: Optional[Mapping[str, Any]] = None,
        on_delete: Optional[Callable[[], None]] = None,
        disabled: bool = False,
    ):
        """
        Initialize account form.

        Args:
            on_submit: Called with validated values
            id: Existing account id; None when creating
            default_values: Initial field values
            on_delete: Called when an existing account is deleted
            disabled: Suppress all interaction
        """
        self.id = id
        self.on_submit = on_submit
        self.on_delete = on_delete
        self.disabled = disabled
        self._values: Dict[str, Any] = {"name": ""}
        self._values.update(default_values or {})
        self._errors: Dict[str, str] = {}

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self._values)

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self._errors)

    @property
    def submit_label(self) -> str:
        return "Save Changes" if self.id else "Create Account"

    @property
    def show_delete(self) -> bool:
        return bool(self.id)

    def set_value(self, field: str, value: Any) -> None:
        """Update a field value; ignored while disabled."""
        if self.disabled:
            return
        self._values[field] = value
        self._errors.pop(field, None)

    def submit(self) -> bool:
        """
        Validate current values and hand them to on_submit.

        Returns:
            True if on_submit was called, False otherwise
        """
        if self.disabled:
            return False

        result = validate(self.schema, self._values)

        if not result.ok:
            self._errors = dict(result.errors)
            logger.debug("account_form_invalid", fields=sorted(self._errors))
            return False

        self._errors = {}
        self.on_submit(result.value.model_dump(by_alias=True))
        return True

    def delete(self) -> bool:
        """
        Invoke on_delete for an existing account.

        Returns:
            True if on_delete was called, False otherwise
        """
        if self.disabled or not self.show_delete or self.on_delete is None:
            return False

        self.on_delete()
        return True

    def fields(self) -> List[Dict[str, Any]]:
        """Describe the form fields for rendering."""
        return [
            {
                "name": "name",
                "label": "Name",
                "placeholder": "Account Name",
                "value": self._values.get("name", ""),
                "disabled": self.disabled,
                "error": self._errors.get("name"),
            }
        ]
