"""Form presentation models."""

from finance_api.src.forms.account_form import AccountForm

__all__ = ["AccountForm"]
