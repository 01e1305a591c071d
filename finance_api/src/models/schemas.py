"""
Validation schemas for request payloads and forms.

Schemas are built once at import time and never mutated. Derived schemas
(create/update variants, form subsets) are produced with pick/omit/partial/
refine from the base shapes below.
"""

from datetime import date
from typing import Annotated, Literal
from urllib.parse import urlparse

from email_validator import validate_email
from pydantic import AfterValidator

from finance_api.src.validation import Schema, optional, schema_field


def _url_or_empty(value: str) -> str:
    """Accept an absolute URL or an empty string."""
    if value:
        parsed = urlparse(value)
        if not parsed.scheme or not parsed.netloc:
            raise ValueError("Invalid url")
    return value


UrlOrEmpty = Annotated[str, AfterValidator(_url_or_empty)]


def _check_email(value: str) -> str:
    """Reject malformed addresses; the accepted value is returned as given."""
    validate_email(value, check_deliverability=False)
    return value


Email = Annotated[str, AfterValidator(_check_email)]

EMAIL_MESSAGES = {"value_error": "Invalid email address"}
NAME_MESSAGES = {"string_too_short": "Name must be at least 2 characters"}
AMOUNT_MESSAGES = {"greater_than": "Amount must be positive"}
DESCRIPTION_MESSAGES = {"string_too_short": "Description is required"}
CATEGORY_MESSAGES = {"string_too_short": "Category is required"}


# ============================================================================
# User Schemas
# ============================================================================

user_schema = Schema("User", {
    "id": optional(str),
    "email": schema_field(Email, messages=EMAIL_MESSAGES),
    "name": schema_field(str, min_length=2, messages=NAME_MESSAGES),
    "image": optional(UrlOrEmpty, messages={"value_error": "Invalid url"}),
})

create_user_schema = user_schema.omit("id", name="CreateUser")
update_user_schema = user_schema.partial(name="UpdateUser")


# ============================================================================
# Authentication Schemas
# ============================================================================

sign_in_schema = Schema("SignIn", {
    "email": schema_field(Email, messages=EMAIL_MESSAGES),
    "password": schema_field(
        str,
        min_length=6,
        messages={"string_too_short": "Password must be at least 6 characters"},
    ),
})

sign_up_schema = Schema("SignUp", {
    "email": schema_field(Email, messages=EMAIL_MESSAGES),
    "password": schema_field(
        str,
        min_length=8,
        messages={"string_too_short": "Password must be at least 8 characters"},
    ),
    "confirm_password": schema_field(str),
    "name": schema_field(str, min_length=2, messages=NAME_MESSAGES),
}).refine(
    lambda data: data.password == data.confirm_password,
    "Passwords don't match",
    path=["confirm_password"],
)


# ============================================================================
# Budget and Financial Schemas
# ============================================================================

budget_schema = Schema("Budget", {
    "id": optional(str),
    "name": schema_field(str, min_length=1, messages={"string_too_short": "Budget name is required"}),
    "amount": schema_field(float, gt=0, messages=AMOUNT_MESSAGES),
    "category": schema_field(str, min_length=1, messages=CATEGORY_MESSAGES),
    "period": schema_field(Literal["monthly", "weekly", "yearly"]),
    "start_date": optional(date),
    "end_date": optional(date),
})

transaction_schema = Schema("Transaction", {
    "id": optional(str),
    "amount": schema_field(float, gt=0, messages=AMOUNT_MESSAGES),
    "description": schema_field(str, min_length=1, messages=DESCRIPTION_MESSAGES),
    "category": schema_field(str, min_length=1, messages=CATEGORY_MESSAGES),
    "type": schema_field(Literal["income", "expense"]),
    "date": schema_field(date),
    "budget_id": optional(str),
})

# Quick-entry variant: the server stamps today's date when none is sent.
create_transaction_schema = transaction_schema.omit(
    "id", name="CreateTransaction"
).with_clock_default("date")

expense_schema = Schema("Expense", {
    "id": optional(str),
    "amount": schema_field(float, gt=0, messages=AMOUNT_MESSAGES),
    "description": schema_field(str, min_length=1, messages=DESCRIPTION_MESSAGES),
    "category": schema_field(str, min_length=1, messages=CATEGORY_MESSAGES),
    "date": schema_field(date),
    "budget_id": optional(str),
})

income_schema = Schema("Income", {
    "id": optional(str),
    "amount": schema_field(float, gt=0, messages=AMOUNT_MESSAGES),
    "description": schema_field(str, min_length=1, messages=DESCRIPTION_MESSAGES),
    "source": schema_field(str, min_length=1, messages={"string_too_short": "Income source is required"}),
    "date": schema_field(date),
    "frequency": optional(Literal["one-time", "monthly", "weekly", "yearly"]),
})


# ============================================================================
# Form Schemas
# ============================================================================

profile_form_schema = Schema("ProfileForm", {
    "name": schema_field(str, min_length=2, messages=NAME_MESSAGES),
    "email": schema_field(Email, messages=EMAIL_MESSAGES),
    "bio": optional(str, max_length=500, messages={"string_too_long": "Bio must be less than 500 characters"}),
})

settings_form_schema = Schema("SettingsForm", {
    "currency": schema_field(str, min_length=1, messages={"string_too_short": "Currency is required"}),
    "timezone": schema_field(str, min_length=1, messages={"string_too_short": "Timezone is required"}),
    "notifications": schema_field(bool),
    "theme": schema_field(Literal["light", "dark", "system"]),
})


# ============================================================================
# API Request Schemas
# ============================================================================

pagination_schema = Schema("Pagination", {
    "page": schema_field(int, 1, gt=0),
    "limit": schema_field(int, 10, gt=0, le=100),
    "search": optional(str),
    "sort_by": optional(str),
    "sort_order": optional(Literal["asc", "desc"]),
})

date_range_schema = Schema("DateRange", {
    "start_date": schema_field(date),
    "end_date": schema_field(date),
}).refine(
    lambda data: data.start_date <= data.end_date,
    "Start date must be before or equal to end date",
    path=["end_date"],
)


# ============================================================================
# Account Schemas
# ============================================================================

insert_account_schema = Schema("InsertAccount", {
    "id": optional(str),
    "name": schema_field(str, min_length=1, messages={"string_too_short": "Name is required"}),
})

account_form_schema = insert_account_schema.pick("name", name="AccountForm")
