"""
Unit tests for the schema catalogue.

Tests cover the field messages and constraints of the user, financial,
form and account schemas.
"""

import pytest

from finance_api.src.models.schemas import (
    account_form_schema,
    budget_schema,
    create_user_schema,
    expense_schema,
    income_schema,
    insert_account_schema,
    profile_form_schema,
    settings_form_schema,
    sign_in_schema,
    transaction_schema,
    user_schema,
)
from finance_api.src.validation import validate


BUDGET = {"name": "Groceries", "amount": 400, "category": "Food", "period": "monthly"}
TRANSACTION = {
    "amount": 42.1,
    "description": "Rent share",
    "category": "Housing",
    "type": "expense",
    "date": "2024-05-01",
}


class TestUserSchemas:

    def test_user_image_may_be_empty(self):
        result = validate(user_schema, {"email": "jo@finance.io", "name": "Jo", "image": ""})

        assert result.ok

    def test_user_image_url(self):
        result = validate(user_schema, {"email": "jo@finance.io", "name": "Jo", "image": "https://cdn.finance.io/jo.png"})

        assert result.ok

    def test_user_image_rejects_non_url(self):
        result = validate(user_schema, {"email": "jo@finance.io", "name": "Jo", "image": "not a url"})

        assert dict(result.errors) == {"image": "Invalid url"}

    def test_email_kept_as_given(self):
        result = validate(sign_in_schema, {"email": "Jo.Smith@Finance.IO", "password": "secret1"})

        assert result.value.email == "Jo.Smith@Finance.IO"

    @pytest.mark.parametrize("email", ["jo", "jo@", "@finance.io", "jo smith@finance.io"])
    def test_email_rejects_malformed(self, email):
        result = validate(sign_in_schema, {"email": email, "password": "secret1"})

        assert dict(result.errors) == {"email": "Invalid email address"}

    def test_create_user_has_no_id(self):
        assert "id" not in create_user_schema.fields

    def test_sign_in_password_minimum(self):
        result = validate(sign_in_schema, {"email": "jo@finance.io", "password": "12345"})

        assert dict(result.errors) == {"password": "Password must be at least 6 characters"}


class TestFinancialSchemas:

    def test_budget_valid(self):
        result = validate(budget_schema, BUDGET)

        assert result.ok
        assert result.value.start_date is None

    @pytest.mark.parametrize("amount", [0, -10])
    def test_budget_amount_must_be_positive(self, amount):
        result = validate(budget_schema, {**BUDGET, "amount": amount})

        assert dict(result.errors) == {"amount": "Amount must be positive"}

    def test_budget_name_required(self):
        result = validate(budget_schema, {**BUDGET, "name": ""})

        assert dict(result.errors) == {"name": "Budget name is required"}

    def test_budget_period_enum(self):
        result = validate(budget_schema, {**BUDGET, "period": "daily"})

        assert list(result.errors) == ["period"]

    def test_transaction_type_enum(self):
        result = validate(transaction_schema, {**TRANSACTION, "type": "transfer"})

        assert list(result.errors) == ["type"]

    def test_transaction_requires_date(self):
        data = {key: value for key, value in TRANSACTION.items() if key != "date"}

        result = validate(transaction_schema, data)

        assert list(result.errors) == ["date"]

    def test_transaction_budget_id_wire_name(self):
        result = validate(transaction_schema, {**TRANSACTION, "budgetId": "bud_1"})

        assert result.value.budget_id == "bud_1"

    def test_expense_description_required(self):
        data = {key: value for key, value in TRANSACTION.items() if key != "type"}

        result = validate(expense_schema, {**data, "description": ""})

        assert dict(result.errors) == {"description": "Description is required"}

    def test_income_source_required(self):
        data = {"amount": 3000, "description": "Salary", "source": "", "date": "2024-05-31"}

        result = validate(income_schema, data)

        assert dict(result.errors) == {"source": "Income source is required"}

    def test_income_frequency_optional(self):
        data = {"amount": 3000, "description": "Salary", "source": "Employer", "date": "2024-05-31"}

        assert validate(income_schema, data).ok
        assert validate(income_schema, {**data, "frequency": "one-time"}).ok
        assert not validate(income_schema, {**data, "frequency": "daily"}).ok


class TestFormSchemas:

    def test_profile_bio_limit(self):
        data = {"name": "Jo", "email": "jo@finance.io", "bio": "x" * 501}

        result = validate(profile_form_schema, data)

        assert dict(result.errors) == {"bio": "Bio must be less than 500 characters"}

    def test_settings_form(self):
        data = {"currency": "USD", "timezone": "UTC", "notifications": True, "theme": "dark"}

        assert validate(settings_form_schema, data).ok
        assert list(validate(settings_form_schema, {**data, "theme": "blue"}).errors) == ["theme"]
        assert list(validate(settings_form_schema, {**data, "notifications": "maybe"}).errors) == ["notifications"]


class TestAccountSchemas:

    def test_account_form_only_has_name(self):
        assert account_form_schema.field_names == ("name",)

    def test_account_name_required(self):
        result = validate(account_form_schema, {"name": ""})

        assert dict(result.errors) == {"name": "Name is required"}

    def test_insert_account_id_optional(self):
        result = validate(insert_account_schema, {"name": "Checking"})

        assert result.ok
        assert result.value.id is None
