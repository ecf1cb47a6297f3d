# =============================================================================
# tests/test_models.py - Pydantic Model Tests
# =============================================================================
# Unit tests for request models to ensure:
# - Valid data is accepted and parsed correctly
# - Invalid data raises ValidationError
# - Validation errors are reported in the API error format
#
# Run with: pytest tests/test_models.py -v
# =============================================================================

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from app.exceptions import format_validation_error
from core.models import (
    CommentCreate,
    EducationCreate,
    ExperienceCreate,
    LoginRequest,
    PostCreate,
    ProfileInput,
    UserCreate,
)


# =============================================================================
# User Models
# =============================================================================

class TestUserCreate:
    """Tests for UserCreate model."""

    def test_valid(self):
        user = UserCreate(name="Jane", email="jane@example.com", password="secret1")

        assert user.name == "Jane"
        assert user.email == "jane@example.com"

    def test_short_password(self):
        with pytest.raises(ValidationError) as exc_info:
            UserCreate(name="Jane", email="jane@example.com", password="123")

        error = format_validation_error(exc_info.value.errors()[0])
        assert error["msg"] == "password must be at least 6 characters"
        assert error["param"] == "password"

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            UserCreate(name="Jane", email="not-an-email", password="secret1")

    def test_all_errors_reported(self):
        """Every failing field shows up, not just the first."""
        with pytest.raises(ValidationError) as exc_info:
            UserCreate(name="", email="bad", password="")

        fields = {format_validation_error(e)["param"] for e in exc_info.value.errors()}
        assert fields == {"name", "email", "password"}


class TestLoginRequest:

    def test_missing_password(self):
        with pytest.raises(ValidationError) as exc_info:
            LoginRequest(email="jane@example.com")

        assert format_validation_error(exc_info.value.errors()[0])["msg"] == "password is required"


# =============================================================================
# Profile Models
# =============================================================================

class TestProfileInput:

    def test_required_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            ProfileInput()

        messages = {format_validation_error(e)["msg"] for e in exc_info.value.errors()}
        assert messages == {"status is required", "skills is required"}

    def test_optional_fields_default_none(self):
        form = ProfileInput(status="Dev", skills="py")

        assert form.company is None
        assert form.twitter is None


class TestDatedEntries:
    """Tests for ExperienceCreate and EducationCreate."""

    def test_from_alias(self):
        entry = ExperienceCreate.model_validate({"title": "Dev", "company": "Acme", "from": "2020-01-15"})

        assert entry.from_ == date(2020, 1, 15)
        assert entry.current is False

    def test_to_document(self):
        entry = ExperienceCreate.model_validate({
            "title": "Dev",
            "company": "Acme",
            "from": "2020-01-15",
            "to": "2021-06-30",
        })

        document = entry.to_document()

        assert document["from"] == datetime(2020, 1, 15)
        assert document["to"] == datetime(2021, 6, 30)
        assert "from_" not in document
        assert "location" not in document

    def test_to_before_from(self):
        with pytest.raises(ValidationError) as exc_info:
            ExperienceCreate.model_validate({
                "title": "Dev", "company": "Acme", "from": "2021-01-01", "to": "2020-01-01",
            })

        error = format_validation_error(exc_info.value.errors()[0])
        assert error["msg"] == "to date must not be before from date"

    def test_education_required(self):
        with pytest.raises(ValidationError) as exc_info:
            EducationCreate.model_validate({"school": "TU"})

        messages = {format_validation_error(e)["msg"] for e in exc_info.value.errors()}
        assert messages == {"degree is required", "fieldofstudy is required", "from is required"}


# =============================================================================
# Post Models
# =============================================================================

class TestPostModels:

    def test_empty_text(self):
        with pytest.raises(ValidationError):
            PostCreate(text="")
        with pytest.raises(ValidationError):
            CommentCreate(text="")

    def test_valid_text(self):
        assert PostCreate(text="Hello").text == "Hello"
