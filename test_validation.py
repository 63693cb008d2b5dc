"""
Tests for the validation gate of each resource
"""
import pytest

from portfolio.messages.schemas import validate_contact_message, validate_message_update, validate_status
from portfolio.profile.schemas import validate_profile
from portfolio.projects.schemas import parse_tags, validate_project, validate_project_update
from portfolio.shared.errors import ValidationError


def test_project_without_title_lists_title_as_missing():
    with pytest.raises(ValidationError) as exc_info:
        validate_project({"category": "video"})

    assert "title" in exc_info.value.missing_fields
    assert "category" not in exc_info.value.missing_fields


def test_project_blank_fields_count_as_missing():
    with pytest.raises(ValidationError) as exc_info:
        validate_project({"title": "", "category": ""})

    assert exc_info.value.missing_fields == ["title", "category"]
    assert exc_info.value.message == "Missing required fields: title, category"


def test_project_unknown_category_is_rejected():
    with pytest.raises(ValidationError) as exc_info:
        validate_project({"title": "Statue", "category": "sculpture"})

    assert exc_info.value.missing_fields == []
    assert "Invalid category" in exc_info.value.message


def test_project_defaults_and_ignored_fields():
    project = validate_project({
        "title": "Reel",
        "category": "motion",
        "id": "caller-id",
        "created_at": "1999-01-01T00:00:00Z",
    })

    assert project["tags"] == []
    assert project["featured"] is False
    assert "id" not in project
    assert "created_at" not in project


def test_tags_accept_comma_separated_text():
    project = validate_project({"title": "Reel", "category": "video", "tags": " edit, ,color ,"})

    assert project["tags"] == ["edit", "color"]
    assert parse_tags(["a", " ", " b "]) == ["a", "b"]
    assert parse_tags(None) == []


def test_project_update_only_returns_supplied_fields():
    assert validate_project_update({"featured": True}) == {"featured": True}

    with pytest.raises(ValidationError):
        validate_project_update({"category": "sculpture"})
    with pytest.raises(ValidationError):
        validate_project_update({"title": ""})


def test_profile_requires_name_and_tagline():
    with pytest.raises(ValidationError) as exc_info:
        validate_profile({"name": "Harsh"})

    assert exc_info.value.missing_fields == ["tagline"]


@pytest.mark.parametrize("email", ["not-an-email", "a@b", "a b@c.com", "@b.com"])
def test_profile_rejects_bad_email(email):
    with pytest.raises(ValidationError) as exc_info:
        validate_profile({"name": "Harsh", "tagline": "Editor", "email": email})

    assert exc_info.value.message == "Invalid email format"


def test_profile_email_is_optional():
    profile = validate_profile({"name": "Harsh", "tagline": "Editor", "email": ""})

    assert profile["email"] is None


def test_contact_message_requires_all_core_fields():
    with pytest.raises(ValidationError) as exc_info:
        validate_contact_message({"email": "a@b.com"})

    assert exc_info.value.missing_fields == ["name", "message"]


def test_contact_message_checks_email_format():
    with pytest.raises(ValidationError) as exc_info:
        validate_contact_message({"name": "A", "email": "nope", "message": "hi"})

    assert exc_info.value.message == "Invalid email format"


def test_contact_message_drops_status():
    message = validate_contact_message({
        "name": "A",
        "email": "a@b.com",
        "message": "hi",
        "status": "archived",
    })

    assert "status" not in message
    assert message["service"] is None


def test_message_update_and_status():
    assert validate_message_update({"budget": "500"}) == {"budget": "500"}
    assert validate_status("read") == "read"

    with pytest.raises(ValidationError) as exc_info:
        validate_status("deleted")
    assert "Invalid status" in exc_info.value.message


@pytest.mark.parametrize("field", ["title", "category", "tags", "featured"])
def test_project_update_rejects_null_for_fields_that_cannot_be_cleared(field):
    with pytest.raises(ValidationError):
        validate_project_update({field: None})


def test_project_update_allows_clearing_optional_text():
    assert validate_project_update({"description": None}) == {"description": None}


@pytest.mark.parametrize("field", ["name", "email", "message"])
def test_message_update_rejects_null_for_required_fields(field):
    with pytest.raises(ValidationError):
        validate_message_update({field: None})
