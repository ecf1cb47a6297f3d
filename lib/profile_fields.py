# =============================================================================
# lib/profile_fields.py - Profile Field Builder
# =============================================================================
# Turns the loosely-filled profile form into the partial record that is
# written to the profiles collection. Absent fields are left out of the
# record entirely so an update never blanks a value the user did not send.
# =============================================================================

from typing import Any, Mapping

from pydantic import BaseModel

# Plain string fields copied through when present
PROFILE_TEXT_FIELDS = (
    "company",
    "website",
    "location",
    "bio",
    "status",
    "githubusername",
)

# Links stored under the nested "social" record
SOCIAL_FIELDS = (
    "youtube",
    "twitter",
    "facebook",
    "linkedin",
    "instagram",
)


def _present(value: Any) -> bool:
    return value is not None and value != ""


def split_skills(skills: str | list[str]) -> list[str]:
    """
    Split a comma-separated skills string.

    Whitespace around each token is trimmed and order is preserved.
    Empty tokens are kept: "a,,b" -> ["a", "", "b"].
    """
    tokens = skills if isinstance(skills, list) else skills.split(",")
    return [token.strip() for token in tokens]


def build_profile_fields(data: Mapping[str, Any] | BaseModel) -> dict[str, Any]:
    """
    Build the partial profile record from form input.

    Args:
        data: Raw mapping or a Pydantic model of the profile form

    Returns:
        Dict with only the supplied text fields, "skills" when supplied,
        and a "social" dict that is always present (possibly empty).

    Example:
        >>> build_profile_fields({"status": "Developer", "skills": "py, go"})
        {'status': 'Developer', 'skills': ['py', 'go'], 'social': {}}
    """
    if isinstance(data, BaseModel):
        data = data.model_dump(exclude_none=True)

    fields: dict[str, Any] = {}
    for name in PROFILE_TEXT_FIELDS:
        if _present(data.get(name)):
            fields[name] = data[name]

    if _present(data.get("skills")):
        fields["skills"] = split_skills(data["skills"])

    fields["social"] = {
        name: data[name] for name in SOCIAL_FIELDS if _present(data.get(name))
    }
    return fields
