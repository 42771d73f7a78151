"""In-progress profile aggregate shape.

The draft is the value the wizard accumulates across steps. It is always
total: every scalar defaults to "", every social link to None and every
collection to []. It carries shape only. Whether the values are acceptable
is decided by the rules in ``profile_wizard.schemas.profile``.

Wire and storage representations use camelCase names (``firstName``,
``postalCode``, ``startDate``); Python code uses the snake_case attributes.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _DraftModel(BaseModel):
    """Base for draft models: camelCase aliases, unknown keys dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class SkillDraft(_DraftModel):
    """A skill row as typed by the user."""

    name: str = ""
    level: str = ""


class LanguageDraft(_DraftModel):
    """A language row as typed by the user."""

    name: str = ""
    proficiency: str = ""


class ExperienceDraft(_DraftModel):
    """A work experience row as typed by the user.

    Attributes:
        end_date: None while the position is ongoing ("present").
        current: Explicit "I currently work here" flag, if the user set it.
    """

    company: str = ""
    title: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str | None = None
    current: bool | None = None
    description: str | None = None


class EducationDraft(_DraftModel):
    """An education row as typed by the user.

    Attributes:
        end_date: None while studies are in progress.
    """

    school: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str | None = None


class ProfileDraft(_DraftModel):
    """The whole profile under construction, possibly incomplete."""

    # Identity / contact
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""

    # Address
    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""

    # Social links
    website: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    linkedin: str | None = None

    # Collections
    skills: list[SkillDraft] = Field(default_factory=list)
    languages: list[LanguageDraft] = Field(default_factory=list)
    interests: list[str] = Field(default_factory=list)
    hobbies: list[str] = Field(default_factory=list)
    experiences: list[ExperienceDraft] = Field(default_factory=list)
    education: list[EducationDraft] = Field(default_factory=list)


def empty_profile() -> ProfileDraft:
    """Return a fresh empty aggregate."""
    return ProfileDraft()


def profile_to_payload(profile: ProfileDraft) -> dict:
    """Serialize a draft into the flat camelCase JSON object used on the wire.

    Args:
        profile: The aggregate to serialize.

    Returns:
        JSON-compatible dict keyed by wire field names.
    """
    return profile.model_dump(by_alias=True, mode="json")


PROFILE_FIELD_NAMES: tuple[str, ...] = tuple(
    info.alias or name for name, info in ProfileDraft.model_fields.items()
)
"""Wire names of every aggregate field, in declaration order."""
