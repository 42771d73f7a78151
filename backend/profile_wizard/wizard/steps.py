"""Wizard steps and their validation schemas.

The step sequence is fixed:

    personal → skills_languages → work_experience → interests_hobbies

Each step governs a subset of the profile's fields and validates that subset
with an explicit model built from the same annotated types as
``ProfileSubmission``. A step may demand more than the full profile does
(minimum list sizes) but never less.
"""

from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from profile_wizard.schemas.profile import (
    AddressText,
    EducationList,
    EmailAddress,
    ExperienceList,
    HobbyList,
    InterestList,
    LanguageList,
    OptionalUrl,
    PhoneNumber,
    PostalCode,
    RequiredText,
    SkillList,
    ValidationResult,
    validate_model,
)
from profile_wizard.schemas.profile_draft import ProfileDraft

MIN_SKILLS = 3
MIN_LANGUAGES = 1


class StepId(StrEnum):
    """Identifiers of the wizard steps, in navigation order."""

    PERSONAL = "personal"
    SKILLS_LANGUAGES = "skills_languages"
    WORK_EXPERIENCE = "work_experience"
    INTERESTS_HOBBIES = "interests_hobbies"


STEP_SEQUENCE: tuple[StepId, ...] = (
    StepId.PERSONAL,
    StepId.SKILLS_LANGUAGES,
    StepId.WORK_EXPERIENCE,
    StepId.INTERESTS_HOBBIES,
)


def _at_least(count: int, message: str):
    """Build a list validator enforcing a minimum length with a custom message."""

    def check(items: list) -> list:
        if len(items) < count:
            raise ValueError(message)
        return items

    return AfterValidator(check)


class _StepModel(BaseModel):
    """Base for step models: camelCase aliases, fields of other steps ignored."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# Step Models
# =============================================================================


class PersonalStep(_StepModel):
    """Contact details and optional social links."""

    first_name: RequiredText
    last_name: RequiredText
    email: EmailAddress
    phone: PhoneNumber
    website: OptionalUrl = None
    facebook: OptionalUrl = None
    instagram: OptionalUrl = None
    linkedin: OptionalUrl = None


class SkillsLanguagesStep(_StepModel):
    """At least three skills and at least one language."""

    skills: Annotated[
        SkillList, _at_least(MIN_SKILLS, "Please add at least three skills.")
    ]
    languages: Annotated[
        LanguageList, _at_least(MIN_LANGUAGES, "Please add at least one language.")
    ]


class WorkExperienceStep(_StepModel):
    """Work history and education. Both lists may be empty."""

    experiences: ExperienceList = Field(default_factory=list)
    education: EducationList = Field(default_factory=list)


class InterestsHobbiesStep(_StepModel):
    """Interests, hobbies and the postal address confirmed before submitting."""

    interests: InterestList = Field(default_factory=list)
    hobbies: HobbyList = Field(default_factory=list)
    street: AddressText
    city: AddressText
    state: AddressText
    postal_code: PostalCode
    country: AddressText


# =============================================================================
# Step Registry
# =============================================================================


@dataclass(frozen=True)
class StepSchema:
    """One wizard step: its id, heading and validation model.

    Attributes:
        step_id: Position-independent step identifier.
        title: Heading shown above the step's form.
        model: Pydantic model validating the step's fields.
    """

    step_id: StepId
    title: str
    model: type[BaseModel]

    @property
    def fields(self) -> tuple[str, ...]:
        """Wire names of the profile fields this step governs."""
        return tuple(
            info.alias or name for name, info in self.model.model_fields.items()
        )

    def validate(self, values: object) -> ValidationResult:
        """Validate a step draft.

        Args:
            values: Mapping keyed by wire names. Keys outside ``fields``
                are ignored.

        Returns:
            ValidationResult with the parsed step model or per-field errors.
        """
        return validate_model(self.model, values)

    def draft_values(self, profile: ProfileDraft) -> dict:
        """Extract this step's fields from an aggregate, keyed by wire name."""
        payload = profile.model_dump(by_alias=True, mode="json")
        return {name: payload[name] for name in self.fields}


STEP_SCHEMAS: dict[StepId, StepSchema] = {
    StepId.PERSONAL: StepSchema(
        step_id=StepId.PERSONAL,
        title="Personal details",
        model=PersonalStep,
    ),
    StepId.SKILLS_LANGUAGES: StepSchema(
        step_id=StepId.SKILLS_LANGUAGES,
        title="Skills & languages",
        model=SkillsLanguagesStep,
    ),
    StepId.WORK_EXPERIENCE: StepSchema(
        step_id=StepId.WORK_EXPERIENCE,
        title="Work experience & education",
        model=WorkExperienceStep,
    ),
    StepId.INTERESTS_HOBBIES: StepSchema(
        step_id=StepId.INTERESTS_HOBBIES,
        title="Interests, hobbies & address",
        model=InterestsHobbiesStep,
    ),
}


def validate_step(step_id: StepId, values: object) -> ValidationResult:
    """Validate a draft against the schema of the given step.

    Args:
        step_id: Which step's rules to apply.
        values: The step draft, keyed by wire names.

    Returns:
        ValidationResult for the step.
    """
    return STEP_SCHEMAS[step_id].validate(values)
