"""Typed update payloads accepted by ``WizardStore.merge``.

Each payload carries only the fields one screen may touch. Only the fields
that were explicitly given are applied; everything else in the aggregate is
left as it was. Payloads describe shape, not validity: a half-typed email is
a legal update, and the step gate decides whether the user may move on.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from profile_wizard.schemas.profile_draft import (
    EducationDraft,
    ExperienceDraft,
    LanguageDraft,
    SkillDraft,
)
from profile_wizard.wizard.steps import StepId


class _ProfileUpdate(BaseModel):
    """Base for update payloads.

    Unknown fields are rejected so a payload can never write outside its
    own step's fields.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    step: ClassVar[StepId]

    def changes(self) -> dict[str, object]:
        """Return the explicitly-set fields as attribute name → value."""
        return {name: getattr(self, name) for name in sorted(self.model_fields_set)}


class PersonalUpdate(_ProfileUpdate):
    """Edits from the personal details form."""

    step: ClassVar[StepId] = StepId.PERSONAL

    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""


class SocialLinksUpdate(_ProfileUpdate):
    """Edits to the optional social links. None clears a link."""

    step: ClassVar[StepId] = StepId.PERSONAL

    website: str | None = None
    facebook: str | None = None
    instagram: str | None = None
    linkedin: str | None = None


class SkillsLanguagesUpdate(_ProfileUpdate):
    """Replacement skill and/or language lists."""

    step: ClassVar[StepId] = StepId.SKILLS_LANGUAGES

    skills: list[SkillDraft] = Field(default_factory=list)
    languages: list[LanguageDraft] = Field(default_factory=list)


class ExperienceEducationUpdate(_ProfileUpdate):
    """Replacement work experience and/or education lists."""

    step: ClassVar[StepId] = StepId.WORK_EXPERIENCE

    experiences: list[ExperienceDraft] = Field(default_factory=list)
    education: list[EducationDraft] = Field(default_factory=list)


class InterestsHobbiesUpdate(_ProfileUpdate):
    """Replacement interest and/or hobby lists."""

    step: ClassVar[StepId] = StepId.INTERESTS_HOBBIES

    interests: list[str] = Field(default_factory=list)
    hobbies: list[str] = Field(default_factory=list)


class AddressUpdate(_ProfileUpdate):
    """Edits from the address block on the final screen."""

    step: ClassVar[StepId] = StepId.INTERESTS_HOBBIES

    street: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""


ProfileUpdate = (
    PersonalUpdate
    | SocialLinksUpdate
    | SkillsLanguagesUpdate
    | ExperienceEducationUpdate
    | InterestsHobbiesUpdate
    | AddressUpdate
)
"""Every payload ``WizardStore.merge`` accepts."""
