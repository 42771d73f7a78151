"""Profile validation rules.

Defines the field-level rules once, as annotated types, and the complete
``ProfileSubmission`` model built from them. Step models in
``profile_wizard.wizard.steps`` reuse the same annotated types, so a step can
add a minimum but never loosen a rule.

``validate_profile`` is the entry point for untrusted input: it never raises
on malformed data and reports every violation in one pass, keyed by dotted
wire path (``lastName``, ``skills.0.level``).
"""

import re
from dataclasses import dataclass, field
from typing import Annotated, Generic, Literal, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
)
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

ModelT = TypeVar("ModelT", bound=BaseModel)

FORM_ERRORS_KEY = "_form"
"""Error key for problems that belong to the payload as a whole."""

MAX_SKILLS = 50
MAX_LANGUAGES = 20
MAX_INTERESTS = 30
MAX_HOBBIES = 30
MAX_EXPERIENCES = 30
MAX_EDUCATION = 20

# Match the submissions table column widths.
MAX_TEXT_LENGTH = 255
MAX_SHORT_TEXT_LENGTH = 50


_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE_RE = re.compile(r"^([+]?[\s0-9]+)?(\d{3}|[(]?[0-9]+[)])?([-]?[\s]?[0-9])+$")
_URL_ADAPTER: TypeAdapter[HttpUrl] = TypeAdapter(HttpUrl)

_REQUIRED_MSG = "This field is required."
_EMAIL_MSG = "Invalid email address."
_PHONE_MSG = "Invalid Number!"
_URL_MSG = "Invalid URL."
_TOO_LONG_MSG = "Must be at most {limit} characters."


# =============================================================================
# Field Validators
# =============================================================================


def _strip(value: object) -> object:
    """Strip surrounding whitespace from strings, leave other types alone."""
    if isinstance(value, str):
        return value.strip()
    return value


def _blank_to_none(value: object) -> object:
    """Treat None and blank strings alike as "not provided"."""
    if value is None:
        return None
    if isinstance(value, str) and not value.strip():
        return None
    return _strip(value)


def _require_text(value: str) -> str:
    if not value:
        raise ValueError(_REQUIRED_MSG)
    return value


def _at_most(limit: int):
    """Build a string validator enforcing a maximum length."""

    def check(value: str) -> str:
        if len(value) > limit:
            raise ValueError(_TOO_LONG_MSG.format(limit=limit))
        return value

    return AfterValidator(check)


def _check_email(value: str) -> str:
    if not _EMAIL_RE.match(value):
        raise ValueError(_EMAIL_MSG)
    return value


def _check_phone(value: str) -> str:
    if not _PHONE_RE.match(value):
        raise ValueError(_PHONE_MSG)
    return value


def _check_url(value: str | None) -> str | None:
    """Accept well-formed http(s) URLs, keeping the user's original text."""
    if value is None:
        return None
    try:
        _URL_ADAPTER.validate_python(value)
    except PydanticValidationError:
        raise ValueError(_URL_MSG) from None
    return value


RequiredText = Annotated[
    str,
    BeforeValidator(_strip),
    AfterValidator(_require_text),
    _at_most(MAX_TEXT_LENGTH),
]
EmailAddress = Annotated[RequiredText, AfterValidator(_check_email)]
PhoneNumber = Annotated[
    str,
    BeforeValidator(_strip),
    AfterValidator(_require_text),
    _at_most(MAX_SHORT_TEXT_LENGTH),
    AfterValidator(_check_phone),
]
AddressText = Annotated[str, _at_most(MAX_TEXT_LENGTH)]
PostalCode = Annotated[str, _at_most(MAX_SHORT_TEXT_LENGTH)]
DateText = RequiredText
OptionalDateText = Annotated[str | None, BeforeValidator(_blank_to_none)]
OptionalUrl = Annotated[
    str | None, BeforeValidator(_blank_to_none), AfterValidator(_check_url)
]
SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]
LanguageProficiency = Literal["basic", "conversational", "fluent", "native"]


class _ProfileModel(BaseModel):
    """Base for validated profile models: camelCase aliases, unknown keys dropped."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


# =============================================================================
# Entry Models
# =============================================================================


class SkillEntry(_ProfileModel):
    """A named skill with a self-assessed level."""

    name: RequiredText
    level: SkillLevel


class LanguageEntry(_ProfileModel):
    """A spoken language with a proficiency."""

    name: RequiredText
    proficiency: LanguageProficiency


class WorkExperienceEntry(_ProfileModel):
    """A position held. ``end_date`` None means the position is ongoing."""

    company: RequiredText
    title: RequiredText
    location: RequiredText
    start_date: DateText
    end_date: OptionalDateText = None
    current: bool | None = None
    description: str | None = None


class EducationEntry(_ProfileModel):
    """A school attended. ``end_date`` None means studies are in progress."""

    school: RequiredText
    degree: RequiredText
    field: RequiredText
    start_date: DateText
    end_date: OptionalDateText = None


SkillList = Annotated[list[SkillEntry], Field(max_length=MAX_SKILLS)]
LanguageList = Annotated[list[LanguageEntry], Field(max_length=MAX_LANGUAGES)]
InterestList = Annotated[list[RequiredText], Field(max_length=MAX_INTERESTS)]
HobbyList = Annotated[list[RequiredText], Field(max_length=MAX_HOBBIES)]
ExperienceList = Annotated[
    list[WorkExperienceEntry], Field(max_length=MAX_EXPERIENCES)
]
EducationList = Annotated[list[EducationEntry], Field(max_length=MAX_EDUCATION)]


# =============================================================================
# Aggregate Model
# =============================================================================


class ProfileSubmission(_ProfileModel):
    """A complete profile, ready to be stored.

    Collections default to [] when omitted; everything else must be present.
    """

    # Identity / contact
    first_name: RequiredText
    last_name: RequiredText
    email: EmailAddress
    phone: PhoneNumber

    # Address (free-form, may be empty)
    street: AddressText
    city: AddressText
    state: AddressText
    postal_code: PostalCode
    country: AddressText

    # Social links
    website: OptionalUrl = None
    facebook: OptionalUrl = None
    instagram: OptionalUrl = None
    linkedin: OptionalUrl = None

    # Collections
    skills: SkillList = Field(default_factory=list)
    languages: LanguageList = Field(default_factory=list)
    interests: InterestList = Field(default_factory=list)
    hobbies: HobbyList = Field(default_factory=list)
    experiences: ExperienceList = Field(default_factory=list)
    education: EducationList = Field(default_factory=list)


# =============================================================================
# Validation Entry Points
# =============================================================================


@dataclass(frozen=True)
class ValidationResult(Generic[ModelT]):
    """Outcome of validating untrusted input against a model.

    Exactly one of ``value`` and ``errors`` is meaningful: ``value`` is set
    when validation passed, ``errors`` is non-empty when it failed.
    """

    value: ModelT | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True when the input passed validation."""
        return self.value is not None and not self.errors


def _error_message(error: dict) -> str:
    """Pick the user-facing text for one pydantic error.

    Messages raised by our own validators are returned verbatim instead of
    pydantic's "Value error, ..." wrapping.
    """
    if error["type"] == "value_error":
        return str(error["ctx"]["error"])
    return str(error["msg"])


def field_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Flatten a pydantic ValidationError into field-path → messages.

    Args:
        exc: The validation error to flatten.

    Returns:
        Mapping of dotted wire paths to every message reported for them,
        in the order pydantic reported them.
    """
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        path = ".".join(str(part) for part in error["loc"]) or FORM_ERRORS_KEY
        errors.setdefault(path, []).append(_error_message(error))
    return errors


def validate_model(model: type[ModelT], value: object) -> ValidationResult[ModelT]:
    """Validate arbitrary input against a model without raising.

    Args:
        model: The pydantic model to validate against.
        value: Untrusted input (usually decoded JSON).

    Returns:
        ValidationResult with the parsed model or per-field errors.
    """
    try:
        parsed = model.model_validate(value)
    except PydanticValidationError as exc:
        return ValidationResult(errors=field_errors(exc))
    return ValidationResult(value=parsed)


def validate_profile(value: object) -> ValidationResult[ProfileSubmission]:
    """Validate a whole profile payload against the full rules.

    Args:
        value: Untrusted input, typically the submitted JSON body.

    Returns:
        ValidationResult with the normalized ProfileSubmission or errors.
    """
    return validate_model(ProfileSubmission, value)
