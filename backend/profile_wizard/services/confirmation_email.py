"""Confirmation email content for a stored submission.

The body is plain text: a greeting, the captured details grouped the way the
wizard collected them, and a closing line.
"""

from profile_wizard.schemas.profile import ProfileSubmission

CONFIRMATION_SUBJECT = "Form Submission Confirmation"

_NOT_PROVIDED = "-"


def _line(label: str, value: str | None) -> str:
    return f"  {label}: {value or _NOT_PROVIDED}"


def _bullets(items: list[str]) -> list[str]:
    if not items:
        return [f"  {_NOT_PROVIDED}"]
    return [f"  - {item}" for item in items]


def _period(start: str, end: str | None) -> str:
    return f"{start} - {end or 'present'}"


def build_confirmation_body(profile: ProfileSubmission) -> str:
    """Render the plain-text summary sent after a successful submission.

    Args:
        profile: The validated, stored profile.

    Returns:
        Email body text.
    """
    lines = [
        f"Thank you for your submission, {profile.first_name}!",
        "",
        "We have received your form. Here's a summary of your details:",
        "",
        "Personal details",
        _line("Name", f"{profile.first_name} {profile.last_name}"),
        _line("Email", profile.email),
        _line("Phone", profile.phone),
        _line("Website", profile.website),
        _line("Facebook", profile.facebook),
        _line("Instagram", profile.instagram),
        _line("LinkedIn", profile.linkedin),
        "",
        "Address",
        _line("Street", profile.street),
        _line("City", profile.city),
        _line("State", profile.state),
        _line("Postal code", profile.postal_code),
        _line("Country", profile.country),
        "",
        "Skills",
        *_bullets([f"{s.name} ({s.level})" for s in profile.skills]),
        "",
        "Languages",
        *_bullets([f"{lang.name} ({lang.proficiency})" for lang in profile.languages]),
        "",
        "Work experience",
        *_bullets(
            [
                f"{exp.title} at {exp.company}, {exp.location} "
                f"({_period(exp.start_date, exp.end_date)})"
                for exp in profile.experiences
            ]
        ),
        "",
        "Education",
        *_bullets(
            [
                f"{edu.degree} in {edu.field}, {edu.school} "
                f"({_period(edu.start_date, edu.end_date)})"
                for edu in profile.education
            ]
        ),
        "",
        "Interests",
        *_bullets(profile.interests),
        "",
        "Hobbies",
        *_bullets(profile.hobbies),
        "",
        "We will be in touch shortly.",
    ]
    return "\n".join(lines)
