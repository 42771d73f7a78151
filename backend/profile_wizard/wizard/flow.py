"""Step gate: what a step screen does when the user presses Next or Submit.

``complete_step`` merges the screen's edits, validates the current step on
the merged aggregate and advances only if it passes. Edits are kept (and
persisted) even when validation fails, so nothing typed is ever lost.

``finish_wizard`` does the same for the last step, then hands the whole
aggregate to a submit callable and clears the wizard only once the profile
is confirmed stored.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from profile_wizard.schemas.profile import FORM_ERRORS_KEY
from profile_wizard.schemas.profile_draft import profile_to_payload
from profile_wizard.schemas.submission import SubmissionCreated, SubmissionOutcome
from profile_wizard.wizard.steps import STEP_SCHEMAS, StepId
from profile_wizard.wizard.store import WizardStore
from profile_wizard.wizard.updates import ProfileUpdate

logger = logging.getLogger(__name__)

SubmitProfile = Callable[[dict], Awaitable[SubmissionOutcome]]
"""Sends the flat camelCase aggregate somewhere that stores it."""

_NOT_ON_LAST_STEP_MSG = "Complete the remaining steps before submitting."


@dataclass(frozen=True)
class StepOutcome:
    """Result of trying to leave a step.

    Attributes:
        step_id: The step that was validated.
        errors: Per-field messages. Empty when the step passed.
    """

    step_id: StepId
    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors


def check_step(store: WizardStore, step_id: StepId | None = None) -> StepOutcome:
    """Validate one step's fields of the store's aggregate without moving.

    Args:
        store: The wizard session.
        step_id: Step to check. Defaults to the current step.

    Returns:
        StepOutcome for that step.
    """
    step_id = step_id or store.current_step
    schema = STEP_SCHEMAS[step_id]
    result = schema.validate(schema.draft_values(store.profile))
    return StepOutcome(step_id=step_id, errors=result.errors)


def complete_step(store: WizardStore, *updates: ProfileUpdate) -> StepOutcome:
    """Merge a screen's edits and move forward if its step is valid.

    Args:
        store: The wizard session.
        *updates: Edits made on the current screen.

    Returns:
        StepOutcome. On failure the index is unchanged and the edits are
        still merged.
    """
    for update in updates:
        store.merge(update)
    outcome = check_step(store)
    if outcome.ok:
        store.advance()
    else:
        logger.debug("Step %s blocked on %s", outcome.step_id, sorted(outcome.errors))
    return outcome


def go_back(store: WizardStore) -> None:
    """Return to the previous screen. Nothing is validated or discarded."""
    store.retreat()


async def finish_wizard(
    store: WizardStore,
    submit: SubmitProfile,
    *updates: ProfileUpdate,
) -> StepOutcome | SubmissionOutcome:
    """Merge the last screen's edits, validate it, and submit the profile.

    Args:
        store: The wizard session. Must be on its last step.
        submit: Callable that stores the profile (HTTP client or service).
        *updates: Edits made on the last screen.

    Returns:
        A failing StepOutcome if the last step (or the position) blocks
        submission, otherwise whatever ``submit`` returned. The store is
        reset only on SubmissionCreated.
    """
    for update in updates:
        store.merge(update)
    if not store.is_last_step:
        return StepOutcome(
            step_id=store.current_step,
            errors={FORM_ERRORS_KEY: [_NOT_ON_LAST_STEP_MSG]},
        )
    outcome = check_step(store)
    if not outcome.ok:
        return outcome

    result = await submit(profile_to_payload(store.profile))
    if isinstance(result, SubmissionCreated):
        store.reset()
    return result
