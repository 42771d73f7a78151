"""Wizard state owner.

``WizardStore`` holds the profile aggregate and the navigation position for
one user session. It is an ordinary object passed to whoever renders the
steps; there is no module-level instance.

None of its operations validate or fail. Validation happens in the step gate
(``profile_wizard.wizard.flow``) before ``advance`` is called, and persistence
is attached from outside through ``subscribe``.
"""

import copy
import logging
from collections.abc import Callable, Sequence

from profile_wizard.schemas.profile_draft import ProfileDraft, empty_profile
from profile_wizard.wizard.steps import STEP_SEQUENCE, StepId
from profile_wizard.wizard.updates import ProfileUpdate

logger = logging.getLogger(__name__)

ProfileListener = Callable[[ProfileDraft], None]
"""Called with the new aggregate after every merge or reset."""


class WizardStore:
    """Profile aggregate plus current step index for one wizard session.

    Mutations are synchronous. Listeners registered with ``subscribe`` run
    right after each aggregate change (``merge``, ``reset``), in registration
    order. Navigation changes the index only and does not notify.
    """

    def __init__(
        self,
        profile: ProfileDraft | None = None,
        steps: Sequence[StepId] = STEP_SEQUENCE,
    ) -> None:
        """Initialize the store.

        Args:
            profile: Starting aggregate (e.g. rehydrated). Empty if None.
            steps: Ordered step sequence. Must not be empty.
        """
        if not steps:
            msg = "A wizard needs at least one step"
            raise ValueError(msg)
        self._profile = (
            profile.model_copy(deep=True) if profile is not None else empty_profile()
        )
        self._steps: tuple[StepId, ...] = tuple(steps)
        self._step_index = 0
        self._listeners: list[ProfileListener] = []

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def profile(self) -> ProfileDraft:
        """A copy of the current aggregate."""
        return self._profile.model_copy(deep=True)

    @property
    def steps(self) -> tuple[StepId, ...]:
        return self._steps

    @property
    def step_index(self) -> int:
        return self._step_index

    @property
    def current_step(self) -> StepId:
        return self._steps[self._step_index]

    @property
    def is_last_step(self) -> bool:
        return self._step_index == len(self._steps) - 1

    @property
    def progress(self) -> float:
        """Fraction of the wizard reached, counting the current step (0 < p <= 1)."""
        return (self._step_index + 1) / len(self._steps)

    # -------------------------------------------------------------------------
    # Aggregate mutation
    # -------------------------------------------------------------------------

    def merge(self, update: ProfileUpdate) -> None:
        """Overwrite the fields named by ``update``; leave all others untouched.

        Lists are replaced wholesale. The store keeps its own copies, so later
        changes to objects held by the caller do not leak in.

        Args:
            update: Typed payload for one screen's fields.
        """
        changes = copy.deepcopy(update.changes())
        if not changes:
            return
        self._profile = self._profile.model_copy(update=changes)
        logger.debug("Merged fields %s on step %s", sorted(changes), update.step)
        self._notify()

    def reset(self) -> None:
        """Return to an empty aggregate at the first step."""
        self._profile = empty_profile()
        self._step_index = 0
        self._notify()

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def advance(self) -> None:
        """Move one step forward. No-op on the last step."""
        self._step_index = min(self._step_index + 1, len(self._steps) - 1)

    def retreat(self) -> None:
        """Move one step back. No-op on the first step. Never touches data."""
        self._step_index = max(self._step_index - 1, 0)

    def jump_to(self, step_id: StepId | str) -> None:
        """Go directly to a step. Unknown step identifiers are ignored.

        Args:
            step_id: Identifier of the target step.
        """
        try:
            self._step_index = self._steps.index(StepId(step_id))
        except ValueError:
            logger.debug("Ignoring jump to unknown step %r", step_id)

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def subscribe(self, listener: ProfileListener) -> Callable[[], None]:
        """Register a listener for aggregate changes.

        Args:
            listener: Called with a copy of the new aggregate.

        Returns:
            Callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.profile)
