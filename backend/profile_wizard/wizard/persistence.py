"""Durable copy of the in-progress profile.

The bridge mirrors the whole aggregate into a key-value slot after every
aggregate change and reads it back when a session starts, so a restart does
not lose what the user already typed.

Only the aggregate is stored, never the step index: a restored session always
starts at the first step, with the fields pre-filled.

WHY NEVER RAISE:
- A corrupt or unreadable slot must not prevent the wizard from opening
- A failed write must not turn a keystroke into an error; the next
  successful write supersedes it
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Protocol

from pydantic import ValidationError as PydanticValidationError

from profile_wizard.core.config import SLOT_KEY_RE, settings
from profile_wizard.schemas.profile_draft import ProfileDraft, empty_profile
from profile_wizard.wizard.store import WizardStore

logger = logging.getLogger(__name__)


class KeyValueSlot(Protocol):
    """Minimal durable byte storage addressed by key."""

    def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or None if nothing is stored."""
        ...

    def set(self, key: str, value: bytes) -> None:
        """Store bytes under key, replacing any previous value."""
        ...


class InMemorySlot:
    """Process-local slot. Survives store re-creation, not process restarts."""

    def __init__(self) -> None:
        self._values: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._values.get(key)

    def set(self, key: str, value: bytes) -> None:
        self._values[key] = value


class FileSlot:
    """Slot storing one file per key inside a directory.

    Writes go to a temporary file first and are moved into place, so a crash
    mid-write leaves the previous value intact.
    """

    def __init__(self, directory: Path) -> None:
        """Initialize the slot.

        Args:
            directory: Where slot files live. Created on first write.
        """
        self._directory = directory

    def _path(self, key: str) -> Path:
        if not SLOT_KEY_RE.match(key):
            msg = f"Invalid slot key: {key!r}"
            raise ValueError(msg)
        return self._directory / f"{key}.json"

    def get(self, key: str) -> bytes | None:
        path = self._path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def set(self, key: str, value: bytes) -> None:
        path = self._path(key)
        self._directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(value)
            os.replace(tmp_name, path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def serialize_profile(profile: ProfileDraft) -> bytes:
    """Encode an aggregate as compact JSON keyed by wire names.

    The encoding is deterministic: equal aggregates give equal bytes.
    """
    return profile.model_dump_json(by_alias=True).encode("utf-8")


def deserialize_profile(raw: bytes) -> ProfileDraft:
    """Decode bytes written by ``serialize_profile``.

    Raises:
        pydantic.ValidationError: If the bytes are not a JSON object of the
            aggregate's shape.
    """
    return ProfileDraft.model_validate_json(raw)


class PersistenceBridge:
    """Keeps a key-value slot in sync with a ``WizardStore``'s aggregate."""

    def __init__(self, slot: KeyValueSlot, key: str) -> None:
        """Initialize the bridge.

        Args:
            slot: Durable storage.
            key: Slot key identifying the in-progress aggregate.
        """
        self._slot = slot
        self._key = key

    def load(self) -> ProfileDraft:
        """Read the stored aggregate.

        Returns:
            The stored aggregate, or an empty one when the slot is empty,
            unreadable, or holds something that is not a profile.
        """
        try:
            raw = self._slot.get(self._key)
        except (OSError, ValueError):
            logger.warning("Could not read wizard slot %s", self._key, exc_info=True)
            return empty_profile()
        if raw is None:
            return empty_profile()
        try:
            return deserialize_profile(raw)
        except PydanticValidationError as exc:
            logger.warning(
                "Discarding malformed wizard slot %s (%d errors)",
                self._key,
                exc.error_count(),
            )
            return empty_profile()

    def save(self, profile: ProfileDraft) -> None:
        """Write the whole aggregate to the slot. Failures are logged only."""
        try:
            self._slot.set(self._key, serialize_profile(profile))
        except (OSError, ValueError):
            logger.warning("Could not write wizard slot %s", self._key, exc_info=True)

    def attach(self, store: WizardStore) -> None:
        """Save after every aggregate change of ``store``."""
        store.subscribe(self.save)


def open_wizard(
    slot: KeyValueSlot | None = None,
    key: str | None = None,
) -> WizardStore:
    """Start a wizard session from the durable slot.

    Args:
        slot: Storage to use. Defaults to a FileSlot under
            ``settings.wizard_storage_dir``.
        key: Slot key. Defaults to ``settings.wizard_storage_key``.

    Returns:
        A store holding the restored aggregate, positioned on the first step,
        with persistence attached.
    """
    bridge = PersistenceBridge(
        slot if slot is not None else FileSlot(settings.wizard_storage_dir),
        key or settings.wizard_storage_key,
    )
    store = WizardStore(profile=bridge.load())
    bridge.attach(store)
    return store
