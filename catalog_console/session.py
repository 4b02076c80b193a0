"""Create/edit session state machine."""
import enum
import logging
from typing import Any, Callable, Iterable, Optional

from catalog_console.errors import (
    CatalogError,
    ServerRejection,
    SessionStateError,
    ValidationError,
)
from catalog_console.models import apply_changes, missing_fields

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    CLOSED = "closed"
    OPEN = "open"
    SUBMITTING = "submitting"


class SessionMode(enum.Enum):
    CREATE = "create"
    EDIT = "edit"


class EditSession:
    """
    One create-or-edit interaction on a screen.

    ``CLOSED -> OPEN -> SUBMITTING -> CLOSED``. ``error`` holds the inline
    message and overlays OPEN/SUBMITTING without changing state; after a
    failed submit the session is OPEN again with the draft intact.
    """

    def __init__(
        self,
        client,
        store,
        prefill: Optional[Callable[[Any], Any]] = None,
        validators: Iterable[Callable[[Any], Optional[str]]] = (),
    ):
        """
        Args:
            client: AsyncEntityClient used for create/update
            store: EntityListStore reloaded after a successful submit
            prefill: Builds the edit draft from a listed row
            validators: Extra checks run after the required-field check;
                each returns an error message or None
        """
        self.client = client
        self.store = store
        self.entity = client.entity
        self.prefill = prefill or self.entity.draft_from
        self.validators = list(validators)
        # Bumped on open/cancel so a late submit result can tell it is stale
        self._generation = 0
        self._reset()

    def _reset(self):
        self.state = SessionState.CLOSED
        self.mode: Optional[SessionMode] = None
        self.editing = None
        self.draft = None
        self.error: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.state is not SessionState.CLOSED

    def open(self, row=None):
        """
        Start a session: edit ``row`` if given, otherwise create.

        Raises:
            SessionStateError: If a session is already open
        """
        if self.is_open:
            raise SessionStateError(f"A {self.entity.key} session is already {self.state.value}")

        self._generation += 1
        if row is None:
            self.mode = SessionMode.CREATE
            self.editing = None
            self.draft = self.entity.draft_type()
        else:
            self.mode = SessionMode.EDIT
            self.editing = row
            self.draft = self.prefill(row)
        self.error = None
        self.state = SessionState.OPEN
        logger.debug(f"Opened {self.mode.value} session on {self.entity.key}")

    def update(self, **changes):
        """Change draft fields; unknown field names raise TypeError."""
        if self.state is not SessionState.OPEN:
            raise SessionStateError(f"Cannot edit a draft while {self.state.value}")
        self.draft = apply_changes(self.draft, **changes)

    def cancel(self):
        """Close the session and discard the draft, whatever the state."""
        self._generation += 1
        self._reset()

    def validate(self):
        """
        Raises:
            ValidationError: With the message to show inline
        """
        if missing_fields(self.draft):
            raise ValidationError(self.entity.missing_fields_error)
        for check in self.validators:
            message = check(self.draft)
            if message:
                raise ValidationError(message)

    def _message_for(self, error: CatalogError) -> str:
        if isinstance(error, ServerRejection):
            return str(error)
        return self.entity.save_error

    async def submit(self) -> bool:
        """
        Validate, send, and on success close the session and reload the list.

        Returns:
            True once the store accepted the change

        Raises:
            ValidationError: Draft incomplete; nothing was sent
            ServerRejection: Store refused the change
            TransportError: Store unreachable
            SessionStateError: Session not open
        """
        if self.state is not SessionState.OPEN:
            raise SessionStateError(f"Cannot submit while {self.state.value}")

        try:
            self.validate()
        except ValidationError as e:
            self.error = str(e)
            raise

        self.error = None
        payload = self.draft.to_payload()
        generation = self._generation
        self.state = SessionState.SUBMITTING

        try:
            if self.mode is SessionMode.EDIT:
                await self.client.update(self.editing.id, payload)
            else:
                await self.client.create(payload)
        except CatalogError as e:
            if generation == self._generation:
                self.state = SessionState.OPEN
                self.error = self._message_for(e)
            raise

        if generation == self._generation:
            self._reset()
        else:
            logger.debug(f"{self.entity.key} session was cancelled before the store answered")

        await self.store.reload()
        return True
