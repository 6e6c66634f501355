"""State machine driving the payload wizard.

The wizard walks through four screens: pick pre-actions one at a time, fill in
each action's sub-form, pick a forwarding protocol and fill in its sub-form.
Submitting the forwarding assembles the payload and ends the session. The
presentation layer only feeds events into :meth:`Wizard.dispatch` and renders
:attr:`Wizard.session`; all transitions and validation happen here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Union

from .actions import begin_action_input, list_available_action_kinds, submit_action_input
from .assembler import assemble
from .config import WizardConfig
from .errors import AssemblyError, InternalStateError, UnsupportedFeatureError
from .forms import CatalogEntry, FormDraft
from .forwarding import (
    begin_forwarding_input,
    list_available_protocols,
    submit_forwarding_input,
)
from .schema import Action, Forwarding
from .validators import ValidationError

logger = logging.getLogger(__name__)

FINISH_ACTIONS_TITLE = "No more actions"


class Screen(Enum):
    """Screens of the wizard; the last three are terminal."""

    ACTION_SELECTION = auto()
    ACTION_INPUT = auto()
    FORWARDING_SELECTION = auto()
    FORWARDING_INPUT = auto()
    DONE = auto()
    FAILED = auto()
    ABORTED = auto()

    @property
    def terminal(self) -> bool:
        return self in {Screen.DONE, Screen.FAILED, Screen.ABORTED}


@dataclass(frozen=True)
class Confirm:
    """Select the highlighted item or submit the current sub-form."""


@dataclass(frozen=True)
class Quit:
    """Abandon the session without producing a payload."""


@dataclass(frozen=True)
class Cancel:
    """Leave the current screen for the previous selection screen."""


@dataclass(frozen=True)
class Navigate:
    """Move the selection cursor or the focused field by ``step``."""

    step: int


@dataclass(frozen=True)
class SetCursor:
    index: int


@dataclass(frozen=True)
class EditField:
    """Replace the value of ``key`` (or of the focused field)."""

    value: str
    key: str | None = None


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


WizardEvent = Union[Confirm, Quit, Cancel, Navigate, SetCursor, EditField, Resize]


@dataclass(frozen=True)
class MenuItem:
    """One line of a selection screen.

    ``entry`` is ``None`` for the item that ends action collection.
    """

    title: str
    description: str
    entry: CatalogEntry | None = None


@dataclass
class Session:
    """Working set of a single wizard run."""

    screen: Screen = Screen.ACTION_SELECTION
    actions: list[Action] = field(default_factory=list)
    cursor: int = 0
    draft: FormDraft | None = None
    error: Exception | None = None
    forwarding: Forwarding | None = None
    payload: str | None = None
    width: int = 0
    height: int = 0


class Wizard:
    """Event-driven builder of one Orbiter payload."""

    def __init__(
        self,
        *,
        allow_random: bool = False,
        recipient_prefix: str | None = None,
    ) -> None:
        self.allow_random = allow_random
        self.recipient_prefix = recipient_prefix
        self._session = Session()

    @classmethod
    def from_config(cls, config: WizardConfig) -> "Wizard":
        return cls(
            allow_random=config.allow_random_values,
            recipient_prefix=config.recipient_prefix,
        )

    @property
    def session(self) -> Session:
        return self._session

    @property
    def screen(self) -> Screen:
        return self._session.screen

    @property
    def actions(self) -> tuple[Action, ...]:
        return tuple(self._session.actions)

    @property
    def payload(self) -> str | None:
        return self._session.payload

    @property
    def finished(self) -> bool:
        return self._session.screen.terminal

    def menu(self) -> list[MenuItem]:
        """Return the items of the current selection screen."""

        screen = self._session.screen
        if screen is Screen.ACTION_SELECTION:
            items = [
                MenuItem(entry.title, entry.description, entry)
                for entry in list_available_action_kinds()
            ]
            items.append(MenuItem(FINISH_ACTIONS_TITLE, "Proceed to forwarding selection"))
            return items
        if screen is Screen.FORWARDING_SELECTION:
            return [
                MenuItem(entry.title, entry.description, entry)
                for entry in list_available_protocols()
            ]
        return []

    def dispatch(self, event: WizardEvent) -> Session:
        """Apply ``event`` to the session and return it.

        Validation failures are stored on ``session.error`` and never raised.
        :class:`~orbgen.errors.UnsupportedFeatureError` and
        :class:`~orbgen.errors.InternalStateError` propagate to the caller.
        """

        session = self._session
        if session.screen.terminal:
            raise InternalStateError(
                f"session is already {session.screen.name}; cannot handle {type(event).__name__}"
            )

        if isinstance(event, Quit):
            logger.info("Session aborted by user", extra={"screen": session.screen.name})
            session.draft = None
            session.screen = Screen.ABORTED
        elif isinstance(event, Resize):
            session.width = event.width
            session.height = event.height
        elif session.screen in (Screen.ACTION_SELECTION, Screen.FORWARDING_SELECTION):
            self._handle_selection(event)
        elif session.screen in (Screen.ACTION_INPUT, Screen.FORWARDING_INPUT):
            self._handle_input(event)
        else:  # pragma: no cover - every non-terminal screen is handled above
            raise InternalStateError(f"unhandled screen: {session.screen!r}")
        return session

    def _transition(self, screen: Screen, draft: FormDraft | None = None) -> None:
        logger.debug("Transition %s -> %s", self._session.screen.name, screen.name)
        self._session.screen = screen
        self._session.draft = draft
        self._session.cursor = 0
        self._session.error = None

    def _handle_selection(self, event: WizardEvent) -> None:
        session = self._session
        items = self.menu()
        if isinstance(event, Navigate):
            session.cursor = max(0, min(len(items) - 1, session.cursor + event.step))
        elif isinstance(event, SetCursor):
            if not 0 <= event.index < len(items):
                raise InternalStateError(
                    f"selection index {event.index} out of range for {len(items)} items"
                )
            session.cursor = event.index
        elif isinstance(event, Confirm):
            self._select(items[session.cursor])
        elif isinstance(event, Cancel):
            if session.screen is Screen.FORWARDING_SELECTION:
                self._transition(Screen.ACTION_SELECTION)
        else:
            raise InternalStateError(
                f"unexpected {type(event).__name__} on {session.screen.name}"
            )

    def _select(self, item: MenuItem) -> None:
        screen = self._session.screen
        if item.entry is None:
            if screen is not Screen.ACTION_SELECTION:
                raise InternalStateError(f"unexpected selection {item.title!r} on {screen.name}")
            self._transition(Screen.FORWARDING_SELECTION)
            return

        try:
            if screen is Screen.ACTION_SELECTION:
                draft = begin_action_input(item.entry.kind)
                next_screen = Screen.ACTION_INPUT
            else:
                draft = begin_forwarding_input(item.entry.kind)
                next_screen = Screen.FORWARDING_INPUT
        except UnsupportedFeatureError:
            logger.critical("Selected an unimplemented feature: %s", item.title)
            raise
        self._transition(next_screen, draft)

    def _handle_input(self, event: WizardEvent) -> None:
        session = self._session
        draft = session.draft
        if draft is None:
            raise InternalStateError(f"{session.screen.name} has no draft")

        if isinstance(event, EditField):
            try:
                draft.set_value(event.value, event.key)
            except KeyError as exc:
                raise InternalStateError(str(exc)) from exc
        elif isinstance(event, Navigate):
            draft.move_focus(event.step)
        elif isinstance(event, Cancel):
            if session.screen is Screen.ACTION_INPUT:
                self._transition(Screen.ACTION_SELECTION)
            else:
                self._transition(Screen.FORWARDING_SELECTION)
        elif isinstance(event, Confirm):
            if session.screen is Screen.ACTION_INPUT:
                self._submit_action(draft)
            else:
                self._submit_forwarding(draft)
        else:
            raise InternalStateError(
                f"unexpected {type(event).__name__} on {session.screen.name}"
            )

    def _submit_action(self, draft: FormDraft) -> None:
        try:
            action = submit_action_input(draft, recipient_prefix=self.recipient_prefix)
        except ValidationError as exc:
            logger.info("Rejected %s input: %s", draft.kind.display_name, exc)
            self._session.error = exc
            return
        self._session.actions.append(action)
        logger.info(
            "Added action %s", action.id.display_name,
            extra={"action_count": len(self._session.actions)},
        )
        self._transition(Screen.ACTION_SELECTION)

    def _submit_forwarding(self, draft: FormDraft) -> None:
        session = self._session
        try:
            forwarding = submit_forwarding_input(draft, allow_random=self.allow_random)
        except ValidationError as exc:
            logger.info("Rejected %s input: %s", draft.kind.display_name, exc)
            session.error = exc
            return

        if session.payload is not None:
            raise InternalStateError("payload has already been assembled")
        try:
            payload = assemble(session.actions, forwarding)
        except AssemblyError as exc:
            self._transition(Screen.FAILED)
            session.error = exc
            return

        session.forwarding = forwarding
        session.payload = payload
        self._transition(Screen.DONE)
