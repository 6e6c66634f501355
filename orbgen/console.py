"""Interactive line-based console for the payload wizard.

Screens and prompts are written to stderr so that stdout only ever carries the
final payload, which keeps ``orbgen > payload.json`` usable.
"""

from __future__ import annotations

import logging
import shutil
import sys
import textwrap

from .forms import FormDraft, FormField
from .wizard import (
    Cancel,
    Confirm,
    EditField,
    Navigate,
    Quit,
    Resize,
    Screen,
    SetCursor,
    Wizard,
)

logger = logging.getLogger(__name__)

QUIT_KEYS = {"q", "quit"}
BACK_KEYS = {"b", "back"}
CLEAR_VALUE = "-"
ELLIPSIS = "..."


def _echo(message: str = "") -> None:
    print(message, file=sys.stderr)


def _read(prompt: str) -> str:
    print(prompt, end="", file=sys.stderr, flush=True)
    return input()


def prompt_str(prompt: str, default: str | None = None) -> str:
    """Prompt for a string value; blank input returns ``default`` (or "")."""

    suffix = f" [{default}]" if default else ""
    raw = _read(f"{prompt}{suffix}: ").strip()
    if not raw:
        return default or ""
    if raw == CLEAR_VALUE:
        return ""
    return raw


def _write_error(wizard: Wizard) -> None:
    if wizard.session.error is not None:
        _echo(f"\nError: {wizard.session.error}")


def _write_action_selection(wizard: Wizard) -> None:
    _echo("Orbiter Payload Generator\n")
    if not wizard.actions:
        _echo(
            textwrap.dedent(
                """\
                Welcome! This tool helps you build payloads for cross-chain operations.
                To start, select if you want to add a so-called action to the payload.

                Actions are optional operations that run before forwarding (e.g. fee payments).
                The selected actions will be run sequentially, so bear that in mind.
                """
            )
        )
    else:
        _echo("Add another action or continue to forwarding selection.")
        current = ", ".join(action.id.display_name for action in wizard.actions)
        _echo(f"Current actions: {current}\n")
    _echo("Select an action to add:")


def _write_forwarding_selection(wizard: Wizard) -> None:
    _echo("Select Forwarding Protocol\n")
    _echo("Now choose how to forward your transaction to the destination chain.")
    _echo("Each protocol supports different chains and tokens:\n")
    _echo("Select a protocol:")


def _fit(line: str, width: int) -> str:
    if width <= len(ELLIPSIS) or len(line) <= width:
        return line
    return line[: width - len(ELLIPSIS)] + ELLIPSIS


def _write_menu(wizard: Wizard) -> None:
    width = wizard.session.width
    for index, item in enumerate(wizard.menu(), start=1):
        marker = ">" if index - 1 == wizard.session.cursor else " "
        _echo(_fit(f"{marker} [{index}] {item.title}: {item.description}", width))


def _write_form(draft: FormDraft, width: int) -> None:
    _echo(draft.title + "\n")
    for line in draft.description:
        _echo(textwrap.fill(line, width=width, subsequent_indent="  ") if width else line)
    _echo(f"\nPress Enter to keep a value, '{CLEAR_VALUE}' to clear it, "
          "'b' at the submit prompt to go back, Ctrl+C to quit")


def _handle_selection(wizard: Wizard) -> None:
    if wizard.screen is Screen.ACTION_SELECTION:
        _write_action_selection(wizard)
    else:
        _write_forwarding_selection(wizard)
    _write_menu(wizard)
    _write_error(wizard)

    items = wizard.menu()
    while True:
        raw = _read("\nSelect an option (number, q to quit): ").strip().lower()
        if raw in QUIT_KEYS:
            wizard.dispatch(Quit())
            return
        if raw in BACK_KEYS and wizard.screen is Screen.FORWARDING_SELECTION:
            wizard.dispatch(Cancel())
            return
        if not raw:
            wizard.dispatch(Confirm())
            return
        if raw.isdigit() and 1 <= int(raw) <= len(items):
            wizard.dispatch(SetCursor(int(raw) - 1))
            wizard.dispatch(Confirm())
            return
        _echo("Invalid selection, please try again.")


def _prompt_field(item: FormField) -> str:
    label = item.label if item.required else f"{item.label} (optional)"
    _echo(f"  {item.placeholder}")
    return prompt_str(label, default=item.value or None)


def _handle_form(wizard: Wizard) -> None:
    draft = wizard.session.draft
    if draft is None:  # pragma: no cover - the wizard always sets a draft here
        return
    _write_form(draft, wizard.session.width)
    _write_error(wizard)

    for index, item in enumerate(draft.fields):
        wizard.dispatch(Navigate(index - draft.focus))
        wizard.dispatch(EditField(_prompt_field(item)))

    choice = _read("Submit? [Y/n/b(ack)/q(uit)]: ").strip().lower()
    if choice in QUIT_KEYS:
        wizard.dispatch(Quit())
    elif choice in BACK_KEYS:
        wizard.dispatch(Cancel())
    elif choice in {"n", "no"}:
        return
    else:
        wizard.dispatch(Confirm())


def run_wizard(wizard: Wizard) -> Wizard:
    """Drive ``wizard`` from terminal input until it reaches a terminal screen.

    Ctrl+C and end-of-input quit the session. Unsupported selections and
    internal errors propagate to the caller.
    """

    while not wizard.finished:
        _echo()
        size = shutil.get_terminal_size()
        wizard.dispatch(Resize(size.columns, size.lines))
        try:
            if wizard.screen in (Screen.ACTION_SELECTION, Screen.FORWARDING_SELECTION):
                _handle_selection(wizard)
            else:
                _handle_form(wizard)
        except (KeyboardInterrupt, EOFError):
            _echo()
            wizard.dispatch(Quit())

    if wizard.screen is Screen.FAILED:
        _write_error(wizard)
    elif wizard.screen is Screen.DONE:
        _echo("Payload assembled.")
    logger.debug("Console loop finished on %s", wizard.screen.name)
    return wizard
