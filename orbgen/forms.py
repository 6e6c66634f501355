"""Draft state for the multi-field input screens.

A :class:`FormDraft` lives exactly as long as one input screen. It keeps the
raw strings typed so far, untruncated, and the index of the focused field.
Character limits are enforced when a builder reads a value on submit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from .validators import FieldTooLongError


@dataclass
class FormField:
    """One text input of a sub-form."""

    key: str
    label: str
    placeholder: str = ""
    char_limit: int = 0
    required: bool = False
    value: str = ""

    def set_value(self, raw: str) -> None:
        self.value = raw

    def checked_value(self) -> str:
        """Return the trimmed value, rejecting input longer than ``char_limit``."""

        value = self.value.strip()
        if self.char_limit and len(value) > self.char_limit:
            raise FieldTooLongError(self.label.lower(), self.char_limit)
        return value


@dataclass
class FormDraft:
    """Editable values for a single action or forwarding sub-form."""

    kind: Any
    title: str
    fields: list[FormField]
    focus: int = 0
    description: list[str] = field(default_factory=list)

    @property
    def focused(self) -> FormField:
        return self.fields[self.focus]

    def get_field(self, key: str) -> FormField:
        for candidate in self.fields:
            if candidate.key == key:
                return candidate
        raise KeyError(f"{self.title} has no field {key!r}")

    def move_focus(self, step: int) -> None:
        """Move focus by ``step`` fields, clamped to the first and last one."""

        self.focus = max(0, min(len(self.fields) - 1, self.focus + step))

    def set_value(self, value: str, key: str | None = None) -> None:
        target = self.focused if key is None else self.get_field(key)
        target.set_value(value)

    def value(self, key: str) -> str:
        """Return the trimmed value of ``key``.

        Raises :class:`~orbgen.validators.FieldTooLongError` when the value
        does not fit the field.
        """

        return self.get_field(key).checked_value()

    def values(self) -> dict[str, str]:
        return {item.key: item.value.strip() for item in self.fields}


class SubFormBuilder(Protocol):
    """Builds one record kind from a sub-form draft."""

    def begin(self) -> FormDraft:
        """Return a fresh draft for this kind."""

    def submit(self, draft: FormDraft, **options: Any) -> Any:
        """Validate ``draft`` and return the constructed record."""


@dataclass(frozen=True)
class CatalogEntry:
    """A selectable kind and, when implemented, the builder behind it."""

    kind: Any
    description: str
    builder: SubFormBuilder | None = None

    @property
    def title(self) -> str:
        return self.kind.display_name

    @property
    def supported(self) -> bool:
        return self.builder is not None
