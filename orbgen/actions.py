"""Action catalog and the fee action sub-form."""

from __future__ import annotations

import logging

from .errors import InternalStateError, UnsupportedFeatureError
from .forms import CatalogEntry, FormDraft, FormField, SubFormBuilder
from .schema import Action, ActionID, FeeInfo, SchemaError, new_fee_action
from .validators import (
    ValidationError,
    validate_basis_points,
    validate_recipient_prefix,
    validate_required,
    validate_uint,
)

logger = logging.getLogger(__name__)

FEE_RECIPIENT = "recipient"
FEE_BASIS_POINTS = "basis_points"


class FeeActionBuilder:
    """Collects a single fee recipient and its share in basis points."""

    kind = ActionID.ACTION_FEE

    def begin(self) -> FormDraft:
        return FormDraft(
            kind=self.kind,
            title="Configure Fee Action",
            description=[
                "Fee actions allow you to collect a percentage of the transaction amount.",
                "The recipient will receive the specified percentage as a fee.",
            ],
            fields=[
                FormField(
                    key=FEE_RECIPIENT,
                    label="Recipient",
                    placeholder="Fee recipient address",
                    char_limit=100,
                    required=True,
                ),
                FormField(
                    key=FEE_BASIS_POINTS,
                    label="Basis Points",
                    placeholder="Basis points (e.g. 100 for 1%)",
                    char_limit=5,
                    required=True,
                ),
            ],
        )

    def submit(self, draft: FormDraft, *, recipient_prefix: str | None = None) -> Action:
        recipient = draft.value(FEE_RECIPIENT)
        validate_required(recipient, "recipient address")
        basis_points_raw = draft.value(FEE_BASIS_POINTS)
        validate_required(basis_points_raw, "basis points")
        basis_points = validate_uint(basis_points_raw, 32, field_name="basis points")
        validate_basis_points(basis_points)
        validate_recipient_prefix(recipient, recipient_prefix)

        try:
            action = new_fee_action([FeeInfo(recipient=recipient, basis_points=basis_points)])
        except SchemaError as exc:
            raise ValidationError(f"invalid fee action: {exc}") from exc
        logger.debug(
            "Built fee action",
            extra={"recipient": recipient, "basis_points": basis_points},
        )
        return action


ACTION_CATALOG: tuple[CatalogEntry, ...] = (
    CatalogEntry(ActionID.ACTION_FEE, "Add fee payment action", FeeActionBuilder()),
    CatalogEntry(ActionID.ACTION_SWAP, "Add token swap action"),
)


def list_available_action_kinds() -> list[CatalogEntry]:
    """Return the selectable action kinds in display order."""

    return list(ACTION_CATALOG)


def _builder_for(kind: ActionID) -> SubFormBuilder:
    for entry in ACTION_CATALOG:
        if entry.kind is kind:
            if entry.builder is None:
                raise UnsupportedFeatureError(kind.display_name)
            return entry.builder
    raise InternalStateError(f"action kind is not in the catalog: {kind!r}")


def begin_action_input(kind: ActionID) -> FormDraft:
    """Return an empty draft for ``kind``."""

    return _builder_for(kind).begin()


def submit_action_input(draft: FormDraft, *, recipient_prefix: str | None = None) -> Action:
    """Validate ``draft`` and return the finished action.

    Raises a :class:`~orbgen.validators.ValidationError` for the first field
    that fails; the draft itself is left untouched so it can be corrected.
    """

    return _builder_for(draft.kind).submit(draft, recipient_prefix=recipient_prefix)
