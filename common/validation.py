"""
common.validation
~~~~~~~~~~~~~~~~~
Input-shape checks run by services before any store access.

Checks append human-readable messages to a list so that every problem is
reported at once; :func:`ensure_valid` then raises a single
:class:`~common.exceptions.ValidationError`.
"""
from __future__ import annotations

from enum import Enum

from django.utils.translation import gettext as _

from common.exceptions import ValidationError


def check_length(
    errors: list[str],
    value: str | None,
    *,
    label: str,
    max_length: int,
    min_length: int = 0,
    required: bool = False,
) -> None:
    """Validate an optional (or *required*) string's length."""
    if value is None or value == "":
        if required:
            errors.append(_("%(label)s is required.") % {"label": label})
        return
    if not isinstance(value, str):
        errors.append(_("%(label)s must be text.") % {"label": label})
        return
    if min_length and not min_length <= len(value) <= max_length:
        errors.append(
            _("%(label)s must be between %(min)d and %(max)d characters.")
            % {"label": label, "min": min_length, "max": max_length}
        )
    elif len(value) > max_length:
        errors.append(
            _("%(label)s cannot exceed %(max)d characters.") % {"label": label, "max": max_length}
        )


def check_choice(errors: list[str], value, choices: type[Enum], *, label: str, required: bool = False) -> None:
    """Validate that *value* is one of the enumeration's values."""
    if value is None:
        if required:
            errors.append(_("%(label)s is required.") % {"label": label})
        return
    if value not in choices.values:
        errors.append(_("%(label)s is not a valid choice.") % {"label": label})


def ensure_valid(errors: list[str]) -> None:
    """
    Raise if any check failed.

    Raises:
        ValidationError: Carrying every collected message.
    """
    if errors:
        raise ValidationError(_("Invalid data: %(errors)s") % {"errors": " ".join(errors)})
