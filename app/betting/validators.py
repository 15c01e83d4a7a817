"""
Input validators for wagers and draw declarations.

These run in the service layer before any row is locked, so a malformed
request never reaches the database. All of them raise
core.exceptions.ValidationError (kind INVALID_INPUT).

Usage:
    from betting.validators import build_draw_label, validate_number

    label = build_draw_label(date(2024, 1, 1), "Game X")  # "2024-01-01-Game_X"
    validate_number(GameKind.TWO_DIGIT, "47")
"""

from __future__ import annotations

import datetime
import re
from decimal import Decimal, InvalidOperation

from betting.states import GameKind
from core.exceptions import ValidationError

DRAW_LABEL_PATTERN = re.compile(r"^(?P<date>\d{4}-\d{2}-\d{2})-(?P<game>[A-Za-z0-9_]+)$")

TWO_DIGITS = re.compile(r"^\d{2}$")
ONE_DIGIT = re.compile(r"^\d$")


def build_draw_label(date: datetime.date, game_name: str) -> str:
    """
    Build the draw label shared by wagers and declarations.

    Args:
        date: Draw date
        game_name: Display name of the game; spaces become underscores

    Returns:
        Label in the form "{YYYY-MM-DD}-{gameName}"

    Raises:
        ValidationError: If the game name is empty or has other punctuation
    """
    game = "_".join(game_name.split())
    label = f"{date.isoformat()}-{game}"
    return validate_draw_label(label)


def validate_draw_label(draw_label: str) -> str:
    """
    Check a draw label is "{YYYY-MM-DD}-{gameName}" with a real date.

    Returns:
        The label unchanged
    """
    match = DRAW_LABEL_PATTERN.match(draw_label or "")
    if not match:
        raise ValidationError(
            "Draw label must look like YYYY-MM-DD-GameName",
            error_code="INVALID_DRAW_LABEL",
            details={"draw_label": [f"Invalid draw label: {draw_label!r}"]},
        )
    try:
        datetime.date.fromisoformat(match.group("date"))
    except ValueError:
        raise ValidationError(
            "Draw label does not start with a valid date",
            error_code="INVALID_DRAW_LABEL",
            details={"draw_label": [f"Invalid date in {draw_label!r}"]},
        ) from None
    return draw_label


def validate_game_kind(game_kind: str) -> str:
    if game_kind not in GameKind.values:
        raise ValidationError(
            f"Unknown game kind: {game_kind}",
            error_code="INVALID_GAME_KIND",
            details={"game_kind": [f"Expected one of {', '.join(GameKind.values)}"]},
        )
    return game_kind


def validate_number(game_kind: str, number: str) -> str:
    """
    Check a predicted or declared number has the right shape for its kind.

    Two-digit games take exactly two digits ("07"), one-digit games a
    single digit.
    """
    pattern = TWO_DIGITS if game_kind == GameKind.TWO_DIGIT else ONE_DIGIT
    if not isinstance(number, str) or not pattern.match(number):
        expected = "two digits" if game_kind == GameKind.TWO_DIGIT else "one digit"
        raise ValidationError(
            f"{game_kind} numbers must be exactly {expected}",
            error_code="INVALID_NUMBER",
            details={"number": [f"Expected {expected}, got {number!r}"]},
        )
    return number


def validate_stake(stake) -> Decimal:
    """
    Parse a positive stake with at most two decimal places.

    Returns:
        The stake as a Decimal
    """
    try:
        value = Decimal(str(stake))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(
            "Stake must be a number",
            error_code="INVALID_STAKE",
            details={"stake": [f"Not a number: {stake!r}"]},
        ) from None
    if not value.is_finite() or value <= 0:
        raise ValidationError(
            "Stake must be positive",
            error_code="INVALID_STAKE",
            details={"stake": ["Must be greater than zero"]},
        )
    if value != value.quantize(Decimal("0.01")):
        raise ValidationError(
            "Stake may have at most two decimal places",
            error_code="INVALID_STAKE",
            details={"stake": ["At most two decimal places"]},
        )
    return value
