"""
Tests for BetPlacementService.

Covers:
1. Atomic placement of a batch (balance, wagers and bet_placed entries)
2. Rejections that leave nothing behind (funds, format, roles, blocking)
3. Wagers on outcomes that are already declared
4. Per-draw and per-category bet limits
5. Storage faults
6. Read projections
"""

from decimal import Decimal
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from betting.models import Bet, DrawResult
from betting.services import BetPlacementService, DrawSettlementService, placement
from betting.states import BetStatus, DrawState, GameKind
from betting.tests.factories import DRAW_LABEL
from betting.types import WagerRequest
from core.exceptions import ErrorKind
from wallets.models import EntryKind, LedgerEntry
from wallets.services import AccountService, AccountStore, LedgerRecorder
from wallets.tests.factories import UserAccountFactory


def wager(game_kind=GameKind.TWO_DIGIT, number="47", stake="300", draw_label=DRAW_LABEL):
    return WagerRequest(draw_label, game_kind, number, Decimal(stake))


def assert_nothing_placed(account, balance):
    assert AccountStore.get_balance(account.id) == Decimal(balance)
    assert not Bet.objects.filter(account=account).exists()
    assert not LedgerEntry.objects.filter(
        account=account, kind=EntryKind.BET_PLACED
    ).exists()


# =============================================================================
# Successful Placement
# =============================================================================


@pytest.mark.django_db
class TestPlaceBets:
    def test_two_wagers_debit_the_total(self, user):
        result = BetPlacementService.place_bets(
            user.id, [wager(number="47"), wager(number="12")]
        )

        assert result.success
        bets = result.data
        assert [bet.number for bet in bets] == ["47", "12"]
        assert all(bet.status == BetStatus.PENDING for bet in bets)
        assert AccountStore.get_balance(user.id) == Decimal("400.00")

        entries = LedgerEntry.objects.filter(
            account=user, kind=EntryKind.BET_PLACED
        ).order_by("balance_after")
        assert [entry.amount for entry in entries] == [
            Decimal("-300.00"),
            Decimal("-300.00"),
        ]
        assert [entry.balance_after for entry in entries] == [
            Decimal("400.00"),
            Decimal("700.00"),
        ]
        assert {entry.related_entity_id for entry in entries} == {
            bet.id for bet in bets
        }
        assert AccountStore.verify_balance(user.id).consistent

    def test_accepts_plain_dicts(self, user):
        result = BetPlacementService.place_bets(
            user.id,
            [
                {
                    "draw_label": DRAW_LABEL,
                    "game_kind": "1D-Open",
                    "number": "4",
                    "stake": "25.50",
                }
            ],
        )

        assert result.success
        assert result.data[0].stake == Decimal("25.50")

    def test_empty_batch_is_a_no_op(self, user):
        result = BetPlacementService.place_bets(user.id, [])

        assert result.success
        assert result.data == []
        assert AccountStore.get_balance(user.id) == Decimal("1000.00")

    def test_whole_balance_can_be_staked(self, user):
        result = BetPlacementService.place_bets(user.id, [wager(stake="1000")])

        assert result.success
        assert AccountStore.get_balance(user.id) == Decimal("0.00")

    def test_several_draws_in_one_batch(self, user):
        result = BetPlacementService.place_bets(
            user.id,
            [wager(), wager(draw_label="2024-01-02-GameX", stake="100")],
        )

        assert result.success
        assert AccountStore.get_balance(user.id) == Decimal("600.00")


# =============================================================================
# Rejections
# =============================================================================


@pytest.mark.django_db
class TestPlacementRejections:
    def test_insufficient_funds_for_the_batch(self, user):
        result = BetPlacementService.place_bets(
            user.id, [wager(stake="600"), wager(stake="400.01")]
        )

        assert result.kind == ErrorKind.INSUFFICIENT_FUNDS
        assert result.errors["required"] == "1000.01"
        assert_nothing_placed(user, "1000.00")

    def test_malformed_wager_rejects_the_batch(self, user):
        result = BetPlacementService.place_bets(
            user.id, [wager(), wager(game_kind=GameKind.ONE_DIGIT_OPEN, number="47")]
        )

        assert result.kind == ErrorKind.INVALID_INPUT
        assert result.error_code == "INVALID_NUMBER"
        assert_nothing_placed(user, "1000.00")

    @pytest.mark.parametrize(
        "bad, error_code",
        [
            ({"draw_label": "tomorrow"}, "INVALID_DRAW_LABEL"),
            ({"game_kind": "3D"}, "INVALID_GAME_KIND"),
            ({"stake": "0"}, "INVALID_STAKE"),
            ({"stake": "-10"}, "INVALID_STAKE"),
        ],
    )
    def test_field_errors(self, user, bad, error_code):
        data = {"draw_label": DRAW_LABEL, "game_kind": "2D", "number": "47", "stake": "5"}
        data.update(bad)

        result = BetPlacementService.place_bets(user.id, [data])

        assert result.error_code == error_code
        assert_nothing_placed(user, "1000.00")

    def test_unknown_account(self, db):
        result = BetPlacementService.place_bets("acc_missing", [wager()])

        assert result.kind == ErrorKind.NOT_FOUND

    def test_blocked_account(self, user):
        AccountService.update_settings(user.id, is_blocked=True)

        result = BetPlacementService.place_bets(user.id, [wager()])

        assert result.kind == ErrorKind.PERMISSION_DENIED
        assert result.error_code == "ACCOUNT_BLOCKED"
        assert_nothing_placed(user, "1000.00")

    def test_dealers_cannot_wager(self, dealer):
        result = BetPlacementService.place_bets(dealer.id, [wager()])

        assert result.kind == ErrorKind.PERMISSION_DENIED
        assert result.error_code == "BETTING_NOT_ALLOWED"

    def test_storage_error_on_second_entry_writes_nothing(self, user):
        real_record = LedgerRecorder.record
        calls = []

        def record_then_fail(*args, **kwargs):
            calls.append(args)
            if len(calls) == 2:
                raise DatabaseError("disk full")
            return real_record(*args, **kwargs)

        with patch.object(LedgerRecorder, "record", side_effect=record_then_fail):
            result = BetPlacementService.place_bets(user.id, [wager(), wager()])

        # The first wager and its entry were written before the fault
        assert len(calls) == 2
        assert result.kind == ErrorKind.STORAGE_ERROR
        assert result.retryable
        assert_nothing_placed(user, "1000.00")


# =============================================================================
# Declared Outcomes
# =============================================================================


@pytest.mark.django_db
class TestDeclaredOutcomes:
    def test_cannot_wager_on_declared_two_digit(self, user, declare):
        declare(two_digit="47")

        result = BetPlacementService.place_bets(user.id, [wager()])

        assert result.kind == ErrorKind.CONFLICT
        assert result.error_code == "DRAW_CLOSED"
        assert_nothing_placed(user, "1000.00")

    def test_open_half_closes_only_open_wagers(self, user, declare):
        declare(one_digit_open="4")

        closed = BetPlacementService.place_bets(
            user.id, [wager(game_kind=GameKind.ONE_DIGIT_OPEN, number="4")]
        )
        still_open = BetPlacementService.place_bets(
            user.id,
            [
                wager(game_kind=GameKind.ONE_DIGIT_CLOSE, number="7", stake="10"),
                wager(stake="10"),
            ],
        )

        assert closed.error_code == "DRAW_CLOSED"
        assert still_open.success

    def test_other_draws_stay_open(self, user, declare):
        declare(two_digit="47")

        result = BetPlacementService.place_bets(
            user.id, [wager(draw_label="2024-01-02-GameX")]
        )

        assert result.success

    def test_placement_creates_an_undeclared_draw_row(self, user):
        BetPlacementService.place_bets(user.id, [wager(stake="10")])

        draw = DrawResult.objects.get(draw_label=DRAW_LABEL)
        assert draw.state == DrawState.NO_RESULT
        assert list(DrawSettlementService.list_results()) == []

    def test_rejected_placement_leaves_no_draw_row(self, user):
        result = BetPlacementService.place_bets(user.id, [wager(stake="5000")])

        assert result.kind == ErrorKind.INSUFFICIENT_FUNDS
        assert not DrawResult.objects.exists()

    def test_draw_rows_are_locked_before_the_account(self, user):
        order = []
        real_lock_draws = placement.lock_draws
        real_lock_account = AccountStore.lock_account

        def track_draws(labels):
            order.append(("draws", sorted(labels)))
            return real_lock_draws(labels)

        def track_account(account_id):
            order.append(("account", account_id))
            return real_lock_account(account_id)

        with patch.object(placement, "lock_draws", side_effect=track_draws), patch.object(
            AccountStore, "lock_account", side_effect=track_account
        ):
            BetPlacementService.place_bets(
                user.id,
                [wager(stake="10", draw_label="2024-01-02-B"), wager(stake="10")],
            )

        assert order == [
            ("draws", [DRAW_LABEL, "2024-01-02-B"]),
            ("account", user.id),
        ]

    def test_declaration_settles_wager_on_existing_undeclared_row(self, user, declare):
        bet = BetPlacementService.place_bets(
            user.id, [wager(game_kind=GameKind.ONE_DIGIT_OPEN, number="4", stake="10")]
        ).data[0]

        declare(one_digit_open="4")

        bet.refresh_from_db()
        assert bet.status == BetStatus.WON


# =============================================================================
# Bet Limits
# =============================================================================


@pytest.mark.django_db
class TestBetLimits:
    def test_per_draw_limit_counts_earlier_wagers(self, user, place):
        AccountService.update_settings(user.id, bet_limit_per_draw=Decimal("500"))
        place(user, ("2D", "47", "300"))

        result = BetPlacementService.place_bets(user.id, [wager(stake="200.01")])

        assert result.kind == ErrorKind.INVALID_INPUT
        assert result.error_code == "BET_LIMIT_EXCEEDED"
        assert result.errors["limit"] == "bet_limit_per_draw"
        assert AccountStore.get_balance(user.id) == Decimal("700.00")

    def test_limit_may_be_reached_exactly(self, user, place):
        AccountService.update_settings(user.id, bet_limit_per_draw=Decimal("500"))
        place(user, ("2D", "47", "300"))

        result = BetPlacementService.place_bets(user.id, [wager(stake="200")])

        assert result.success

    def test_limit_is_per_draw(self, user, place):
        AccountService.update_settings(user.id, bet_limit_per_draw=Decimal("300"))
        place(user, ("2D", "47", "300"))

        result = BetPlacementService.place_bets(
            user.id, [wager(draw_label="2024-01-02-GameX")]
        )

        assert result.success

    def test_one_digit_limit_covers_open_and_close(self, user):
        AccountService.update_settings(user.id, bet_limit_1d=Decimal("100"))

        result = BetPlacementService.place_bets(
            user.id,
            [
                wager(game_kind=GameKind.ONE_DIGIT_OPEN, number="4", stake="60"),
                wager(game_kind=GameKind.ONE_DIGIT_CLOSE, number="7", stake="60"),
            ],
        )

        assert result.error_code == "BET_LIMIT_EXCEEDED"
        assert result.errors["limit"] == "bet_limit_1d"

    def test_two_digit_limit_ignores_one_digit_wagers(self, user):
        AccountService.update_settings(user.id, bet_limit_2d=Decimal("100"))

        result = BetPlacementService.place_bets(
            user.id,
            [
                wager(stake="100"),
                wager(game_kind=GameKind.ONE_DIGIT_OPEN, number="4", stake="500"),
            ],
        )

        assert result.success

    def test_zero_means_no_limit(self, user):
        AccountService.update_settings(user.id, bet_limit_per_draw=Decimal("0"))

        result = BetPlacementService.place_bets(user.id, [wager(stake="900")])

        assert result.success


# =============================================================================
# Read Projections
# =============================================================================


@pytest.mark.django_db
class TestBetProjections:
    def test_history_is_own_and_newest_first(self, user, dealer, place):
        other = UserAccountFactory(dealer=dealer)
        first = place(user, ("2D", "47", "10"))[0]
        second = place(user, ("2D", "12", "10"))[0]

        history = list(BetPlacementService.bet_history(user.id))

        assert [bet.id for bet in history] == [second.id, first.id]
        assert not BetPlacementService.bet_history(other.id).exists()

    def test_history_paging(self, user, place):
        for number in ("01", "02", "03"):
            place(user, ("2D", number, "1"))

        page = BetPlacementService.bet_history(user.id, limit=1, offset=1)

        assert [bet.number for bet in page] == ["02"]

    def test_dealer_sees_managed_users_only(self, user, dealer, place):
        place(user, ("2D", "47", "10"))
        stranger = UserAccountFactory(funds=Decimal("50"))
        place(stranger, ("2D", "47", "10"))

        bets = BetPlacementService.bets_for_dealer(dealer.id)

        assert [bet.account_id for bet in bets] == [user.id]
