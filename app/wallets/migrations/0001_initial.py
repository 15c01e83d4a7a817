import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Account",
            fields=[
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "id",
                    models.CharField(
                        editable=False,
                        help_text="Prefixed, time-sortable identifier",
                        max_length=40,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "username",
                    models.CharField(
                        help_text="Unique login name", max_length=150, unique=True
                    ),
                ),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("user", "User"),
                            ("dealer", "Dealer"),
                            ("admin", "Admin"),
                        ],
                        db_index=True,
                        default="user",
                        help_text="Position in the account hierarchy",
                        max_length=10,
                    ),
                ),
                (
                    "balance",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        help_text="Current balance (mutated only through AccountStore)",
                        max_digits=16,
                    ),
                ),
                (
                    "is_blocked",
                    models.BooleanField(
                        default=False,
                        help_text="Blocked accounts may not place wagers",
                    ),
                ),
                (
                    "bet_limit_per_draw",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Maximum total stake per draw (empty for no limit)",
                        max_digits=16,
                        null=True,
                    ),
                ),
                (
                    "bet_limit_2d",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Maximum two-digit stake per draw (empty for no limit)",
                        max_digits=16,
                        null=True,
                    ),
                ),
                (
                    "bet_limit_1d",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Maximum one-digit stake per draw (empty for no limit)",
                        max_digits=16,
                        null=True,
                    ),
                ),
                (
                    "commission_rate",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        help_text="Commission (dealer) or rebate (user) percentage",
                        max_digits=5,
                    ),
                ),
                (
                    "prize_rate_2d",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="Two-digit payout multiplier (empty for platform default)",
                        max_digits=8,
                        null=True,
                    ),
                ),
                (
                    "prize_rate_1d",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        help_text="One-digit payout multiplier (empty for platform default)",
                        max_digits=8,
                        null=True,
                    ),
                ),
                (
                    "dealer",
                    models.ForeignKey(
                        blank=True,
                        help_text="Dealer managing this user",
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="managed_users",
                        to="wallets.account",
                    ),
                ),
            ],
            options={
                "ordering": ["id"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("balance__gte", 0)),
                        name="wallet_account_balance_non_negative",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("commission_rate__gte", 0), ("commission_rate__lte", 100)
                        ),
                        name="wallet_account_commission_rate_percent",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                (
                    "id",
                    models.CharField(
                        editable=False,
                        help_text="Prefixed, time-sortable identifier",
                        max_length=40,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                (
                    "amount",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Signed amount (negative for debits)",
                        max_digits=16,
                    ),
                ),
                (
                    "kind",
                    models.CharField(
                        choices=[
                            ("bet_placed", "Bet Placed"),
                            ("prize_won", "Prize Won"),
                            ("dealer_credit", "Dealer Credit"),
                            ("dealer_debit_to_user", "Dealer Debit To User"),
                            ("admin_credit", "Admin Credit"),
                            ("admin_debit_to_user", "Admin Debit To User"),
                            ("admin_debit_from_user", "Admin Debit From User"),
                            ("admin_credit_from_user", "Admin Credit From User"),
                            ("commission_payout", "Commission Payout"),
                            ("top_up_approved", "Top-Up Approved"),
                            ("commission_rebate", "Commission Rebate"),
                        ],
                        db_index=True,
                        help_text="Category of this movement",
                        max_length=30,
                    ),
                ),
                (
                    "related_entity_id",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Id of the wager, counterparty, draw or payout involved",
                        max_length=100,
                        null=True,
                    ),
                ),
                (
                    "balance_after",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Account balance right after this movement",
                        max_digits=16,
                    ),
                ),
                (
                    "description",
                    models.CharField(
                        blank=True,
                        default="",
                        help_text="Human-readable description",
                        max_length=255,
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this entry was recorded",
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        help_text="Account whose balance moved",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="wallets.account",
                    ),
                ),
            ],
            options={
                "verbose_name_plural": "ledger entries",
                "ordering": ["-created_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["account", "created_at"],
                        name="wallet_entry_acct_created_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("amount", 0), _negated=True),
                        name="wallet_ledger_entry_amount_non_zero",
                    )
                ],
            },
        ),
    ]
