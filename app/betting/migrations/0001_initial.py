import django.db.models.deletion
import django_fsm
from django.db import migrations, models


def _timestamps():
    return [
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
    ]


PAYOUT_STATUS_CHOICES = [("pending", "Pending"), ("approved", "Approved")]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("wallets", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Bet",
            fields=[
                *_timestamps(),
                (
                    "draw_label",
                    models.CharField(
                        db_index=True,
                        help_text="Draw label, e.g. 2024-01-01-GameX",
                        max_length=100,
                    ),
                ),
                (
                    "game_kind",
                    models.CharField(
                        choices=[
                            ("2D", "Two Digit"),
                            ("1D-Open", "One Digit Open"),
                            ("1D-Close", "One Digit Close"),
                        ],
                        help_text="Outcome component this wager predicts",
                        max_length=10,
                    ),
                ),
                (
                    "number",
                    models.CharField(help_text="Predicted digits", max_length=2),
                ),
                (
                    "stake",
                    models.DecimalField(
                        decimal_places=2, help_text="Amount staked", max_digits=16
                    ),
                ),
                (
                    "status",
                    django_fsm.FSMField(
                        choices=[
                            ("pending", "Pending"),
                            ("won", "Won"),
                            ("lost", "Lost"),
                        ],
                        db_index=True,
                        default="pending",
                        help_text="Current state of the wager (managed by FSM)",
                        max_length=50,
                    ),
                ),
                (
                    "settled_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the wager was resolved",
                        null=True,
                    ),
                ),
                (
                    "account",
                    models.ForeignKey(
                        help_text="Account that placed the wager",
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="bets",
                        to="wallets.account",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["draw_label", "status", "game_kind"],
                        name="betting_bet_draw_status_idx",
                    )
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("stake__gt", 0)),
                        name="betting_bet_stake_positive",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="DrawResult",
            fields=[
                *_timestamps(),
                (
                    "draw_label",
                    models.CharField(
                        help_text="Draw label, e.g. 2024-01-01-GameX",
                        max_length=100,
                        unique=True,
                    ),
                ),
                ("two_digit", models.CharField(blank=True, max_length=2, null=True)),
                (
                    "one_digit_open",
                    models.CharField(blank=True, max_length=1, null=True),
                ),
                (
                    "one_digit_close",
                    models.CharField(blank=True, max_length=1, null=True),
                ),
                ("declared_at", models.DateTimeField(blank=True, null=True)),
                ("open_declared_at", models.DateTimeField(blank=True, null=True)),
                ("close_declared_at", models.DateTimeField(blank=True, null=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Prize",
            fields=[
                *_timestamps(),
                ("draw_label", models.CharField(db_index=True, max_length=100)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=16)),
                (
                    "status",
                    models.CharField(
                        choices=PAYOUT_STATUS_CHOICES,
                        db_index=True,
                        default="pending",
                        max_length=10,
                    ),
                ),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("approved_by", models.CharField(blank=True, max_length=40, null=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="prizes",
                        to="wallets.account",
                    ),
                ),
                (
                    "bet",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="prize",
                        to="betting.bet",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Commission",
            fields=[
                *_timestamps(),
                (
                    "recipient_type",
                    models.CharField(
                        choices=[("dealer", "Dealer"), ("user", "User")],
                        max_length=10,
                    ),
                ),
                ("draw_label", models.CharField(db_index=True, max_length=100)),
                ("total_stake", models.DecimalField(decimal_places=2, max_digits=16)),
                ("rate", models.DecimalField(decimal_places=2, max_digits=5)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=16)),
                (
                    "status",
                    models.CharField(
                        choices=PAYOUT_STATUS_CHOICES,
                        db_index=True,
                        default="pending",
                        max_length=10,
                    ),
                ),
                ("approved_at", models.DateTimeField(blank=True, null=True)),
                ("approved_by", models.CharField(blank=True, max_length=40, null=True)),
                (
                    "account",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="commissions",
                        to="wallets.account",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("draw_label", "account"),
                        name="betting_commission_once_per_draw",
                    )
                ],
            },
        ),
    ]
