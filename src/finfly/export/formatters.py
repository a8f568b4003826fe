"""Transaction export rendering.

CSV follows pt-BR spreadsheet conventions: ``;`` separated, dates as
dd/mm/yyyy and decimal commas. JSON wraps the transactions in a
metadata envelope.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from dataclasses import dataclass
from datetime import date, datetime, timezone
from decimal import Decimal

from finfly.core.periods import EXPORT_RANGES, resolve_period
from finfly.core.security import AuthenticatedUser
from finfly.db import repo
from finfly.db.repo import DbSession
from finfly.models.domain import TransactionEntity, TransactionFilter
from finfly.models.types import ExportDocument, ExportUser, to_transaction_out

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("csv", "json")

CSV_HEADER = ["Data", "Tipo", "Categoria", "Descrição", "Valor"]
CSV_DELIMITER = ";"
TYPE_LABELS = {"income": "Receita", "expense": "Despesa"}


class ExportFormatError(ValueError):
    """Raised for unsupported export formats."""


@dataclass
class ExportFile:
    """Rendered export ready to be sent as a download."""

    content: str
    media_type: str
    filename: str
    transaction_count: int


def format_date(value: date) -> str:
    return value.strftime("%d/%m/%Y")


def format_decimal(value: Decimal) -> str:
    """Two fractional digits with a decimal comma, no grouping."""
    return f"{value:.2f}".replace(".", ",")


def render_csv(transactions: list[TransactionEntity]) -> str:
    """Render header plus one row per transaction."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=CSV_DELIMITER, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for txn in transactions:
        writer.writerow(
            [
                format_date(txn.date),
                TYPE_LABELS.get(txn.type, txn.type),
                txn.category,
                txn.description,
                format_decimal(txn.value),
            ]
        )
    return buffer.getvalue()


def render_json(
    transactions: list[TransactionEntity],
    user: AuthenticatedUser,
    *,
    exported_at: datetime | None = None,
) -> str:
    """Render the metadata envelope with a two-space indent."""
    document = ExportDocument(
        exported_at=exported_at or datetime.now(timezone.utc),
        user=ExportUser(id=user.user_id, email=user.email),
        transaction_count=len(transactions),
        transactions=[to_transaction_out(t) for t in transactions],
    )
    return json.dumps(
        document.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False
    )


def export_transactions(
    session: DbSession,
    user: AuthenticatedUser,
    export_format: str = "csv",
    date_range: str = "all",
    start: date | None = None,
    end: date | None = None,
    *,
    today: date | None = None,
    now: datetime | None = None,
) -> ExportFile:
    """Select the user's transactions for a range and render them.

    Selection uses the same owner-scoped filter as the list endpoint.

    Raises:
        ExportFormatError: If export_format is not csv or json.
        PeriodError: If the range is unknown or custom bounds are invalid.
    """
    if export_format not in EXPORT_FORMATS:
        raise ExportFormatError(
            f"Unsupported export type '{export_format}'. Use one of: {', '.join(EXPORT_FORMATS)}"
        )

    bounds = resolve_period(date_range, start, end, today=today, allowed=EXPORT_RANGES)
    filters = TransactionFilter(start_date=bounds.start, end_date=bounds.end)
    transactions = repo.list_transactions(session, user.user_id, filters)

    now = now or datetime.now(timezone.utc)
    stamp = int(now.timestamp() * 1000)

    if export_format == "csv":
        content = render_csv(transactions)
        media_type = "text/csv; charset=utf-8"
    else:
        content = render_json(transactions, user, exported_at=now)
        media_type = "application/json"

    logger.info(
        "export_completed user_id=%s format=%s range=%s transactions=%d",
        user.user_id,
        export_format,
        date_range,
        len(transactions),
    )
    return ExportFile(
        content=content,
        media_type=media_type,
        filename=f"finfly-export-{stamp}.{export_format}",
        transaction_count=len(transactions),
    )
