"""Plain-text rendering helpers shared by the report CLIs."""

import os
from collections.abc import Sequence

from src.domain.models import InvoiceGroup, ReportRow
from src.utils.decimal_utils import round_amount


def resolve_argument(argv: Sequence[str], env_name: str) -> str | None:
    """Return the first CLI argument, falling back to an env variable."""
    if argv:
        value = argv[0].strip()
    else:
        value = (os.getenv(env_name) or "").strip()
    return value or None


def format_row(row: ReportRow) -> str:
    """Format one two-column settlement row with whole-unit amounts."""
    left = f"{row.label}: {round_amount(row.value):,}"
    if not row.label2:
        return left
    return f"{left:<40}{row.label2}: {round_amount(row.value2):,}"


def format_invoice_groups(
    title: str,
    groups: Sequence[InvoiceGroup],
) -> list[str]:
    """Return the lines of payee chunks as laid out on paper."""
    lines = [title]
    if not groups:
        lines.append("  (none)")
        return lines
    for group in groups:
        total = ""
        if not group.total_suppressed:
            total = f"  total={round_amount(group.total):,}"
        lines.append(f"  [{group.payee_label}]{total}")
        for row in group.rows:
            lines.append(
                f"    {row.invoice_id}  {row.created_by}  {row.note}  "
                f"{round_amount(row.price):,}"
            )
    return lines


__all__ = ["resolve_argument", "format_row", "format_invoice_groups"]
