"""CLI adapter printing the settlement report of a tour group.

The group code is read from the first command-line argument or, when absent,
from the ``SETTLEMENT_GROUP_CODE`` environment variable.
"""

import sys
from collections.abc import Sequence

from src.adapters.report_printing import (
    format_invoice_groups,
    format_row,
    resolve_argument,
)
from src.domain.exceptions import SettlementError
from src.infrastructure.container import build_group_settlement_use_case
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger


def main(argv: Sequence[str] | None = None) -> int:
    """Run the group settlement use case and print its report."""
    logger = get_app_logger()
    args = sys.argv[1:] if argv is None else list(argv)
    group_code = resolve_argument(args, "SETTLEMENT_GROUP_CODE")
    if group_code is None:
        logger.warning(
            "A group code is required (argument or SETTLEMENT_GROUP_CODE)."
        )
        return 2

    use_case = build_group_settlement_use_case()
    try:
        report = use_case.execute(group_code)
    except (SettlementError, RuntimeError) as exc:
        logger.error(f"Settlement failed for group={group_code}: {exc}")
        return 1

    get_usage_logger().info(f"settlement report group={group_code}")
    print(f"Group {report.group_code} ({report.traveller_count} travellers)")
    for row in report.rows:
        print(format_row(row))
    for line in format_invoice_groups(
        "Expenses by payee",
        report.invoice_groups,
    ):
        print(line)
    for line in format_invoice_groups(
        "Bonuses by payee",
        report.bonus_invoice_groups,
    ):
        print(line)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
