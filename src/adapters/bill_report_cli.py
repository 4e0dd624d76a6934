"""CLI adapter printing the payee groups of a bill.

The bill number is read from the first command-line argument or, when absent,
from the ``SETTLEMENT_BILL_NUMBER`` environment variable.
"""

import sys
from collections.abc import Sequence

from src.adapters.report_printing import format_invoice_groups, resolve_argument
from src.domain.exceptions import SettlementError
from src.infrastructure.container import build_bill_use_case
from src.infrastructure.logging.logger import get_app_logger, get_usage_logger
from src.utils.decimal_utils import round_amount


def main(argv: Sequence[str] | None = None) -> int:
    """Run the bill use case and print its payee groups."""
    logger = get_app_logger()
    args = sys.argv[1:] if argv is None else list(argv)
    bill_number = resolve_argument(args, "SETTLEMENT_BILL_NUMBER")
    if bill_number is None:
        logger.warning(
            "A bill number is required (argument or SETTLEMENT_BILL_NUMBER)."
        )
        return 2

    use_case = build_bill_use_case()
    try:
        view = use_case.execute(bill_number)
    except (SettlementError, RuntimeError) as exc:
        logger.error(f"Bill report failed for bill={bill_number}: {exc}")
        return 1

    get_usage_logger().info(f"bill report bill={bill_number}")
    for line in format_invoice_groups(
        f"Bill {view.bill_number}",
        view.invoice_groups,
    ):
        print(line)
    print(f"Total: {round_amount(view.total_amount):,}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
