#!/usr/bin/env python
"""
Decode a checkout query and print how it was priced.

Usage:
    python scripts/debug_order.py "box=family&type=one-day&boureks=6&delivery=delivery"
"""
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from iftar_box.engine import fmt_money
from iftar_box.services.checkout_service import build_checkout_summary


def debug(query: str):
    summary = build_checkout_summary(query)

    print("Decoded Order:")
    print(summary.order)
    print(f"Delivery: {summary.delivery_method.value}")
    print(f"Customer: {summary.customer.full_name or '(none)'}")

    print(f"\n--- {summary.plan_label} ---")
    print(summary.prices.get_trace_text())

    print("\nLines (per day):")
    for line in summary.prices.lines:
        print(f"  {line.description:<28} {fmt_money(line.daily_price, summary.currency)}")
    print(f"\nTotal to pay: {fmt_money(summary.prices.grand_total, summary.currency)}")

    for warning in summary.warnings:
        print(f"WARNING: {warning}")
    for field, message in summary.errors.items():
        print(f"MISSING {field}: {message}")


if __name__ == "__main__":
    debug(sys.argv[1] if len(sys.argv) > 1 else "")
