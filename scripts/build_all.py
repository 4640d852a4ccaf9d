#!/usr/bin/env python
"""
Build pipeline - exports the price list and runs the regression suite.

Usage:
    python scripts/build_all.py
"""
import subprocess
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from iftar_box.data.build_price_list import build_price_list


def main():
    print("=" * 60)
    print("IFTAR BOX BUILD PIPELINE")
    print("=" * 60)
    print()

    print("[1/2] Exporting price list...")
    report = build_price_list(verbose=True)

    if report["status"] != "success":
        print("\n❌ BUILD FAILED")
        for error in report["errors"]:
            print(f"  ERROR: {error}")
        sys.exit(1)

    for warning in report["warnings"]:
        print(f"  WARNING: {warning}")

    print()
    print("[2/2] Running golden tests...")

    test_result = subprocess.run(
        [sys.executable, '-m', 'pytest', 'tests/', '-v', '--tb=short'],
        cwd=Path(__file__).parent.parent
    )

    if test_result.returncode != 0:
        print("\n❌ TESTS FAILED")
        sys.exit(1)

    print()
    print("=" * 60)
    print("✅ BUILD COMPLETE")
    print("=" * 60)
    print()
    print("Summary:")
    print(f"  Priced items: {report['metrics']['item_count']}")
    print(f"  One-day delivery fee: {report['metrics']['delivery_fee_oneday']}")
    print()
    print("Subscription Discounts:")
    for tier, stats in report['metrics'].get('tier_discounts', {}).items():
        print(f"  {tier}: {stats['min_discount_pct']}% - {stats['max_discount_pct']}%")


if __name__ == "__main__":
    main()
