"""
Price List Builder - exports the price tables for the ops team.

Writes one row per priced item with a column per tier, plus a build
report with discount metrics and sanity warnings.
"""
import pandas as pd
import json
import hashlib
from datetime import datetime
from typing import Optional
from pathlib import Path

from ..config.settings import get_settings, Settings
from ..engine.models import PriceTier
from ..engine.pricing_tables import DELIVERY_FEE_ONEDAY, iter_price_rows

TIER_COLUMNS = [tier.value for tier in PriceTier]


def get_file_hash(path: Path) -> str:
    """Get SHA256 hash of a file."""
    if not path.exists():
        return ""
    with open(path, 'rb') as f:
        return hashlib.sha256(f.read()).hexdigest()[:12]


def price_list_frame() -> pd.DataFrame:
    """One row per priced item: Item, Code, then a price column per tier."""
    rows = []
    for item, code, row in iter_price_rows():
        record = {'Item': item, 'Code': code}
        for tier in PriceTier:
            record[tier.value] = float(row[tier])
        rows.append(record)
    return pd.DataFrame(rows, columns=['Item', 'Code'] + TIER_COLUMNS)


def build_price_list(settings: Optional[Settings] = None, verbose: bool = True) -> dict:
    """
    Export the price list and write a build report.

    Args:
        settings: Optional settings override
        verbose: Print progress messages

    Returns:
        Build report dictionary
    """
    settings = settings or get_settings()

    report = {
        "timestamp": datetime.now().isoformat(),
        "status": "pending",
        "metrics": {},
        "warnings": [],
        "errors": []
    }

    try:
        prices = price_list_frame()
    except Exception as e:
        msg = f"ERROR: Failed to assemble price tables. {e}"
        report["errors"].append(msg)
        report["status"] = "failed"
        if verbose:
            print(msg)
        return report

    report["metrics"]["item_count"] = len(prices)
    report["metrics"]["delivery_fee_oneday"] = float(DELIVERY_FEE_ONEDAY)

    # A subscription tier must never cost more than one-day, or savings go negative
    discounts = {}
    for tier in (PriceTier.SUB_10.value, PriceTier.SUB_30.value):
        over = prices[prices[tier] > prices[PriceTier.ONE_DAY.value]]
        for _, row in over.iterrows():
            report["warnings"].append(
                f"{row['Item']} costs more at {tier} ({row[tier]}) than one-day ({row[PriceTier.ONE_DAY.value]})"
            )
        pct = (1 - prices[tier] / prices[PriceTier.ONE_DAY.value]) * 100
        discounts[tier] = {
            "min_discount_pct": round(float(pct.min()), 1),
            "max_discount_pct": round(float(pct.max()), 1),
        }
        if verbose:
            print(f"{tier}: discount {discounts[tier]['min_discount_pct']}% - {discounts[tier]['max_discount_pct']}%")

    report["metrics"]["tier_discounts"] = discounts

    output_path = settings.price_list
    output_path.parent.mkdir(parents=True, exist_ok=True)
    prices.to_csv(output_path, index=False)
    report["output_file"] = {"path": str(output_path), "hash": get_file_hash(output_path)}
    report["status"] = "success"

    if verbose:
        print(f"\nPROCESS COMPLETE: {output_path} generated with {len(prices)} priced items.")

    report_path = settings.build_report
    report_path.parent.mkdir(parents=True, exist_ok=True)
    with open(report_path, 'w') as f:
        json.dump(report, f, indent=2)

    if verbose:
        print(f"Build report saved to: {report_path}")

    return report


if __name__ == "__main__":
    build_price_list()
