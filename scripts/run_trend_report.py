#!/usr/bin/env python
"""
Run a historical trend report over a batch of companies.

Input is a CSV with one row per observation:

    company,frequency,period,value
    Emami,annual,2025,4776
    Emami,quarterly,Mar 2025,963

Rows for each company must already be ordered most-recent-first within
each frequency. Missing values are treated as 0.

Usage:
    python scripts/run_trend_report.py data/revenue.csv --output report.csv
"""

import sys
from pathlib import Path
from typing import Optional

import pandas as pd

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config.logging_config import setup_logging, get_logger
from engine.historical import (
    CompanyInfo,
    TrendAnalysisInput,
    TrendAnalysisResult,
    analyze_many,
)
from engine.series import DataPoint

logger = get_logger(__name__)

REQUIRED_COLUMNS = {"company", "frequency", "period", "value"}


def build_inputs(frame: pd.DataFrame) -> list[TrendAnalysisInput]:
    """
    Group report rows into one analysis input per company.

    Row order within a company is preserved.
    """
    missing = REQUIRED_COLUMNS - set(frame.columns)
    if missing:
        raise ValueError(f"Missing columns: {', '.join(sorted(missing))}")

    frame = frame.copy()
    frame["value"] = pd.to_numeric(frame["value"], errors="coerce").fillna(0.0)
    frame["frequency"] = frame["frequency"].str.strip().str.lower()
    frame["period"] = frame["period"].astype(str)

    inputs = []
    for company, rows in frame.groupby("company", sort=False):
        annual = rows[rows["frequency"] == "annual"]
        quarterly = rows[rows["frequency"] == "quarterly"]

        inputs.append(
            TrendAnalysisInput(
                annual_data=[
                    DataPoint(period=row.period, value=float(row.value))
                    for row in annual.itertuples(index=False)
                ],
                quarterly_data=[
                    DataPoint(period=row.period, value=float(row.value))
                    for row in quarterly.itertuples(index=False)
                ],
                company_info=CompanyInfo(name=str(company)),
            )
        )

    return inputs


def results_frame(
    inputs: list[TrendAnalysisInput],
    results: list[TrendAnalysisResult],
) -> pd.DataFrame:
    """Flatten analysis results into one row per company."""
    records = []
    for item, result in zip(inputs, results):
        records.append({
            "company": item.company_info.name if item.company_info else "",
            "cagr_1y": result.cagr_1y,
            "cagr_3y": result.cagr_3y,
            "cagr_5y": result.cagr_5y,
            "cagr_10y": result.cagr_10y,
            "trend_direction": result.trend_direction,
            "trend_strength": result.trend_strength,
            "trend_consistency": result.trend_consistency,
            "seasonality_score": result.growth_pattern.seasonality_score,
            "volatility": result.growth_pattern.volatility,
            "data_completeness": result.data_completeness,
            "trend_score": result.trend_score,
        })
    return pd.DataFrame.from_records(records)


def run_trend_report(csv_path: Path, output: Optional[Path] = None) -> pd.DataFrame:
    """Analyze every company in the CSV and print a summary."""
    setup_logging()
    logger.info(f"Loading trend data from {csv_path}")

    inputs = build_inputs(pd.read_csv(csv_path))
    results = analyze_many(inputs)
    report = results_frame(inputs, results)

    logger.info(f"Analyzed {len(report)} companies")

    # Print summary
    print("\n" + "=" * 60)
    print("HISTORICAL TREND REPORT")
    print("=" * 60)

    for row in report.sort_values("trend_score", ascending=False).itertuples(index=False):
        print(
            f"  {row.company:20s} | "
            f"5Y CAGR: {row.cagr_5y * 100:>6.1f}% | "
            f"{row.trend_direction:8s} {row.trend_strength:8s} | "
            f"Score: {row.trend_score:>5.1f}"
        )

    print("\n" + "=" * 60)

    if output is not None:
        report.to_csv(output, index=False)
        logger.info(f"Report written to {output}")

    return report


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Run historical trend report")
    parser.add_argument("csv_path", type=Path, help="CSV of company observations")
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Optional CSV path for the full report",
    )

    args = parser.parse_args()
    run_trend_report(args.csv_path, args.output)
