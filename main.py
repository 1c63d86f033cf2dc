# =============================================================================
# POLYMARKET VERIFIER
# Module: main.py
# Purpose: CLI entry point for verifying a market
# =============================================================================
#
# USAGE:
# python main.py --market path/to/market.json [--news path/to/news.json]
# python main.py --example  (runs the built-in example market)
#
# MARKET FILE FORMAT (JSON), either the flat shape:
# {
#     "id": "...",
#     "question": "...",
#     "category": "politics",
#     "outcomes": [{"name": "Yes", "price": 0.62}, {"name": "No", "price": 0.38}],
#     "volume": 250000,
#     "liquidity": 40000,
#     "endDate": "2026-11-03T00:00:00Z"
# }
# or a raw Polymarket Gamma API market record.
#
# NEWS FILE FORMAT (JSON): a list of articles, or {"articles": [...]} as
# returned by the news search collaborator. "source" may be a string or
# {"name", "domain"}. "sentiment" (positive / neutral / negative) is
# optional; when absent it is inferred from title + description.
#
# OUTPUT:
# - Prints verification summary to console
# - Saves full result to <output-dir>/verification.json
# - Saves human-readable report to <output-dir>/report.md
#
# =============================================================================

import argparse
import json
import os
import sys
from datetime import datetime, timedelta, timezone
from typing import List, Optional

from collector.news_normalizer import NewsNormalizer
from collector.normalizer import MarketNormalizer, is_gamma_record
from core.verification_engine import VerificationEngine
from models.data_models import (
    Market,
    MarketOutcome,
    NewsArticle,
    VerificationResult,
)
from shared.config_loader import get_verification_config
from shared.enums import NewsSentiment
from shared.logging_config import setup_logging
from shared.status_display import label_for


def _read_json(path: str, what: str):
    """Read a JSON file or exit with an error message."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        print(f"ERROR: {what} file not found: {path}")
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"ERROR: Invalid JSON in {path}: {e}")
        sys.exit(1)
    except PermissionError:
        print(f"ERROR: Permission denied reading {path}")
        sys.exit(1)


def load_market_from_file(path: str) -> Market:
    """
    Load a market from a JSON file (flat shape or raw Gamma record).

    Raises:
        SystemExit: If the file is missing, invalid, or not a market object
    """
    data = _read_json(path, "Market")
    if not isinstance(data, dict):
        print(f"ERROR: Market file must contain a JSON object, got {type(data).__name__}")
        sys.exit(1)

    try:
        if is_gamma_record(data):
            return MarketNormalizer().normalize(data)
        return Market.from_dict(data)
    except (TypeError, ValueError) as e:
        print(f"ERROR: Invalid market data in {path}: {e}")
        sys.exit(1)


def load_news_from_file(path: str) -> List[NewsArticle]:
    """
    Load news articles from a JSON file.

    Raises:
        SystemExit: If the file is missing or an article is malformed
    """
    data = _read_json(path, "News")
    if isinstance(data, dict):
        data = data.get("articles", [])
    if not isinstance(data, list):
        print(f"ERROR: News file must contain a list of articles, got {type(data).__name__}")
        sys.exit(1)

    try:
        return NewsNormalizer().normalize_many(data)
    except (AttributeError, TypeError, ValueError) as e:
        print(f"ERROR: Invalid news article in {path}: {e}")
        sys.exit(1)


def create_example_market(now: Optional[datetime] = None) -> Market:
    """
    Create an example market for demonstration purposes.

    The end date is 45 days after `now` so the example always resolves
    in the future.
    """
    now = now or datetime.now(timezone.utc)
    return Market(
        market_id="example-fed-cut-2026",
        question="Will the Fed cut the interest rate before the next recession?",
        category="economy",
        outcomes=(
            MarketOutcome("Yes", 0.58, 0.02, "example-fed-cut-2026-0"),
            MarketOutcome("No", 0.43, -0.02, "example-fed-cut-2026-1"),
        ),
        volume=1_250_000,
        liquidity=85_000,
        end_date=(now + timedelta(days=45)).isoformat(),
        slug="fed-rate-cut-before-recession",
    )


def create_example_news() -> List[NewsArticle]:
    """Example news articles matching the example market."""
    return [
        NewsArticle("Reuters", NewsSentiment.POSITIVE, "Fed signals openness to cuts"),
        NewsArticle("Bloomberg", NewsSentiment.POSITIVE, "Traders price in rate cut"),
        NewsArticle("CNBC", NewsSentiment.NEUTRAL, "Economists split on timing"),
    ]


def generate_markdown_report(result: VerificationResult, market: Market) -> str:
    """
    Generate a human-readable markdown report.

    Args:
        result: The verification result
        market: The verified market

    Returns:
        Markdown-formatted string
    """
    lines = []

    verified_at = datetime.fromtimestamp(result.verified_at / 1000, tz=timezone.utc)

    lines.append("# Polymarket Verification Report")
    lines.append("")
    lines.append(f"**Verified:** {verified_at.isoformat()}")
    lines.append(f"**Request ID:** {result.request_id}")
    lines.append("")

    lines.append("## Verdict")
    lines.append("")
    lines.append(f"**Status:** {label_for(result.overall_status)}")
    lines.append("")
    lines.append(f"**Confidence:** {result.overall_confidence}%")
    lines.append("")
    lines.append(f"**Summary:** {result.summary}")
    lines.append("")

    lines.append("## Market Information")
    lines.append("")
    lines.append(f"**ID:** {market.market_id}")
    lines.append("")
    lines.append(f"**Question:** {market.question}")
    lines.append("")
    lines.append(f"**Category:** {market.category}")
    lines.append("")
    lines.append(f"**End Date:** {market.end_date}")
    lines.append("")
    if market.outcomes:
        lines.append("**Outcomes:**")
        for outcome in market.outcomes:
            lines.append(f"- {outcome.name}: {outcome.price:.1%}")
        lines.append("")

    lines.append("## Checks")
    lines.append("")
    lines.append("| Check | Status | Confidence | Details |")
    lines.append("|-------|--------|------------|---------|")
    for check in result.checks:
        details = (check.details or "").replace("|", "\\|")
        lines.append(
            f"| {check.name} | {label_for(check.status)} | "
            f"{check.confidence}% | {details} |"
        )
    lines.append("")

    lines.append("---")
    lines.append("")
    lines.append("*Verification is heuristic and for informational purposes only. ")
    lines.append("It is not financial advice.*")

    return "\n".join(lines)


def main(argv: Optional[List[str]] = None):
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(
        description="Polymarket Verifier - "
                    "multi-check consistency verification of prediction markets"
    )

    parser.add_argument(
        "--market",
        type=str,
        help="Path to market JSON file (flat shape or raw Gamma record)"
    )

    parser.add_argument(
        "--news",
        type=str,
        help="Path to news JSON file (optional)"
    )

    parser.add_argument(
        "--example",
        action="store_true",
        help="Run verification on the built-in example market"
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        default="output",
        help="Directory to save output files (default: output)"
    )

    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Print results only, do not write output files"
    )

    args = parser.parse_args(argv)

    config = get_verification_config()
    setup_logging(level=config.log_level, file_output=config.log_to_file)

    # Determine input source
    if args.example:
        print("Running verification on the example market...")
        market = create_example_market()
        news = create_example_news()
    elif args.market:
        print(f"Loading market from: {args.market}")
        market = load_market_from_file(args.market)
        news = load_news_from_file(args.news) if args.news else []
    else:
        parser.print_help()
        print("\nError: Please provide --market or --example")
        sys.exit(1)

    engine = VerificationEngine(config=config)

    print("\nRunning verification...")
    print("=" * 60)

    result = engine.verify(market, news)

    # Print summary to console
    print(f"\nMarket: {market.question}")
    print(f"Category: {market.category}")
    print(f"News articles: {len(news)}")
    print("-" * 60)
    for check in result.checks:
        print(f"  [{label_for(check.status):<18}] {check.confidence:>3}%  {check.name}")
        if check.details:
            print(f"  {'':<20}       {check.details}")
    print("-" * 60)
    print(f"\n>>> {label_for(result.overall_status).upper()} "
          f"({result.overall_confidence}% confidence) <<<\n")
    print(result.summary)

    if args.no_save:
        return

    output_dir = os.path.abspath(args.output_dir)
    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        print(f"\nERROR: Cannot create output directory '{output_dir}': {e}")
        print("Verification completed but results could not be saved.")
        sys.exit(1)

    # Save JSON output
    json_path = os.path.join(output_dir, "verification.json")
    try:
        with open(json_path, 'w', encoding='utf-8') as f:
            f.write(result.to_json())
        print(f"\nJSON result saved to: {json_path}")
    except OSError as e:
        print(f"\nERROR: Failed to write JSON output to '{json_path}': {e}")
        sys.exit(1)

    # Save markdown report
    md_path = os.path.join(output_dir, "report.md")
    try:
        with open(md_path, 'w', encoding='utf-8') as f:
            f.write(generate_markdown_report(result, market))
        print(f"Markdown report saved to: {md_path}")
    except OSError as e:
        print(f"ERROR: Failed to write markdown report to '{md_path}': {e}")
        sys.exit(1)

    print("\n" + "=" * 60)
    print("Verification complete.")


if __name__ == "__main__":
    main()
