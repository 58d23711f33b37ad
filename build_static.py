#!/usr/bin/env python3
"""
build_static.py — Fetch, transform, and export headlines for a static site.

Usage:
    python build_static.py                         # Write app/public/headlines.json
    python build_static.py --output out.json       # Custom snapshot location
    python build_static.py --no-linguistic         # Rule engine only
    python build_static.py --demo                  # Offline demo, no network
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from blamemom.config import settings
from blamemom.engine import engine
from blamemom.fetcher import NewsFetcher
from blamemom.logging import get_logger, setup_logging
from blamemom.pipeline import HeadlinePipeline, build_pipeline
from blamemom.snapshot import build_snapshot, write_snapshot
from blamemom.suitability import is_suitable

logger = get_logger("build")

DEMO_HEADLINES = [
    "BBC reports that the lemur population is in decline after forever chemicals are found in their natural habitat",
    "Forever chemicals detected in drinking water supplies",
    "Climate change causes severe drought in California",
    "Polar bear population declining due to melting ice caps",
    "Scientists discover toxic chemicals in ocean fish",
    "Deforestation leads to habitat loss for endangered species",
    "Air pollution levels reach dangerous heights in major cities",
    "Plastic waste found in remote Arctic regions",
    "Coral reefs dying from ocean acidification",
    "Reuters reports oil spill threatens marine wildlife",
    "NPR reports pesticides linked to bee population decline",
    "Chemical contamination discovered in agricultural soil",
    "Microplastics found in human bloodstream",
    "Endangered tigers threatened by poaching crisis",
    "Forest fires destroy thousands of acres of wilderness",
]


def run_demo() -> None:
    """Print rule-engine rewrites of the demo headlines."""
    print("\nBLAME MOM - DEMO\n")
    print('Transforming news headlines to satirically blame "your mother"\n')
    print("=" * 80)

    for index, headline in enumerate(DEMO_HEADLINES, start=1):
        outcome = engine.apply(headline)
        print(f"\n[{index}] ORIGINAL:")
        print(f"    {headline}")
        print("    TRANSFORMED:")
        print(f"    {outcome.text}")
        print(f"    Rule: {outcome.rule_id or 'fallback'}")
        print(f"    Suitable for transformation: {'yes' if is_suitable(headline) else 'no'}")
        print("-" * 80)


async def run_build(output: Path, linguistic: bool) -> int:
    if linguistic:
        pipeline = build_pipeline()
    else:
        pipeline = HeadlinePipeline(engine=engine)

    fetcher = NewsFetcher()
    articles = await fetcher.fetch_all()
    print(f"Fetched {len(articles)} headlines. Transforming...")

    records = pipeline.process_batch(articles)
    snapshot = build_snapshot(records)
    print(f"Found {snapshot['count']} suitable headlines.")

    path = write_snapshot(output, snapshot)
    print(f"Successfully wrote headlines to {path}")
    return snapshot["count"]


def main():
    parser = argparse.ArgumentParser(description="Blame Mom static build")
    parser.add_argument(
        "--output",
        default=settings.SNAPSHOT_PATH,
        help=f"Snapshot path (default: {settings.SNAPSHOT_PATH})",
    )
    parser.add_argument(
        "--no-linguistic",
        action="store_true",
        help="Skip the tagger-driven rewrite path",
    )
    parser.add_argument(
        "--demo",
        action="store_true",
        help="Transform the built-in demo headlines offline and exit",
    )
    args = parser.parse_args()

    if args.demo:
        run_demo()
        return

    setup_logging()
    print("Starting static build...")
    try:
        asyncio.run(run_build(Path(args.output), linguistic=not args.no_linguistic))
    except Exception:
        logger.error("Build failed", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
