"""Company enrichment workflow - Fill in domain, email, phone and industry.

USAGE:

1. Enrich the next batch of records (BATCH_SIZE, default 5):
   uv run python workflows/enrich_companies.py run

2. Dry run, logging patches instead of writing them:
   uv run python workflows/enrich_companies.py run --dry-run --limit 10

3. Enrich a single company without touching the store:
   uv run python workflows/enrich_companies.py lookup "Acme Widgets Ltd" --country UK --sic 25110

4. Show which records the next run would pick up:
   uv run python workflows/enrich_companies.py preview

NOTES:
- Requires AIRTABLE_API_KEY, AIRTABLE_BASE_ID and AIRTABLE_TABLE_NAME in .env (not for lookup)
- Records are processed one at a time with pauses between network calls
- Safe to re-run: only records with a blank domain/email/phone/industry are selected
"""

import sys
from pathlib import Path

# Add project root to path for direct script execution
sys.path.insert(0, str(Path(__file__).parent.parent))

import asyncio
import argparse
from typing import Optional

import httpx
from loguru import logger

from infra import slack
from services.enrichment.config import ConfigError, EnrichmentConfig
from services.enrichment.enricher import CompanyEnricher
from services.enrichment.repo import AirtableStore
from services.enrichment.run_log import RunLogger
from services.enrichment.service import Service


def configure_logging(verbose: bool = False) -> None:
    logger.remove()
    logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format="<level>{level: <8}</level> | {message}",
    )


def build_service(config: EnrichmentConfig) -> tuple[Service, AirtableStore, CompanyEnricher]:
    store = AirtableStore(config)
    enricher = CompanyEnricher.build(config.discovery)
    return Service(store, enricher, config), store, enricher


async def run_enrichment(config: EnrichmentConfig, notify: bool = True) -> int:
    """One enrichment run. Returns the process exit code."""
    service, store, enricher = build_service(config)
    webhook = config.slack_webhook_url
    try:
        with RunLogger("enrich", s3_bucket=config.log_bucket, local_dir=config.log_dir):
            try:
                result = await service.run()
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Fatal: could not select records: {e}")
                if notify:
                    slack.send_error("Company Enrichment", str(e), webhook_url=webhook)
                return 1

            logger.info("=" * 60)
            logger.info("COMPANY ENRICHMENT COMPLETE")
            logger.info("=" * 60)
            logger.info(f"Selected: {result.selected}")
            logger.info(f"Updated: {result.updated}{' (dry run)' if result.dry_run else ''}")
            logger.info(f"Failed: {result.failed}")
            for status, count in result.statuses.items():
                logger.info(f"{status}: {count}")
            logger.info("=" * 60)

            if notify and result.selected > 0:
                slack.send_run_summary(
                    selected=result.selected,
                    updated=result.updated,
                    failed=result.failed,
                    statuses=result.statuses,
                    dry_run=result.dry_run,
                    webhook_url=webhook,
                )
            return 0
    finally:
        await enricher.close()
        await store.close()


async def run_lookup(company: str, country: Optional[str], sic: Optional[str]) -> int:
    config = EnrichmentConfig.from_env(require_store=False)
    enricher = CompanyEnricher.build(config.discovery)
    try:
        service = Service(store=None, enricher=enricher, config=config)
        result = await service.lookup(company, country=country, sic=sic)
    finally:
        await enricher.close()

    logger.info("=" * 60)
    logger.info(f"Company:  {company}")
    logger.info(f"Domain:   {result.domain or '-'}")
    logger.info(f"Email:    {result.email or '-'}")
    logger.info(f"Phone:    {result.phone or '-'}")
    logger.info(f"Industry: {result.industry or '-'}")
    if result.brand_score is not None:
        logger.info(f"Brand:    {result.brand_score * 100:.0f}%")
    logger.info(f"Status:   {result.status.value}")
    logger.info("=" * 60)
    return 0


async def run_preview(config: EnrichmentConfig) -> int:
    store = AirtableStore(config)
    try:
        records = await Service(store, enricher=None, config=config).preview()
    except httpx.HTTPError as e:
        logger.error(f"Fatal: could not select records: {e}")
        return 1
    finally:
        await store.close()

    logger.info("=" * 60)
    logger.info(f"RECORDS NEEDING ENRICHMENT: {len(records)}")
    logger.info("=" * 60)
    for record in records:
        missing = [
            name for name in (config.fields.domain, config.fields.email, config.fields.phone, config.fields.industry)
            if name and not record.get_field(name)
        ]
        logger.info(f"• {record.id} - {record.get_field(config.fields.company)} (missing: {', '.join(missing)})")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Enrich company records with domain, contacts and industry",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Enrich the next batch
  uv run python workflows/enrich_companies.py run

  # Preview without writing
  uv run python workflows/enrich_companies.py run --dry-run --limit 10

  # Debug a single company
  uv run python workflows/enrich_companies.py lookup "Acme Widgets Ltd" --country UK
        """
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log probe-level detail (DEBUG)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    run_parser = subparsers.add_parser("run", help="Enrich the next batch of records")
    run_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log patches instead of writing them (overrides DRY_RUN)"
    )
    run_parser.add_argument(
        "--limit", "-l",
        type=int,
        default=None,
        help="Max records to process (overrides BATCH_SIZE)"
    )
    run_parser.add_argument(
        "--no-notify",
        action="store_true",
        help="Disable Slack notification"
    )

    lookup_parser = subparsers.add_parser("lookup", help="Enrich one company without touching the store")
    lookup_parser.add_argument("company", help="Company name")
    lookup_parser.add_argument("--country", "-c", default=None, help="Country hint (e.g. UK)")
    lookup_parser.add_argument("--sic", "-s", default=None, help="SIC code(s), e.g. '62020,62090'")

    subparsers.add_parser("preview", help="List records the next run would pick up")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    command = args.command or "run"

    if command == "lookup":
        return asyncio.run(run_lookup(args.company, args.country, args.sic))

    try:
        config = EnrichmentConfig.from_env()
    except ConfigError as e:
        logger.error(str(e))
        return 1

    if command == "preview":
        return asyncio.run(run_preview(config))

    dry_run = getattr(args, "dry_run", False)
    limit = getattr(args, "limit", None)
    updates = {}
    if dry_run:
        updates["dry_run"] = True
    if limit is not None and limit > 0:
        updates["batch_size"] = limit
    if updates:
        config = config.model_copy(update=updates)

    logger.info(f"Running company enrichment (batch_size={config.batch_size}, dry_run={config.dry_run})")
    return asyncio.run(run_enrichment(config, notify=not getattr(args, "no_notify", False)))


if __name__ == "__main__":
    sys.exit(main())
