"""Slack client for sending notifications."""

import os
from typing import Optional

import httpx
from loguru import logger


def get_webhook_url() -> Optional[str]:
    """Get Slack webhook URL from environment, or None if not configured."""
    return os.getenv("SLACK_WEBHOOK_URL") or None


def send_message(
    text: str,
    webhook_url: Optional[str] = None,
) -> bool:
    """Send a message to Slack.

    Args:
        text: Message text (supports Slack markdown)
        webhook_url: Override webhook URL

    Returns:
        True if sent successfully, False otherwise
    """
    url = webhook_url or get_webhook_url()

    if not url:
        logger.warning("Slack webhook URL not configured")
        return False

    try:
        response = httpx.post(
            url,
            json={"text": text},
            timeout=10.0,
        )

        if response.status_code == 200:
            logger.info("Sent Slack message")
            return True
        else:
            logger.error(f"Slack API error: {response.status_code} - {response.text}")
            return False

    except httpx.HTTPError as e:
        logger.error(f"Failed to send Slack message: {e}")
        return False


def send_error(
    context: str,
    error: str,
    webhook_url: Optional[str] = None,
) -> bool:
    """Send an error notification."""
    message = f""":warning: *Enrichment error*
• Context: {context}
• Error: `{error}`"""

    return send_message(message, webhook_url)


def send_run_summary(
    selected: int,
    updated: int,
    failed: int,
    statuses: Optional[dict] = None,
    dry_run: bool = False,
    webhook_url: Optional[str] = None,
) -> bool:
    """Send a formatted run summary.

    Args:
        selected: Records selected for enrichment
        updated: Records written back
        failed: Records that raised during enrichment
        statuses: Count per status label
        dry_run: Whether writes were skipped

    Returns:
        True if sent successfully
    """
    title = "*Company Enrichment Complete*" + (" (dry run)" if dry_run else "")
    lines = [
        title,
        f"• Selected: {selected}",
        f"• Updated: {updated}",
        f"• Failed: {failed}",
    ]
    for status, count in (statuses or {}).items():
        lines.append(f"• {status}: {count}")

    return send_message("\n".join(lines), webhook_url)
