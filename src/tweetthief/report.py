"""Rank incidents and render them as plain-text summaries."""

from __future__ import annotations

import logging
import math
from datetime import datetime

from tweetthief.models import Incident

logger = logging.getLogger(__name__)

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def aggregate(incidents: list[Incident]) -> list[Incident]:
    """Sort incidents by confidence descending (stable for ties)."""
    report = sorted(incidents, key=lambda i: i.confidence, reverse=True)
    logger.info(
        "Report: %d incidents; top confidence=%.2f",
        len(report),
        report[0].confidence if report else 0.0,
    )
    return report


def _fmt_date(value: datetime) -> str:
    return value.strftime(_DATE_FORMAT)


def format_summary(incident: Incident) -> str:
    """Human-readable block describing a single incident."""
    original, theft = incident.original, incident.theft
    percent = math.floor(incident.confidence * 100 + 0.5)
    return (
        f"score: {percent}%\n"
        f"  {theft.author_display} stole a tweet from {original.author_display}\n"
        f"    original ({_fmt_date(original.created_at)}) : {original.text}\n"
        f"    repost   ({_fmt_date(theft.created_at)}) : {theft.text}\n"
    )


def render_report(report: list[Incident]) -> str:
    if not report:
        return "No stolen tweets found.\n"
    return "\n".join(format_summary(incident) for incident in report)
