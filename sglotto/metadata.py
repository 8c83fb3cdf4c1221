from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Dict, Optional

from .types import LotteryType

DEFAULT_TITLE = "SG Lotto Results"
DEFAULT_DESCRIPTION = "Latest Singapore Lottery Results"
DEFAULT_PATH = "/"


@dataclass(frozen=True)
class Alternates:
    canonical: str


@dataclass(frozen=True)
class Metadata:
    """Page head fields consumed by the front end renderer."""

    title: str
    description: str
    alternates: Alternates

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "alternates": {"canonical": self.alternates.canonical},
        }


def construct_metadata(
    title: Optional[str] = None,
    description: Optional[str] = None,
    path: str = DEFAULT_PATH,
) -> Metadata:
    # None means omitted; an empty string is kept as given.
    return Metadata(
        title=title if title is not None else DEFAULT_TITLE,
        description=description if description is not None else DEFAULT_DESCRIPTION,
        alternates=Alternates(canonical=path if path is not None else DEFAULT_PATH),
    )


PAGE_METADATA: Dict[str, Metadata] = {
    "/": construct_metadata(path="/"),
    "/toto/yesterday": construct_metadata(
        title="Toto Results Yesterday - SG Lotto",
        description="Previous Toto Results",
        path="/toto/yesterday",
    ),
    "/schedule": construct_metadata(
        title="Draw Schedule - SG Lotto",
        description=(
            "Complete draw schedule for Singapore 4D, Toto, and Sweep lottery games. "
            "Find out when draws happen and sales closing times."
        ),
        path="/schedule",
    ),
    "/jackpot": construct_metadata(
        title="Jackpot Prizes - SG Lotto Results",
        description="Latest Jackpot Prizes for Singapore TOTO, 4D, and Singapore Sweep lottery games",
        path="/jackpot",
    ),
    "/4d/history": construct_metadata(
        title="4D Results History - SG Lotto",
        description="Browse past 4D results with date range search",
        path="/4d/history",
    ),
    "/about": construct_metadata(
        title="About Us | SG Lotto Results",
        description=(
            "Learn about SG Lotto Results - your trusted source for Singapore 4D, Toto, "
            "and Singapore Sweep lottery updates."
        ),
        path="/about",
    ),
    "/contact": construct_metadata(
        title="Contact Us | SG Lotto Results",
        description=(
            "Get in touch with SG Lotto Results. Contact us for questions, suggestions, "
            "error reports, or business inquiries."
        ),
        path="/contact",
    ),
    "/terms": construct_metadata(
        title="Terms of Service | SG Lotto Results",
        description=(
            "Terms of Service for SG Lotto Results. Read the rules and regulations for "
            "using our lottery results website."
        ),
        path="/terms",
    ),
    "/privacy": construct_metadata(
        title="Privacy Policy | SG Lotto Results",
        description=(
            "Privacy Policy for SG Lotto Results. Learn how we collect, use, and protect "
            "your information."
        ),
        path="/privacy",
    ),
    "/disclaimer": construct_metadata(
        title="Disclaimer | SG Lotto Results",
        description=(
            "Disclaimer for SG Lotto Results. Important information about the use of our "
            "lottery results website."
        ),
        path="/disclaimer",
    ),
}


def metadata_for_path(path: str) -> Metadata:
    registered = PAGE_METADATA.get(path)
    if registered is not None:
        return registered
    return construct_metadata(path=path)


_DRAW_PAGE_COPY = {
    LotteryType.FOUR_D: (
        "4D Results",
        "4D winning numbers for {date}. View the complete prize list including 1st, 2nd, "
        "3rd prizes and all consolation and starter prizes.",
    ),
    LotteryType.TOTO: (
        "Toto Results",
        "Toto winning numbers and prize breakdown for {date}. View jackpot amount, "
        "winning shares, and complete results.",
    ),
    LotteryType.SWEEP: (
        "Singapore Sweep Results",
        "Singapore Sweep winning numbers for {date}. View the complete prize list including "
        "1st, 2nd, 3rd prizes and all participation prizes.",
    ),
}


def draw_page_metadata(lottery_type: LotteryType, draw_date: dt.date) -> Metadata:
    """Metadata for a single draw page such as ``/toto/2025-01-06``."""
    heading, description = _DRAW_PAGE_COPY[lottery_type]
    formatted = f"{draw_date:%B} {draw_date.day}, {draw_date.year}"
    return construct_metadata(
        title=f"{heading} - {formatted} | Singapore Draw",
        description=description.format(date=formatted),
        path=f"/{lottery_type.slug}/{draw_date.isoformat()}",
    )
