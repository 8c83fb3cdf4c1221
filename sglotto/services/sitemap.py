from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional
from xml.etree import ElementTree

from ..types import LotteryType
from .results import ResultRepository
from .schedule import SGT

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"

# (path, game whose last update dates the page, changefreq, priority)
STATIC_PAGES = [
    ("", None, "always", 1.0),
    ("/4d", LotteryType.FOUR_D, "always", 1.0),
    ("/4d/history", LotteryType.FOUR_D, "always", 1.0),
    ("/toto", LotteryType.TOTO, "always", 1.0),
    ("/toto/history", LotteryType.TOTO, "always", 1.0),
    ("/sweep", LotteryType.SWEEP, "monthly", 1.0),
    ("/sweep/history", LotteryType.SWEEP, "monthly", 1.0),
    ("/schedule", "now", "monthly", 0.7),
    ("/jackpot", LotteryType.TOTO, "weekly", 0.8),
]


def format_sgt(moment: dt.datetime) -> str:
    """Render a stored (naive UTC) timestamp as ``2025-12-10T14:24:00+08:00``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=dt.timezone.utc)
    return moment.astimezone(SGT).isoformat(timespec="seconds")


def build_sitemap(
    site_url: str,
    repo: Optional[ResultRepository] = None,
    now: Optional[dt.datetime] = None,
) -> List[Dict[str, object]]:
    repo = repo or ResultRepository()
    base = site_url.rstrip("/")
    now_text = format_sgt(now or dt.datetime.utcnow())

    last_updated = {game: repo.last_updated(game) for game in LotteryType}
    any_updated = repo.last_updated()

    entries: List[Dict[str, object]] = []
    for path, source, changefreq, priority in STATIC_PAGES:
        if source == "now":
            stamp = None
        elif source is None:
            stamp = any_updated
        else:
            stamp = last_updated[source]
        entries.append(
            {
                "loc": f"{base}{path}",
                "lastmod": format_sgt(stamp) if stamp else now_text,
                "changefreq": changefreq,
                "priority": priority,
            }
        )

    for row in repo.list_draw_dates():
        game = LotteryType(row["type"])
        entries.append(
            {
                "loc": f"{base}/{game.slug}/{row['draw_date'].isoformat()}",
                "lastmod": format_sgt(row["updated_at"]),
                "changefreq": "daily",
                "priority": 0.9,
            }
        )
    return entries


def render_sitemap_xml(entries: List[Dict[str, object]]) -> bytes:
    urlset = ElementTree.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ElementTree.SubElement(urlset, "url")
        for key in ("loc", "lastmod", "changefreq", "priority"):
            ElementTree.SubElement(url, key).text = str(entry[key])
    return ElementTree.tostring(urlset, encoding="utf-8", xml_declaration=True)
