import datetime as dt
import unittest

from sglotto.services.sitemap import build_sitemap, format_sgt, render_sitemap_xml
from sglotto.types import LotteryType


class FakeResultRepository:
    def __init__(self, updated, draws):
        self._updated = updated
        self._draws = draws

    def last_updated(self, lottery_type=None):
        if lottery_type is None:
            stamps = [stamp for stamp in self._updated.values() if stamp]
            return max(stamps) if stamps else None
        return self._updated.get(lottery_type)

    def list_draw_dates(self):
        return list(self._draws)


class SitemapTests(unittest.TestCase):
    def setUp(self) -> None:
        self.stamp = dt.datetime(2025, 12, 10, 6, 24)
        self.now = dt.datetime(2025, 12, 11, 0, 0)
        self.repo = FakeResultRepository(
            {LotteryType.FOUR_D: self.stamp},
            [{"type": "4D", "draw_date": dt.date(2025, 12, 10), "updated_at": self.stamp}],
        )

    def test_formats_timestamps_in_singapore_time(self):
        self.assertEqual(format_sgt(self.stamp), "2025-12-10T14:24:00+08:00")

    def test_static_pages_and_draw_pages(self):
        entries = build_sitemap("https://example.test/", repo=self.repo, now=self.now)
        by_loc = {entry["loc"]: entry for entry in entries}

        self.assertEqual(by_loc["https://example.test"]["lastmod"], "2025-12-10T14:24:00+08:00")
        self.assertEqual(by_loc["https://example.test/4d"]["lastmod"], "2025-12-10T14:24:00+08:00")
        self.assertEqual(by_loc["https://example.test/toto"]["lastmod"], "2025-12-11T08:00:00+08:00")
        self.assertEqual(by_loc["https://example.test/schedule"]["priority"], 0.7)
        self.assertEqual(by_loc["https://example.test/jackpot"]["changefreq"], "weekly")

        draw = by_loc["https://example.test/4d/2025-12-10"]
        self.assertEqual(draw["priority"], 0.9)
        self.assertEqual(draw["changefreq"], "daily")
        self.assertEqual(len(entries), 10)

    def test_renders_xml_urlset(self):
        entries = build_sitemap("https://example.test", repo=self.repo, now=self.now)

        xml = render_sitemap_xml(entries)

        self.assertTrue(xml.startswith(b"<?xml"))
        self.assertIn(b'xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"', xml)
        self.assertIn(b"<loc>https://example.test/4d/2025-12-10</loc>", xml)
        self.assertIn(b"<priority>0.9</priority>", xml)


if __name__ == "__main__":
    unittest.main()
