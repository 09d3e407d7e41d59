import unittest
from datetime import date

from date_filter import (
    DateRange, filter_active, is_event_within_range, is_range_visible, visible_ranges, visible_stevner,
)


def _range(rid, *dates):
    return {
        "skytterlag_id": rid,
        "stevner": [{"id": f"{rid}-{i}", "name": "Banestevne", "date": d} for i, d in enumerate(dates)],
    }


class TestIsEventWithinRange(unittest.TestCase):
    def test_no_filter_matches_everything(self):
        for d in ("2025-06-15", "", None, "not-a-date"):
            with self.subTest(d=d):
                self.assertTrue(is_event_within_range(d, "", ""))
                self.assertTrue(is_event_within_range(d, None, None))
                self.assertTrue(is_event_within_range(d))

    def test_single_day_is_inclusive(self):
        start = end = "2025-06-15"
        self.assertTrue(is_event_within_range("2025-06-15", start, end))
        self.assertFalse(is_event_within_range("2025-06-14", start, end))
        self.assertFalse(is_event_within_range("2025-06-16", start, end))

    def test_missing_date_under_active_filter(self):
        self.assertFalse(is_event_within_range("", "2025-01-01", ""))
        self.assertFalse(is_event_within_range(None, "", "2025-12-31"))

    def test_invalid_date_is_excluded(self):
        self.assertFalse(is_event_within_range("not-a-date", "2025-01-01", "2025-12-31"))
        self.assertFalse(is_event_within_range("2025-02-30", "2025-01-01", "2025-12-31"))

    def test_open_ended_start(self):
        self.assertTrue(is_event_within_range("2025-01-01", "2025-01-01", ""))
        self.assertTrue(is_event_within_range("2031-09-09", "2025-01-01", ""))
        self.assertFalse(is_event_within_range("2024-12-31", "2025-01-01", ""))

    def test_open_ended_end(self):
        self.assertTrue(is_event_within_range("1999-01-01", "", "2025-03-31"))
        self.assertTrue(is_event_within_range("2025-03-31", "", "2025-03-31"))
        self.assertFalse(is_event_within_range("2025-04-01", "", "2025-03-31"))

    def test_invalid_bound_excludes(self):
        self.assertFalse(is_event_within_range("2025-06-15", "garbage", ""))
        self.assertFalse(is_event_within_range("2025-06-15", "", "2025-13-40"))

    def test_inverted_interval_matches_nothing(self):
        self.assertFalse(is_event_within_range("2025-06-15", "2025-06-20", "2025-06-10"))


class TestRangeVisibility(unittest.TestCase):
    def test_all_visible_without_filter(self):
        empty = {"skytterlag_id": "E", "stevner": []}
        self.assertTrue(is_range_visible(empty, "", ""))
        self.assertTrue(is_range_visible({"skytterlag_id": "N"}, None, None))

    def test_range_without_events_hidden_under_filter(self):
        self.assertFalse(is_range_visible({"skytterlag_id": "E", "stevner": []}, "2025-01-01", ""))
        self.assertFalse(is_range_visible({"skytterlag_id": "N"}, "2025-01-01", ""))

    def test_range_with_all_events_outside(self):
        r = _range("R", "2025-01-10", "2025-03-01")
        self.assertFalse(is_range_visible(r, "2025-02-01", "2025-02-28"))

    def test_one_matching_event_is_enough(self):
        r = _range("R", "2025-01-10", "2025-02-14", "2025-03-01")
        self.assertTrue(is_range_visible(r, "2025-02-01", "2025-02-28"))

    def test_visible_ranges_keeps_order(self):
        ranges = [_range("A", "2025-05-01"), _range("B", "2025-07-01"), _range("C", "2025-05-20")]
        self.assertEqual([r["skytterlag_id"] for r in visible_ranges(ranges, "2025-05-01", "2025-05-31")], ["A", "C"])
        self.assertEqual(len(visible_ranges(ranges, "", "")), 3)
        self.assertEqual(visible_ranges(None, "2025-05-01", ""), [])


class TestVisibleStevner(unittest.TestCase):
    def test_projection_keeps_original_order(self):
        r = _range("R", "2025-06-20", "2025-05-01", "2025-06-02", "")
        shown = visible_stevner(r, "2025-06-01", "2025-06-30")
        self.assertEqual([ev["id"] for ev in shown], ["R-0", "R-2"])

    def test_no_filter_shows_all(self):
        r = _range("R", "2025-06-20", "", "bad")
        self.assertEqual([ev["id"] for ev in visible_stevner(r)], ["R-0", "R-1", "R-2"])

    def test_does_not_mutate(self):
        r = _range("R", "2025-06-20", "2025-05-01")
        before = [dict(ev) for ev in r["stevner"]]
        visible_stevner(r, "2025-06-01", "")
        self.assertEqual(r["stevner"], before)


class TestDateRange(unittest.TestCase):
    def test_from_args_normalizes(self):
        self.assertEqual(DateRange.from_args(None, None), DateRange("", ""))
        self.assertEqual(DateRange.from_args(" 2025-06-01 ", ""), DateRange("2025-06-01", ""))
        self.assertEqual(DateRange.from_args(date(2025, 6, 1), date(2025, 6, 9)), DateRange("2025-06-01", "2025-06-09"))

    def test_active_and_cleared(self):
        self.assertTrue(DateRange("2025-06-01", "").active)
        self.assertTrue(DateRange("", "2025-06-01").active)
        self.assertFalse(DateRange.cleared().active)
        self.assertFalse(filter_active(None, ""))

    def test_delegates_to_filter(self):
        sel = DateRange("2025-06-15", "2025-06-15")
        self.assertTrue(sel.includes("2025-06-15"))
        self.assertFalse(sel.includes("2025-06-16"))
        r = _range("R", "2025-06-15", "2025-06-16")
        self.assertEqual(sel.ranges([r]), [r])
        self.assertEqual([ev["id"] for ev in sel.stevner(r)], ["R-0"])


if __name__ == "__main__":
    unittest.main()
