import unittest
from datetime import date, timedelta

from local_dates import parse_local_date
from stevner import (
    BASE_NAMES, first_char_code, generate_stevner_for_range, has_real_stevner, stevner_for_range,
)

TODAY = date(2025, 1, 1)


class TestGenerateStevner(unittest.TestCase):
    def test_even_index_abc_gives_two_events(self):
        events = generate_stevner_for_range({"skytterlag_id": "ABC"}, 0, today=TODAY)
        self.assertEqual(events, [
            {"id": "ABC-0", "name": "Banestevne", "rsvpOpen": False, "attendees": 1,
             "maxAttendees": 40, "date": "2025-01-04"},
            {"id": "ABC-1", "name": "Kretsstevne", "rsvpOpen": True, "attendees": 23,
             "maxAttendees": 60, "date": "2025-01-21"},
        ])

    def test_single_event_when_count_is_one(self):
        events = generate_stevner_for_range({"skytterlag_id": "B"}, 2, today=TODAY)
        self.assertEqual(events, [
            {"id": "B-0", "name": "Treningskveld", "rsvpOpen": True, "attendees": 24,
             "maxAttendees": 80, "date": "2025-01-14"},
        ])

    def test_odd_index_gives_nothing(self):
        for index in (1, 3, 5, 77, 1001):
            with self.subTest(index=index):
                self.assertEqual(generate_stevner_for_range({"skytterlag_id": "ABC"}, index, today=TODAY), [])

    def test_deterministic(self):
        r = {"skytterlag_id": "Ørland"}
        self.assertEqual(
            generate_stevner_for_range(r, 10, today=TODAY),
            generate_stevner_for_range(dict(r), 10, today=TODAY),
        )

    def test_only_the_id_is_read(self):
        a = generate_stevner_for_range({"skytterlag_id": "X9"}, 4, today=TODAY)
        b = generate_stevner_for_range({"skytterlag_id": "X9", "lat": 60.0, "skytterlag_navn": "Noe"}, 4, today=TODAY)
        self.assertEqual(a, b)

    def test_empty_id_uses_code_zero(self):
        events = generate_stevner_for_range({"skytterlag_id": ""}, 0, today=TODAY)
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0]["id"], "-0")
        self.assertEqual(generate_stevner_for_range({}, 0, today=TODAY), events)

    def test_invariants_over_many_inputs(self):
        for rid in ("A", "b", "Ø", "123", "", "😀x"):
            for index in range(0, 400):
                for ev in generate_stevner_for_range({"skytterlag_id": rid}, index, today=TODAY):
                    self.assertIn(ev["maxAttendees"], (40, 60, 80, 100))
                    self.assertGreaterEqual(ev["attendees"], 0)
                    self.assertLessEqual(ev["attendees"], ev["maxAttendees"])
                    self.assertIn(ev["name"], BASE_NAMES)
                    offset = (parse_local_date(ev["date"]) - TODAY).days
                    self.assertGreaterEqual(offset, 3)
                    self.assertLessEqual(offset, 122)

    def test_ids_unique_within_range(self):
        for index in range(0, 50, 2):
            events = generate_stevner_for_range({"skytterlag_id": "ZZ"}, index, today=TODAY)
            ids = [ev["id"] for ev in events]
            self.assertEqual(len(ids), len(set(ids)))

    def test_dates_cross_year_boundary(self):
        events = generate_stevner_for_range({"skytterlag_id": "ABC"}, 0, today=date(2025, 12, 30))
        self.assertEqual(events[0]["date"], "2026-01-02")

    def test_defaults_to_today(self):
        events = generate_stevner_for_range({"skytterlag_id": "ABC"}, 0)
        d = parse_local_date(events[0]["date"])
        self.assertGreater(d, date.today() + timedelta(days=1))


class TestFirstCharCode(unittest.TestCase):
    def test_codes(self):
        self.assertEqual(first_char_code("ABC"), 65)
        self.assertEqual(first_char_code(""), 0)
        self.assertEqual(first_char_code("Å"), 0xC5)
        # astral characters count as their UTF-16 high surrogate
        self.assertEqual(first_char_code("😀"), 0xD83D)


class TestStevnerForRange(unittest.TestCase):
    def test_real_events_win(self):
        real = [{"id": "r-1", "name": "Landsskytterstevnet", "date": "2025-08-01"}]
        r = {"skytterlag_id": "ABC", "stevner": real}
        self.assertTrue(has_real_stevner(r))
        self.assertIs(stevner_for_range(r, 0, today=TODAY), real)

    def test_empty_or_missing_events_are_generated(self):
        for r in ({"skytterlag_id": "ABC", "stevner": []}, {"skytterlag_id": "ABC"},
                  {"skytterlag_id": "ABC", "stevner": "ingen"}):
            with self.subTest(r=r):
                self.assertFalse(has_real_stevner(r))
                self.assertEqual(len(stevner_for_range(r, 0, today=TODAY)), 2)


if __name__ == "__main__":
    unittest.main()
