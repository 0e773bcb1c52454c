import os
import shutil
import tempfile
import unittest

from intervalbill.day_types import HolidaySet, classify_day, load_public_holidays, parse_date
from intervalbill.errors import BillingError, DateParseError, ParseError
from intervalbill.models import DayIndex


class TestClassifyDay(unittest.TestCase):
    def test_weekdays(self):
        no_holidays = HolidaySet()
        week = {
            "20230807": DayIndex.MONDAY,
            "20230808": DayIndex.TUESDAY,
            "20230809": DayIndex.WEDNESDAY,
            "20230810": DayIndex.THURSDAY,
            "20230811": DayIndex.FRIDAY,
            "20230812": DayIndex.SATURDAY,
            "20230813": DayIndex.SUNDAY_OR_HOLIDAY,
        }
        for date_str, day in week.items():
            self.assertEqual(classify_day(date_str, no_holidays), day)

    def test_holiday_overrides_weekday(self):
        holidays = HolidaySet(["20230808", "20500101"])
        self.assertEqual(classify_day("20230808", holidays), DayIndex.SUNDAY_OR_HOLIDAY)
        self.assertEqual(classify_day("20230807", holidays), DayIndex.MONDAY)
        # 1 January 2050 is a Saturday
        self.assertEqual(classify_day("20500101", holidays), 6)

    def test_sunday_and_holiday_share_a_slot(self):
        holidays = HolidaySet(["20230808"])
        self.assertEqual(classify_day("20230813", holidays), classify_day("20230808", holidays))

    def test_whitespace_is_trimmed(self):
        holidays = HolidaySet([" 20230808 "])
        self.assertEqual(classify_day(" 20230808", holidays), DayIndex.SUNDAY_OR_HOLIDAY)
        self.assertEqual(classify_day("20230807 ", holidays), DayIndex.MONDAY)

    def test_unparseable_dates(self):
        for bad in ["", "2023-08-07", "20231345", "2023080", "202308077", "abcdefgh"]:
            with self.assertRaises(DateParseError, msg=bad):
                classify_day(bad, HolidaySet())

    def test_parse_date(self):
        self.assertEqual(parse_date("20240229").isoformat(), "2024-02-29")
        with self.assertRaises(DateParseError):
            parse_date("20230229")


class TestHolidaySet(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def test_load_public_holidays(self):
        path = os.path.join(self.test_dir, "publicHolidays.csv")
        with open(path, "w", encoding="utf-8") as f:
            f.write("date\n20230808\n 20500101 \n")
        holidays = load_public_holidays(path)
        self.assertNotIn("20230807", holidays)
        self.assertIn("20230808", holidays)
        self.assertIn("20500101", holidays)
        self.assertEqual(len(holidays), 2)

    def test_empty_file_means_no_holidays(self):
        path = os.path.join(self.test_dir, "empty.csv")
        open(path, "w").close()
        holidays = load_public_holidays(path)
        self.assertEqual(len(holidays), 0)
        self.assertFalse(holidays)

    def test_row_wider_than_header(self):
        path = os.path.join(self.test_dir, "wide.csv")
        with open(path, "w", encoding="utf-8") as f:
            f.write("date\n20230808\n20500101,New Year\n")
        with self.assertRaises(ParseError) as ctx:
            load_public_holidays(path)
        self.assertEqual(ctx.exception.source, path)

    def test_country_calendar(self):
        holidays = HolidaySet.for_country("AU", subdiv="NSW", dates=["20230808"])
        self.assertIn("20231225", holidays)
        self.assertIn("20240101", holidays)
        self.assertIn("20230808", holidays)
        self.assertNotIn("20231227", holidays)
        self.assertNotIn("not-a-date", holidays)
        self.assertEqual(classify_day("20231225", holidays), DayIndex.SUNDAY_OR_HOLIDAY)
        self.assertEqual(classify_day("20231227", holidays), DayIndex.WEDNESDAY)

    def test_unknown_country(self):
        with self.assertRaises(BillingError):
            HolidaySet.for_country("XX")


if __name__ == "__main__":
    unittest.main()
