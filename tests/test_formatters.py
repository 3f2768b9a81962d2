"""
Unit tests for the DANFE display formatters.
"""
import unittest
from datetime import timezone, timedelta
from decimal import Decimal
from pathlib import Path
import sys

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from utils.formatters import (
    MalformedTimestamp,
    mask_person_id,
    mask_company_id,
    format_national_id,
    parse_date_parts,
    format_date,
    format_time,
    format_currency,
    format_access_key,
    resolve_timezone,
)

BRT = timezone(timedelta(hours=-3))


class TestNationalId(unittest.TestCase):
    """CPF/CNPJ masks"""

    def test_mask_person_id(self):
        self.assertEqual(mask_person_id("12345678901"), "123.456.789-01")

    def test_mask_company_id(self):
        self.assertEqual(mask_company_id("12345678000199"), "12.345.678/0001-99")

    def test_short_input_skips_empty_groups(self):
        self.assertEqual(mask_person_id("1234"), "123.4")
        self.assertEqual(mask_person_id("123"), "123")
        self.assertEqual(mask_company_id("123456"), "12.345.6")
        self.assertEqual(mask_company_id(""), "")

    def test_dispatch_by_length(self):
        self.assertEqual(format_national_id("12345678901"), "123.456.789-01")
        self.assertEqual(format_national_id("12345678000199"), "12.345.678/0001-99")

    def test_other_lengths_pass_through(self):
        for value in ["", "1", "1234567890", "123456789012", "123456789012345", "EX12345"]:
            with self.subTest(value=value):
                self.assertEqual(format_national_id(value), value)
        self.assertIsNone(format_national_id(None))


class TestFormatDate(unittest.TestCase):
    """DD/MM/YYYY dates"""

    def test_bare_date(self):
        self.assertEqual(format_date("2023-05-09"), "09/05/2023")

    def test_datetime_with_offset(self):
        self.assertEqual(format_date("2023-05-09T14:30:00-03:00"), "09/05/2023")
        self.assertEqual(format_date("2023-12-31T23:59:59+01:00"), "31/12/2023")

    def test_datetime_without_offset(self):
        self.assertEqual(format_date("2023-05-09T14:30:00"), "09/05/2023")

    def test_date_is_not_shifted_by_offset(self):
        # Late evening in Brazil is already the next day in UTC
        self.assertEqual(format_date("2023-05-09T23:30:00-03:00"), "09/05/2023")

    def test_empty_values(self):
        self.assertEqual(format_date(""), "")
        self.assertEqual(format_date(None), "")

    def test_malformed_degrades_to_empty(self):
        for value in ["09/05/2023", "2023-05-09 14:30:00", "2023-05-09T", "abcd-ef-gh", "2023-05"]:
            with self.subTest(value=value):
                self.assertEqual(format_date(value), "")

    def test_parse_date_parts_is_strict(self):
        self.assertEqual(parse_date_parts("2023-05-09"), ("2023", "05", "09"))
        with self.assertRaises(MalformedTimestamp):
            parse_date_parts("2023-05-09 14:30")
        with self.assertRaises(MalformedTimestamp):
            parse_date_parts("2023/05/09T10:00:00")
        with self.assertRaises(ValueError):
            parse_date_parts("2023-05-09T-03:00")


class TestFormatTime(unittest.TestCase):
    """HH:MM:SS times"""

    def test_offset_converted_to_zone(self):
        self.assertEqual(format_time("2023-05-09T14:30:00-03:00", timezone.utc), "17:30:00")
        self.assertEqual(format_time("2023-05-09T14:30:00-03:00", BRT), "14:30:00")

    def test_utc_designator(self):
        self.assertEqual(format_time("2023-05-09T14:30:00Z", timezone.utc), "14:30:00")

    def test_naive_is_wall_clock(self):
        self.assertEqual(format_time("2023-05-09T08:05:09", timezone.utc), "08:05:09")
        self.assertEqual(format_time("2023-05-09T08:05:09", BRT), "08:05:09")

    def test_bare_date_is_midnight_utc(self):
        self.assertEqual(format_time("2023-05-09", timezone.utc), "00:00:00")
        self.assertEqual(format_time("2023-05-09", BRT), "21:00:00")

    def test_empty_and_invalid(self):
        self.assertEqual(format_time(""), "")
        self.assertEqual(format_time(None), "")
        self.assertEqual(format_time("not a date", timezone.utc), "")

    def test_same_malformed_policy_as_format_date(self):
        for value in ["2023-05-09 14:30:00", "09/05/2023T14:30:00", "2023-05-09T"]:
            with self.subTest(value=value):
                self.assertEqual(format_date(value), "")
                self.assertEqual(format_time(value, timezone.utc), "")

    def test_local_zone_when_not_given(self):
        result = format_time("2023-05-09T14:30:00-03:00")
        self.assertRegex(result, r"^\d{2}:\d{2}:00$")

    def test_unknown_zone_name(self):
        self.assertIsNone(resolve_timezone("Nowhere/Atlantis"))
        self.assertIsNone(resolve_timezone(""))
        self.assertRegex(format_time("2023-05-09T14:30:00-03:00", "Nowhere/Atlantis"), r"^\d{2}:\d{2}:00$")


class TestFormatCurrency(unittest.TestCase):
    """Brazilian number notation"""

    def test_reference_values(self):
        self.assertEqual(format_currency(1234567.891, 2), "1.234.567,89")
        self.assertEqual(format_currency(-42, 2), "-42,00")
        self.assertEqual(format_currency(0, 0), "0")

    def test_default_four_decimals(self):
        self.assertEqual(format_currency("1234.5"), "1.234,5000")
        self.assertEqual(format_currency(1), "1,0000")

    def test_grouping(self):
        self.assertEqual(format_currency(123, 2), "123,00")
        self.assertEqual(format_currency(1234, 2), "1.234,00")
        self.assertEqual(format_currency(123456, 0), "123.456")
        self.assertEqual(format_currency(1234567890, 0), "1.234.567.890")

    def test_round_half_away_from_zero(self):
        self.assertEqual(format_currency(2.5, 0), "3")
        self.assertEqual(format_currency("0.125", 2), "0,13")
        self.assertEqual(format_currency(-0.125, 2), "-0,13")
        self.assertEqual(format_currency("999.995", 2), "1.000,00")
        self.assertEqual(format_currency(Decimal("1.23455"), 4), "1,2346")

    def test_numeric_strings(self):
        self.assertEqual(format_currency("1312.50", 2), "1.312,50")
        self.assertEqual(format_currency(" 18.00 ", 2), "18,00")

    def test_non_numeric_is_zero(self):
        self.assertEqual(format_currency("abc", 2), "0,00")
        self.assertEqual(format_currency(None, 2), "0,00")
        self.assertEqual(format_currency("", 2), "0,00")
        self.assertEqual(format_currency(float("nan"), 2), "0,00")
        self.assertEqual(format_currency(None), "0,0000")

    def test_invalid_decimals_fall_back_to_two(self):
        self.assertEqual(format_currency(1.5, -1), "1,50")
        self.assertEqual(format_currency(1.5, "x"), "1,50")
        self.assertEqual(format_currency(1.5, float("inf")), "1,50")

    def test_very_large_amounts(self):
        expected = "10" + ".000" * 23 + ",00"
        self.assertEqual(format_currency(1e70, 2), expected)
        self.assertEqual(format_currency(10 ** 70, 2), expected)
        self.assertEqual(format_currency(-10 ** 70, 0), "-" + expected[:-3])


class TestFormatAccessKey(unittest.TestCase):
    """44 digit access key grouping"""

    KEY = "35230512345678000199550010000012341000012345"

    def test_groups_of_four(self):
        result = format_access_key(self.KEY)
        self.assertEqual(len(result), 44 + 11)
        self.assertTrue(result.startswith(" 3523 "))
        groups = result.split(" ")
        self.assertEqual(groups[0], "")
        self.assertEqual(len(groups[1:]), 11)
        self.assertTrue(all(len(g) == 4 for g in groups[1:]))
        self.assertEqual("".join(groups), self.KEY)

    def test_other_lengths_unchanged(self):
        self.assertEqual(format_access_key(self.KEY[:-1]), self.KEY[:-1])
        self.assertEqual(format_access_key(""), "")
        self.assertIsNone(format_access_key(None))


if __name__ == '__main__':
    unittest.main()
