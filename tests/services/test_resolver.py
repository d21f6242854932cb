import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

# Module to test
from milk_api.services import resolver
from milk_api.services.records import DeliveryRecord


def _record(user, date, ref, milk="whole"):
    return DeliveryRecord(user=user, milk=milk, quantity="1", date=date, ref=ref)


class TestParseDeliveryDate(unittest.TestCase):

    def test_parses_iso_date(self):
        """ISO dates parse to the matching calendar day."""
        parsed = resolver.parse_delivery_date("2024-02-01")
        self.assertEqual(parsed.date(), datetime(2024, 2, 1).date())

    def test_parses_written_month(self):
        parsed = resolver.parse_delivery_date("Mar 5, 2024")
        self.assertEqual(parsed.date(), datetime(2024, 3, 5).date())

    def test_empty_values_are_none(self):
        self.assertIsNone(resolver.parse_delivery_date(""))
        self.assertIsNone(resolver.parse_delivery_date(None))

    @patch('milk_api.services.resolver.dateparser.parse')
    def test_unparseable_is_none(self, mock_parse):
        mock_parse.return_value = None
        self.assertIsNone(resolver.parse_delivery_date("someday"))
        mock_parse.assert_called_once()

    @patch('milk_api.services.resolver.dateparser.parse')
    def test_aware_dates_are_normalised_to_naive_utc(self, mock_parse):
        """Timezone-aware results are shifted to UTC and made naive so they compare with naive ones."""
        mock_parse.return_value = datetime(2024, 1, 1, 10, 0, tzinfo=timezone(timedelta(hours=2)))

        parsed = resolver.parse_delivery_date("2024-01-01T10:00:00+02:00")

        self.assertIsNone(parsed.tzinfo)
        self.assertEqual(parsed, datetime(2024, 1, 1, 8, 0))


class TestResolveRecord(unittest.TestCase):

    def setUp(self):
        self.records = [
            _record("A", "2024-01-01", 2),
            _record("B", "2024-03-01", 3),
            _record("A", "2024-02-01", 4, milk="skim"),
            _record("A", "2023-12-31", 5),
        ]

    def test_target_date_exact_match(self):
        result = resolver.resolve_record(self.records, "A", "2024-01-01")
        self.assertEqual(result.ref, 2)

    def test_target_date_requires_same_user(self):
        """B's row on 2024-03-01 is not A's."""
        self.assertIsNone(resolver.resolve_record(self.records, "A", "2024-03-01"))

    def test_target_date_without_match_is_not_found(self):
        """Rows for the user exist, but none on that date."""
        self.assertIsNone(resolver.resolve_record(self.records, "A", "2024-06-01"))

    def test_target_date_is_exact_string_match(self):
        """Same day written differently does not match."""
        self.assertIsNone(resolver.resolve_record(self.records, "A", "Jan 1, 2024"))

    def test_target_date_first_match_wins(self):
        records = self.records + [_record("A", "2024-01-01", 9)]
        self.assertEqual(resolver.resolve_record(records, "A", "2024-01-01").ref, 2)

    def test_latest_record_without_target_date(self):
        result = resolver.resolve_record(self.records, "A")
        self.assertEqual(result.ref, 4)
        self.assertEqual(result.milk, "skim")

    def test_empty_target_date_means_latest(self):
        self.assertEqual(resolver.resolve_record(self.records, "A", "").ref, 4)

    def test_latest_across_date_formats(self):
        records = [
            _record("C", "2024-01-15", 2),
            _record("C", "Feb 1, 2024", 3),
        ]
        self.assertEqual(resolver.resolve_record(records, "C").ref, 3)

    def test_unknown_user(self):
        self.assertIsNone(resolver.resolve_record(self.records, "Z"))
        self.assertIsNone(resolver.resolve_record([], "A"))

    def test_ties_keep_sheet_order(self):
        records = [
            _record("A", "2024-02-01", 2),
            _record("A", "2024-02-01", 3),
        ]
        self.assertEqual(resolver.resolve_record(records, "A").ref, 2)

    def test_unparseable_dates_rank_last(self):
        records = [
            _record("A", "", 2),
            _record("A", "2020-01-01", 3),
        ]
        self.assertEqual(resolver.resolve_record(records, "A").ref, 3)

    def test_only_unparseable_dates_picks_first(self):
        records = [_record("A", "", 2), _record("A", "", 3)]
        self.assertEqual(resolver.resolve_record(records, "A").ref, 2)


if __name__ == '__main__':
    unittest.main()
