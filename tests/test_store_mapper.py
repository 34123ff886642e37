from __future__ import annotations

import unittest
from datetime import datetime, timezone
from decimal import Decimal

from gamestore.infrastructure.db.mappers.store_mapper import as_utc_datetime, map_row_to_purchase


class StoreMapperTests(unittest.TestCase):
    def test_map_row_to_purchase_reads_sqlite_text_columns(self):
        row = {
            "id": 7,
            "user_id": 3,
            "total": 24.48,
            "created_at": "2024-05-01 10:00:00.000000",
            "paid": 0,
        }

        purchase = map_row_to_purchase(row)

        self.assertEqual(purchase.total, Decimal("24.48"))
        self.assertEqual(purchase.created_at, datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc))
        self.assertIs(purchase.paid, False)

    def test_as_utc_datetime_accepts_rfc3339_zulu_suffix(self):
        self.assertEqual(
            as_utc_datetime("2024-05-01T10:00:00Z"),
            datetime(2024, 5, 1, 10, 0, tzinfo=timezone.utc),
        )

    def test_as_utc_datetime_converts_offsets_to_utc(self):
        value = as_utc_datetime("2024-05-01T12:30:00+02:00")

        self.assertEqual(value, datetime(2024, 5, 1, 10, 30, tzinfo=timezone.utc))
        self.assertEqual(value.utcoffset().total_seconds(), 0)


if __name__ == "__main__":
    unittest.main()
