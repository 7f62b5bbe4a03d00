import unittest
from datetime import date, timezone

from fairlottery.models import Order
from fairlottery.reports import (
    CSV_HEADERS,
    SummaryRow,
    csv_filename,
    format_amount,
    orders_to_csv,
    search_orders,
    summarize_by_client,
    summarize_by_exhibitor,
    total_value,
)


def _orders() -> list[Order]:
    return [
        Order(
            id="o-1",
            client_name='Firma "Dom"',
            order_value=1234.5,
            ticket_number="#001-4821",
            created_at=1_700_000_000_000,  # 2023-11-14 22:13:20 UTC
            created_by="Stoisko 7",
            exhibitor_id="ex-7",
        ),
        Order(
            id="o-2",
            client_name="ACME",
            order_value=100.0,
            ticket_number="#002-1000",
            created_at=1_700_000_005_000,
            is_winner=True,
        ),
        Order(
            id="o-3",
            client_name="ACME",
            order_value=50.0,
            ticket_number="#003-2000",
            created_at=1_700_000_010_000,
            created_by="Stoisko 7",
            exhibitor_id="ex-7",
        ),
    ]


class CsvExportTests(unittest.TestCase):
    def test_layout(self):
        text = orders_to_csv(_orders(), tz=timezone.utc)
        self.assertTrue(text.startswith("\ufeff"))
        lines = text[1:].split("\n")
        self.assertEqual(len(lines), 4)
        self.assertEqual(lines[0].split(";"), list(CSV_HEADERS))
        self.assertEqual(
            lines[1],
            'o-1;#001-4821;"Firma ""Dom""";1234,50;ex-7;"Stoisko 7";14.11.2023;22:13:20;NIE',
        )
        self.assertEqual(
            lines[2],
            'o-2;#002-1000;"ACME";100,00;;"";14.11.2023;22:13:25;TAK',
        )

    def test_empty_report_has_header_only(self):
        self.assertEqual(orders_to_csv([]), "\ufeff" + ";".join(CSV_HEADERS))

    def test_format_amount(self):
        self.assertEqual(format_amount(0), "0,00")
        self.assertEqual(format_amount(99.999), "100,00")
        self.assertEqual(format_amount(12.3), "12,30")

    def test_csv_filename(self):
        self.assertEqual(csv_filename(date(2024, 5, 17)), "targi_hasta_wyniki_2024-05-17.csv")


class SummaryTests(unittest.TestCase):
    def test_by_exhibitor_groups_unknown(self):
        rows = summarize_by_exhibitor(_orders())
        self.assertEqual(
            rows,
            [
                SummaryRow(name="Stoisko 7", count=2, value=1284.5),
                SummaryRow(name="Nieznany", count=1, value=100.0),
            ],
        )

    def test_by_client(self):
        rows = summarize_by_client(_orders())
        self.assertEqual(rows[0], SummaryRow(name='Firma "Dom"', count=1, value=1234.5))
        self.assertEqual(rows[1], SummaryRow(name="ACME", count=2, value=150.0))

    def test_total_value(self):
        self.assertEqual(total_value(_orders()), 1384.5)
        self.assertEqual(total_value([]), 0)

    def test_search(self):
        orders = _orders()
        self.assertEqual([o.id for o in search_orders(orders, "acme")], ["o-2", "o-3"])
        self.assertEqual([o.id for o in search_orders(orders, "#001")], ["o-1"])
        self.assertEqual([o.id for o in search_orders(orders, "stoisko")], ["o-1", "o-3"])
        self.assertEqual(len(search_orders(orders, "  ")), 3)


if __name__ == "__main__":
    unittest.main()
