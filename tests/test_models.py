import random
import re
import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fairlottery.models import Base, ExhibitorAccount, Order, StorageRecord, parse_order_value
from fairlottery.models.utils import (
    format_ticket_number,
    generate_access_code,
    new_identifier,
    random_ticket_suffix,
)


class OrderJsonTests(unittest.TestCase):
    def _order(self, **overrides) -> Order:
        fields = dict(
            id="o-1",
            client_name="ACME",
            order_value=500.0,
            ticket_number="#001-1234",
            created_at=1_700_000_000_000,
        )
        fields.update(overrides)
        return Order(**fields)

    def test_to_json_uses_camel_case_and_omits_missing_attribution(self):
        data = self._order().to_json()
        self.assertEqual(
            data,
            {
                "id": "o-1",
                "clientName": "ACME",
                "orderValue": 500.0,
                "ticketNumber": "#001-1234",
                "createdAt": 1_700_000_000_000,
                "isWinner": False,
            },
        )

    def test_from_json_restores_attribution(self):
        order = self._order(created_by="Stoisko 7", exhibitor_id="ex-7", is_winner=True)
        self.assertEqual(Order.from_json(order.to_json()), order)

    def test_from_json_defaults_is_winner(self):
        data = self._order().to_json()
        del data["isWinner"]
        self.assertFalse(Order.from_json(data).is_winner)

    def test_from_json_rejects_missing_keys_and_bad_types(self):
        data = self._order().to_json()
        del data["ticketNumber"]
        with self.assertRaises(ValueError):
            Order.from_json(data)
        with self.assertRaises(ValueError):
            Order.from_json({**self._order().to_json(), "isWinner": "yes"})
        with self.assertRaises(ValueError):
            Order.from_json({**self._order().to_json(), "orderValue": -1})
        with self.assertRaises(ValueError):
            Order.from_json(["not", "an", "object"])  # type: ignore[arg-type]


class ParseOrderValueTests(unittest.TestCase):
    def test_accepts_numbers_and_numeric_strings(self):
        self.assertEqual(parse_order_value(500), 500.0)
        self.assertEqual(parse_order_value(0), 0.0)
        self.assertEqual(parse_order_value(" 12.5 "), 12.5)
        self.assertEqual(parse_order_value("1234,50"), 1234.5)

    def test_rejects_invalid_values(self):
        for value in (-0.01, "abc", "", None, True, float("nan"), float("inf"), [1]):
            with self.subTest(value=value):
                with self.assertRaises(ValueError):
                    parse_order_value(value)


class ExhibitorAccountTests(unittest.TestCase):
    def test_json_round_trip(self):
        account = ExhibitorAccount(id="ex-1", name="Cegielnia", access_code="AB-123")
        self.assertEqual(
            account.to_json(), {"id": "ex-1", "name": "Cegielnia", "accessCode": "AB-123"}
        )
        self.assertEqual(ExhibitorAccount.from_json(account.to_json()), account)

    def test_from_json_requires_access_code(self):
        with self.assertRaises(ValueError):
            ExhibitorAccount.from_json({"id": "ex-1", "name": "Cegielnia"})


class ModelUtilsTests(unittest.TestCase):
    def test_format_ticket_number_pads_position(self):
        self.assertEqual(format_ticket_number(1, 4821), "#001-4821")
        self.assertEqual(format_ticket_number(42, 1000), "#042-1000")
        self.assertEqual(format_ticket_number(1234, 9999), "#1234-9999")

    def test_format_ticket_number_validates_arguments(self):
        with self.assertRaises(ValueError):
            format_ticket_number(0, 1234)
        with self.assertRaises(ValueError):
            format_ticket_number(1, 999)

    def test_random_ticket_suffix_stays_in_range(self):
        rng = random.Random(7)
        suffixes = {random_ticket_suffix(rng) for _ in range(2000)}
        self.assertTrue(all(1000 <= s <= 9999 for s in suffixes))

    def test_access_code_shape(self):
        rng = random.Random(3)
        for _ in range(200):
            code = generate_access_code(rng)
            self.assertRegex(code, r"^[A-HJ-NP-Z]{2}-[1-9]\d{2}$")

    def test_new_identifier_is_unique(self):
        ids = {new_identifier() for _ in range(100)}
        self.assertEqual(len(ids), 100)
        self.assertTrue(all(re.fullmatch(r"[0-9a-f-]{36}", i) for i in ids))


class StorageRecordTests(unittest.TestCase):
    def setUp(self):
        self.engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
        Base.metadata.create_all(self.engine)
        self.Session = sessionmaker(
            bind=self.engine, future=True, expire_on_commit=False
        )

    def tearDown(self):
        self.engine.dispose()

    def test_put_inserts_then_overwrites(self):
        with self.Session.begin() as session:
            StorageRecord.put(session, "slot", [1, 2])
        with self.Session.begin() as session:
            StorageRecord.put(session, "slot", {"a": "b"})
        with self.Session() as session:
            record = StorageRecord.get_by_key(session, "slot")
            self.assertIsNotNone(record)
            assert record is not None
            self.assertEqual(record.value, {"a": "b"})
            self.assertIsNone(StorageRecord.get_by_key(session, "missing"))


if __name__ == "__main__":
    unittest.main()
