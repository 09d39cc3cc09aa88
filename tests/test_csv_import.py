"""
Tests for CSV statement parsing and duplicate-rejecting ingestion.
"""

from datetime import date
from decimal import Decimal

from app.services.csv_import import parse_amount, parse_date, parse_statement
from app.services.import_helpers import ingest_records

HEADER = "Transaction Date,Posted Date,Card No.,Description,Category,Debit,Credit\n"


def csv_bytes(*lines, header=True):
    return ((HEADER if header else "") + "".join(line + "\n" for line in lines)).encode("utf-8")


class TestParsers:

    def test_parse_amount(self):
        assert parse_amount("12.5") == Decimal("12.50")
        assert parse_amount("-3") == Decimal("-3.00")
        assert parse_amount("1,234.56") == Decimal("1234.56")
        assert parse_amount("") is None
        assert parse_amount("abc") is None
        assert parse_amount("NaN") is None
        assert parse_amount("inf") is None

    def test_parse_date(self):
        assert parse_date("2025-01-31") == date(2025, 1, 31)
        assert parse_date("") is None
        assert parse_date("31/01/2025") is None


class TestParseStatement:

    def test_header_is_skipped(self):
        records, skipped = parse_statement(
            csv_bytes("2025-01-02,2025-01-03,1234,Coffee Shop,Dining,4.50,"),
            "jan.csv",
        )
        assert skipped == 0
        assert records == [
            {
                "description": "Coffee Shop",
                "amount": Decimal("4.50"),
                "transaction_date": date(2025, 1, 2),
                "posted_date": date(2025, 1, 3),
                "card_number": "1234",
                "category": "Dining",
                "file_name": "jan.csv",
            }
        ]

    def test_without_header(self):
        records, skipped = parse_statement(
            csv_bytes("2025-01-02,2025-01-03,1234,Coffee,Dining,4.50,", header=False)
        )
        assert skipped == 0
        assert len(records) == 1

    def test_credit_used_when_debit_empty(self):
        records, _ = parse_statement(csv_bytes("2025-01-02,2025-01-03,1234,Refund,Other,,20.00"))
        assert records[0]["amount"] == Decimal("20.00")

    def test_rows_without_amount_or_short_are_skipped(self):
        records, skipped = parse_statement(
            csv_bytes(
                "2025-01-02,2025-01-03,1234,No amount,Other,,",
                "2025-01-02,2025-01-03,1234,Too short",
                "2025-01-02,2025-01-03,1234,Bad amount,Other,abc,",
                "2025-01-02,2025-01-03,1234,Good,Other,1.00,",
            )
        )
        assert [r["description"] for r in records] == ["Good"]
        assert skipped == 3

    def test_extra_columns_are_ignored(self):
        records, skipped = parse_statement(
            csv_bytes("2025-01-02,2025-01-03,1234,Wide,Other,7.00,,extra,more")
        )
        assert skipped == 0
        assert records[0]["amount"] == Decimal("7.00")

    def test_unparseable_dates_become_none(self):
        records, _ = parse_statement(csv_bytes("01/02/2025,,,Odd date,,3.00,"))
        assert records[0]["transaction_date"] is None
        assert records[0]["posted_date"] is None
        assert records[0]["card_number"] is None

    def test_empty_file(self):
        assert parse_statement(b"") == ([], 0)

    def test_latin1_statement_is_read(self):
        content = "2025-01-02,2025-01-03,1234,Caf\xe9 Central,Food,4.50,\n".encode("latin-1")
        records, skipped = parse_statement(content, "jan.csv")
        assert skipped == 0
        assert [r["description"] for r in records] == ["Caf\xe9 Central"]
        assert records[0]["amount"] == Decimal("4.50")


class TestIngestRecords:

    def records(self):
        records, _ = parse_statement(
            csv_bytes(
                "2025-01-02,2025-01-03,1234,Coffee,Dining,4.50,",
                "2025-01-04,2025-01-05,1234,Gas,Gas/Automotive,40.00,",
            ),
            "jan.csv",
        )
        return records

    def test_creates_transactions(self, store):
        created, skipped = ingest_records(store, self.records())
        assert skipped == 0
        assert {t.description for t in created} == {"Coffee", "Gas"}
        assert all(t.file_name == "jan.csv" for t in created)
        assert len(store.list_active()) == 2

    def test_reupload_creates_nothing(self, store):
        ingest_records(store, self.records())
        created, skipped = ingest_records(store, self.records())
        assert created == []
        assert skipped == 2
        assert len(store.list_active()) == 2

    def test_duplicates_within_one_file(self, store):
        records = self.records()
        created, skipped = ingest_records(store, records + records[:1])
        assert len(created) == 2
        assert skipped == 1

    def test_category_matched_by_exact_name(self, store, categories):
        dining = categories.create("Dining")
        created, _ = ingest_records(store, self.records(), categories.by_name())
        by_desc = {t.description: t for t in created}
        assert by_desc["Coffee"].category_id == dining.id
        assert by_desc["Gas"].category_id is None
