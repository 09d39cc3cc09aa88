# app/services/csv_import.py
"""
Parse credit card statement CSVs into normalized transaction records.

Expected columns (header row optional):
    Transaction Date, Posted Date, Card No., Description, Category, Debit, Credit

Rows that cannot become a transaction are counted as skipped, never raised.
"""

import io
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd

logger = logging.getLogger(__name__)

COLUMNS = [
    "transaction_date",
    "posted_date",
    "card_number",
    "description",
    "category",
    "debit",
    "credit",
]

HEADER_MARKER = "Transaction Date"


def parse_amount(value: str) -> Optional[Decimal]:
    """
    '12.5' -> Decimal('12.50'); blank or garbage -> None.
    """
    s = str(value or "").strip().replace(",", "")
    if s == "":
        return None
    try:
        d = Decimal(s)
    except InvalidOperation:
        return None
    if not d.is_finite():
        return None
    return d.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def parse_date(value: str):
    s = str(value or "").strip()
    if not s:
        return None
    parsed = pd.to_datetime(s, format="%Y-%m-%d", errors="coerce")
    if pd.isna(parsed):
        return None
    return parsed.date()


def _read_frame(content: bytes, encoding: str = "utf-8") -> pd.DataFrame:
    def keep_first_columns(bad_line: List[str]) -> List[str]:
        # Extra trailing columns are ignored
        return bad_line[: len(COLUMNS)]

    return pd.read_csv(
        io.BytesIO(content),
        encoding=encoding,
        header=None,
        names=COLUMNS,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        on_bad_lines=keep_first_columns,
    )


def parse_statement(content: bytes, file_name: Optional[str] = None) -> Tuple[List[Dict[str, Any]], int]:
    """
    Returns (records, skipped_rows).

    Each record has: description, amount (Decimal), transaction_date,
    posted_date (date or None), card_number, category (raw CSV text), file_name.
    Debit wins over Credit when both are filled.
    """
    if not content or not content.strip():
        return [], 0

    try:
        df = _read_frame(content)
    except UnicodeDecodeError:
        # Bank exports are often Latin-1; every byte decodes there
        logger.info("CSV %r is not UTF-8, reading it as latin-1", file_name)
        df = _read_frame(content, encoding="latin-1")

    if len(df) and str(df.iloc[0]["transaction_date"]).strip() == HEADER_MARKER:
        df = df.iloc[1:]

    records: List[Dict[str, Any]] = []
    skipped = 0

    for row in df.to_dict(orient="records"):
        # Short rows come back with NaN in the missing columns
        if any(pd.isna(row[col]) for col in COLUMNS):
            skipped += 1
            continue

        description = str(row["description"]).strip()
        raw_amount = row["debit"] if str(row["debit"]).strip() else row["credit"]
        amount = parse_amount(raw_amount)

        if not description or amount is None:
            logger.debug("Skipping unusable CSV row: %r", row)
            skipped += 1
            continue

        records.append(
            {
                "description": description,
                "amount": amount,
                "transaction_date": parse_date(row["transaction_date"]),
                "posted_date": parse_date(row["posted_date"]),
                "card_number": str(row["card_number"]).strip() or None,
                "category": str(row["category"]).strip() or None,
                "file_name": file_name,
            }
        )

    return records, skipped
