"""
API helpers shared by the endpoint tests.
"""

from decimal import Decimal


CSV_HEADER = "Transaction Date,Posted Date,Card No.,Description,Category,Debit,Credit\n"


def upload_csv(client, rows, file_name="statement.csv", header=True):
    """
    rows: list of (transaction_date, posted_date, card, description, category, debit, credit)
    """
    body = CSV_HEADER if header else ""
    body += "".join(",".join(str(v) for v in row) + "\n" for row in rows)
    return client.post(
        "/api/upload-csv",
        files={"file": (file_name, body.encode("utf-8"), "text/csv")},
    )


def create_person(client, name, email=None):
    resp = client.post("/api/people", json={"name": name, "email": email})
    assert resp.status_code == 201, resp.text
    return resp.json()


def add_transaction(client, description, amount, when="2025-01-15"):
    """Upload a one-row CSV and return the created transaction."""
    resp = upload_csv(client, [(when, when, "1234", description, "", f"{amount:.2f}", "")])
    assert resp.status_code == 200, resp.text
    created = resp.json()["transactions"]
    assert len(created) == 1
    return created[0]


def assign(client, tx_id, person_ids):
    resp = client.put(f"/api/transactions/{tx_id}/assign", json={"assigned_to": person_ids})
    assert resp.status_code == 200, resp.text
    return resp.json()


def totals_by_person(client):
    resp = client.get("/api/totals")
    assert resp.status_code == 200
    return {row["person"]: Decimal(str(row["total"])) for row in resp.json()}
