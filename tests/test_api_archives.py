"""
Endpoint tests for archives and person deletion cascades.
"""

import uuid

import pytest

from helpers import add_transaction, assign, create_person


class TestCreateArchive:

    def test_archives_all_active_transactions(self, client):
        alice = create_person(client, "Alice")
        bob = create_person(client, "Bob")
        assign(client, add_transaction(client, "Test Transaction", 100.50)["id"], [alice["id"]])
        assign(client, add_transaction(client, "Second", 75.25)["id"], [bob["id"]])

        resp = client.post("/api/archives", json={"name": "Q1", "description": "First quarter"})
        assert resp.status_code == 201
        archive = resp.json()

        assert archive["id"]
        assert archive["archived_at"]
        assert archive["name"] == "Q1"
        assert archive["description"] == "First quarter"
        assert archive["transaction_count"] == 2
        assert archive["total_amount"] == pytest.approx(175.75)
        assert archive["person_totals"] == [
            {"name": "Alice", "total": 100.5},
            {"name": "Bob", "total": 75.25},
        ]

        assert client.get("/api/transactions").json() == []

    def test_count_includes_unassigned_but_total_does_not(self, client):
        alice = create_person(client, "Alice")
        assign(client, add_transaction(client, "Assigned", 40.00)["id"], [alice["id"]])
        add_transaction(client, "Unassigned", 60.00)

        archive = client.post("/api/archives", json={"name": "Mixed"}).json()
        assert archive["transaction_count"] == 2
        assert archive["total_amount"] == pytest.approx(40.00)

    def test_no_active_transactions(self, client):
        resp = client.post("/api/archives", json={"name": "Empty", "description": "nothing"})
        assert resp.status_code == 400
        assert "no active transactions" in resp.json()["error"]
        assert client.get("/api/archives").json() == []

    def test_second_archive_without_new_transactions(self, client):
        add_transaction(client, "Only", 1.00)
        assert client.post("/api/archives", json={"name": "First"}).status_code == 201

        resp = client.post("/api/archives", json={"name": "Second"})
        assert resp.status_code == 400
        assert len(client.get("/api/archives").json()) == 1

    def test_empty_body_is_accepted(self, client):
        add_transaction(client, "Only", 1.00)
        resp = client.post("/api/archives", json={})
        assert resp.status_code == 201
        assert resp.json()["name"] is None


class TestReadArchives:

    def test_list_newest_first(self, client):
        add_transaction(client, "A", 1.00)
        first = client.post("/api/archives", json={"name": "First"}).json()
        add_transaction(client, "B", 2.00)
        second = client.post("/api/archives", json={"name": "Second"}).json()

        listed = client.get("/api/archives").json()
        assert [a["id"] for a in listed] == [second["id"], first["id"]]

    def test_get_one(self, client):
        add_transaction(client, "A", 1.00)
        created = client.post("/api/archives", json={"name": "First"}).json()

        resp = client.get(f"/api/archives/{created['id']}")
        assert resp.status_code == 200
        assert resp.json() == created

    def test_archived_transactions(self, client):
        tx = add_transaction(client, "Test Transaction", 100.50)
        archive = client.post("/api/archives", json={"name": "Jan"}).json()

        resp = client.get(f"/api/archives/{archive['id']}/transactions")
        assert resp.status_code == 200
        transactions = resp.json()
        assert len(transactions) == 1
        assert transactions[0]["id"] == tx["id"]
        assert transactions[0]["description"] == "Test Transaction"
        assert transactions[0]["is_active"] is False
        assert transactions[0]["amount"] == pytest.approx(100.50)
        assert transactions[0]["archive_id"] == archive["id"]

    def test_unknown_archive(self, client):
        resp = client.get(f"/api/archives/{uuid.uuid4()}/transactions")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Archive not found"}

        assert client.get(f"/api/archives/{uuid.uuid4()}").status_code == 404

    def test_malformed_archive_id(self, client):
        resp = client.get("/api/archives/not-a-uuid/transactions")
        assert resp.status_code == 400


class TestDeletePersonCascade:

    def test_removed_from_active_and_archived(self, client):
        alice = create_person(client, "Alice")
        bob = create_person(client, "Bob")
        archived = add_transaction(client, "Archived dinner", 50.00)
        assign(client, archived["id"], [alice["id"], bob["id"]])
        archive = client.post("/api/archives", json={"name": "Jan"}).json()
        active = add_transaction(client, "Active lunch", 20.00)
        assign(client, active["id"], [alice["id"]])

        resp = client.delete(f"/api/people/{alice['id']}")
        assert resp.status_code == 200

        assert client.get("/api/transactions").json()[0]["assigned_to"] == []
        frozen = client.get(f"/api/archives/{archive['id']}/transactions").json()
        assert frozen[0]["assigned_to"] == [bob["id"]]
        assert [p["name"] for p in client.get("/api/people").json()] == ["Bob"]

    def test_archive_snapshot_is_kept(self, client):
        alice = create_person(client, "Alice")
        assign(client, add_transaction(client, "Dinner", 30.00)["id"], [alice["id"]])
        archive = client.post("/api/archives", json={"name": "Jan"}).json()

        client.delete(f"/api/people/{alice['id']}")

        after = client.get(f"/api/archives/{archive['id']}").json()
        assert after["total_amount"] == pytest.approx(30.00)
        assert after["person_totals"] == [{"name": "Alice", "total": 30.0}]

    def test_unknown_person(self, client):
        resp = client.delete(f"/api/people/{uuid.uuid4()}")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Person not found"}
