"""
API tests for the School Bank Passbook Service.
Tests record management, ledger views, access control and error handling.
"""

from conftest import ADMIN

DAY = 86_400 * 10**9
JUNE_1 = 1_717_200_000 * 10**9  # 2024-06-01 00:00:00 UTC


def user(account_number):
    return {"X-User-Role": "user", "X-Account-Number": account_number}


def create_student(client, name="Asha Patil"):
    response = client.post(
        "/api/v1/students/",
        json={
            "name": name,
            "dob": 1_262_304_000 * 10**9,
            "student_class": "5A",
            "attendance_number": 12,
            "school_name": "ZP Primary School",
            "taluka": "Haveli",
            "district": "Pune"
        },
        headers=ADMIN
    )
    assert response.status_code == 201
    return response.json()


def create_bank(client, ifsc_code="SBIN0001234"):
    response = client.post(
        "/api/v1/banks/",
        json={"name": "Haveli Branch", "ifsc_code": ifsc_code, "taluka": "Haveli", "district": "Pune"},
        headers=ADMIN
    )
    assert response.status_code == 201
    return response.json()


def create_account(client, account_number="ACC001", initial_amount=500, student=None, bank=None):
    student = student or create_student(client)
    bank = bank or create_bank(client)
    response = client.post(
        "/api/v1/accounts/",
        json={
            "student_id": student["id"],
            "bank_id": bank["id"],
            "account_number": account_number,
            "initial_amount": initial_amount
        },
        headers=ADMIN
    )
    assert response.status_code == 201
    return response.json()


def add_transaction(client, account, kind, amount, date, reason="Pocket money"):
    return client.post(
        "/api/v1/transactions/",
        json={
            "account_id": account["id"],
            "transaction_type": kind,
            "date": date,
            "amount": amount,
            "reason": reason
        },
        headers=ADMIN
    )


# ==================== HEALTH CHECK TESTS ====================

def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "running"
    assert "School Bank" in data["message"]


def test_health_check(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# ==================== SESSION TESTS ====================

def test_session_resolves_roles(client):
    assert client.get("/api/v1/session/", headers=ADMIN).json()["role"] == "admin"

    data = client.get("/api/v1/session/", headers=user("ACC001")).json()
    assert data == {"role": "user", "account_number": "ACC001"}

    assert client.get("/api/v1/session/").json()["role"] == "guest"


def test_admin_routes_reject_other_roles(client):
    assert client.get("/api/v1/students/").status_code == 403
    assert client.get("/api/v1/accounts/", headers=user("ACC001")).status_code == 403
    assert client.get("/api/v1/summary/", headers={"X-User-Role": "guest"}).status_code == 403


# ==================== STUDENT AND BANK TESTS ====================

def test_student_crud(client):
    student = create_student(client)

    response = client.get(f"/api/v1/students/{student['id']}", headers=ADMIN)
    assert response.status_code == 200
    assert response.json()["school_name"] == "ZP Primary School"

    payload = {**student, "student_class": "6A"}
    payload.pop("id")
    response = client.put(f"/api/v1/students/{student['id']}", json=payload, headers=ADMIN)
    assert response.status_code == 200
    assert response.json()["student_class"] == "6A"

    response = client.delete(f"/api/v1/students/{student['id']}", headers=ADMIN)
    assert response.status_code == 204
    assert client.get(f"/api/v1/students/{student['id']}", headers=ADMIN).status_code == 404


def test_list_students(client):
    for i in range(3):
        create_student(client, name=f"Student {i}")
    response = client.get("/api/v1/students/", headers=ADMIN)
    assert [s["name"] for s in response.json()] == ["Student 0", "Student 1", "Student 2"]


def test_bank_crud(client):
    bank = create_bank(client)
    response = client.put(
        f"/api/v1/banks/{bank['id']}",
        json={"name": "Renamed", "ifsc_code": "SBIN0009999"},
        headers=ADMIN
    )
    assert response.status_code == 200
    assert response.json()["ifsc_code"] == "SBIN0009999"

    assert client.delete(f"/api/v1/banks/{bank['id']}", headers=ADMIN).status_code == 204
    assert client.get(f"/api/v1/banks/{bank['id']}", headers=ADMIN).status_code == 404


# ==================== ACCOUNT TESTS ====================

def test_create_account_copies_branch_code(client):
    account = create_account(client)
    assert account["account_number"] == "ACC001"
    assert account["initial_amount"] == 500
    assert account["ifsc_code"] == "SBIN0001234"


def test_routing_code_is_a_snapshot(client):
    bank = create_bank(client)
    account = create_account(client, bank=bank)

    client.put(
        f"/api/v1/banks/{bank['id']}",
        json={"name": "Haveli Branch", "ifsc_code": "SBIN0005678"},
        headers=ADMIN
    )

    response = client.get(f"/api/v1/accounts/{account['id']}", headers=ADMIN)
    assert response.json()["ifsc_code"] == "SBIN0001234"


def test_create_account_negative_initial_amount(client):
    student = create_student(client)
    bank = create_bank(client)
    response = client.post(
        "/api/v1/accounts/",
        json={"student_id": student["id"], "bank_id": bank["id"], "account_number": "ACC001", "initial_amount": -1},
        headers=ADMIN
    )
    assert response.status_code == 422


def test_create_duplicate_account_in_branch(client):
    student = create_student(client)
    bank = create_bank(client)
    create_account(client, student=student, bank=bank)

    response = client.post(
        "/api/v1/accounts/",
        json={"student_id": student["id"], "bank_id": bank["id"], "account_number": "ACC001"},
        headers=ADMIN
    )
    assert response.status_code == 400
    assert "already exists" in response.json()["detail"]


def test_create_account_for_missing_student(client):
    bank = create_bank(client)
    response = client.post(
        "/api/v1/accounts/",
        json={"student_id": 42, "bank_id": bank["id"], "account_number": "ACC001"},
        headers=ADMIN
    )
    assert response.status_code == 404


def test_delete_account_removes_transactions(client):
    account = create_account(client)
    add_transaction(client, account, "deposit", 100, JUNE_1)

    assert client.delete(f"/api/v1/accounts/{account['id']}", headers=ADMIN).status_code == 204
    assert client.get("/api/v1/transactions/", headers=ADMIN).json() == []


def test_account_balance_by_number(client):
    account = create_account(client)
    add_transaction(client, account, "deposit", 200, JUNE_1)
    add_transaction(client, account, "withdrawal", 100, JUNE_1 + DAY)

    response = client.get("/api/v1/accounts/by-number/ACC001/balance", headers=ADMIN)
    assert response.status_code == 200
    assert response.json() == {"account_number": "ACC001", "initial_amount": 500, "balance": 600}


def test_account_balance_unknown_number(client):
    response = client.get("/api/v1/accounts/by-number/NOPE/balance", headers=ADMIN)
    assert response.status_code == 404
    assert response.json()["detail"] == "Account NOPE not found"


# ==================== TRANSACTION TESTS ====================

def test_transaction_stores_running_total(client):
    account = create_account(client)

    first = add_transaction(client, account, "deposit", 200, JUNE_1)
    assert first.status_code == 201
    assert first.json()["total_amount"] == 700

    second = add_transaction(client, account, "withdrawal", 100, JUNE_1 + DAY)
    assert second.status_code == 201
    assert second.json()["total_amount"] == 600


def test_withdrawal_over_balance_rejected(client):
    account = create_account(client, initial_amount=100)
    response = add_transaction(client, account, "withdrawal", 150, JUNE_1)
    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient balance for withdrawal"


def test_backdated_withdrawal_rejected_when_later_balance_would_clamp(client):
    account = create_account(client, initial_amount=0)
    assert add_transaction(client, account, "deposit", 100, JUNE_1 + DAY * 2).status_code == 201

    response = add_transaction(client, account, "withdrawal", 100, JUNE_1)
    assert response.status_code == 400
    assert response.json()["detail"] == "Insufficient balance for withdrawal"

    ledger = client.get("/api/v1/accounts/by-number/ACC001/ledger", headers=ADMIN).json()
    assert ledger["balance"] == 100
    assert ledger["drift"] == []


def test_backdated_withdrawal_limited_by_lowest_later_balance(client):
    account = create_account(client, initial_amount=500)
    assert add_transaction(client, account, "withdrawal", 400, JUNE_1 + DAY * 2).json()["total_amount"] == 100

    # 500 is available on June 1st but only 100 is left after the later withdrawal
    assert add_transaction(client, account, "withdrawal", 200, JUNE_1).status_code == 400

    response = add_transaction(client, account, "withdrawal", 50, JUNE_1)
    assert response.status_code == 201
    assert response.json()["total_amount"] == 450

    ledger = client.get("/api/v1/accounts/by-number/ACC001/ledger", headers=ADMIN).json()
    assert [e["balance"] for e in ledger["entries"]] == [450, 50]
    assert ledger["balance"] == 50
    assert ledger["drift"] == []


def test_backdated_deposit_uses_balance_at_its_date(client):
    account = create_account(client, initial_amount=500)
    later = add_transaction(client, account, "deposit", 100, JUNE_1 + DAY * 2).json()
    assert later["total_amount"] == 600

    earlier = add_transaction(client, account, "deposit", 50, JUNE_1)
    assert earlier.status_code == 201
    assert earlier.json()["total_amount"] == 550

    restamped = client.get(f"/api/v1/transactions/{later['id']}", headers=ADMIN).json()
    assert restamped["total_amount"] == 650

    ledger = client.get("/api/v1/accounts/by-number/ACC001/ledger", headers=ADMIN).json()
    assert ledger["balance"] == 650
    assert ledger["drift"] == []


def test_out_of_order_appends_leave_no_drift(client):
    account = create_account(client, initial_amount=100)
    for kind, amount, date in [
        ("deposit", 50, JUNE_1 + DAY * 3),
        ("withdrawal", 30, JUNE_1 + DAY),
        ("deposit", 20, JUNE_1 + DAY * 2),
        ("withdrawal", 40, JUNE_1 + DAY * 3),
        ("deposit", 10, JUNE_1),
    ]:
        assert add_transaction(client, account, kind, amount, date).status_code == 201

    ledger = client.get("/api/v1/accounts/by-number/ACC001/ledger", headers=ADMIN).json()
    assert [e["balance"] for e in ledger["entries"]] == [110, 80, 100, 150, 110]
    assert [e["transaction"]["total_amount"] for e in ledger["entries"]] == [110, 80, 100, 150, 110]
    assert ledger["balance"] == 110
    assert ledger["drift"] == []


def test_transaction_amount_must_be_positive(client):
    account = create_account(client)
    assert add_transaction(client, account, "deposit", 0, JUNE_1).status_code == 422
    assert add_transaction(client, account, "deposit", 10, JUNE_1, reason="").status_code == 422


def test_transaction_for_missing_account(client):
    response = add_transaction(client, {"id": 999}, "deposit", 10, JUNE_1)
    assert response.status_code == 404


def test_list_transactions_by_account(client):
    first = create_account(client, account_number="ACC001")
    second = create_account(client, account_number="ACC002")
    add_transaction(client, first, "deposit", 10, JUNE_1)
    add_transaction(client, second, "deposit", 20, JUNE_1)

    response = client.get(f"/api/v1/transactions/?account_id={second['id']}", headers=ADMIN)
    assert [t["amount"] for t in response.json()] == [20]


def test_edit_leaves_later_totals_and_ledger_reports_drift(client):
    account = create_account(client)
    first = add_transaction(client, account, "deposit", 200, JUNE_1).json()
    add_transaction(client, account, "withdrawal", 100, JUNE_1 + DAY)

    response = client.put(
        f"/api/v1/transactions/{first['id']}",
        json={
            "account_id": account["id"],
            "transaction_type": "deposit",
            "date": JUNE_1,
            "amount": 300,
            "reason": "Corrected",
            "total_amount": 800
        },
        headers=ADMIN
    )
    assert response.status_code == 200

    ledger = client.get("/api/v1/accounts/by-number/ACC001/ledger", headers=ADMIN).json()
    assert ledger["balance"] == 700
    assert [e["balance"] for e in ledger["entries"]] == [800, 700]
    assert len(ledger["drift"]) == 1
    assert ledger["drift"][0]["stored"] == 600
    assert ledger["drift"][0]["expected"] == 700


def test_delete_transaction(client):
    account = create_account(client)
    created = add_transaction(client, account, "deposit", 200, JUNE_1).json()

    assert client.delete(f"/api/v1/transactions/{created['id']}", headers=ADMIN).status_code == 204
    assert client.get(f"/api/v1/transactions/{created['id']}", headers=ADMIN).status_code == 404


# ==================== PASSBOOK TESTS ====================

def test_passbook(client):
    account = create_account(client)
    add_transaction(client, account, "deposit", 200, JUNE_1)
    add_transaction(client, account, "withdrawal", 100, JUNE_1 + DAY)

    response = client.get("/api/v1/passbook/ACC001", headers=ADMIN)
    assert response.status_code == 200
    data = response.json()
    assert data["account"]["account_number"] == "ACC001"
    assert data["student"]["name"] == "Asha Patil"
    assert data["bank_branch"]["ifsc_code"] == "SBIN0001234"
    assert [t["amount"] for t in data["transactions"]] == [200, 100]
    assert data["balance"] == 600


def test_passbook_transactions_sorted_by_date(client):
    account = create_account(client)
    add_transaction(client, account, "deposit", 20, JUNE_1 + DAY * 2)
    add_transaction(client, account, "deposit", 10, JUNE_1)

    data = client.get("/api/v1/passbook/ACC001", headers=ADMIN).json()
    assert [t["date"] for t in data["transactions"]] == [JUNE_1, JUNE_1 + DAY * 2]
    assert [t["total_amount"] for t in data["transactions"]] == [510, 530]
    assert data["balance"] == 530


def test_passbook_for_orphaned_account(client):
    student = create_student(client)
    create_account(client, student=student)
    client.delete(f"/api/v1/students/{student['id']}", headers=ADMIN)

    response = client.get("/api/v1/passbook/ACC001", headers=ADMIN)
    assert response.status_code == 200
    assert response.json()["student"] is None


def test_passbook_unknown_account(client):
    response = client.get("/api/v1/passbook/NOPE", headers=ADMIN)
    assert response.status_code == 404


def test_account_holder_sees_only_own_passbook(client):
    create_account(client, account_number="ACC001")
    create_account(client, account_number="ACC002")

    assert client.get("/api/v1/passbook/ACC001", headers=user("ACC001")).status_code == 200
    assert client.get("/api/v1/passbook/ACC002", headers=user("ACC001")).status_code == 403
    assert client.get("/api/v1/passbook/ACC001").status_code == 403


# ==================== HISTORY TESTS ====================

def test_history_range_is_inclusive_by_day(client):
    account = create_account(client)
    add_transaction(client, account, "deposit", 10, JUNE_1 + DAY * 5)
    add_transaction(client, account, "deposit", 20, JUNE_1)
    add_transaction(client, account, "deposit", 30, JUNE_1 + DAY + (DAY - 10**9))  # 2024-06-02 23:59:59
    add_transaction(client, account, "deposit", 40, JUNE_1 + DAY * 2)

    response = client.get(
        "/api/v1/history/ACC001",
        params={"date_from": "2024-06-01", "date_to": "2024-06-02"},
        headers=user("ACC001")
    )
    assert response.status_code == 200
    assert [t["amount"] for t in response.json()] == [20, 30]


def test_history_inverted_range_is_empty(client):
    account = create_account(client)
    add_transaction(client, account, "deposit", 10, JUNE_1)

    response = client.get(
        "/api/v1/history/ACC001",
        params={"date_from": "2024-06-30", "date_to": "2024-06-01"},
        headers=ADMIN
    )
    assert response.status_code == 200
    assert response.json() == []


def test_history_unknown_account(client):
    response = client.get(
        "/api/v1/history/NOPE",
        params={"date_from": "2024-06-01", "date_to": "2024-06-30"},
        headers=ADMIN
    )
    assert response.status_code == 404


def test_history_export_csv(client):
    account = create_account(client)
    add_transaction(client, account, "deposit", 200, JUNE_1, reason='Prize "best saver"')

    response = client.get(
        "/api/v1/history/ACC001/export",
        params={"date_from": "2024-06-01", "date_to": "2024-06-30"},
        headers=ADMIN
    )
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "history_ACC001.csv" in response.headers["content-disposition"]

    lines = response.text.splitlines()
    assert lines[0] == '"Account Number","Student Name","Date","Type","Amount","Reason","Balance"'
    assert lines[1] == '"ACC001","Asha Patil","1/6/2024","deposit","200","Prize ""best saver""","700"'


def test_history_export_empty(client):
    create_account(client)
    response = client.get(
        "/api/v1/history/ACC001/export",
        params={"date_from": "2024-06-01", "date_to": "2024-06-30"},
        headers=ADMIN
    )
    assert len(response.text.splitlines()) == 1


# ==================== SUMMARY TESTS ====================

def test_summary(client):
    first = create_account(client, account_number="ACC001", initial_amount=300)
    second = create_account(client, account_number="ACC002", initial_amount=700)
    add_transaction(client, first, "deposit", 150, JUNE_1)
    add_transaction(client, second, "deposit", 50, JUNE_1)
    add_transaction(client, second, "withdrawal", 50, JUNE_1 + DAY)

    response = client.get("/api/v1/summary/", headers=ADMIN)
    assert response.status_code == 200
    assert response.json() == {
        "total_students": 2,
        "total_accounts": 2,
        "total_initial": 1000,
        "total_deposits": 200,
        "total_withdrawals": 50,
        "net_balance": 1150
    }


def test_summary_empty(client):
    data = client.get("/api/v1/summary/", headers=ADMIN).json()
    assert data["net_balance"] == 0
    assert data["total_accounts"] == 0
