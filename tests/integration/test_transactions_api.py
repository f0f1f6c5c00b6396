import uuid

API = "/api/v1"


def _create(client, headers, **overrides):
    payload = {"title": "Coffee", "amount": -4.5, "category": "Food"}
    payload.update(overrides)
    r = client.post(f"{API}/transactions/create", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_create_transaction_defaults(client, user):
    body = _create(client, user["headers"], title="  Salary ", amount=2500, category="", tags=["work", " ", "monthly"])
    assert body["title"] == "Salary"
    assert body["amount"] == 2500
    assert body["category"] == "Others"
    assert body["note"] == ""
    assert body["tags"] == ["work", "monthly"]
    assert body["userId"] == user["user"]["id"]
    assert body["date"]


def test_create_requires_title_and_amount(client, user):
    r = client.post(f"{API}/transactions/create", json={"title": "", "amount": 10}, headers=user["headers"])
    assert r.status_code == 400
    assert r.json()["detail"] == "Title and amount are required"

    r = client.post(f"{API}/transactions/create", json={"title": "Lunch"}, headers=user["headers"])
    assert r.status_code == 400


def test_write_without_credentials_is_rejected(client):
    r = client.post(f"{API}/transactions/create", json={"title": "x", "amount": 1})
    assert r.status_code == 401


def test_pagination_newest_first_with_has_more(client, user):
    for day in range(1, 13):
        _create(client, user["headers"], title=f"t{day:02d}", date=f"2024-03-{day:02d}T10:00:00Z")

    first = client.get(f"{API}/transactions", params={"page": 1, "limit": 5}, headers=user["headers"]).json()
    assert [t["title"] for t in first["transactions"]] == ["t12", "t11", "t10", "t09", "t08"]
    assert first["currentPage"] == 1
    assert first["totalPages"] == 3
    assert first["totalItems"] == 12
    assert first["hasMore"] is True

    last = client.get(f"{API}/transactions", params={"page": 3, "limit": 5}, headers=user["headers"]).json()
    assert [t["title"] for t in last["transactions"]] == ["t02", "t01"]
    assert last["hasMore"] is False

    beyond = client.get(f"{API}/transactions", params={"page": 9, "limit": 5}, headers=user["headers"]).json()
    assert beyond["transactions"] == []
    assert beyond["hasMore"] is False


def test_empty_list(client, user):
    body = client.get(f"{API}/transactions", headers=user["headers"]).json()
    assert body["transactions"] == []
    assert body["totalPages"] == 0
    assert body["totalItems"] == 0
    assert body["hasMore"] is False


def test_invalid_paging_params(client, user):
    assert client.get(f"{API}/transactions", params={"page": 0}, headers=user["headers"]).status_code == 422
    assert client.get(f"{API}/transactions", params={"limit": 1000}, headers=user["headers"]).status_code == 422


def test_search_matches_title_note_and_tags_case_insensitively(client, user):
    _create(client, user["headers"], title="Groceries at market")
    _create(client, user["headers"], title="Bus", note="weekly MARKET pass")
    _create(client, user["headers"], title="Gift", tags=["Marketplace"])
    _create(client, user["headers"], title="Rent")

    body = client.get(f"{API}/transactions", params={"search": "market"}, headers=user["headers"]).json()
    assert sorted(t["title"] for t in body["transactions"]) == ["Bus", "Gift", "Groceries at market"]
    assert body["totalItems"] == 3


def test_search_is_literal_not_pattern(client, user):
    _create(client, user["headers"], title="100% cotton")
    _create(client, user["headers"], title="1000 points")

    body = client.get(f"{API}/transactions", params={"search": "0%"}, headers=user["headers"]).json()
    assert [t["title"] for t in body["transactions"]] == ["100% cotton"]

    body = client.get(f"{API}/transactions", params={"search": "(.*"}, headers=user["headers"]).json()
    assert body["transactions"] == []


def test_filter_by_category_combines_with_search(client, user):
    _create(client, user["headers"], title="Pizza", category="Food")
    _create(client, user["headers"], title="Pizza stone", category="Home")
    _create(client, user["headers"], title="Salad", category="Food")

    food = client.get(f"{API}/transactions", params={"filter": "Food"}, headers=user["headers"]).json()
    assert sorted(t["title"] for t in food["transactions"]) == ["Pizza", "Salad"]

    both = client.get(
        f"{API}/transactions", params={"filter": "Food", "search": "pizza"}, headers=user["headers"]
    ).json()
    assert [t["title"] for t in both["transactions"]] == ["Pizza"]


def test_users_only_see_their_own_transactions(client, make_user):
    alice = make_user()
    bob = make_user()
    txn = _create(client, alice["headers"], title="Alice only")

    bob_list = client.get(f"{API}/transactions", headers=bob["headers"]).json()
    assert bob_list["transactions"] == []
    assert client.get(f"{API}/transactions/{txn['id']}", headers=bob["headers"]).status_code == 404

    r = client.delete(f"{API}/transactions/{txn['id']}", headers=bob["headers"])
    assert r.status_code == 404
    assert r.json()["detail"] == "Transaction not found or unauthorized"
    assert client.get(f"{API}/transactions/{txn['id']}", headers=alice["headers"]).status_code == 200


def test_delete_returns_remaining_transactions(client, user):
    keep = _create(client, user["headers"], title="Keep")
    drop = _create(client, user["headers"], title="Drop")

    r = client.delete(f"{API}/transactions/{drop['id']}", headers=user["headers"])
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Transaction deleted successfully"
    assert [t["id"] for t in body["transactions"]] == [keep["id"]]

    again = client.delete(f"{API}/transactions/{drop['id']}", headers=user["headers"])
    assert again.status_code == 404


def test_malformed_and_unknown_ids_are_not_found(client, user):
    assert client.get(f"{API}/transactions/not-a-uuid", headers=user["headers"]).status_code == 404
    assert client.delete(f"{API}/transactions/{uuid.uuid4()}", headers=user["headers"]).status_code == 404


def test_transaction_summary(client, user):
    _create(client, user["headers"], title="Salary", amount=1000)
    _create(client, user["headers"], title="Rent", amount=-400)
    _create(client, user["headers"], title="Food", amount=-100)

    body = client.get(f"{API}/transactions/summary", headers=user["headers"]).json()
    assert body == {"totalTransactions": 3, "income": 1000.0, "expense": 500.0, "net": 500.0}


def test_search_does_not_match_json_syntax_of_tags(client, user):
    _create(client, user["headers"], title="Coffee", tags=["food"])

    for term in ["[", '"', ","]:
        body = client.get(f"{API}/transactions", params={"search": term}, headers=user["headers"]).json()
        assert body["transactions"] == [], term


def test_search_does_not_span_two_tags(client, user):
    _create(client, user["headers"], title="Coffee", tags=["food", "drink"])

    body = client.get(f"{API}/transactions", params={"search": 'food", "dr'}, headers=user["headers"]).json()
    assert body["transactions"] == []

    body = client.get(f"{API}/transactions", params={"search": "DRI"}, headers=user["headers"]).json()
    assert [t["title"] for t in body["transactions"]] == ["Coffee"]


def test_search_matches_non_ascii_tag(client, user):
    _create(client, user["headers"], title="Lunch", tags=["café"])
    _create(client, user["headers"], title="Dinner", tags=["cafe"])

    body = client.get(f"{API}/transactions", params={"search": "café"}, headers=user["headers"]).json()
    assert [t["title"] for t in body["transactions"]] == ["Lunch"]
