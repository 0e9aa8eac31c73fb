async def _create_book(client, external_id=258027, stock=10, available=None, price="15.99"):
    payload = {"external_id": external_id, "title": "The Lord of the Rings", "price": price, "stock_quantity": stock}
    if available is not None:
        payload["available_quantity"] = available
    return await client.post("/api/books", json=payload)


async def test_user_crud(client):
    created = await client.post("/api/users", json={"name": "Juan Pérez", "email": "juan@example.com"})
    assert created.status_code == 201
    user_id = created.json()["id"]

    assert (await client.get(f"/api/users/{user_id}")).json()["email"] == "juan@example.com"
    assert len((await client.get("/api/users")).json()) == 1

    updated = await client.put(f"/api/users/{user_id}", json={"name": "Juan P.", "email": "jp@example.com"})
    assert updated.status_code == 200
    assert updated.json()["name"] == "Juan P."

    assert (await client.delete(f"/api/users/{user_id}")).status_code == 204
    assert (await client.get(f"/api/users/{user_id}")).status_code == 404


async def test_user_duplicate_email(client):
    await client.post("/api/users", json={"name": "A", "email": "a@example.com"})
    response = await client.post("/api/users", json={"name": "B", "email": "a@example.com"})
    assert response.status_code == 409


async def test_user_invalid_email(client):
    response = await client.post("/api/users", json={"name": "A", "email": "not-an-email"})
    assert response.status_code == 422


async def test_user_with_reservations_cannot_be_deleted(client):
    user = (await client.post("/api/users", json={"name": "A", "email": "a@example.com"})).json()
    await _create_book(client)
    await client.post(
        "/api/reservations",
        json={"user_id": user["id"], "book_external_id": 258027, "rental_days": 3, "start_date": "2026-01-01"},
    )

    assert (await client.delete(f"/api/users/{user['id']}")).status_code == 409


async def test_book_defaults_available_to_stock(client):
    response = await _create_book(client, stock=4)
    assert response.status_code == 201
    assert response.json()["available_quantity"] == 4
    assert response.json()["price"] == "15.99"


async def test_book_available_cannot_exceed_stock(client):
    response = await _create_book(client, stock=2, available=3)
    assert response.status_code == 409


async def test_book_duplicate_external_id(client):
    await _create_book(client)
    assert (await _create_book(client)).status_code == 409


async def test_book_missing(client):
    assert (await client.get("/api/books/1")).status_code == 404


async def test_book_update_shifts_available(client):
    await _create_book(client, stock=10, available=5)

    response = await client.put(
        "/api/books/258027", json={"title": "LOTR", "price": "12.50", "stock_quantity": 12}
    )

    body = response.json()
    assert response.status_code == 200
    assert body["title"] == "LOTR"
    assert body["stock_quantity"] == 12
    assert body["available_quantity"] == 7


async def test_book_update_cannot_drop_below_reserved(client):
    await _create_book(client, stock=10, available=2)

    response = await client.put(
        "/api/books/258027", json={"title": "LOTR", "price": "12.50", "stock_quantity": 7}
    )

    assert response.status_code == 409
    assert (await client.get("/api/books/258027")).json()["stock_quantity"] == 10


async def test_book_delete(client):
    await _create_book(client)
    assert (await client.delete("/api/books/258027")).status_code == 204
    assert (await client.get("/api/books")).json() == []


async def test_book_zero_price_is_rejected(client):
    assert (await _create_book(client, price="0")).status_code == 422
    assert (await client.get("/api/books")).json() == []


async def test_book_update_zero_price_is_rejected(client):
    await _create_book(client)

    response = await client.put(
        "/api/books/258027", json={"title": "LOTR", "price": "0.00", "stock_quantity": 10}
    )

    assert response.status_code == 422
    assert (await client.get("/api/books/258027")).json()["price"] == "15.99"
