from decimal import Decimal
from uuid import uuid4


async def create_client(api, login="user1", nickname="nickname1"):
    response = await api.post(
        "/api/clients",
        json={"login": login, "password": "secret", "nickname": nickname, "balance": 100.0},
    )
    assert response.status_code == 200
    return response.json()


async def create_game(api, name="Game1", cost="50.0", keys=("key1", "key2")):
    response = await api.post("/api/games", json={"name": name, "cost": cost, "keys": list(keys)})
    assert response.status_code == 201
    return response.json()


async def test_create_and_get_client(api):
    client = await create_client(api)

    assert Decimal(client["balance"]) == Decimal("0")
    assert "password" not in client and "hash_password" not in client

    response = await api.get(f"/api/clients/{client['client_id']}")
    assert response.status_code == 200
    assert response.json()["nickname"] == "nickname1"


async def test_create_client_conflict(api):
    await create_client(api)

    response = await api.post(
        "/api/clients", json={"login": "user1", "password": "x", "nickname": "someone"}
    )
    assert response.status_code == 409


async def test_unknown_ids_are_404(api):
    assert (await api.get(f"/api/clients/{uuid4()}")).status_code == 404
    assert (await api.get(f"/api/games/{uuid4()}")).status_code == 404
    assert (await api.post(f"/api/clients/{uuid4()}/purchase-all")).status_code == 404


async def test_create_game_validation_and_conflict(api):
    game = await create_game(api)
    assert game["sold"] is False
    assert game["keys"] == ["key1", "key2"]

    response = await api.post("/api/games", json={"name": "Game2", "cost": "10"})
    assert response.status_code == 400

    response = await api.post("/api/games", json={"name": "Game2", "cost": "10", "keys": ["key2"]})
    assert response.status_code == 409

    response = await api.get("/api/games")
    assert [entry["name"] for entry in response.json()] == ["Game1"]


async def test_cart_and_purchase_flow(api):
    client = await create_client(api)
    game = await create_game(api)
    client_url = f"/api/clients/{client['client_id']}"

    response = await api.post(f"{client_url}/purchase/{game['game_id']}")
    assert response.status_code == 404

    assert (await api.post(f"{client_url}/cart/{game['game_id']}")).status_code == 200
    assert (await api.post(f"{client_url}/cart/{game['game_id']}")).status_code == 200

    response = await api.post(f"{client_url}/purchase/{game['game_id']}")
    assert response.status_code == 400

    response = await api.post(f"{client_url}/add-balance", params={"amount": "100.0"})
    assert response.status_code == 200

    response = await api.post(f"{client_url}/purchase/{game['game_id']}")
    assert response.status_code == 200
    assert response.content == b""

    body = (await api.get(client_url)).json()
    assert Decimal(body["balance"]) == Decimal("50")
    assert body["cart"] == []
    assert [receipt["license_key"] for receipt in body["purchased"]] == ["key1"]
    assert body["purchased"][0]["sold"] is True

    game_body = (await api.get(f"/api/games/{game['game_id']}")).json()
    assert game_body["keys"] == ["key2"]


async def test_remove_from_cart_statuses(api):
    client = await create_client(api)
    game = await create_game(api)
    cart_url = f"/api/clients/{client['client_id']}/cart/{game['game_id']}"

    assert (await api.delete(cart_url)).status_code == 400

    await api.post(cart_url)
    assert (await api.delete(cart_url)).status_code == 200
    assert (await api.delete(f"/api/clients/{client['client_id']}/cart/{uuid4()}")).status_code == 404


async def test_purchase_all_insufficient_funds(api):
    client = await create_client(api)
    game = await create_game(api)
    client_url = f"/api/clients/{client['client_id']}"
    await api.post(f"{client_url}/cart/{game['game_id']}")

    response = await api.post(f"{client_url}/purchase-all")

    assert response.status_code == 400
    assert len((await api.get(client_url)).json()["cart"]) == 1


async def test_add_balance_rejects_bad_amounts(api):
    client = await create_client(api)
    client_url = f"/api/clients/{client['client_id']}"

    assert (await api.post(f"{client_url}/add-balance", params={"amount": "0"})).status_code == 400
    assert (await api.post(f"{client_url}/add-balance", params={"amount": "-1"})).status_code == 400
    assert (await api.post(f"/api/clients/{uuid4()}/add-balance", params={"amount": "1"})).status_code == 404
    assert Decimal((await api.get(client_url)).json()["balance"]) == Decimal("0")


async def test_actions_return_empty_body(api):
    client = await create_client(api)
    game = await create_game(api)
    client_url = f"/api/clients/{client['client_id']}"

    responses = [
        await api.post(f"{client_url}/add-balance", params={"amount": "100"}),
        await api.post(f"{client_url}/cart/{game['game_id']}"),
        await api.delete(f"{client_url}/cart/{game['game_id']}"),
        await api.post(f"{client_url}/cart/{game['game_id']}"),
        await api.post(f"{client_url}/purchase-all"),
    ]

    assert [response.status_code for response in responses] == [200] * 5
    assert all(response.content == b"" for response in responses)
