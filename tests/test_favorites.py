from uuid import uuid4


def test_add_check_and_remove_favorite(client, register, add_place):
    _, headers = register()
    place_id = add_place()

    r = client.get(f"/api/favorites/{place_id}/check", headers=headers)
    assert r.json() == {"isFavorite": False}

    r = client.post("/api/favorites", json={"placeId": place_id}, headers=headers)
    assert r.status_code == 201
    assert r.json()["message"] == "Added to favorites"
    assert r.json()["favorite"]["placeId"] == place_id

    r = client.get(f"/api/favorites/{place_id}/check", headers=headers)
    assert r.json() == {"isFavorite": True}

    r = client.delete(f"/api/favorites/{place_id}", headers=headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Removed from favorites"}

    r = client.get(f"/api/favorites/{place_id}/check", headers=headers)
    assert r.json() == {"isFavorite": False}


def test_second_add_conflicts(client, register, add_place):
    _, headers = register()
    place_id = add_place()
    client.post("/api/favorites", json={"placeId": place_id}, headers=headers)

    r = client.post("/api/favorites", json={"placeId": place_id}, headers=headers)
    assert r.status_code == 409
    assert r.json()["message"] == "Already added to favorites"


def test_favorites_are_per_user(client, register, add_place):
    _, headers = register()
    _, other_headers = register(email="grace@quiethours.io")
    place_id = add_place()
    client.post("/api/favorites", json={"placeId": place_id}, headers=headers)

    r = client.post("/api/favorites", json={"placeId": place_id}, headers=other_headers)
    assert r.status_code == 201
    assert client.get("/api/favorites", headers=other_headers).json()["places"][0]["id"] == place_id


def test_remove_missing_favorite(client, register, add_place):
    _, headers = register()
    r = client.delete(f"/api/favorites/{add_place()}", headers=headers)
    assert r.status_code == 404
    assert r.json()["message"] == "Favorite not found"


def test_favorite_unknown_place(client, register):
    _, headers = register()
    r = client.post("/api/favorites", json={"placeId": str(uuid4())}, headers=headers)
    assert r.status_code == 404


def test_list_favorites_most_recent_first(client, register, add_place):
    _, headers = register()
    first = add_place(name="First", address="1 A St")
    second = add_place(name="Second", address="2 B St")
    client.post("/api/favorites", json={"placeId": first}, headers=headers)
    client.post("/api/favorites", json={"placeId": second}, headers=headers)

    r = client.get("/api/favorites", headers=headers)
    assert r.status_code == 200
    assert [place["id"] for place in r.json()["places"]] == [second, first]


def test_favorites_require_auth(client, add_place):
    assert client.get("/api/favorites").status_code == 401
    assert client.post("/api/favorites", json={"placeId": add_place()}).status_code == 401


# ---------- REVIEWS ----------

def test_review_rating_bounds(client, register, add_place):
    _, headers = register()
    place_id = add_place()

    for rating in (1, 5):
        r = client.post("/api/favorites/review", json={"placeId": place_id, "rating": rating}, headers=headers)
        assert r.status_code == 201
        assert r.json()["message"] == "Review added successfully"
        assert r.json()["review"]["rating"] == rating

    for rating in (0, 6):
        r = client.post("/api/favorites/review", json={"placeId": place_id, "rating": rating}, headers=headers)
        assert r.status_code == 400


def test_review_does_not_change_place_rating(client, register, add_place):
    _, headers = register()
    place_id = add_place(rating=3.5)
    client.post("/api/favorites/review", json={"placeId": place_id, "rating": 5}, headers=headers)

    assert client.get(f"/api/places/{place_id}").json()["place"]["rating"] == 3.5


def test_review_unknown_place(client, register):
    _, headers = register()
    r = client.post("/api/favorites/review", json={"placeId": str(uuid4()), "rating": 4}, headers=headers)
    assert r.status_code == 404
