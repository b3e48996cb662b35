from pantry_chef.errors import UpstreamFetchFailed

from fakes import AUTH_HEADERS, USER_ID, make_onboarding


def seed_user(fake_db, onboarding=None):
    data = {"email": "cook@example.com"}
    if onboarding is not None:
        data["onboarding"] = onboarding
    fake_db.collection("users").document(USER_ID).set(data)


def test_home(client):
    assert client.get("/").status_code == 200


def test_discovery_requires_a_token(client, spoonacular):
    assert client.get("/api/discovery/random").status_code == 401
    response = client.get("/api/discovery/random", headers={"Authorization": "Bearer forged"})
    assert response.status_code == 401
    spoonacular.get_random_recipes.assert_not_called()


def test_random_recipes(client, fake_db, spoonacular):
    seed_user(fake_db, make_onboarding({"nuts": True}, {"vegan": True}))
    spoonacular.get_random_recipes.return_value = [{
        "id": 11,
        "title": "Lentil Soup",
        "summary": "<p>Warm &amp; hearty</p>",
        "extendedIngredients": [{"name": "lentils", "amount": 1, "unit": "cup"}],
        "instructions": "1. Simmer.",
    }]

    response = client.get("/api/discovery/random", headers=AUTH_HEADERS)

    assert response.status_code == 200
    body = response.get_json()
    assert body["count"] == 1
    recipe = body["recipes"][0]
    assert recipe["recipeId"] == 11
    assert recipe["description"] == "Warm   hearty"
    assert recipe["instructions"] == [{"stepNumber": 1, "instruction": "Simmer."}]
    params = spoonacular.get_random_recipes.call_args.args[0]
    assert params["includeTags"] == "vegan"
    assert params["excludeTags"] == "tree nuts,peanuts"


def test_random_recipes_with_no_matches_is_empty_200(client, fake_db, spoonacular):
    seed_user(fake_db, make_onboarding())
    spoonacular.get_random_recipes.return_value = []
    response = client.get("/api/discovery/random", headers=AUTH_HEADERS)
    assert response.status_code == 200
    assert response.get_json()["recipes"] == []
    assert spoonacular.get_random_recipes.call_count == 3


def test_random_recipes_unknown_user(client, spoonacular):
    response = client.get("/api/discovery/random", headers=AUTH_HEADERS)
    assert response.status_code == 404
    spoonacular.get_random_recipes.assert_not_called()


def test_random_recipes_without_onboarding(client, fake_db):
    seed_user(fake_db)
    response = client.get("/api/discovery/random", headers=AUTH_HEADERS)
    assert response.status_code == 400
    assert response.get_json()["error"] == "User onboarding data not found"


def test_upstream_failure_is_a_502(client, fake_db, spoonacular):
    seed_user(fake_db, make_onboarding({"soy": True}))
    spoonacular.get_random_recipes.side_effect = UpstreamFetchFailed(
        "Spoonacular API error", detail="Daily points limit reached", status_code=402
    )
    response = client.get("/api/discovery/random", headers=AUTH_HEADERS)
    assert response.status_code == 502
    assert response.get_json()["details"] == "Daily points limit reached"
    assert spoonacular.get_random_recipes.call_count == 1


def test_unexpected_client_error_is_a_502(client, fake_db, spoonacular):
    seed_user(fake_db, make_onboarding())
    spoonacular.get_random_recipes.side_effect = RuntimeError("socket closed")
    response = client.get("/api/discovery/random", headers=AUTH_HEADERS)
    assert response.status_code == 502
    assert "socket closed" in response.get_json()["details"]
    assert spoonacular.get_random_recipes.call_count == 1


def test_search(client, fake_db, spoonacular):
    seed_user(fake_db, make_onboarding(dietary={"glutenFree": True}))
    spoonacular.search_recipes.return_value = [{"id": 3, "title": "Risotto"}]
    response = client.get("/api/discovery/search?query=risotto", headers=AUTH_HEADERS)
    assert response.status_code == 200
    body = response.get_json()
    assert body["query"] == "risotto"
    assert body["recipes"][0]["title"] == "Risotto"
    query, params = spoonacular.search_recipes.call_args.args
    assert query == "risotto"
    assert params["intolerances"] == "gluten"


def test_search_with_blank_query(client, fake_db, spoonacular):
    seed_user(fake_db, make_onboarding())
    response = client.get("/api/discovery/search?query=%20%20", headers=AUTH_HEADERS)
    assert response.status_code == 400
    spoonacular.search_recipes.assert_not_called()


def test_recipe_details(client, spoonacular):
    spoonacular.get_recipe_information.return_value = {"id": 9, "title": "Pie", "servings": 8}
    response = client.get("/api/discovery/recipes/9", headers=AUTH_HEADERS)
    assert response.status_code == 200
    assert response.get_json()["recipe"]["servings"] == 8


def test_recipe_details_not_found(client, spoonacular):
    spoonacular.get_recipe_information.side_effect = UpstreamFetchFailed("missing", status_code=404)
    assert client.get("/api/discovery/recipes/9", headers=AUTH_HEADERS).status_code == 404


def test_preferences_round_trip(client, fake_db):
    seed_user(fake_db)
    response = client.put(
        "/api/discovery/preferences",
        json={"onboarding": {"allergies": {"eggs": True}}},
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 200
    assert response.get_json()["resolved"]["allergies"]["eggs"] is True

    body = client.get("/api/discovery/preferences", headers=AUTH_HEADERS).get_json()
    assert body["preferences"] == {"allergies": {"eggs": True}}
    assert body["resolved"]["dietaryPreferences"]["vegan"] is False


def test_preferences_rejects_non_boolean_flags(client, fake_db):
    seed_user(fake_db)
    response = client.put(
        "/api/discovery/preferences",
        json={"onboarding": {"allergies": {"eggs": "yes"}}},
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 400


def test_pantry_crud(client, fake_db):
    response = client.post(
        "/api/pantry",
        json={"title": "Milk", "quantity": 2, "category": "dairy", "location": "fridge"},
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 201
    item_id = response.get_json()["item"]["id"]

    listing = client.get("/api/pantry", headers=AUTH_HEADERS).get_json()
    assert [i["title"] for i in listing["fridge"]] == ["Milk"]
    assert listing["pantry"] == []

    response = client.put(f"/api/pantry/{item_id}", json={"quantity": 1}, headers=AUTH_HEADERS)
    assert response.status_code == 200
    assert client.get(f"/api/pantry/{item_id}", headers=AUTH_HEADERS).get_json()["quantity"] == 1

    assert client.delete(f"/api/pantry/{item_id}", headers=AUTH_HEADERS).status_code == 200
    assert client.get(f"/api/pantry/{item_id}", headers=AUTH_HEADERS).status_code == 404


def test_pantry_rejects_unknown_location(client, fake_db):
    response = client.post(
        "/api/pantry",
        json={"title": "Milk", "quantity": 2, "category": "dairy", "location": "garage"},
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 400


def test_shopping_item_crud(client, fake_db):
    response = client.post("/api/shopping-list", json={"title": "Bread", "quantity": 1}, headers=AUTH_HEADERS)
    assert response.status_code == 201
    item_id = response.get_json()["item"]["id"]

    response = client.put(f"/api/shopping-list/{item_id}", json={"quantity": 2}, headers=AUTH_HEADERS)
    assert response.get_json()["item"]["title"] == "Bread"
    assert client.get(f"/api/shopping-list/{item_id}", headers=AUTH_HEADERS).get_json()["quantity"] == 2

    assert client.delete(f"/api/shopping-list/{item_id}", headers=AUTH_HEADERS).status_code == 200
    assert client.delete(f"/api/shopping-list/{item_id}", headers=AUTH_HEADERS).status_code == 404


def test_generate_shopping_list(client, fake_db):
    client.post(
        "/api/pantry",
        json={"title": "Eggs", "quantity": 2, "category": "dairy", "location": "fridge"},
        headers=AUTH_HEADERS,
    )
    response = client.post(
        "/api/shopping-list/generate",
        json={
            "recipeId": 716429,
            "recipeName": "Omelette",
            "ingredients": [{"name": "eggs", "quantity": 3, "unit": ""}, {"name": "Cheese", "quantity": 50, "unit": "g"}],
        },
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 201
    shopping_list = response.get_json()["list"]
    assert shopping_list["totalItems"] == 2
    assert [(i["name"], i["quantity"]) for i in shopping_list["items"]] == [("eggs", 1.0), ("Cheese", 50.0)]

    lists = client.get("/api/shopping-list", headers=AUTH_HEADERS).get_json()
    assert [entry["listName"] for entry in lists] == ["Omelette"]


def test_generate_when_pantry_has_everything(client, fake_db):
    client.post(
        "/api/pantry",
        json={"title": "Eggs", "quantity": 6, "category": "dairy", "location": "fridge"},
        headers=AUTH_HEADERS,
    )
    response = client.post(
        "/api/shopping-list/generate",
        json={"recipeId": 1, "recipeName": "Omelette", "ingredients": [{"name": "eggs", "quantity": 3}]},
        headers=AUTH_HEADERS,
    )
    assert response.status_code == 200
    assert response.get_json()["list"] is None


def test_health_reports_services(client, fake_db, monkeypatch):
    from pantry_chef import firebase_service

    monkeypatch.setattr(firebase_service.auth, "list_users", lambda max_results: [])
    response = client.get("/health")
    assert response.status_code == 200
    assert response.get_json()["services"] == {"firestore": "connected", "auth": "connected"}
    assert fake_db.docs == {}


def test_health_reports_auth_failure(client, fake_db, monkeypatch):
    from pantry_chef import firebase_service

    def list_users(max_results):
        raise RuntimeError("auth unavailable")

    monkeypatch.setattr(firebase_service.auth, "list_users", list_users)
    response = client.get("/health")
    assert response.status_code == 503
    assert response.get_json()["message"] == "Auth service failed"
