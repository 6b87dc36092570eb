"""
HTTP tests for the meal routes.

Requests go through the full FastAPI stack (validation, service, repository,
exception handlers); only the MongoDB collections are mocked.
"""

from bson import ObjectId

from app.config import settings
from test_fixtures import (
    client,
    make_meal_doc,
    make_restaurant_doc,
    mock_db,
    valid_create_payload,
)

MEALS_URL = f"{settings.api_prefix}/meals"
BAD_IDS = ["123", "507f1f77bcf86cd79943901z", "507f1f77bcf86cd7994390110"]


def _shaped(food_name, restaurant_name="Joe's"):
    return {
        "_id": ObjectId(),
        "foodName": food_name,
        "rating": 4.0,
        "imageUrl": "http://x/p.png",
        "restaurant": {"name": restaurant_name, "logo": "http://x/l.png", "status": "open"},
    }


# =============================================================================
# SERVICE ENDPOINTS
# =============================================================================


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"message": "Server is running and DB connected!"}


def test_health_check(client):
    r = client.get(f"{settings.api_prefix}/health-check")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": settings.app_name}


def test_request_id_header(client):
    r = client.get("/")
    assert r.headers["X-Request-ID"]
    assert "X-Process-Time" in r.headers


# =============================================================================
# LIST
# =============================================================================


def test_list_meals_envelope(client, mock_db):
    docs = [_shaped("Margherita Pizza"), _shaped("Pepperoni Pizza")]
    mock_db.meals.aggregate.return_value = iter(docs)
    mock_db.meals.count_documents.return_value = 5

    r = client.get(MEALS_URL, params={"search": "pizza", "limit": "2", "page": "3"})

    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "OK"
    assert body["pagination"] == {"total": 5}
    assert [m["foodName"] for m in body["data"]] == ["Margherita Pizza", "Pepperoni Pizza"]
    assert body["data"][0]["id"] == str(docs[0]["_id"])
    assert body["data"][0]["restaurant"] == {
        "name": "Joe's",
        "logo": "http://x/l.png",
        "status": "open",
    }

    pipeline = mock_db.meals.aggregate.call_args.args[0]
    assert pipeline[0]["$match"]["foodName"]["$options"] == "i"
    assert pipeline[-1] == {"$limit": 2}
    mock_db.meals.count_documents.assert_called_once_with({})


def test_list_meals_defaults(client, mock_db):
    mock_db.meals.aggregate.return_value = iter([])
    mock_db.meals.count_documents.return_value = 0

    r = client.get(MEALS_URL)

    assert r.status_code == 200
    assert r.json() == {"message": "OK", "data": [], "pagination": {"total": 0}}
    pipeline = mock_db.meals.aggregate.call_args.args[0]
    assert "$match" not in pipeline[0]
    assert pipeline[-1] == {"$limit": 8}


def test_list_meals_rejects_bad_limit(client, mock_db):
    r = client.get(MEALS_URL, params={"limit": "ten"})

    assert r.status_code == 400
    assert r.json() == {"error": "limit: must be a positive integer", "message": "Bad Request"}
    assert mock_db.meals.method_calls == []


def test_list_meals_rejects_limit_beyond_int64(client, mock_db):
    r = client.get(MEALS_URL, params={"limit": "99999999999999999999"})

    assert r.status_code == 400
    assert r.json()["error"] == "limit: must be a positive integer"
    assert mock_db.meals.method_calls == []


# =============================================================================
# GET
# =============================================================================


def test_get_meal(client, mock_db):
    restaurant = make_restaurant_doc(status="close")
    meal = make_meal_doc(restaurant=restaurant)
    mock_db.meals.aggregate.return_value = iter([meal])

    r = client.get(f"{MEALS_URL}/{meal['_id']}")

    assert r.status_code == 200
    data = r.json()["data"]
    assert data["id"] == str(meal["_id"])
    assert data["restaurant"]["id"] == str(restaurant["_id"])
    assert data["restaurant"]["status"] == "close"


def test_get_meal_not_found(client, mock_db):
    mock_db.meals.aggregate.return_value = iter([])

    r = client.get(f"{MEALS_URL}/{ObjectId()}")

    assert r.status_code == 404
    assert r.json() == {"error": "Meal not found", "message": "Not Found"}


def test_id_taking_routes_reject_malformed_ids(client, mock_db):
    for bad_id in BAD_IDS:
        url = f"{MEALS_URL}/{bad_id}"
        for r in (client.get(url), client.put(url, json={"rating": 3}), client.delete(url)):
            assert r.status_code == 400
            assert r.json()["error"] == "meal_id: must be a 24 character hex string"
    assert mock_db.meals.method_calls == []
    assert mock_db.restaurants.method_calls == []


# =============================================================================
# CREATE
# =============================================================================


def test_create_meal(client, mock_db):
    r = client.post(MEALS_URL, json=valid_create_payload())

    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Created"
    meal, restaurant = body["data"]["meal"], body["data"]["restaurant"]
    assert meal["restaurant"] == restaurant["id"]
    assert restaurant["status"] == "open"
    assert restaurant["name"] == "Joe's"
    assert meal["rating"] == 4.5
    mock_db.restaurants.insert_one.assert_called_once()
    mock_db.meals.insert_one.assert_called_once()


def test_create_meal_validation_error_never_writes(client, mock_db):
    r = client.post(MEALS_URL, json=valid_create_payload(rating=9))

    assert r.status_code == 400
    assert r.json()["error"].startswith("rating: ")
    assert r.json()["message"] == "Bad Request"
    mock_db.restaurants.insert_one.assert_not_called()
    mock_db.meals.insert_one.assert_not_called()


def test_create_meal_missing_restaurant_field(client, mock_db):
    r = client.post(MEALS_URL, json=valid_create_payload(restaurant={"name": "Joe's"}))

    assert r.status_code == 400
    assert r.json()["error"] == "restaurant.logo: Field required"


def test_create_meal_store_failure_is_generic_500(client, mock_db):
    mock_db.meals.insert_one.side_effect = RuntimeError("disk full on shard-3")

    r = client.post(MEALS_URL, json=valid_create_payload())

    assert r.status_code == 500
    assert r.json() == {"error": "Internal Server Error", "message": "Internal Server Error"}
    assert "shard-3" not in r.text
    mock_db.restaurants.insert_one.assert_called_once()


# =============================================================================
# UPDATE
# =============================================================================


def test_update_meal(client, mock_db):
    meal_id = ObjectId()
    mock_db.meals.find_one_and_update.return_value = make_meal_doc(_id=meal_id)
    mock_db.meals.aggregate.return_value = iter(
        [make_meal_doc(_id=meal_id, food_name="Calzone", restaurant=make_restaurant_doc())]
    )

    r = client.put(f"{MEALS_URL}/{meal_id}", json={"foodName": "Calzone", "spicy": True})

    assert r.status_code == 200
    assert r.json()["data"]["foodName"] == "Calzone"
    assert r.json()["data"]["restaurant"]["name"] == "Joe's Pizzeria"
    update = mock_db.meals.find_one_and_update.call_args.args[1]
    assert update == {"$set": {"foodName": "Calzone", "spicy": True}}


def test_update_meal_without_body(client, mock_db):
    meal = make_meal_doc()
    mock_db.meals.find_one.return_value = meal
    mock_db.meals.aggregate.return_value = iter([meal])

    r = client.put(f"{MEALS_URL}/{meal['_id']}")

    assert r.status_code == 200
    mock_db.meals.find_one_and_update.assert_not_called()


def test_update_meal_not_found(client, mock_db):
    mock_db.meals.find_one_and_update.return_value = None

    r = client.put(f"{MEALS_URL}/{ObjectId()}", json={"rating": 2})

    assert r.status_code == 404
    assert r.json()["error"] == "Meal not found"


def test_update_meal_rejects_boolean_rating(client, mock_db):
    r = client.put(f"{MEALS_URL}/{ObjectId()}", json={"rating": True})

    assert r.status_code == 400
    assert r.json()["error"] == "rating: must be a number"
    assert mock_db.meals.method_calls == []


def test_update_meal_rejects_id_change(client, mock_db):
    r = client.put(f"{MEALS_URL}/{ObjectId()}", json={"_id": str(ObjectId())})

    assert r.status_code == 400
    assert r.json()["error"] == "field '_id' cannot be updated"
    assert mock_db.meals.method_calls == []


# =============================================================================
# DELETE
# =============================================================================


def test_delete_then_get_is_not_found(client, mock_db):
    meal = make_meal_doc(food_name="Doro Wat", rating=5)
    mock_db.meals.find_one_and_delete.return_value = meal
    mock_db.meals.aggregate.return_value = iter([])

    r = client.delete(f"{MEALS_URL}/{meal['_id']}")
    assert r.status_code == 200
    assert r.json()["data"]["foodName"] == "Doro Wat"
    assert r.json()["data"]["restaurant"] == str(meal["restaurant"])

    r = client.get(f"{MEALS_URL}/{meal['_id']}")
    assert r.status_code == 404
    mock_db.restaurants.delete_one.assert_not_called()


def test_delete_meal_not_found(client, mock_db):
    mock_db.meals.find_one_and_delete.return_value = None

    r = client.delete(f"{MEALS_URL}/{ObjectId()}")

    assert r.status_code == 404
    assert r.json() == {"error": "Meal not found", "message": "Not Found"}
