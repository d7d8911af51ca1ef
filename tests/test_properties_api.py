import pytest


@pytest.fixture
def landlord(api, admin_token):
    return api.verified_user("LANDLORD", admin_token)


def test_unverified_owner_cannot_list_until_verified(api, admin_token):
    user = api.register(role="LANDLORD").json()["data"]
    token = api.login(user["phone"])

    rejected = api.create_property(token)
    assert rejected.status_code == 400
    assert rejected.json()["message"] == "Owner must be verified to create properties"

    api.verify_user(user["id"], admin_token)
    created = api.create_property(token)

    assert created.status_code == 201
    prop = created.json()["data"]
    assert prop["status"] == "AVAILABLE"
    assert prop["verified"] is False
    assert prop["ownerId"] == user["id"]
    assert prop["owner"]["id"] == user["id"]
    assert "password" not in prop["owner"]


def test_create_requires_authentication(api):
    response = api.client.post(
        api.url("/properties"),
        json={"title": "x", "type": "HOUSE", "price": 1, "location": "y"},
    )

    assert response.status_code == 401


def test_create_validates_body(api, landlord):
    _, token = landlord

    response = api.create_property(token, title="   ", type="CASTLE", price=-5, rooms=-1)

    assert response.status_code == 400
    assert set(response.json()["errors"]) == {"title", "type", "price", "rooms"}


def test_integers_beyond_column_range_are_rejected(api, landlord):
    _, token = landlord

    too_big = api.create_property(token, price=2**63, rooms=2**31)
    search = api.client.get(api.url("/properties"), params={"minPrice": 2**40})

    assert too_big.status_code == 400
    assert set(too_big.json()["errors"]) == {"price", "rooms"}
    assert search.status_code == 400
    assert "minPrice" in search.json()["errors"]
    assert api.create_property(token, price=2**31 - 1).status_code == 201


def test_create_stores_media_in_order(api, landlord):
    _, token = landlord
    urls = ["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"]

    prop = api.create_property(token, media=urls).json()["data"]

    assert [m["url"] for m in prop["media"]] == urls
    fetched = api.client.get(api.url(f"/properties/{prop['id']}")).json()["data"]
    assert [m["url"] for m in fetched["media"]] == urls


def test_admin_may_create_on_behalf_of_owner(api, admin_token, landlord):
    owner, _ = landlord

    response = api.create_property(admin_token, ownerId=owner["id"])

    assert response.status_code == 201
    assert response.json()["data"]["ownerId"] == owner["id"]


def test_non_admin_owner_id_is_ignored(api, admin_token, landlord):
    owner, _ = landlord
    other, other_token = api.verified_user("LANDLORD", admin_token)

    prop = api.create_property(other_token, ownerId=owner["id"]).json()["data"]

    assert prop["ownerId"] == other["id"]


def test_get_property_is_public_and_404s(api, landlord):
    _, token = landlord
    prop = api.create_property(token).json()["data"]

    found = api.client.get(api.url(f"/properties/{prop['id']}"))
    missing = api.client.get(
        api.url("/properties/00000000-0000-0000-0000-000000000000")
    )
    malformed = api.client.get(api.url("/properties/not-a-uuid"))

    assert found.status_code == 200
    assert found.json()["data"]["title"] == "Two bedroom flat"
    assert missing.status_code == 404
    assert missing.json()["message"] == "Property not found"
    assert malformed.status_code == 400


def test_pagination_second_page(api, landlord):
    _, token = landlord
    for i in range(1, 26):
        assert api.create_property(token, title=f"Listing {i:02d}").status_code == 201

    response = api.client.get(api.url("/properties"), params={"page": 2, "pageSize": 10})

    body = response.json()
    assert response.status_code == 200
    assert body["meta"] == {
        "page": 2,
        "pageSize": 10,
        "totalItems": 25,
        "totalPages": 3,
    }
    # newest first: positions 11-20 are listings 15 down to 6
    assert [p["title"] for p in body["data"]] == [
        f"Listing {i:02d}" for i in range(15, 5, -1)
    ]


def test_page_size_is_clamped(api, landlord):
    _, token = landlord
    api.create_property(token)

    big = api.client.get(api.url("/properties"), params={"pageSize": 500}).json()
    small = api.client.get(
        api.url("/properties"), params={"page": 0, "pageSize": 0}
    ).json()

    assert big["meta"]["pageSize"] == 100
    assert small["meta"]["page"] == 1
    assert small["meta"]["pageSize"] == 10


def test_search_filters_combine(api, admin_token, landlord):
    _, token = landlord
    house = api.create_property(
        token, title="Villa", type="HOUSE", price=500000, location="Kigali, Nyarutarama", rooms=4
    ).json()["data"]
    api.create_property(
        token, title="Studio", type="ROOM", price=60000, location="Kigali, Kimironko", rooms=1
    )
    api.create_property(
        token, title="Plot", type="PLOT", price=900000, location="Musanze", rooms=None
    )
    api.client.patch(
        api.url(f"/properties/{house['id']}/verify"), headers=api.auth(admin_token)
    )

    def titles(**params):
        body = api.client.get(api.url("/properties"), params=params).json()
        return sorted(p["title"] for p in body["data"])

    assert titles(location="kigali") == ["Studio", "Villa"]
    assert titles(minPrice=100000, maxPrice=600000) == ["Villa"]
    assert titles(type="PLOT") == ["Plot"]
    assert titles(rooms=1) == ["Studio"]
    assert titles(verified="true") == ["Villa"]
    assert titles(verified="false", location="KIGALI") == ["Studio"]
    assert titles(status="RENTED") == []
    assert titles(location="100%") == []


def test_update_by_owner(api, landlord):
    _, token = landlord
    prop = api.create_property(token).json()["data"]

    response = api.client.patch(
        api.url(f"/properties/{prop['id']}"),
        json={"price": 175000, "status": "SOLD", "rooms": None},
        headers=api.auth(token),
    )

    assert response.status_code == 200
    updated = response.json()["data"]
    assert updated["price"] == 175000
    assert updated["status"] == "SOLD"
    assert updated["rooms"] is None
    assert updated["title"] == prop["title"]


def test_update_by_stranger_is_forbidden(api, admin_token, landlord):
    _, token = landlord
    prop = api.create_property(token).json()["data"]
    _, stranger_token = api.verified_user("LANDLORD", admin_token)

    response = api.client.patch(
        api.url(f"/properties/{prop['id']}"),
        json={"price": 1},
        headers=api.auth(stranger_token),
    )

    assert response.status_code == 403
    assert response.json()["message"] == "Unauthorized to update this property"


def test_update_by_admin(api, admin_token, landlord):
    _, token = landlord
    prop = api.create_property(token).json()["data"]

    response = api.client.patch(
        api.url(f"/properties/{prop['id']}"),
        json={"title": "Renovated flat"},
        headers=api.auth(admin_token),
    )

    assert response.status_code == 200
    assert response.json()["data"]["title"] == "Renovated flat"


def test_empty_patch_returns_property_unchanged(api, landlord):
    _, token = landlord
    prop = api.create_property(token).json()["data"]

    response = api.client.patch(
        api.url(f"/properties/{prop['id']}"), json={}, headers=api.auth(token)
    )

    assert response.status_code == 200
    assert response.json()["data"]["price"] == prop["price"]


def test_patch_rejects_null_for_required_fields(api, landlord):
    _, token = landlord
    prop = api.create_property(token).json()["data"]

    response = api.client.patch(
        api.url(f"/properties/{prop['id']}"),
        json={"title": None},
        headers=api.auth(token),
    )

    assert response.status_code == 400


def test_update_unknown_property(api, landlord):
    _, token = landlord

    response = api.client.patch(
        api.url("/properties/00000000-0000-0000-0000-000000000000"),
        json={"price": 1},
        headers=api.auth(token),
    )

    assert response.status_code == 404


def test_verify_and_pending_queue(api, admin_token, landlord):
    _, token = landlord
    first = api.create_property(token, title="First").json()["data"]
    second = api.create_property(token, title="Second").json()["data"]

    assert (
        api.client.patch(
            api.url(f"/properties/{first['id']}/verify"), headers=api.auth(token)
        ).status_code
        == 403
    )

    verified = api.client.patch(
        api.url(f"/properties/{first['id']}/verify"), headers=api.auth(admin_token)
    )
    assert verified.json()["data"]["verified"] is True

    pending = api.client.get(
        api.url("/properties/pending/verification"), headers=api.auth(admin_token)
    ).json()
    assert [p["id"] for p in pending["data"]] == [second["id"]]


def test_list_properties_of_owner(api, admin_token, landlord):
    owner, token = landlord
    api.create_property(token, title="Mine")
    _, other_token = api.verified_user("LANDLORD", admin_token)
    api.create_property(other_token, title="Theirs")

    response = api.client.get(
        api.url(f"/users/{owner['id']}/properties"), headers=api.auth(token)
    )

    assert response.status_code == 200
    assert [p["title"] for p in response.json()["data"]] == ["Mine"]
