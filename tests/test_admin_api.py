def test_stats_on_empty_marketplace(api, admin_token):
    response = api.client.get(api.url("/admin/stats"), headers=api.auth(admin_token))

    assert response.status_code == 200
    assert response.json()["data"] == {
        "totalUsers": 1,
        "totalProperties": 0,
        "totalRequests": 0,
        "totalCommissions": 0,
        "pendingUsers": 0,
        "pendingProperties": 0,
        "pendingRequests": 0,
        "totalCommissionAmount": 0,
        "totalPlatformFee": 0,
    }


def test_stats_aggregate_activity(api, admin_token):
    _, landlord_token = api.verified_user("LANDLORD", admin_token)
    commissioner, commissioner_token = api.verified_user("COMMISSIONER", admin_token)
    _, tenant_token = api.verified_user("TENANT", admin_token)
    api.register(role="TENANT")
    first = api.create_property(landlord_token).json()["data"]
    api.create_property(landlord_token, title="Second")
    api.client.patch(
        api.url(f"/properties/{first['id']}/verify"), headers=api.auth(admin_token)
    )
    api.client.post(
        api.url("/requests"),
        json={"propertyId": first["id"]},
        headers=api.auth(tenant_token),
    )
    for amount in (10, 30):
        api.client.post(
            api.url("/commissions"),
            json={
                "propertyId": first["id"],
                "commissionerId": commissioner["id"],
                "amount": amount,
            },
            headers=api.auth(commissioner_token),
        )

    stats = api.client.get(
        api.url("/admin/stats"), headers=api.auth(admin_token)
    ).json()["data"]

    assert stats == {
        "totalUsers": 5,
        "totalProperties": 2,
        "totalRequests": 1,
        "totalCommissions": 2,
        "pendingUsers": 1,
        "pendingProperties": 1,
        "pendingRequests": 1,
        "totalCommissionAmount": 40,
        "totalPlatformFee": 3,
    }


def test_stats_are_admin_only(api, admin_token):
    user = api.register().json()["data"]
    token = api.login(user["phone"])

    response = api.client.get(api.url("/admin/stats"), headers=api.auth(token))

    assert response.status_code == 403
    assert response.json() == {"status": "error", "message": "Insufficient permissions"}
