from datetime import date

from bodytrack.utils.dates import local_today, most_recent_sunday


def test_manual_update_uses_last_sunday_weight(client, make_user, make_log, auth_headers):
    user_id = make_user()
    make_log(user_id, most_recent_sunday(local_today()), weight=80)

    response = client.post("/api/goals/manual-update", headers=auth_headers(user_id))

    assert response.status_code == 200
    body = response.get_json()
    assert body["maintenance_calories"] == 2128
    assert body["protein_goal"] == 136
    assert body["last_weekly_update"] == local_today().isoformat()
    assert "password_hash" not in body


def test_manual_update_twice_gives_same_goals(client, make_user, make_log, auth_headers):
    user_id = make_user()
    make_log(user_id, most_recent_sunday(local_today()), weight=76.3)
    headers = auth_headers(user_id)

    first = client.post("/api/goals/manual-update", headers=headers).get_json()
    second = client.post("/api/goals/manual-update", headers=headers).get_json()

    assert first["maintenance_calories"] == second["maintenance_calories"] == 2030
    assert first["protein_goal"] == second["protein_goal"] == 130


def test_manual_update_ignores_weekly_marker(client, make_user, make_log, auth_headers):
    today = local_today()
    user_id = make_user(last_weekly_update=today, maintenance_calories=1500, protein_goal=90)
    make_log(user_id, most_recent_sunday(today), weight=70)

    response = client.post("/api/goals/manual-update", headers=auth_headers(user_id))

    assert response.status_code == 200
    assert response.get_json()["maintenance_calories"] == 1862


def test_manual_update_without_anchor_log_is_client_error(client, make_user, make_log, auth_headers, get_user):
    user_id = make_user(maintenance_calories=2000, protein_goal=120)

    response = client.post("/api/goals/manual-update", headers=auth_headers(user_id))

    assert response.status_code == 400
    assert "No weight log found for last Sunday" in response.get_json()["error"]
    user = get_user(user_id)
    assert user["maintenance_calories"] == 2000
    assert user["last_weekly_update"] is None


def test_manual_update_with_weightless_anchor_log_is_client_error(client, make_user, make_log, auth_headers):
    user_id = make_user()
    make_log(user_id, most_recent_sunday(local_today()), weight=None, calories=(400, 600, 700))

    response = client.post("/api/goals/manual-update", headers=auth_headers(user_id))

    assert response.status_code == 400


def test_manual_update_requires_token(client):
    response = client.post("/api/goals/manual-update")
    assert response.status_code == 401
    assert response.get_json()["error"] == "No token, authorization denied"


def test_set_target_weight(client, make_user, auth_headers):
    user_id = make_user()

    response = client.put(
        "/api/goals/target-weight", json={"target_weight": 72.5}, headers=auth_headers(user_id)
    )

    assert response.status_code == 200
    assert response.get_json()["target_weight"] == 72.5


def test_set_target_weight_accepts_camel_case(client, make_user, auth_headers):
    user_id = make_user()

    response = client.put(
        "/api/goals/target-weight", json={"targetWeight": 68}, headers=auth_headers(user_id)
    )

    assert response.status_code == 200
    assert response.get_json()["target_weight"] == 68


def test_set_target_weight_requires_value(client, make_user, auth_headers):
    user_id = make_user()

    response = client.put("/api/goals/target-weight", json={}, headers=auth_headers(user_id))

    assert response.status_code == 400
    assert response.get_json()["error"] == "Target weight is required."


def test_weekly_summary_endpoint(client, make_user, make_log, auth_headers):
    user_id = make_user(maintenance_calories=2128, protein_goal=136)
    other_id = make_user(email="other@example.com")
    make_log(user_id, date(2024, 6, 2), weight=80.0, calories=(500, 700, 800), protein=(30, 40, 50))
    make_log(user_id, date(2024, 6, 4), weight=79.6, calories=(400, 600, 1000), protein=(20, 40, 60))
    make_log(user_id, date(2024, 6, 9), weight=79.1, calories=(300, 600, 900), protein=(30, 30, 30))
    make_log(other_id, date(2024, 6, 9), weight=100)

    response = client.get("/api/goals/weekly-summary", headers=auth_headers(user_id))

    assert response.status_code == 200
    weeks = response.get_json()
    assert [w["week_start"] for w in weeks] == ["2024-06-09", "2024-06-02"]
    assert weeks[0] == {
        "week_start": "2024-06-09",
        "avg_calories": 1800,
        "avg_protein": 90,
        "log_count": 1,
        "weight": 79.1,
        "calorie_goal": 1628,
        "protein_goal": 136,
    }
    assert weeks[1]["log_count"] == 2
    assert weeks[1]["avg_calories"] == 2000
    assert weeks[1]["avg_protein"] == 120
    assert weeks[1]["weight"] == 79.6


def test_set_target_weight_rejects_non_finite_values(client, make_user, auth_headers):
    headers = auth_headers(make_user())

    for value in ("Infinity", "NaN"):
        response = client.put("/api/goals/target-weight", json={"target_weight": value}, headers=headers)
        assert response.status_code == 400
        assert response.get_json()["error"] == "Target weight must be a number."


def test_manual_update_after_rejected_infinite_weight(client, make_user, make_log, auth_headers):
    user_id = make_user()
    headers = auth_headers(user_id)
    anchor = most_recent_sunday(local_today())

    response = client.post(
        "/api/logs", json={"weight": "Infinity", "log_date": anchor.isoformat()}, headers=headers
    )
    assert response.status_code == 400

    # nothing was logged for the anchor day, so there is nothing to recalculate from
    assert client.post("/api/goals/manual-update", headers=headers).status_code == 400
