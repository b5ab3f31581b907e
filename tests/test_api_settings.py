from tests.helpers import create_user

ADMIN = {"X-User-Email": "admin@local.test"}
USER = {"X-User-Email": "user@local.test"}


def seed(db_session):
    create_user(db_session, "admin@local.test", full_name="Admin", is_admin=True)
    create_user(db_session, "user@local.test")


def test_list_settings_requires_auth(client):
    # No header => 401
    r = client.get("/settings")
    assert r.status_code == 401


def test_list_settings(client, db_session):
    seed(db_session)
    r = client.get("/settings", headers=USER)
    assert r.status_code == 200
    by_key = {s["key"]: s for s in r.json()}
    assert by_key["RESPONSES_REQUIRED_TO_VIEW_RESULTS"]["value"] == 5
    assert by_key["EVAL_USE_SAME_VIEW_DATES"]["overridden"] is False


def test_update_setting_requires_admin(client, db_session):
    seed(db_session)
    r = client.put("/settings/EVAL_USE_STOP_DATE", headers=USER, json={"value": True})
    assert r.status_code == 403


def test_setting_lifecycle(client, db_session):
    seed(db_session)

    r = client.put("/settings/eval_use_stop_date", headers=ADMIN, json={"value": True})
    assert r.status_code == 200
    assert r.json() == {
        "key": "EVAL_USE_STOP_DATE",
        "value": True,
        "default": False,
        "overridden": True,
    }

    r = client.get("/settings/EVAL_USE_STOP_DATE", headers=USER)
    assert r.json()["value"] is True

    r = client.delete("/settings/EVAL_USE_STOP_DATE", headers=ADMIN)
    assert r.status_code == 200
    assert r.json()["overridden"] is False
    assert r.json()["value"] is False


def test_update_setting_rejects_wrong_type(client, db_session):
    seed(db_session)
    r = client.put("/settings/EVAL_DEFAULT_START_HOUR", headers=ADMIN, json={"value": "nine"})
    assert r.status_code == 400
    assert r.json()["detail"]["code"] == "invalid_setting"


def test_unknown_setting(client, db_session):
    seed(db_session)
    r = client.get("/settings/NOT_A_SETTING", headers=USER)
    assert r.status_code == 404
