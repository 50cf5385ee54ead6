from conftest import auth_headers

from app.models.user import User, UserStatus


def test_users_require_auth(client):
    assert client.get("/users").status_code == 401


def test_admin_sees_users_from_every_region(client, make_staff, make_customer):
    admin = make_staff("ravi", region="Pune")
    make_customer("pune_user", city="Pune")
    make_customer("delhi_user", city="Delhi")
    body = client.get("/users", headers=auth_headers(admin)).json()
    assert sorted(u["username"] for u in body["users"]) == ["delhi_user", "pune_user"]
    assert body["total"] == 2


def test_admin_without_region_still_sees_users(client, make_staff, make_customer):
    admin = make_staff("ravi")
    make_customer("someone")
    assert client.get("/users", headers=auth_headers(admin)).json()["total"] == 1


def test_search_and_status_filter(client, manager, make_customer):
    make_customer("anil", full_name="Anil Kumar", status=UserStatus.active)
    make_customer("bela", status=UserStatus.inactive)
    h = auth_headers(manager)
    assert [u["username"] for u in client.get("/users", params={"search": "kumar"}, headers=h).json()["users"]] == ["anil"]
    assert [u["username"] for u in client.get("/users", params={"status": "inactive"}, headers=h).json()["users"]] == ["bela"]
    assert client.get("/users", params={"status": "all"}, headers=h).json()["total"] == 2
    assert client.get("/users", params={"status": "bogus"}, headers=h).status_code == 400


def test_get_user(client, manager, make_customer):
    u = make_customer("anil")
    h = auth_headers(manager)
    body = client.get(f"/users/{u.id}", headers=h).json()["user"]
    assert body["email"] == "anil@mail.test"
    assert "user_password" not in body
    assert client.get("/users/9999", headers=h).status_code == 404


def test_create_user(client, make_staff, make_customer, db):
    h = auth_headers(make_staff("ravi", region="Pune"))
    r = client.post("/users", json={"username": "neo", "email": "NEO@mail.test", "segment": "Premium"}, headers=h)
    assert r.status_code == 200
    user = r.json()["user"]
    assert user["status"] == "pending"
    assert user["segment"] == "Premium"
    assert user["email"] == "neo@mail.test"

    assert client.post("/users", json={"username": "neo", "email": "other@mail.test"}, headers=h).status_code == 400
    assert client.post("/users", json={"username": "x"}, headers=h).status_code == 400


def test_update_user(client, manager, make_customer, db):
    u = make_customer("anil")
    make_customer("bela")
    h = auth_headers(manager)
    r = client.put(f"/users/{u.id}", json={"city": "Pune", "status": "active", "username": ""}, headers=h)
    assert r.status_code == 200
    assert r.json()["user"]["city"] == "Pune"
    assert r.json()["user"]["status"] == "active"
    assert r.json()["user"]["username"] == "anil"

    assert client.put(f"/users/{u.id}", json={"email": "bela@mail.test"}, headers=h).status_code == 400
    assert client.put("/users/9999", json={"city": "Pune"}, headers=h).status_code == 404


def test_delete_user_manager_only(client, make_staff, manager, make_customer, db):
    u = make_customer("anil")
    user_id = u.id
    assert client.delete(f"/users/{user_id}", headers=auth_headers(make_staff("ravi"))).status_code == 403
    assert client.delete(f"/users/{user_id}", headers=auth_headers(manager)).status_code == 200
    assert client.delete(f"/users/{user_id}", headers=auth_headers(manager)).status_code == 404
    db.expire_all()
    assert db.query(User).filter_by(id=user_id).count() == 0
