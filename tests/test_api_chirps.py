import uuid

import pytest

from tests.fakes import bearer


@pytest.fixture
def auth(logged_in):
    return bearer(logged_in["token"])


def post_chirp(client, auth, body):
    resp = client.post("/api/chirps", json={"body": body}, headers=auth)
    assert resp.status_code == 201
    return resp.get_json()


def test_create_chirp(client, auth, logged_in):
    chirp = post_chirp(client, auth, "I'm the one who knocks!")
    assert chirp["body"] == "I'm the one who knocks!"
    assert chirp["user_id"] == logged_in["id"]


def test_create_chirp_is_moderated(client, auth):
    chirp = post_chirp(client, auth, "This is a kerfuffle opinion I need to share with the world")
    assert chirp["body"] == "This is a **** opinion I need to share with the world"


def test_create_chirp_ignores_user_id_in_body(client, auth, logged_in):
    resp = client.post("/api/chirps", json={"body": "hi", "user_id": str(uuid.uuid4())}, headers=auth)
    assert resp.get_json()["user_id"] == logged_in["id"]


def test_create_chirp_too_long(client, auth):
    resp = client.post("/api/chirps", json={"body": "x" * 141}, headers=auth)
    assert resp.status_code == 422
    assert resp.get_json()["details"]["body"] == ["Chirp is too long"]


def test_chirp_length_counts_bytes(client, auth):
    assert post_chirp(client, auth, "x" * 140)["body"] == "x" * 140

    # 71 characters, 142 bytes
    resp = client.post("/api/chirps", json={"body": "é" * 71}, headers=auth)
    assert resp.status_code == 422
    assert resp.get_json()["details"]["body"] == ["Chirp is too long"]


def test_empty_chirp_is_accepted(client, auth):
    assert post_chirp(client, auth, "")["body"] == ""


def test_create_chirp_requires_auth(client):
    resp = client.post("/api/chirps", json={"body": "hi"})
    assert resp.status_code == 401


def test_create_chirp_with_forged_token(client, auth):
    header, payload, signature = auth["Authorization"].split(" ")[1].split(".")
    forged = ".".join([header, payload, signature[::-1]])
    resp = client.post("/api/chirps", json={"body": "hi"}, headers=bearer(forged))
    assert resp.status_code == 401
    assert resp.get_json()["error"] == "INVALID_SIGNATURE"


def test_list_and_sort(client, auth):
    bodies = ["first", "second", "third"]
    for body in bodies:
        post_chirp(client, auth, body)

    asc = client.get("/api/chirps").get_json()
    desc = client.get("/api/chirps?sort=desc").get_json()
    assert [c["body"] for c in asc] == bodies
    assert [c["body"] for c in desc] == bodies[::-1]


def test_list_bad_sort(client):
    assert client.get("/api/chirps?sort=sideways").status_code == 400


def test_list_by_author(client, auth, logged_in):
    post_chirp(client, auth, "mine")
    client.post("/api/users", json={"email": "jesse@breakingbad.com", "password": "yo"})
    jesse = client.post("/api/login", json={"email": "jesse@breakingbad.com", "password": "yo"}).get_json()
    post_chirp(client, bearer(jesse["token"]), "yeah science")

    mine = client.get(f"/api/chirps?author_id={logged_in['id']}").get_json()
    assert [c["body"] for c in mine] == ["mine"]
    assert client.get("/api/chirps?author_id=nope").status_code == 400


def test_get_chirp(client, auth):
    chirp = post_chirp(client, auth, "hello")
    assert client.get(f"/api/chirps/{chirp['id']}").get_json() == chirp
    assert client.get(f"/api/chirps/{uuid.uuid4()}").status_code == 404


def test_delete_chirp(client, auth):
    chirp = post_chirp(client, auth, "bye")
    assert client.delete(f"/api/chirps/{chirp['id']}", headers=auth).status_code == 204
    assert client.get(f"/api/chirps/{chirp['id']}").status_code == 404


def test_delete_someone_elses_chirp(client, auth):
    chirp = post_chirp(client, auth, "mine")
    client.post("/api/users", json={"email": "jesse@breakingbad.com", "password": "yo"})
    jesse = client.post("/api/login", json={"email": "jesse@breakingbad.com", "password": "yo"}).get_json()

    resp = client.delete(f"/api/chirps/{chirp['id']}", headers=bearer(jesse["token"]))
    assert resp.status_code == 403
    assert client.get(f"/api/chirps/{chirp['id']}").status_code == 200
