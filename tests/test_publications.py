"""
Publication API tests.
- owner is always the authenticated member, the member's name leads the
  author list, list filters / search / ordering, DOI uniqueness and the
  owner-or-admin rule on update and delete.
"""

import uuid
from datetime import date, datetime, timedelta, timezone

from app.models.publication import Publication
from tests.helpers import auth_header, create_user_in_db, get_user, login, setup_admin, setup_member


def _create(client, token, **overrides):
    payload = {"title": "Deep MRI reconstruction", "authors": ["B. Martin"], "year": 2023}
    payload.update(overrides)
    res = client.post("/api/publications", json=payload, headers=auth_header(token))
    assert res.status_code == 201, res.text
    return res.json()["data"]


def test_create_sets_owner_and_leading_author(client, db):
    alice = setup_member(client, db, name="Alice")
    bob = setup_member(client, db, name="Bob")

    pub = _create(client, alice["token"], userId=bob["id"], creatorId=bob["id"])

    assert pub["userId"] == alice["id"]
    assert pub["creatorId"] == alice["id"]
    assert pub["creatorName"] == "Alice"
    assert pub["creatorEmail"] == alice["email"]
    assert pub["authors"] == ["Alice", "B. Martin"]
    assert pub["type"] == "journal"


def test_requester_name_not_duplicated_in_authors(client, db):
    alice = setup_member(client, db, name="Alice")
    pub = _create(client, alice["token"], authors=["X", "Alice"])
    assert pub["authors"] == ["X", "Alice"]


def test_authors_accept_json_text(client, db):
    alice = setup_member(client, db, name="Alice")
    pub = _create(client, alice["token"], authors='["Alice", "C. Durand"]')
    assert pub["authors"] == ["Alice", "C. Durand"]


def test_list_filters_search_and_order(client, db):
    alice = setup_member(client, db, name="Alice")
    bob = setup_member(client, db, name="Bob")

    _create(client, alice["token"], title="Deep MRI", year=2021)
    _create(client, alice["token"], title="Ultrasound imaging", year=2023)
    _create(client, bob["token"], title="deep learning for CT", year=2022)

    res = client.get("/api/publications")
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["count"] == 3
    assert [p["year"] for p in body["data"]] == [2023, 2022, 2021]

    search = client.get("/api/publications", params={"searchTerm": "DEEP"}).json()
    assert sorted(p["title"] for p in search["data"]) == ["Deep MRI", "deep learning for CT"]

    by_year = client.get("/api/publications", params={"year": "2023"}).json()
    assert [p["title"] for p in by_year["data"]] == ["Ultrasound imaging"]

    by_creator = client.get("/api/publications", params={"creatorId": bob["id"]}).json()
    assert [p["title"] for p in by_creator["data"]] == ["deep learning for CT"]

    combined = client.get(
        "/api/publications", params={"creatorId": alice["id"], "searchTerm": "deep"}
    ).json()
    assert [p["title"] for p in combined["data"]] == ["Deep MRI"]


def test_search_matches_author_names(client, db):
    alice = setup_member(client, db, name="Alice")
    _create(client, alice["token"], authors=["Zoé Lambert"])
    _create(client, alice["token"], title="Other", authors=["Someone"])

    res = client.get("/api/publications", params={"searchTerm": "lambert"}).json()
    assert res["count"] == 1
    assert res["data"][0]["authors"] == ["Alice", "Zoé Lambert"]


def test_malformed_year_is_ignored(client, db):
    alice = setup_member(client, db)
    _create(client, alice["token"], year=2020)
    _create(client, alice["token"], year=2021)

    res = client.get("/api/publications", params={"year": "abc"})
    assert res.status_code == 200
    assert res.json()["count"] == 2


def test_duplicate_doi_rejected(client, db):
    alice = setup_member(client, db)
    _create(client, alice["token"], doi="10.1000/xyz")

    dup = client.post(
        "/api/publications",
        json={"title": "Copy", "year": 2024, "doi": "10.1000/xyz"},
        headers=auth_header(alice["token"]),
    )
    assert dup.status_code == 400
    assert dup.json()["message"] == "DOI must be unique."

    # blank DOIs are stored as null and never collide
    _create(client, alice["token"], doi="")
    _create(client, alice["token"], doi="")


def test_update_by_owner_keeps_owner(client, db):
    alice = setup_member(client, db, name="Alice")
    bob = setup_member(client, db, name="Bob")
    pub = _create(client, alice["token"])

    res = client.put(
        f"/api/publications/{pub['id']}",
        json={"title": "Renamed", "userId": bob["id"]},
        headers=auth_header(alice["token"]),
    )
    assert res.status_code == 200, res.text
    data = res.json()["data"]
    assert data["title"] == "Renamed"
    assert data["year"] == 2023
    assert data["creatorId"] == alice["id"]


def test_non_owner_cannot_modify(client, db):
    alice = setup_member(client, db, name="Alice")
    bob = setup_member(client, db, name="Bob")
    pub = _create(client, alice["token"])

    upd = client.put(
        f"/api/publications/{pub['id']}", json={"title": "Hijack"}, headers=auth_header(bob["token"])
    )
    assert upd.status_code == 403
    assert upd.json() == {"success": False, "message": "Not authorized to update this publication"}

    dele = client.delete(f"/api/publications/{pub['id']}", headers=auth_header(bob["token"]))
    assert dele.status_code == 403

    still = client.get(f"/api/publications/{pub['id']}")
    assert still.status_code == 200
    assert still.json()["data"]["title"] == "Deep MRI reconstruction"


def test_admin_can_modify_any(client, db):
    alice = setup_member(client, db, name="Alice")
    admin = setup_admin(client, db)
    pub = _create(client, alice["token"])

    upd = client.put(
        f"/api/publications/{pub['id']}", json={"journal": "IEEE TMI"}, headers=auth_header(admin["token"])
    )
    assert upd.status_code == 200
    assert upd.json()["data"]["journal"] == "IEEE TMI"
    assert upd.json()["data"]["creatorId"] == alice["id"]

    dele = client.delete(f"/api/publications/{pub['id']}", headers=auth_header(admin["token"]))
    assert dele.status_code == 200
    assert dele.json() == {"success": True, "message": "Publication deleted successfully"}
    assert client.get(f"/api/publications/{pub['id']}").status_code == 404


def test_writes_require_token(client, db):
    res = client.post("/api/publications", json={"title": "T", "year": 2020})
    assert res.status_code == 401
    assert res.json()["success"] is False


def test_missing_publication(client, db):
    alice = setup_member(client, db)
    missing = uuid.uuid4()

    assert client.get(f"/api/publications/{missing}").json() == {
        "success": False,
        "message": "Publication not found",
    }
    assert client.put(
        f"/api/publications/{missing}", json={"title": "x"}, headers=auth_header(alice["token"])
    ).status_code == 404
    assert client.delete(f"/api/publications/{missing}", headers=auth_header(alice["token"])).status_code == 404
    assert client.get("/api/publications/not-a-uuid").status_code == 404


def test_missing_required_fields(client, db):
    alice = setup_member(client, db)
    res = client.post("/api/publications", json={"authors": ["A"]}, headers=auth_header(alice["token"]))
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_creating_extends_account_validity(client, db):
    user = create_user_in_db(db, email="soon@lab.org", expiration_date=date.today() + timedelta(days=10))
    token = login(client, "soon@lab.org")

    _create(client, token)

    assert get_user(db, str(user.id)).expiration_date > date.today() + timedelta(days=365)


def test_deleted_owner_leaves_publication_without_creator(client, db):
    alice = setup_member(client, db, name="Alice")
    admin = setup_admin(client, db)
    pub = _create(client, alice["token"])

    res = client.delete(f"/api/users/{alice['id']}", headers=auth_header(admin["token"]))
    assert res.status_code == 200, res.text

    data = client.get(f"/api/publications/{pub['id']}").json()["data"]
    assert data["creatorId"] is None
    assert data["creatorName"] is None


def test_same_year_results_newest_created_first(client, db):
    alice = setup_member(client, db, name="Alice")
    older = _create(client, alice["token"], title="Neural fields for MRI", year=2023)
    newer = _create(client, alice["token"], title="Sparse coding", authors=["P. Neural"], year=2023)
    _create(client, alice["token"], title="Neural nets", year=2022)
    _create(client, alice["token"], title="Ultrasound", year=2023)

    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    db.get(Publication, uuid.UUID(older["id"])).created_at = base
    db.get(Publication, uuid.UUID(newer["id"])).created_at = base + timedelta(hours=1)
    db.commit()

    res = client.get("/api/publications", params={"year": "2023", "searchTerm": "neural"}).json()
    assert [p["id"] for p in res["data"]] == [newer["id"], older["id"]]


def test_rejected_duplicate_doi_leaves_first_record_untouched(client, db):
    alice = setup_member(client, db, name="Alice")
    first = _create(client, alice["token"], title="Original", doi="10.1000/abc")
    other = _create(client, alice["token"], title="Other")

    dup = client.post(
        "/api/publications",
        json={"title": "Copy", "year": 2024, "doi": "10.1000/abc"},
        headers=auth_header(alice["token"]),
    )
    assert dup.status_code == 400
    moved = client.put(
        f"/api/publications/{other['id']}", json={"doi": "10.1000/abc"}, headers=auth_header(alice["token"])
    )
    assert moved.status_code == 400
    assert moved.json()["message"] == "DOI must be unique."

    stored = client.get(f"/api/publications/{first['id']}").json()["data"]
    assert stored["title"] == "Original"
    assert stored["doi"] == "10.1000/abc"
    assert stored["updatedAt"] == first["updatedAt"]
    assert client.get("/api/publications").json()["count"] == 2


def test_authors_cannot_end_up_empty(client, db):
    create_user_in_db(db, email="noname@lab.org", name=None)
    token = login(client, "noname@lab.org")

    res = client.post(
        "/api/publications", json={"title": "T", "year": 2024, "authors": []}, headers=auth_header(token)
    )
    assert res.status_code == 400
    assert res.json()["message"] == "authors cannot be empty"

    pub = _create(client, token)
    upd = client.put(f"/api/publications/{pub['id']}", json={"authors": []}, headers=auth_header(token))
    assert upd.status_code == 400
    assert client.get(f"/api/publications/{pub['id']}").json()["data"]["authors"] == ["B. Martin"]


def test_malformed_authors_on_update_keeps_stored_list(client, db):
    alice = setup_member(client, db, name="Alice")
    pub = _create(client, alice["token"])

    res = client.put(
        f"/api/publications/{pub['id']}", json={"authors": "Bob, Carol"}, headers=auth_header(alice["token"])
    )
    assert res.status_code == 400
    assert res.json()["message"] == "authors must be a JSON array"
    assert client.get(f"/api/publications/{pub['id']}").json()["data"]["authors"] == ["Alice", "B. Martin"]

    ok = client.put(
        f"/api/publications/{pub['id']}", json={"authors": '["Bob", "Carol"]'}, headers=auth_header(alice["token"])
    )
    assert ok.status_code == 200
    assert ok.json()["data"]["authors"] == ["Bob", "Carol"]


def test_over_long_fields_rejected(client, db):
    alice = setup_member(client, db)
    res = client.post(
        "/api/publications",
        json={"title": "T", "year": 2024, "journal": "j" * 256},
        headers=auth_header(alice["token"]),
    )
    assert res.status_code == 400
    assert res.json()["success"] is False

    pub = _create(client, alice["token"])
    upd = client.put(
        f"/api/publications/{pub['id']}", json={"pages": "1" * 51}, headers=auth_header(alice["token"])
    )
    assert upd.status_code == 400
