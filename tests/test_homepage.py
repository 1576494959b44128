"""
Homepage content tests (hero, carousel, presentation page).
- default records created on first read, admin-only writes, unique
  carousel orders and reordering, presentation blocks with uploaded
  images and the director card.
"""

import json
import uuid

from app.services.uploads import local_path
from tests.helpers import auth_header, png_file, setup_admin, setup_member


# Hero

def test_hero_default_created_on_first_read(client):
    first = client.get("/api/hero")
    assert first.status_code == 200
    data = first.json()["data"]
    assert data["title"] == "Welcome to LABTIM"
    assert data["buttonContent"] == "Learn More"
    assert data["imageUrl"] is None

    second = client.get("/api/hero").json()["data"]
    assert second["id"] == data["id"]


def test_hero_first_update_needs_image(client, db):
    admin = setup_admin(client, db)

    res = client.put("/api/hero", data={"title": "Hello"}, headers=auth_header(admin["token"]))
    assert res.status_code == 400
    assert res.json()["message"] == "An image is required to create the initial Hero section."

    created = client.put(
        "/api/hero",
        data={"title": "Hello", "buttonContent": "Explore"},
        files={"image": png_file()},
        headers=auth_header(admin["token"]),
    )
    assert created.status_code == 200, created.text
    hero = created.json()["data"]
    assert hero["title"] == "Hello"
    assert hero["buttonContent"] == "Explore"
    assert hero["imageUrl"].startswith("/uploads/hero_images/")


def test_hero_update_and_clear_image(client, db):
    admin = setup_admin(client, db)
    client.get("/api/hero")

    with_image = client.put(
        "/api/hero", files={"image": png_file()}, headers=auth_header(admin["token"])
    ).json()["data"]
    stored = with_image["imageUrl"]
    assert with_image["title"] == "Welcome to LABTIM"

    cleared = client.put(
        "/api/hero", data={"imageUrl": "null", "description": "Updated"}, headers=auth_header(admin["token"])
    )
    assert cleared.status_code == 200, cleared.text
    assert cleared.json()["data"]["imageUrl"] is None
    assert cleared.json()["data"]["description"] == "Updated"
    assert not local_path(stored).exists()


def test_hero_update_is_admin_only(client, db):
    member = setup_member(client, db)
    res = client.put("/api/hero", data={"title": "x"}, headers=auth_header(member["token"]))
    assert res.status_code == 403
    assert client.put("/api/hero", data={"title": "x"}).status_code == 401


# Carousel

def _slide(client, token, order, title=None):
    res = client.post(
        "/api/carousel",
        data={"order": str(order), "title": title or f"Slide {order}"},
        files={"image": png_file()},
        headers=auth_header(token),
    )
    assert res.status_code == 201, res.text
    return res.json()["data"]


def test_carousel_create_rules(client, db):
    admin = setup_admin(client, db)
    token = admin["token"]

    no_image = client.post("/api/carousel", data={"order": "1"}, headers=auth_header(token))
    assert no_image.status_code == 400
    assert no_image.json()["message"] == "Une image est requise pour créer un élément de carrousel."

    no_order = client.post("/api/carousel", files={"image": png_file()}, headers=auth_header(token))
    assert no_order.status_code == 400

    for order in ("1e400", "inf", "abc"):
        bad_order = client.post(
            "/api/carousel", data={"order": order}, files={"image": png_file()}, headers=auth_header(token)
        )
        assert bad_order.status_code == 400
        assert bad_order.json()["message"] == "L'ordre est un champ obligatoire et doit être un nombre valide."

    _slide(client, token, 2)
    _slide(client, token, 1)
    taken = client.post(
        "/api/carousel", data={"order": "1"}, files={"image": png_file()}, headers=auth_header(token)
    )
    assert taken.status_code == 400
    assert "existe déjà" in taken.json()["message"]

    listed = client.get("/api/carousel").json()
    assert [s["order"] for s in listed["data"]] == [1, 2]


def test_carousel_reorder_swaps_slides(client, db):
    admin = setup_admin(client, db)
    token = admin["token"]
    a = _slide(client, token, 1, "A")
    b = _slide(client, token, 2, "B")
    c = _slide(client, token, 3, "C")

    res = client.put(
        "/api/carousel/reorder",
        json={"items": [{"id": a["id"], "order": 3}, {"id": c["id"], "order": 1}, {"id": b["id"], "order": 2}]},
        headers=auth_header(token),
    )
    assert res.status_code == 200, res.text
    assert res.json() == {"success": True, "message": "Carousel order updated successfully."}

    titles = [s["title"] for s in client.get("/api/carousel").json()["data"]]
    assert titles == ["C", "B", "A"]


def test_carousel_reorder_rejects_bad_input(client, db):
    admin = setup_admin(client, db)
    token = admin["token"]
    a = _slide(client, token, 1, "A")
    b = _slide(client, token, 2, "B")

    same_order = client.put(
        "/api/carousel/reorder",
        json={"items": [{"id": a["id"], "order": 5}, {"id": b["id"], "order": 5}]},
        headers=auth_header(token),
    )
    assert same_order.status_code == 400

    unknown = client.put(
        "/api/carousel/reorder",
        json={"items": [{"id": a["id"], "order": 2}, {"id": str(uuid.uuid4()), "order": 1}]},
        headers=auth_header(token),
    )
    assert unknown.status_code == 404

    empty = client.put("/api/carousel/reorder", json={"items": []}, headers=auth_header(token))
    assert empty.status_code == 400

    titles = [s["title"] for s in client.get("/api/carousel").json()["data"]]
    assert titles == ["A", "B"]


def test_carousel_update_and_delete(client, db):
    admin = setup_admin(client, db)
    token = admin["token"]
    slide = _slide(client, token, 1)
    old_image = slide["imageUrl"]

    upd = client.put(
        f"/api/carousel/{slide['id']}",
        data={"link": "https://labtim.example/news", "order": "4"},
        files={"image": png_file()},
        headers=auth_header(token),
    )
    assert upd.status_code == 200, upd.text
    data = upd.json()["data"]
    assert data["order"] == 4
    assert data["link"] == "https://labtim.example/news"
    assert data["title"] == "Slide 1"
    assert not local_path(old_image).exists()

    assert client.get(f"/api/carousel/{slide['id']}").json()["data"]["order"] == 4

    gone = client.delete(f"/api/carousel/{slide['id']}", headers=auth_header(token))
    assert gone.json() == {"success": True, "message": "Carousel item deleted successfully"}
    assert not local_path(data["imageUrl"]).exists()
    assert client.get(f"/api/carousel/{slide['id']}").status_code == 404


# Presentation

def test_presentation_default(client):
    res = client.get("/api/presentation/main")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["sectionName"] == "main_presentation"
    assert data["contentBlocks"] == []
    assert data["counter1Label"] == "Permanents"
    assert data["counter1Value"] == 0


def test_presentation_update_with_block_images(client, db):
    admin = setup_admin(client, db)
    blocks = [
        {"id": "b1", "type": "text", "content": "<p>Le laboratoire</p>"},
        {"id": "b2", "type": "image", "url": "blob:http://localhost/123", "width": 300},
        {"id": "b3", "type": "image", "url": "blob:http://localhost/456", "width": 200},
    ]

    res = client.put(
        "/api/presentation/main",
        data={
            "contentBlocks": json.dumps(blocks),
            "directorName": "Pr. Benali",
            "counter1Value": "12",
            "counter2Label": "Brevets",
        },
        files={"image_1": png_file("block.png"), "directorImage": png_file("director.png")},
        headers=auth_header(admin["token"]),
    )
    assert res.status_code == 200, res.text
    data = res.json()["data"]

    text_block, uploaded_block, blob_block = data["contentBlocks"]
    assert text_block["content"] == "<p>Le laboratoire</p>"
    assert uploaded_block["url"].startswith("/uploads/presentation_images/")
    assert uploaded_block["width"] == 300
    assert blob_block["url"] is None
    assert blob_block["width"] is None

    assert data["directorName"] == "Pr. Benali"
    assert data["directorImage"].startswith("/uploads/presentation_images/")
    assert data["counter1Value"] == 12
    assert data["counter2Label"] == "Brevets"
    assert data["counter3Label"] == "Articles publiés"

    # dropping the image block and the director picture removes both files
    block_image = uploaded_block["url"]
    director_image = data["directorImage"]
    res = client.put(
        "/api/presentation/main",
        data={"contentBlocks": json.dumps([text_block]), "directorImage": "null"},
        headers=auth_header(admin["token"]),
    )
    assert res.status_code == 200, res.text
    assert res.json()["data"]["directorImage"] is None
    assert len(res.json()["data"]["contentBlocks"]) == 1
    assert not local_path(block_image).exists()
    assert not local_path(director_image).exists()


def test_presentation_rejects_bad_input(client, db):
    admin = setup_admin(client, db)

    bad_json = client.put(
        "/api/presentation/main", data={"contentBlocks": "{not json"}, headers=auth_header(admin["token"])
    )
    assert bad_json.status_code == 400

    bad_counter = client.put(
        "/api/presentation/main",
        data={"contentBlocks": "[]", "counter1Value": "many"},
        headers=auth_header(admin["token"]),
    )
    assert bad_counter.status_code == 400
    assert bad_counter.json()["message"] == "counter1Value must be an integer"

    member = setup_member(client, db)
    denied = client.put(
        "/api/presentation/main", data={"contentBlocks": "[]"}, headers=auth_header(member["token"])
    )
    assert denied.status_code == 403
