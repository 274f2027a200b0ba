from unittest.mock import MagicMock, patch

import pytest
from botocore.exceptions import ClientError

from photobooth.domain.gallery.service import build_upload_path, storage_path_from_url
from photobooth.models import GalleryImage, GalleryImageTag, GalleryTag

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"0" * 128


@pytest.fixture
def storage_client():
    mock_client = MagicMock()
    mock_client.put_object.return_value = {}
    mock_client.delete_objects.return_value = {"Deleted": []}
    with patch("photobooth.storage.get_storage_client", return_value=mock_client):
        yield mock_client


@pytest.fixture
def tags(db):
    wedding = GalleryTag(name="mariage", color="#ec4899")
    corporate = GalleryTag(name="entreprise")
    db.add_all([wedding, corporate])
    db.commit()
    return wedding, corporate


def upload(client, tag_ids=(), caption=None, is_public=True, content_type="image/png", data=PNG_BYTES):
    form = {"is_public": str(is_public).lower(), "tag_ids": list(tag_ids)}
    if caption is not None:
        form["caption"] = caption
    return client.post(
        "/admin/gallery",
        data=form,
        files={"file": ("soiree.png", data, content_type)},
    )


def test_upload_path_layout():
    path = build_upload_path("Mon Image.JPG")
    prefix, name = path.split("/")
    millis, rest = name.split("-", 1)
    assert prefix == "uploads"
    assert millis.isdigit()
    assert rest.endswith(".jpg")


def test_storage_path_from_public_url():
    url = "https://backend.test/storage/v1/object/public/gallery-images/uploads/1700000000000-ab12.png"
    assert storage_path_from_url(url) == "uploads/1700000000000-ab12.png"


def test_upload_stores_file_and_links_tags(admin_client, db, storage_client, tags):
    wedding, _ = tags

    response = upload(admin_client, tag_ids=[wedding.id], caption="Mariage à Lyon")

    assert response.status_code == 201
    body = response.json()
    assert body["caption"] == "Mariage à Lyon"
    assert body["imageUrl"].startswith(
        "https://backend.test/storage/v1/object/public/gallery-images/uploads/"
    )
    assert [t["name"] for t in body["tags"]] == ["mariage"]

    kwargs = storage_client.put_object.call_args.kwargs
    assert kwargs["Bucket"] == "gallery-images"
    assert kwargs["Key"].startswith("uploads/")
    assert kwargs["ContentType"] == "image/png"
    assert db.query(GalleryImageTag).count() == 1


def test_caption_defaults_to_photo(admin_client, storage_client):
    response = upload(admin_client, caption="  ")
    assert response.json()["caption"] == "Photo"


def test_rejects_unsupported_type(admin_client, db, storage_client):
    response = upload(admin_client, content_type="image/gif")

    assert response.status_code == 422
    assert "file" in response.json()["errors"]
    storage_client.put_object.assert_not_called()
    assert db.query(GalleryImage).count() == 0


def test_rejects_files_over_5mb(admin_client, storage_client):
    response = upload(admin_client, data=b"0" * (5 * 1024 * 1024 + 1))
    assert response.status_code == 422
    storage_client.put_object.assert_not_called()


def test_rejects_unknown_tag(admin_client, storage_client):
    response = upload(admin_client, tag_ids=["missing"])
    assert response.status_code == 404
    storage_client.put_object.assert_not_called()


def test_storage_failure_is_reported(admin_client, db, storage_client):
    storage_client.put_object.side_effect = ClientError(
        {"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject"
    )

    response = upload(admin_client)

    assert response.status_code == 502
    assert db.query(GalleryImage).count() == 0


def test_concurrent_style_uploads_are_independent(admin_client, db, storage_client):
    first = upload(admin_client)
    second = upload(admin_client)

    assert first.status_code == second.status_code == 201
    assert first.json()["imageUrl"] != second.json()["imageUrl"]
    assert db.query(GalleryImage).count() == 2


def test_public_gallery_hides_private_images_and_counts_tags(client, admin_client, storage_client, tags):
    wedding, corporate = tags
    upload(admin_client, tag_ids=[wedding.id])
    upload(admin_client, tag_ids=[wedding.id, corporate.id])
    upload(admin_client, tag_ids=[corporate.id], is_public=False)

    body = client.get("/gallery").json()

    assert len(body["images"]) == 2
    assert [(t["name"], t["count"]) for t in body["tags"]] == [("entreprise", 1), ("mariage", 2)]


def test_admin_tag_counts_include_private_images(admin_client, storage_client, tags):
    wedding, corporate = tags
    upload(admin_client, tag_ids=[corporate.id], is_public=False)

    body = admin_client.get("/admin/gallery-tags").json()

    assert [(t["name"], t["count"]) for t in body] == [("entreprise", 1), ("mariage", 0)]
    assert len(admin_client.get("/admin/gallery").json()) == 1


def test_delete_image_removes_object_then_row(admin_client, db, storage_client, tags):
    wedding, _ = tags
    image = upload(admin_client, tag_ids=[wedding.id]).json()

    response = admin_client.delete(f"/admin/gallery/{image['id']}")

    assert response.status_code == 200
    key = image["imageUrl"].rsplit("/", 1)[-1]
    storage_client.delete_objects.assert_called_once_with(
        Bucket="gallery-images", Delete={"Objects": [{"Key": f"uploads/{key}"}], "Quiet": True}
    )
    assert db.query(GalleryImage).count() == 0
    assert db.query(GalleryImageTag).count() == 0


def test_delete_image_keeps_row_when_storage_fails(admin_client, db, storage_client):
    image = upload(admin_client).json()
    storage_client.delete_objects.return_value = {"Errors": [{"Key": "x", "Code": "AccessDenied"}]}

    response = admin_client.delete(f"/admin/gallery/{image['id']}")

    assert response.status_code == 502
    assert db.query(GalleryImage).count() == 1


class TestTags:
    def test_create_normalises_name(self, admin_client):
        response = admin_client.post("/admin/gallery-tags", json={"name": "  Anniversaire "})
        assert response.status_code == 201
        assert response.json()["name"] == "anniversaire"
        assert response.json()["color"] == "#6366f1"

    def test_duplicate_name_conflicts(self, admin_client, tags):
        response = admin_client.post("/admin/gallery-tags", json={"name": "MARIAGE"})
        assert response.status_code == 409

    def test_rejects_empty_name_and_bad_color(self, admin_client):
        assert admin_client.post("/admin/gallery-tags", json={"name": "   "}).status_code == 422
        assert (
            admin_client.post("/admin/gallery-tags", json={"name": "gala", "color": "red"}).status_code
            == 422
        )

    def test_rename_and_recolor(self, admin_client, tags):
        wedding, _ = tags
        response = admin_client.patch(
            f"/admin/gallery-tags/{wedding.id}", json={"name": "Mariages", "color": "#111111"}
        )
        assert response.json() == {"id": wedding.id, "name": "mariages", "color": "#111111"}

    def test_rename_to_existing_name_conflicts(self, admin_client, tags):
        wedding, _ = tags
        response = admin_client.patch(f"/admin/gallery-tags/{wedding.id}", json={"name": "entreprise"})
        assert response.status_code == 409

    def test_delete_tag_drops_links(self, admin_client, db, storage_client, tags):
        wedding, _ = tags
        upload(admin_client, tag_ids=[wedding.id])

        response = admin_client.delete(f"/admin/gallery-tags/{wedding.id}")

        assert response.status_code == 200
        assert db.query(GalleryImageTag).count() == 0
        assert db.query(GalleryImage).count() == 1
