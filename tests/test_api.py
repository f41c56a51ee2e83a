"""API endpoint tests."""

import pytest

from blog.api.dependencies import is_uuid


def create_post(client, headers, title="Hello World", content="Some content"):
    response = client.post(
        "/api/v1/posts", headers=headers, json={"title": title, "content": content}
    )
    assert response.status_code == 201
    return response.json()


def create_category(client, headers, title="Python"):
    response = client.post("/api/v1/categories", headers=headers, json={"title": title})
    assert response.status_code == 201
    return response.json()


def test_health_check(client):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


# --- Posts ---


def test_create_post(client, auth_headers):
    """Test creating a post."""
    data = create_post(client, auth_headers, title="Hello, World! 2024")
    assert data["slug"] == "hello-world-2024"
    assert data["author"]["id"] == auth_headers.user_id
    assert data["categories"] == []


def test_create_post_duplicate_title(client, auth_headers):
    """Test that duplicate titles get distinct slugs."""
    first = create_post(client, auth_headers, title="Same Title")
    second = create_post(client, auth_headers, title="Same Title")
    assert first["slug"] == "same-title"
    assert second["slug"] == "same-title-1"


def test_create_post_validation(client, auth_headers):
    """Test post payload validation."""
    too_short = client.post(
        "/api/v1/posts", headers=auth_headers, json={"title": "Hi", "content": "Body"}
    )
    assert too_short.status_code == 400

    no_alphanumerics = client.post(
        "/api/v1/posts", headers=auth_headers, json={"title": "!!!???", "content": "Body"}
    )
    assert no_alphanumerics.status_code == 400

    missing_content = client.post("/api/v1/posts", headers=auth_headers, json={"title": "Valid"})
    assert missing_content.status_code == 400


def test_get_post_by_slug_and_id(client, auth_headers):
    """Test fetching a post by slug or id."""
    post = create_post(client, auth_headers)

    by_slug = client.get(f"/api/v1/posts/{post['slug']}", headers=auth_headers)
    assert by_slug.status_code == 200
    assert by_slug.json()["id"] == post["id"]

    by_id = client.get(f"/api/v1/posts/{post['id']}", headers=auth_headers)
    assert by_id.status_code == 200
    assert by_id.json()["slug"] == post["slug"]


def test_get_missing_post(client, auth_headers):
    """Test 404 for unknown posts."""
    response = client.get("/api/v1/posts/no-such-post", headers=auth_headers)
    assert response.status_code == 404
    assert "no-such-post" in response.json()["detail"]


def test_list_posts_paginated(client, auth_headers):
    """Test listing posts with skip/limit."""
    for i in range(3):
        create_post(client, auth_headers, title=f"Post number {i}")

    response = client.get("/api/v1/posts", headers=auth_headers, params={"skip": 1, "limit": 1})
    assert response.status_code == 200
    assert len(response.json()) == 1
    assert response.headers["X-Total-Count"] == "3"

    everything = client.get("/api/v1/posts", headers=auth_headers)
    assert len(everything.json()) == 3


def test_update_post(client, auth_headers):
    """Test updating a post."""
    post = create_post(client, auth_headers, title="Old Title")

    response = client.put(
        f"/api/v1/posts/{post['id']}", headers=auth_headers, json={"title": "New Title"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "New Title"
    assert data["slug"] == "new-title"
    assert data["content"] == post["content"]
    assert data["author"]["id"] == auth_headers.user_id


def test_update_post_same_title_keeps_slug(client, auth_headers):
    """Test that re-sending the title does not change the slug."""
    create_post(client, auth_headers, title="Stable")
    post = create_post(client, auth_headers, title="Stable")

    response = client.put(
        f"/api/v1/posts/{post['id']}",
        headers=auth_headers,
        json={"title": "Stable", "content": "Edited content"},
    )
    assert response.status_code == 200
    assert response.json()["slug"] == "stable-1"


def test_update_post_by_other_user(client, auth_headers, other_auth_headers):
    """Test that only the author can update a post."""
    post = create_post(client, auth_headers)
    response = client.put(
        f"/api/v1/posts/{post['id']}", headers=other_auth_headers, json={"content": "Hijacked"}
    )
    assert response.status_code == 403


def test_delete_post(client, auth_headers):
    """Test deleting a post."""
    post = create_post(client, auth_headers)

    response = client.delete(f"/api/v1/posts/{post['id']}", headers=auth_headers)
    assert response.status_code == 204

    again = client.delete(f"/api/v1/posts/{post['id']}", headers=auth_headers)
    assert again.status_code == 404


def test_delete_post_by_other_user(client, auth_headers, other_auth_headers):
    """Test that only the author can delete a post."""
    post = create_post(client, auth_headers)
    response = client.delete(f"/api/v1/posts/{post['id']}", headers=other_auth_headers)
    assert response.status_code == 403


# --- Post categories ---


def test_assign_and_unassign_category(client, auth_headers):
    """Test linking and unlinking a single category."""
    post = create_post(client, auth_headers)
    category = create_category(client, auth_headers)
    url = f"/api/v1/posts/{post['id']}/categories/{category['id']}"

    assert client.post(url, headers=auth_headers).status_code == 204
    linked = client.get(f"/api/v1/posts/{post['id']}/categories", headers=auth_headers).json()
    assert [c["slug"] for c in linked] == ["python"]

    assert client.post(url, headers=auth_headers).status_code == 400

    assert client.delete(url, headers=auth_headers).status_code == 204
    assert client.delete(url, headers=auth_headers).status_code == 204
    linked = client.get(f"/api/v1/posts/{post['id']}/categories", headers=auth_headers).json()
    assert linked == []


def test_replace_post_categories(client, auth_headers):
    """Test replacing all categories on a post."""
    post = create_post(client, auth_headers)
    c1 = create_category(client, auth_headers, "First")
    c2 = create_category(client, auth_headers, "Second")
    c3 = create_category(client, auth_headers, "Third")
    client.post(f"/api/v1/posts/{post['id']}/categories/{c1['id']}", headers=auth_headers)

    response = client.put(
        f"/api/v1/posts/{post['id']}/categories",
        headers=auth_headers,
        json={"category_ids": [c2["id"], c3["id"]]},
    )
    assert response.status_code == 200
    assert {c["slug"] for c in response.json()["categories"]} == {"second", "third"}


def test_replace_post_categories_is_atomic(client, auth_headers):
    """Test that a failed replace leaves the old categories in place."""
    post = create_post(client, auth_headers)
    c1 = create_category(client, auth_headers, "First")
    c2 = create_category(client, auth_headers, "Second")
    client.post(f"/api/v1/posts/{post['id']}/categories/{c1['id']}", headers=auth_headers)

    response = client.put(
        f"/api/v1/posts/{post['id']}/categories",
        headers=auth_headers,
        json={"category_ids": [c2["id"], "00000000-0000-0000-0000-000000000000"]},
    )
    assert response.status_code == 400

    linked = client.get(f"/api/v1/posts/{post['id']}/categories", headers=auth_headers).json()
    assert [c["slug"] for c in linked] == ["first"]


def test_post_categories_require_author(client, auth_headers, other_auth_headers):
    """Test that only the author can change a post's categories."""
    post = create_post(client, auth_headers)
    category = create_category(client, auth_headers)
    response = client.post(
        f"/api/v1/posts/{post['id']}/categories/{category['id']}", headers=other_auth_headers
    )
    assert response.status_code == 403


# --- Categories ---


def test_create_category(client, auth_headers):
    """Test creating a category."""
    data = create_category(client, auth_headers, "Machine Learning")
    assert data["title"] == "Machine Learning"
    assert data["slug"] == "machine-learning"


def test_get_categories(client, auth_headers):
    """Test listing categories and fetching by slug or id."""
    category = create_category(client, auth_headers, "Databases")
    create_category(client, auth_headers, "Networking")

    listed = client.get("/api/v1/categories", headers=auth_headers)
    assert [c["title"] for c in listed.json()] == ["Databases", "Networking"]

    by_slug = client.get("/api/v1/categories/databases", headers=auth_headers)
    assert by_slug.json()["id"] == category["id"]

    by_id = client.get(f"/api/v1/categories/{category['id']}", headers=auth_headers)
    assert by_id.json()["slug"] == "databases"


def test_update_category(client, auth_headers):
    """Test renaming a category."""
    category = create_category(client, auth_headers, "Old Name")
    response = client.put(
        f"/api/v1/categories/{category['id']}", headers=auth_headers, json={"title": "New Name"}
    )
    assert response.status_code == 200
    assert response.json()["slug"] == "new-name"


def test_update_missing_category(client, auth_headers):
    """Test 404 when updating an unknown category."""
    response = client.put(
        "/api/v1/categories/does-not-exist", headers=auth_headers, json={"title": "Anything"}
    )
    assert response.status_code == 404


def test_delete_category(client, auth_headers):
    """Test deleting a category, and deleting it again."""
    category = create_category(client, auth_headers, "To Delete")

    response = client.delete(f"/api/v1/categories/{category['id']}", headers=auth_headers)
    assert response.status_code == 204

    listed = client.get("/api/v1/categories", headers=auth_headers)
    assert listed.json() == []

    again = client.delete(f"/api/v1/categories/{category['id']}", headers=auth_headers)
    assert again.status_code == 404


# --- Users ---


def test_get_users(client, auth_headers, other_auth_headers):
    """Test listing and fetching users."""
    listed = client.get("/api/v1/users", headers=auth_headers)
    assert listed.status_code == 200
    assert {u["email"] for u in listed.json()} == {"test@example.com", "other@example.com"}

    one = client.get(f"/api/v1/users/{other_auth_headers.user_id}", headers=auth_headers)
    assert one.json()["name"] == "Other User"


def test_create_user(client, auth_headers):
    """Test creating a user through the users endpoint."""
    response = client.post(
        "/api/v1/users",
        headers=auth_headers,
        json={"name": "Ned", "email": "ned@example.com", "password": "password123"},
    )
    assert response.status_code == 201
    assert response.json()["auth_provider"] == "local"

    duplicate = client.post(
        "/api/v1/users",
        headers=auth_headers,
        json={"name": "Ned", "email": "ned@example.com", "password": "password123"},
    )
    assert duplicate.status_code == 400


def test_update_user(client, auth_headers, other_auth_headers):
    """Test updating your own profile, and not someone else's."""
    response = client.put(
        f"/api/v1/users/{auth_headers.user_id}",
        headers=auth_headers,
        json={"lastname": "Tester"},
    )
    assert response.status_code == 200
    assert response.json()["lastname"] == "Tester"

    taken = client.put(
        f"/api/v1/users/{auth_headers.user_id}",
        headers=auth_headers,
        json={"email": other_auth_headers.email},
    )
    assert taken.status_code == 400

    forbidden = client.put(
        f"/api/v1/users/{other_auth_headers.user_id}",
        headers=auth_headers,
        json={"name": "Renamed"},
    )
    assert forbidden.status_code == 403


def test_delete_user_removes_posts(client, auth_headers, other_auth_headers):
    """Test deleting an account also deletes its posts."""
    post = create_post(client, auth_headers)

    response = client.delete(f"/api/v1/users/{auth_headers.user_id}", headers=auth_headers)
    assert response.status_code == 204

    missing = client.get(f"/api/v1/posts/{post['id']}", headers=other_auth_headers)
    assert missing.status_code == 404

    # The deleted user's token no longer resolves
    assert client.get("/api/v1/auth/session", headers=auth_headers).status_code == 401


# --- Id or slug ---


@pytest.mark.parametrize(
    "value,expected",
    [
        ("3f2b8c1e-9d4a-4f6b-8e2a-1c5d7e9f0a3b", True),
        ("3f2b8c1e9d4a4f6b8e2a1c5d7e9f0a3b", False),
        ("{3f2b8c1e-9d4a-4f6b-8e2a-1c5d7e9f0a3b}", False),
        ("urn:uuid:3f2b8c1e-9d4a-4f6b-8e2a-1c5d7e9f0a3b", False),
        ("hello-world", False),
    ],
)
def test_is_uuid(value, expected):
    """Test that only canonical ids are treated as ids."""
    assert is_uuid(value) is expected


def test_get_post_with_hex_slug(client, auth_headers):
    """Test that a slug made of 32 hex characters is looked up as a slug."""
    post = create_post(client, auth_headers, title="0123456789abcdef0123456789abcdef")
    assert post["slug"] == "0123456789abcdef0123456789abcdef"

    response = client.get(f"/api/v1/posts/{post['slug']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == post["id"]
