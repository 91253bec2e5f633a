# =============================================================================
# tests/test_categories_blogs_api.py - Category and Blog Endpoint Tests
# =============================================================================
# End-to-end tests for /api/categories and /api/blogs:
# - Unique category names surface as CONFLICT
# - Categories with blogs cannot be deleted
# - Blogs embed their category and filter by categoryId
#
# Run with: pytest tests/test_categories_blogs_api.py -v
# =============================================================================


def create_category(client, auth_headers, name, **extra):
    response = client.post("/api/categories", json={"name": name, **extra}, headers=auth_headers)
    assert response.status_code == 201, response.text
    return response.json()


def create_blog(client, auth_headers, category_id, title="Hello World"):
    response = client.post(
        "/api/blogs",
        json={
            "title": title,
            "description": "First post",
            "images": ["https://cdn.portfolio.dev/blog.png"],
            "categoryId": category_id,
        },
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


# =============================================================================
# Category Tests
# =============================================================================

class TestCategories:
    """Tests for /api/categories."""

    def test_create_and_list_ordered_by_name(self, client, auth_headers):
        create_category(client, auth_headers, "Design")
        create_category(client, auth_headers, "Development", description="Code")

        body = client.get("/api/categories").json()

        assert [c["name"] for c in body] == ["Design", "Development"]
        assert body[1]["description"] == "Code"

    def test_duplicate_name_is_conflict(self, client, auth_headers):
        create_category(client, auth_headers, "Development")

        response = client.post("/api/categories", json={"name": "Development"}, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"

    def test_get_includes_blog_count(self, client, auth_headers):
        category = create_category(client, auth_headers, "Notes")
        create_blog(client, auth_headers, category["id"])

        body = client.get(f"/api/categories/{category['id']}").json()

        assert body["blogCount"] == 1

    def test_update_clears_description_with_null(self, client, auth_headers):
        category = create_category(client, auth_headers, "Notes", description="Short notes")

        response = client.patch(
            f"/api/categories/{category['id']}", json={"description": None}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["description"] is None
        assert response.json()["name"] == "Notes"

    def test_update_requires_a_field(self, client, auth_headers):
        category = create_category(client, auth_headers, "Notes")

        response = client.patch(f"/api/categories/{category['id']}", json={}, headers=auth_headers)

        assert response.status_code == 400

    def test_delete_with_blogs_is_conflict(self, client, auth_headers):
        category = create_category(client, auth_headers, "Notes")
        create_blog(client, auth_headers, category["id"])

        response = client.delete(f"/api/categories/{category['id']}", headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["error"]["message"] == "Cannot delete category with existing blogs"

    def test_delete_empty_category(self, client, auth_headers):
        category = create_category(client, auth_headers, "Notes")

        assert client.delete(f"/api/categories/{category['id']}", headers=auth_headers).status_code == 204
        assert client.get(f"/api/categories/{category['id']}").status_code == 404

    def test_delete_missing(self, client, auth_headers):
        assert client.delete("/api/categories/nope", headers=auth_headers).status_code == 404


# =============================================================================
# Blog Tests
# =============================================================================

class TestBlogs:
    """Tests for /api/blogs."""

    def test_create_embeds_category(self, client, auth_headers):
        category = create_category(client, auth_headers, "Notes")

        blog = create_blog(client, auth_headers, category["id"])

        assert blog["categoryId"] == category["id"]
        assert blog["category"] == {"id": category["id"], "name": "Notes"}

    def test_unknown_category(self, client, auth_headers):
        response = client.post(
            "/api/blogs",
            json={
                "title": "Orphan",
                "description": "No home",
                "images": [],
                "categoryId": "missing",
            },
            headers=auth_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Invalid categoryId"

    def test_list_filters_by_category(self, client, auth_headers):
        notes = create_category(client, auth_headers, "Notes")
        talks = create_category(client, auth_headers, "Talks")
        create_blog(client, auth_headers, notes["id"], title="Note one")
        create_blog(client, auth_headers, talks["id"], title="Talk one")

        body = client.get("/api/blogs", params={"categoryId": talks["id"]}).json()

        assert [b["title"] for b in body["data"]] == ["Talk one"]
        assert body["meta"]["total"] == 1

    def test_list_search(self, client, auth_headers):
        notes = create_category(client, auth_headers, "Notes")
        create_blog(client, auth_headers, notes["id"], title="Async Python")
        create_blog(client, auth_headers, notes["id"], title="CSS Grid")

        body = client.get("/api/blogs", params={"search": "PYTHON"}).json()

        assert [b["title"] for b in body["data"]] == ["Async Python"]

    def test_move_blog_to_other_category(self, client, auth_headers):
        notes = create_category(client, auth_headers, "Notes")
        talks = create_category(client, auth_headers, "Talks")
        blog = create_blog(client, auth_headers, notes["id"])

        response = client.patch(
            f"/api/blogs/{blog['id']}", json={"categoryId": talks["id"]}, headers=auth_headers
        )

        assert response.status_code == 200
        assert response.json()["category"] == {"id": talks["id"], "name": "Talks"}

    def test_move_blog_to_unknown_category(self, client, auth_headers):
        notes = create_category(client, auth_headers, "Notes")
        blog = create_blog(client, auth_headers, notes["id"])

        response = client.patch(f"/api/blogs/{blog['id']}", json={"categoryId": "nope"}, headers=auth_headers)

        assert response.status_code == 400

    def test_delete_blog_then_category(self, client, auth_headers):
        notes = create_category(client, auth_headers, "Notes")
        blog = create_blog(client, auth_headers, notes["id"])

        assert client.delete(f"/api/blogs/{blog['id']}", headers=auth_headers).status_code == 204
        assert client.delete(f"/api/categories/{notes['id']}", headers=auth_headers).status_code == 204
