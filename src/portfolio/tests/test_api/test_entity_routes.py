import pytest

BLOG_URL = "/api/v1/blog"


@pytest.mark.asyncio
class TestEntityRoutesWrite:

    async def test_create_returns_201_with_camel_case_body(self, client, auth_headers, blog_payload):
        """
        Behavior:
            - POST creates the record and answers 201 with the read model in
              camelCase, including the server-derived slug and counters.

        Fixtures:
            - client: httpx AsyncClient bound to the app over ASGI.
            - auth_headers: bearer token for a persisted admin.
        """
        # Act
        response = await client.post(BLOG_URL, json=blog_payload(title="My First Post"), headers=auth_headers)

        # Assert
        assert response.status_code == 201
        body = response.json()
        assert body["slug"] == "my-first-post"
        assert body["viewsCount"] == 0
        assert body["isPublished"] is True
        assert "createdAt" in body and "updatedAt" in body
        assert len(body["id"]) == 24

    async def test_duplicate_returns_409(self, client, auth_headers, blog_payload):
        await client.post(BLOG_URL, json=blog_payload(title="My First Post"), headers=auth_headers)

        response = await client.post(BLOG_URL, json=blog_payload(title="My First Post"), headers=auth_headers)

        assert response.status_code == 409
        body = response.json()
        assert body["type"] == "DUPLICITY"
        assert body["error"] == "A blog post with the same title already exists"
        assert body["details"]["conflictType"] == "title"

    async def test_validation_error_returns_400_with_issues(self, client, auth_headers):
        response = await client.post(BLOG_URL, json={"title": "abc"}, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "VALIDATION"
        assert [issue["field"] for issue in body["details"]] == ["title", "content"]

    async def test_malformed_json_returns_400(self, client, auth_headers):
        response = await client.post(
            BLOG_URL,
            content=b'{"title": "broken',
            headers={**auth_headers, "Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["type"] == "MALFORMED_INPUT"

    async def test_update_collision_leaves_record_unchanged(self, client, auth_headers, blog_payload):
        first = (await client.post(BLOG_URL, json=blog_payload(title="Post Alpha"), headers=auth_headers)).json()
        await client.post(BLOG_URL, json=blog_payload(title="Post Beta"), headers=auth_headers)

        response = await client.patch(f"{BLOG_URL}/{first['id']}", json={"title": "Post Beta"}, headers=auth_headers)

        assert response.status_code == 409
        current = (await client.get(f"{BLOG_URL}/{first['id']}")).json()
        assert current["title"] == "Post Alpha"
        assert current["slug"] == "post-alpha"

    async def test_partial_update(self, client, auth_headers, blog_payload):
        created = (await client.post(BLOG_URL, json=blog_payload(title="Editable Post"), headers=auth_headers)).json()

        response = await client.patch(
            f"{BLOG_URL}/{created['id']}",
            json={"content": "Freshly rewritten content body here.", "slug": "ignored"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["content"] == "Freshly rewritten content body here."
        assert body["slug"] == "editable-post"
        assert body["title"] == "Editable Post"

    async def test_update_missing_returns_404(self, client, auth_headers):
        response = await client.patch(
            f"{BLOG_URL}/0123456789abcdef01234567", json={"content": "x" * 30}, headers=auth_headers
        )

        assert response.status_code == 404
        assert response.json()["type"] == "NOT_FOUND"

    async def test_delete_then_fetch(self, client, auth_headers, blog_payload):
        created = (await client.post(BLOG_URL, json=blog_payload(), headers=auth_headers)).json()

        deleted = await client.delete(f"{BLOG_URL}/{created['id']}", headers=auth_headers)
        fetched = await client.get(f"{BLOG_URL}/{created['id']}")

        assert deleted.status_code == 200
        assert deleted.json()["id"] == created["id"]
        assert fetched.status_code == 404

    async def test_delete_invalid_id_returns_400(self, client, auth_headers):
        response = await client.delete(f"{BLOG_URL}/not-an-id", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["type"] == "VALIDATION"


@pytest.mark.asyncio
class TestEntityRoutesAuth:

    async def test_write_without_token_returns_401(self, client, blog_payload):
        response = await client.post(BLOG_URL, json=blog_payload())

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required", "type": "AUTHORIZATION"}

    async def test_invalid_token_returns_401(self, client, blog_payload):
        response = await client.post(BLOG_URL, json=blog_payload(), headers={"Authorization": "Bearer not.a.token"})

        assert response.status_code == 401
        assert response.json()["type"] == "AUTHORIZATION"

    async def test_token_cookie_is_accepted(self, client, admin_token, blog_payload):
        response = await client.post(BLOG_URL, json=blog_payload(), headers={"Cookie": f"token={admin_token}"})

        assert response.status_code == 201

    async def test_reads_are_public(self, client):
        response = await client.get(BLOG_URL)

        assert response.status_code == 200


@pytest.mark.asyncio
class TestEntityRoutesRead:

    async def test_empty_listing(self, client):
        response = await client.get("/api/v1/project")

        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0, "page": 1, "totalPages": 0}

    async def test_listing_pagination_and_filters(self, client, auth_headers, skill_payload):
        for name, category in [("Python", "Backend"), ("React", "Frontend"), ("Docker", "DevOps")]:
            await client.post("/api/v1/skill", json=skill_payload(name=name, category=category), headers=auth_headers)

        page = (await client.get("/api/v1/skill", params={"limit": 2})).json()
        backend = (await client.get("/api/v1/skill", params={"category": "Backend"})).json()

        assert page["total"] == 3
        assert page["totalPages"] == 2
        assert [item["name"] for item in page["items"]] == ["Docker", "React"]
        assert [item["name"] for item in backend["items"]] == ["Python"]

    async def test_invalid_listing_query_returns_400(self, client):
        response = await client.get(BLOG_URL, params={"page": 0})

        assert response.status_code == 400

    async def test_slug_read_counts_views(self, client, auth_headers, blog_payload):
        await client.post(BLOG_URL, json=blog_payload(title="Counted Post"), headers=auth_headers)

        await client.get(f"{BLOG_URL}/slug/counted-post")
        response = await client.get(f"{BLOG_URL}/slug/counted-post")

        assert response.status_code == 200
        assert response.json()["viewsCount"] == 2

    async def test_unknown_slug_returns_404(self, client):
        response = await client.get(f"{BLOG_URL}/slug/missing-post")

        assert response.status_code == 404

    @pytest.mark.parametrize(
        ("path", "payload_fixture", "expected_slug"),
        [
            ("/api/v1/project", "project_payload", "portfolio-site"),
            ("/api/v1/experience", "experience_payload", "backend-engineer"),
            ("/api/v1/education", "education_payload", "bsc-computer-science"),
        ],
    )
    async def test_each_entity_is_mounted(self, request, client, auth_headers, path, payload_fixture, expected_slug):
        payload = request.getfixturevalue(payload_fixture)()

        created = await client.post(path, json=payload, headers=auth_headers)
        fetched = await client.get(f"{path}/slug/{expected_slug}")

        assert created.status_code == 201
        assert fetched.status_code == 200
        assert fetched.json()["id"] == created.json()["id"]


@pytest.mark.asyncio
class TestAppShell:

    async def test_health(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    async def test_request_id_header(self, client):
        generated = await client.get("/health")
        echoed = await client.get("/health", headers={"X-Request-ID": "trace-123"})

        assert generated.headers.get("X-Request-ID")
        assert echoed.headers["X-Request-ID"] == "trace-123"
