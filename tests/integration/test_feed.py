"""
Integration tests for the feed endpoint.

Covers:
  GET /api/v1/user/feed
"""

from __future__ import annotations

from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories import ConnectionRequestFactory, UserFactory


def _ids(response) -> list[str]:
    return [item["id"] for item in response.json()["data"]]


class TestFeedSelection:
    async def test_excludes_self_and_incomplete_profiles(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        test_user,
        auth_headers,
    ):
        visible = await UserFactory.create_async(db_session)
        await UserFactory.create_async(db_session, is_profile_complete=False)

        response = await async_client.get("/api/v1/user/feed", headers=auth_headers)

        assert response.status_code == 200
        assert _ids(response) == [str(visible.id)]

    async def test_excludes_every_prior_signal_in_either_direction(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        test_user,
        auth_headers,
    ):
        ignored_by_me = await UserFactory.create_async(db_session)
        liked_by_me = await UserFactory.create_async(db_session)
        ignored_me = await UserFactory.create_async(db_session)
        liked_me = await UserFactory.create_async(db_session)
        matched = await UserFactory.create_async(db_session)
        fresh = await UserFactory.create_async(db_session)

        await ConnectionRequestFactory.create_async(
            db_session, from_user_id=test_user.id, to_user_id=ignored_by_me.id, status="ignored"
        )
        await ConnectionRequestFactory.create_async(
            db_session, from_user_id=test_user.id, to_user_id=liked_by_me.id
        )
        await ConnectionRequestFactory.create_async(
            db_session, from_user_id=ignored_me.id, to_user_id=test_user.id, status="ignored"
        )
        await ConnectionRequestFactory.create_async(
            db_session, from_user_id=liked_me.id, to_user_id=test_user.id
        )
        await ConnectionRequestFactory.create_async(
            db_session, from_user_id=test_user.id, to_user_id=matched.id, status="accepted"
        )
        await ConnectionRequestFactory.create_async(
            db_session, from_user_id=matched.id, to_user_id=test_user.id, status="accepted"
        )

        response = await async_client.get("/api/v1/user/feed", headers=auth_headers)

        assert _ids(response) == [str(fresh.id)]

    async def test_swipe_removes_candidate(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        first = await UserFactory.create_async(db_session)
        second = await UserFactory.create_async(db_session)

        before = await async_client.get("/api/v1/user/feed", headers=auth_headers)
        await async_client.post(
            "/api/v1/user/swipe-left", json={"to_user_id": str(first.id)}, headers=auth_headers
        )
        after = await async_client.get("/api/v1/user/feed", headers=auth_headers)

        assert _ids(before) == [str(first.id), str(second.id)]
        assert _ids(after) == [str(second.id)]

    async def test_items_hide_private_fields(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        await UserFactory.create_async(db_session)

        response = await async_client.get("/api/v1/user/feed", headers=auth_headers)

        item = response.json()["data"][0]
        assert "email" not in item
        assert "created_at" not in item
        assert "skills" in item

    async def test_incomplete_viewer_returns_403(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers_for,
    ):
        newcomer = await UserFactory.create_async(db_session, is_profile_complete=False)

        response = await async_client.get("/api/v1/user/feed", headers=auth_headers_for(newcomer))

        assert response.status_code == 403


class TestFeedFilters:
    async def test_skills_overlap(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        gopher = await UserFactory.create_async(db_session, skills=["go", "kubernetes"])
        rustacean = await UserFactory.create_async(db_session, skills=["rust"])
        await UserFactory.create_async(db_session, skills=["java"])
        await UserFactory.create_async(db_session, skills=["golang"])

        response = await async_client.get(
            "/api/v1/user/feed", params={"skills": "go,rust"}, headers=auth_headers
        )

        assert _ids(response) == [str(gopher.id), str(rustacean.id)]

    async def test_repeated_skills_params(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        gopher = await UserFactory.create_async(db_session, skills=["go"])
        rustacean = await UserFactory.create_async(db_session, skills=["rust"])

        response = await async_client.get(
            "/api/v1/user/feed", params=[("skills", "go"), ("skills", "rust")], headers=auth_headers
        )

        assert _ids(response) == [str(gopher.id), str(rustacean.id)]

    async def test_exact_match_filters(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        senior_frontend = await UserFactory.create_async(
            db_session, role="frontend", experience="senior", availability="freelance"
        )
        await UserFactory.create_async(
            db_session, role="frontend", experience="junior", availability="freelance"
        )
        await UserFactory.create_async(
            db_session, role="backend", experience="senior", availability="freelance"
        )

        response = await async_client.get(
            "/api/v1/user/feed",
            params={"role": "frontend", "experience": "senior", "availability": "freelance"},
            headers=auth_headers,
        )

        assert _ids(response) == [str(senior_frontend.id)]

    async def test_any_sentinel_disables_filter(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        backend = await UserFactory.create_async(db_session, role="backend")
        frontend = await UserFactory.create_async(db_session, role="frontend")

        response = await async_client.get(
            "/api/v1/user/feed", params={"role": "any", "experience": ""}, headers=auth_headers
        )

        assert _ids(response) == [str(backend.id), str(frontend.id)]

    async def test_location_is_case_insensitive_substring(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        london = await UserFactory.create_async(db_session, location="London, UK")
        await UserFactory.create_async(db_session, location="Berlin, Germany")

        response = await async_client.get(
            "/api/v1/user/feed", params={"location": "lond"}, headers=auth_headers
        )

        assert _ids(response) == [str(london.id)]


class TestFeedPagination:
    async def test_full_page_reports_more(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        candidates = [await UserFactory.create_async(db_session) for _ in range(51)]

        first = await async_client.get(
            "/api/v1/user/feed", params={"page": 1, "limit": 50}, headers=auth_headers
        )
        second = await async_client.get(
            "/api/v1/user/feed", params={"page": 2, "limit": 50}, headers=auth_headers
        )

        assert first.json()["has_more"] is True
        assert len(first.json()["data"]) == 50
        assert second.json()["has_more"] is False
        assert _ids(second) == [str(candidates[-1].id)]

    async def test_limit_is_capped(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        for _ in range(51):
            await UserFactory.create_async(db_session)

        response = await async_client.get(
            "/api/v1/user/feed", params={"limit": 10000}, headers=auth_headers
        )

        body = response.json()
        assert body["limit"] == 50
        assert len(body["data"]) == 50
        assert body["has_more"] is True

    async def test_invalid_paging_falls_back_to_defaults(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        for _ in range(12):
            await UserFactory.create_async(db_session)

        response = await async_client.get(
            "/api/v1/user/feed", params={"page": "zero", "limit": "-5"}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["page"] == 1
        assert body["limit"] == 10
        assert len(body["data"]) == 10
        assert body["has_more"] is True

    async def test_page_too_large_for_sql_falls_back_to_first_page(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        candidate = await UserFactory.create_async(db_session)

        response = await async_client.get(
            "/api/v1/user/feed", params={"page": "100000000000000000000"}, headers=auth_headers
        )

        assert response.status_code == 200
        body = response.json()
        assert body["page"] == 1
        assert _ids(response) == [str(candidate.id)]

    async def test_pages_do_not_overlap(
        self,
        async_client: AsyncClient,
        db_session: AsyncSession,
        auth_headers,
    ):
        candidates = [await UserFactory.create_async(db_session) for _ in range(5)]

        pages = []
        for page in (1, 2, 3):
            response = await async_client.get(
                "/api/v1/user/feed", params={"page": page, "limit": 2}, headers=auth_headers
            )
            pages.extend(_ids(response))

        assert pages == [str(c.id) for c in candidates]
