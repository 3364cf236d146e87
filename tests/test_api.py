"""
HTTP surface: routing, auth, status codes and JSON shapes.
"""
from datetime import timedelta
import uuid

from unittest.mock import AsyncMock, patch

from social_dashboard.utils.clock import utcnow


def _future(hours=2):
    return (utcnow() + timedelta(hours=hours)).isoformat()


class TestAuthEndpoints:

    def test_register_login_me(self, client, fake_redis):
        email = f"{uuid.uuid4().hex[:8]}@example.com"
        resp = client.post("/auth/register", json={"email": email, "username": email[:8], "password": "Str0ngPassw0rd"})
        assert resp.status_code == 201
        assert "hashed_password" not in resp.json()

        resp = client.post("/auth/login", json={"email": email, "password": "Str0ngPassw0rd"})
        assert resp.status_code == 200
        token = resp.json()["access_token"]
        assert resp.json()["token_type"] == "bearer"

        me = client.get("/users/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["email"] == email

    def test_bad_credentials(self, client, fake_redis):
        resp = client.post("/auth/login", json={"email": "ghost@example.com", "password": "Nope12345"})
        assert resp.status_code == 401

    def test_weak_password_is_400(self, client):
        resp = client.post("/auth/register", json={"email": "weak@example.com", "username": "weak", "password": "weak"})
        assert resp.status_code == 400
        assert resp.json()["code"] == "VALIDATION_ERROR"

    def test_logout_revokes_token(self, client, auth_headers):
        assert client.post("/auth/logout", headers=auth_headers).status_code == 204
        assert client.get("/users/me", headers=auth_headers).status_code == 401

    def test_missing_or_invalid_token(self, client):
        assert client.get("/posts").status_code == 401
        assert client.get("/posts", headers={"Authorization": "Bearer garbage"}).status_code == 401


class TestPostEndpoints:

    def test_crud(self, client, auth_headers):
        resp = client.post("/posts", json={"content": "Hello", "platforms": ["twitter"]}, headers=auth_headers)
        assert resp.status_code == 201
        post = resp.json()
        assert post["status"] == "draft"
        assert post["targetPlatforms"] == ["twitter"]
        post_id = post["id"]

        resp = client.patch(f"/posts/{post_id}", json={"scheduledAt": _future()}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["status"] == "scheduled"

        resp = client.get("/posts", params={"upcoming": "true"}, headers=auth_headers)
        assert [p["id"] for p in resp.json()] == [post_id]

        assert client.delete(f"/posts/{post_id}", headers=auth_headers).status_code == 204
        assert client.get(f"/posts/{post_id}", headers=auth_headers).status_code == 404

    def test_past_schedule_is_400(self, client, auth_headers):
        past = (utcnow() - timedelta(hours=1)).isoformat()
        resp = client.post("/posts", json={"content": "Hi", "platforms": ["twitter"], "scheduledAt": past}, headers=auth_headers)
        assert resp.status_code == 400
        assert resp.json()["detail"] == "date must be in the future"

    def test_unknown_platform_is_400(self, client, auth_headers):
        resp = client.post("/posts", json={"content": "Hi", "platforms": ["myspace"]}, headers=auth_headers)
        assert resp.status_code == 400

    def test_posts_are_private(self, client, auth_headers):
        post_id = client.post("/posts", json={"content": "Mine", "platforms": ["twitter"]}, headers=auth_headers).json()["id"]
        email = f"{uuid.uuid4().hex[:8]}@example.com"
        client.post("/auth/register", json={"email": email, "username": email[:8], "password": "Str0ngPassw0rd"})
        token = client.post("/auth/login", json={"email": email, "password": "Str0ngPassw0rd"}).json()["access_token"]
        resp = client.get(f"/posts/{post_id}", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 404
        assert resp.json()["code"] == "NOT_FOUND"

    def test_day_filter(self, client, auth_headers):
        when = utcnow() + timedelta(days=4)
        client.post(
            "/posts", json={"content": "Later", "platforms": ["twitter"], "scheduledAt": when.isoformat()}, headers=auth_headers,
        )
        client.post("/posts", json={"content": "Now", "platforms": ["twitter"]}, headers=auth_headers)
        resp = client.get("/posts", params={"day": when.date().isoformat()}, headers=auth_headers)
        assert [p["content"] for p in resp.json()] == ["Later"]


class TestPublishEndpoints:

    def test_publish_with_partial_failure(self, client, auth_headers):
        assert client.put("/platforms/facebook", json={"accessToken": "fb-token"}, headers=auth_headers).status_code == 200
        post_id = client.post(
            "/posts", json={"content": "Launch", "platforms": ["instagram", "facebook"]}, headers=auth_headers,
        ).json()["id"]

        resp = client.post("/publish", json={
            "postId": post_id,
            "platforms": ["instagram", "facebook"],
            "content": "Launch",
            "mediaUrls": ["https://cdn.example.com/a.jpg"],
        }, headers=auth_headers)

        assert resp.status_code == 200
        body = resp.json()
        assert [r["platform"] for r in body["results"]] == ["instagram", "facebook"]
        assert body["results"][0]["success"] is False
        assert body["results"][0]["error"] == "instagram not connected"
        assert body["results"][1]["success"] is True
        assert body["results"][1]["externalPostId"].startswith("facebook_")
        assert body["summary"]["status"] == "published"
        assert "instagram:" in body["summary"]["error_message"]

        stored = client.get(f"/posts/{post_id}", headers=auth_headers).json()
        assert stored["status"] == "published"
        assert stored["publishedAt"] is not None

    def test_failed_result_carries_suggestion(self, client, auth_headers):
        client.put("/platforms/twitter", json={"accessToken": "t", "expiresIn": 3600}, headers=auth_headers)
        client.put("/platforms/instagram", json={"accessToken": "i"}, headers=auth_headers)
        post_id = client.post(
            "/posts", json={"content": "Pic", "platforms": ["instagram"]}, headers=auth_headers,
        ).json()["id"]
        resp = client.post("/publish", json={
            "postId": post_id, "platforms": ["instagram"], "content": "Pic",
        }, headers=auth_headers)
        result = resp.json()["results"][0]
        assert result["error"] == "instagram requires at least one media item"
        assert result["suggestion"] == "check file format"
        assert resp.json()["summary"]["status"] == "failed"

    def test_missing_fields_is_400(self, client, auth_headers):
        resp = client.post("/publish", json={"platforms": ["twitter"], "content": "x"}, headers=auth_headers)
        assert resp.status_code == 400
        resp = client.post("/publish", json={"postId": str(uuid.uuid4()), "platforms": [], "content": "x"}, headers=auth_headers)
        assert resp.status_code == 400

    def test_unknown_post_is_404(self, client, auth_headers):
        resp = client.post("/publish", json={
            "postId": str(uuid.uuid4()), "platforms": ["twitter"], "content": "x",
        }, headers=auth_headers)
        assert resp.status_code == 404

    def test_requires_auth(self, client):
        resp = client.post("/publish", json={"postId": str(uuid.uuid4()), "platforms": ["twitter"], "content": "x"})
        assert resp.status_code == 401

    def test_publish_now(self, client, auth_headers):
        client.put("/platforms/linkedin", json={"accessToken": "li"}, headers=auth_headers)
        resp = client.post("/publish/now", json={"content": "Right away", "platforms": ["linkedin"]}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["summary"]["status"] == "published"
        assert resp.json()["summary"].get("error_message") is None


class TestPlatformEndpoints:

    def test_connect_list_disconnect(self, client, auth_headers):
        resp = client.put(
            "/platforms/telegram", json={"accessToken": "bot", "meta": {"chat_id": "42"}}, headers=auth_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["connected"] is True
        assert "accessToken" not in resp.json()

        listed = client.get("/platforms", headers=auth_headers).json()
        assert [c["platform"] for c in listed] == ["telegram"]
        assert listed[0]["expired"] is False

        resp = client.delete("/platforms/telegram", headers=auth_headers)
        assert resp.json()["connected"] is False

    def test_disconnect_unknown_is_404(self, client, auth_headers):
        assert client.delete("/platforms/youtube", headers=auth_headers).status_code == 404


class TestAnalyticsEndpoint:

    def test_report(self, client, auth_headers):
        client.post("/posts", json={"content": "One", "platforms": ["twitter"]}, headers=auth_headers)
        resp = client.get("/analytics", params={"period": "24h"}, headers=auth_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert body["overview"]["totalPosts"] == 1
        assert body["overview"]["publishRate"] == "0.0"
        assert len(body["chartData"]) == 24
        assert body["period"] == "24h"

    def test_empty_report(self, client, auth_headers):
        body = client.get("/analytics", headers=auth_headers).json()
        assert body["overview"]["totalPosts"] == 0
        assert body["overview"]["publishRate"] == 0

    def test_unknown_period_uses_weekly_view(self, client, auth_headers):
        resp = client.get("/analytics", params={"period": "2w"}, headers=auth_headers)
        assert resp.status_code == 200
        assert len(resp.json()["chartData"]) == 7


class TestContentEndpoint:

    def test_generate(self, client, auth_headers):
        answer = "POST: Fresh coffee\nHASHTAGS: #coffee\nCTA: Visit us"
        with patch(
            "social_dashboard.services.content_service.AIGatewayClient.complete",
            new=AsyncMock(return_value=answer),
        ):
            resp = client.post("/content/generate", json={"topic": "coffee"}, headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {"post": "Fresh coffee", "hashtags": "#coffee", "cta": "Visit us", "raw": answer}

    def test_gateway_rate_limit_is_429(self, client, auth_headers):
        from social_dashboard.errors import RateLimitedError

        with patch(
            "social_dashboard.services.content_service.AIGatewayClient.complete",
            new=AsyncMock(side_effect=RateLimitedError()),
        ):
            resp = client.post("/content/generate", json={"topic": "coffee"}, headers=auth_headers)
        assert resp.status_code == 429
        assert resp.json()["code"] == "RATE_LIMITED"

    def test_empty_topic_is_400(self, client, auth_headers):
        assert client.post("/content/generate", json={"topic": " "}, headers=auth_headers).status_code == 400


class TestMediaEndpoints:

    def test_register_list_delete(self, client, auth_headers):
        resp = client.post("/media", json={
            "name": "clip.mp4", "fileUrl": "https://cdn.example.com/clip.mp4", "fileType": "video/mp4", "fileSize": 1024,
        }, headers=auth_headers)
        assert resp.status_code == 201
        media_id = resp.json()["id"]
        assert [m["id"] for m in client.get("/media", headers=auth_headers).json()] == [media_id]
        assert client.delete(f"/media/{media_id}", headers=auth_headers).status_code == 204

    def test_bad_type_is_400(self, client, auth_headers):
        resp = client.post("/media", json={
            "name": "a.exe", "fileUrl": "https://cdn.example.com/a.exe", "fileType": "application/x-msdownload",
        }, headers=auth_headers)
        assert resp.status_code == 400


class TestRequestId:

    def test_echoes_header(self, client):
        resp = client.get("/posts", headers={"X-Request-ID": "abc-123"})
        assert resp.headers["X-Request-ID"] == "abc-123"

    def test_generates_header(self, client):
        assert client.get("/posts").headers.get("X-Request-ID")
