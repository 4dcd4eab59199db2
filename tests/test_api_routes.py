"""
Tests for API routes through the FastAPI TestClient.
"""
import pytest

from app.models.subscriber_model import SubscriberStatus
from app.schemas.common import NotificationType


ADMIN_SECRET = "test-admin-secret"


class TestRouterConfiguration:
    """Tests for router wiring."""

    def test_subscriber_router_has_routes(self):
        from app.router.v1.subscriber_router import router
        routes = [route.path for route in router.routes]

        assert "/subscribe" in routes
        assert "/unsubscribe" in routes
        assert "/subscribers/count" in routes

    def test_admin_router_prefix(self):
        from app.router.v1.admin_router import router
        assert router.prefix == "/admin"

    def test_routes_mounted_with_and_without_api_prefix(self):
        from app.main import app
        paths = {route.path for route in app.routes}

        assert "/subscribe" in paths
        assert "/api/subscribe" in paths
        assert "/api/admin/subscribers/{subscriber_id}" in paths


class TestSubscribeRoute:
    """Tests for POST /subscribe."""

    def test_new_subscriber(self, test_client, mock_dispatcher):
        response = test_client.post("/subscribe", json={"email": "new@example.com"})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["isNew"] is True
        assert "Successfully subscribed" in body["message"]

        notifications = mock_dispatcher.dispatch.call_args.args[0]
        assert [n.type for n in notifications] == [
            NotificationType.WELCOME,
            NotificationType.ADMIN_ALERT,
        ]

    def test_api_prefix(self, test_client):
        response = test_client.post("/api/subscribe", json={"email": "api@example.com"})
        assert response.status_code == 200
        assert response.json()["isNew"] is True

    def test_already_subscribed(self, test_client, mock_dispatcher):
        test_client.post("/subscribe", json={"email": "dup@example.com"})
        response = test_client.post("/subscribe", json={"email": " DUP@example.com "})

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "isNew": False,
            "message": "You are already subscribed to our newsletter!",
        }
        assert mock_dispatcher.dispatch.call_args.args[0] == []

    @pytest.mark.parametrize(
        "payload",
        [{"email": "not-an-email"}, {"email": ""}, {}, {"email": 123}],
    )
    def test_invalid_email(self, test_client, payload, fake_subscriber_crud):
        response = test_client.post("/subscribe", json=payload)

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert fake_subscriber_crud.calls == []

    def test_non_json_body(self, test_client):
        response = test_client.post(
            "/subscribe", content="email=a@b.com", headers={"Content-Type": "text/plain"}
        )
        assert response.status_code == 400

    def test_storage_error(self, test_client, fake_subscriber_crud, storage_error, mock_dispatcher):
        fake_subscriber_crud.fail_with = storage_error

        response = test_client.post("/subscribe", json={"email": "down@example.com"})

        assert response.status_code == 500
        assert response.json()["success"] is False
        mock_dispatcher.dispatch.assert_not_called()

    def test_dispatch_failure_does_not_change_response(self, test_client, mock_dispatcher):
        from unittest.mock import MagicMock
        from app.services.notification_service import NotificationDispatcher

        broken_task = MagicMock()
        broken_task.apply_async.side_effect = ConnectionError("broker down")
        real_dispatcher = NotificationDispatcher(
            tasks={
                NotificationType.WELCOME: broken_task,
                NotificationType.ADMIN_ALERT: broken_task,
            }
        )
        mock_dispatcher.dispatch.side_effect = real_dispatcher.dispatch

        response = test_client.post("/subscribe", json={"email": "ok@example.com"})

        assert response.status_code == 200
        assert response.json()["isNew"] is True
        assert broken_task.apply_async.call_count == 2

    def test_rate_limited(self, test_client):
        from unittest.mock import AsyncMock, patch

        with patch("app.decorators.rate_limiter.redis_manager") as mock_redis:
            mock_redis.incr_with_expiry = AsyncMock(return_value=999)
            response = test_client.post("/subscribe", json={"email": "spam@example.com"})

        assert response.status_code == 429


class TestUnsubscribeRoute:
    """Tests for POST /unsubscribe."""

    def test_unknown_email_still_succeeds(self, test_client, fake_subscriber_crud):
        response = test_client.post("/unsubscribe", json={"email": "ghost@example.com"})

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert fake_subscriber_crud.writes == 0

    def test_known_email(self, test_client, fake_subscriber_crud):
        test_client.post("/subscribe", json={"email": "leave@example.com"})
        response = test_client.post("/unsubscribe", json={"email": "leave@example.com"})

        assert response.status_code == 200
        assert fake_subscriber_crud.records["leave@example.com"].status == SubscriberStatus.unsubscribed

    def test_missing_email(self, test_client):
        response = test_client.post("/unsubscribe", json={})
        assert response.status_code == 400


class TestSubscriberCountRoute:
    """Tests for GET /subscribers/count."""

    def test_count_after_operations(self, test_client):
        for email in ("a@example.com", "b@example.com", "c@example.com"):
            test_client.post("/subscribe", json={"email": email})
        test_client.post("/unsubscribe", json={"email": "b@example.com"})

        response = test_client.get("/subscribers/count")

        assert response.status_code == 200
        assert response.json() == {"count": 2}

    def test_scenario(self, test_client):
        first = test_client.post("/subscribe", json={"email": "a@b.com"}).json()
        second = test_client.post("/subscribe", json={"email": "a@b.com"}).json()
        test_client.post("/unsubscribe", json={"email": "a@b.com"})
        assert test_client.get("/subscribers/count").json() == {"count": 0}
        third = test_client.post("/subscribe", json={"email": "a@b.com"}).json()

        assert first["isNew"] is True
        assert second["isNew"] is False
        assert third["isNew"] is True
        assert third["message"] == "Welcome back! You have been resubscribed."
        assert test_client.get("/subscribers/count").json() == {"count": 1}


class TestAdminRoutes:
    """Tests for the admin login gate and subscriber management."""

    def _login(self, client):
        return client.post("/admin/login", json={"password": ADMIN_SECRET})

    def test_login_success(self, test_client):
        response = self._login(test_client)

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_login_wrong_password(self, test_client):
        response = test_client.post("/admin/login", json={"password": "nope"})

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_login_missing_password(self, test_client):
        response = test_client.post("/admin/login", json={})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_subscribers_require_login(self, test_client):
        assert test_client.get("/admin/subscribers").status_code == 401
        assert test_client.delete("/admin/subscribers/abc").status_code == 401

    def test_list_subscribers(self, test_client):
        test_client.post("/subscribe", json={"email": "first@example.com"})
        test_client.post("/subscribe", json={"email": "second@example.com"})
        test_client.post("/subscribe", json={"email": "gone@example.com"})
        test_client.post("/unsubscribe", json={"email": "gone@example.com"})
        self._login(test_client)

        response = test_client.get("/admin/subscribers")

        assert response.status_code == 200
        items = response.json()
        assert [item["email"] for item in items] == ["second@example.com", "first@example.com"]
        assert set(items[0]) == {"id", "email", "subscribedAt", "status"}
        assert items[0]["status"] == "active"

    def test_delete_subscriber(self, test_client, fake_subscriber_crud):
        test_client.post("/subscribe", json={"email": "rm@example.com"})
        subscriber_id = fake_subscriber_crud.records["rm@example.com"].id
        self._login(test_client)

        response = test_client.delete(f"/admin/subscribers/{subscriber_id}")
        assert response.status_code == 200
        assert response.json()["success"] is True

        response = test_client.delete(f"/admin/subscribers/{subscriber_id}")
        assert response.status_code == 404
        assert response.json()["success"] is False

    def test_logout_revokes_access(self, test_client):
        self._login(test_client)
        assert test_client.get("/admin/subscribers").status_code == 200

        test_client.post("/admin/logout")
        assert test_client.get("/admin/subscribers").status_code == 401


class TestMiscRoutes:
    """Tests for health, donation stats and CORS handling."""

    def test_health(self, test_client):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "Server is running!"

    def test_donation_stats(self, test_client, mock_donation_service):
        mock_donation_service.get_donation_stats.return_value = {
            "totalAmount": 150.5,
            "totalDonations": 3,
            "averageDonation": 50.17,
        }

        response = test_client.get("/api/donations/stats")

        assert response.status_code == 200
        assert response.json() == {
            "totalAmount": 150.5,
            "totalDonations": 3,
            "averageDonation": 50.17,
        }

    def test_bare_options_short_circuits(self, test_client, fake_subscriber_crud):
        response = test_client.options("/subscribe")

        assert response.status_code == 200
        assert fake_subscriber_crud.calls == []

    def test_cors_preflight(self, test_client):
        response = test_client.options(
            "/subscribe",
            headers={
                "Origin": "https://example.org",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert "access-control-allow-origin" in response.headers

    def test_cors_headers_on_response(self, test_client):
        response = test_client.get(
            "/subscribers/count", headers={"Origin": "https://example.org"}
        )
        assert "access-control-allow-origin" in response.headers


class TestAdminSessionSigning:
    """Session cookies are only trusted when signed with the configured key."""

    @staticmethod
    def _signed_admin_cookie(secret_key):
        import json
        from base64 import b64encode
        from itsdangerous import TimestampSigner

        data = b64encode(json.dumps({"is_admin": True}).encode("utf-8"))
        return TimestampSigner(secret_key).sign(data).decode("utf-8")

    @pytest.mark.parametrize(
        "secret_key",
        ["your-secret-key-here-change-in-production", "secret"],
    )
    def test_cookie_signed_with_other_key_is_rejected(self, test_client, secret_key):
        test_client.cookies.set("session", self._signed_admin_cookie(secret_key))

        response = test_client.get("/admin/subscribers")

        assert response.status_code == 401

    def test_cookie_signed_with_configured_key_is_accepted(self, test_client):
        from app.core.config.settings import settings

        key = settings.session.SESSION_SECRET_KEY.get_secret_value()
        test_client.cookies.set("session", self._signed_admin_cookie(key))

        assert test_client.get("/admin/subscribers").status_code == 200


class TestSubscribeDispatchScheduling:
    """Notifications are handed to background tasks, not sent inline."""

    @pytest.mark.asyncio
    async def test_dispatch_runs_after_response(self, subscriber_service, mock_dispatcher):
        from unittest.mock import MagicMock
        from fastapi import BackgroundTasks
        from app.router.v1.subscriber_router import subscribe_router
        from app.schemas.subscriber_schemas import EmailSchema

        background_tasks = BackgroundTasks()
        response = await subscribe_router.__wrapped__(
            MagicMock(),
            form_data=EmailSchema(email="later@example.com"),
            background_tasks=background_tasks,
            subscriber_service=subscriber_service,
            dispatcher=mock_dispatcher,
        )

        assert response.isNew is True
        mock_dispatcher.dispatch.assert_not_called()
        assert len(background_tasks.tasks) == 1
        task = background_tasks.tasks[0]
        assert task.func == mock_dispatcher.dispatch
        assert [n.recipient for n in task.args[0]] == ["later@example.com", "admin@example.org"]

        await background_tasks()
        mock_dispatcher.dispatch.assert_called_once()
