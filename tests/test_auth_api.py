import re
from datetime import timedelta

import pytest

from snsfeed.core.config import settings
from snsfeed.core.limiter import limiter
from snsfeed.crud import crud_refresh_token
from snsfeed.services.auth_service import utcnow

from conftest import DEFAULT_PASSWORD

HEX_128 = re.compile(r"^[0-9a-f]{128}$")


async def login(client, **extra):
    body = {"loginId": "user123", "password": DEFAULT_PASSWORD, **extra}
    return await client.post("/auth/login", json=body)


async def test_root(client):
    response = await client.get("/")
    assert response.status_code == 200
    assert response.json() == {"message": "SNS Feed API is running!"}


async def test_login_success(client, create_user):
    user = await create_user()

    response = await login(client, deviceId="device-12345")

    assert response.status_code == 200
    data = response.json()
    assert data["user"] == {
        "id": user.id,
        "loginId": "user123",
        "name": "김철수",
        "nickname": "nickname",
        "profileImageUrl": "https://picsum.photos/40/40?random=1",
    }
    assert data["accessToken"]
    assert HEX_128.match(data["refreshToken"])


async def test_login_records_client_metadata(client, create_user, session_factory):
    await create_user()

    response = await client.post(
        "/auth/login",
        json={"loginId": "user123", "password": DEFAULT_PASSWORD},
        headers={"User-Agent": "feed-app/1.0", "X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
    )
    assert response.status_code == 200

    async with session_factory() as session:
        row = await crud_refresh_token.get_refresh_token(session, token=response.json()["refreshToken"])
    assert row.user_agent == "feed-app/1.0"
    assert row.ip_address == "203.0.113.7"
    assert row.device_id is None


async def test_login_bad_credentials(client, create_user):
    await create_user()

    wrong_password = await login(client, password="wrongpass1!")
    unknown_user = await client.post("/auth/login", json={"loginId": "ghost", "password": "whatever1!"})

    for response in (wrong_password, unknown_user):
        assert response.status_code == 401
        assert response.json() == {
            "message": "아이디 또는 비밀번호가 올바르지 않습니다",
            "error": "Unauthorized",
            "statusCode": 401,
        }


async def test_login_missing_field_is_bad_request(client):
    response = await client.post("/auth/login", json={"loginId": "user123"})
    assert response.status_code == 400
    assert response.json()["statusCode"] == 400


async def test_refresh_flow(client, create_user):
    await create_user()
    token_a = (await login(client)).json()["refreshToken"]

    response = await client.post("/auth/refresh", json={"refreshToken": token_a})
    assert response.status_code == 200
    token_b = response.json()["refreshToken"]
    assert response.json()["accessToken"]
    assert token_b != token_a

    replay = await client.post("/auth/refresh", json={"refreshToken": token_a})
    assert replay.status_code == 401
    assert replay.json()["message"] == "유효하지 않은 리프레시 토큰입니다"

    again = await client.post("/auth/refresh", json={"refreshToken": token_b})
    assert again.status_code == 200


async def test_refresh_expired(client, create_user, session_factory):
    user = await create_user()
    async with session_factory() as session:
        await crud_refresh_token.create_refresh_token(
            session,
            user_id=user.id,
            token="expired-token",
            ip_address="127.0.0.1",
            expires_at=utcnow() - timedelta(hours=1),
        )

    response = await client.post("/auth/refresh", json={"refreshToken": "expired-token"})

    assert response.status_code == 401
    assert response.json()["message"] == "만료된 리프레시 토큰입니다"
    async with session_factory() as session:
        assert await crud_refresh_token.get_refresh_token(session, token="expired-token") is None


async def test_logout_requires_bearer_token(client, create_user):
    await create_user()
    refresh_token = (await login(client)).json()["refreshToken"]

    missing = await client.post("/auth/logout", json={"refreshToken": refresh_token})
    garbage = await client.post(
        "/auth/logout",
        json={"refreshToken": refresh_token},
        headers={"Authorization": "Bearer not-a-jwt"},
    )

    for response in (missing, garbage):
        assert response.status_code == 401
        assert response.json()["message"] == "Unauthorized"


async def test_logout_flow(client, create_user):
    await create_user()
    data = (await login(client)).json()
    headers = {"Authorization": f"Bearer {data['accessToken']}"}

    response = await client.post("/auth/logout", json={"refreshToken": data["refreshToken"]}, headers=headers)
    assert response.status_code == 200
    assert response.json() == {"message": "로그아웃되었습니다"}

    after = await client.post("/auth/refresh", json={"refreshToken": data["refreshToken"]})
    assert after.status_code == 401
    assert after.json()["message"] == "유효하지 않은 리프레시 토큰입니다"

    # the access token itself stays valid until it expires
    twice = await client.post("/auth/logout", json={"refreshToken": data["refreshToken"]}, headers=headers)
    assert twice.status_code == 401


async def test_logout_blank_refresh_token(client, create_user):
    await create_user()
    data = (await login(client)).json()
    headers = {"Authorization": f"Bearer {data['accessToken']}"}

    response = await client.post("/auth/logout", json={"refreshToken": "   "}, headers=headers)

    assert response.status_code == 400
    assert response.json() == {
        "message": "리프레시 토큰이 필요합니다",
        "error": "Bad Request",
        "statusCode": 400,
    }


@pytest.fixture
def rate_limited(monkeypatch):
    monkeypatch.setattr(limiter, "enabled", True)
    limiter.reset()
    yield
    limiter.reset()


async def test_login_rate_limit_uses_error_body(client, rate_limited):
    allowed = int(settings.LOGIN_RATE_LIMIT.split("/")[0])
    for _ in range(allowed):
        response = await client.post("/auth/login", json={"loginId": "nobody", "password": DEFAULT_PASSWORD})
        assert response.status_code == 401

    response = await client.post("/auth/login", json={"loginId": "nobody", "password": DEFAULT_PASSWORD})

    assert response.status_code == 429
    body = response.json()
    assert set(body) == {"message", "error", "statusCode"}
    assert body["error"] == "Too Many Requests"
    assert body["statusCode"] == 429
    assert body["message"].startswith("요청 한도를 초과했습니다")
