"""Tests for bearer-token verification."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tacotuesday.auth import decode_token, user_id_from_claims
from tacotuesday.config import Settings, settings

from tests.conftest import make_token


class TestUserIdFromClaims:
    def test_string_claim(self):
        assert user_id_from_claims({"Id": "42"}) == 42

    def test_integer_claim(self):
        assert user_id_from_claims({"Id": 7}) == 7

    def test_missing_claim(self):
        with pytest.raises(ValueError, match="no Id claim"):
            user_id_from_claims({"sub": "42"})

    def test_non_numeric_claim(self):
        with pytest.raises(ValueError):
            user_id_from_claims({"Id": "abc"})

    @pytest.mark.parametrize("raw", [1.9, 1.0, "1.9", True, "-3", ["1"]])
    def test_rejects_non_integer_claims(self, raw):
        with pytest.raises(ValueError, match="not an integer"):
            user_id_from_claims({"Id": raw})


class TestDecodeToken:
    def test_round_trip(self):
        claims = decode_token(make_token(5), settings)

        assert claims["Id"] == "5"

    def test_wrong_secret(self):
        token = jwt.encode({"Id": "5"}, "some-other-secret-that-is-long-enough", algorithm="HS256")

        with pytest.raises(jwt.InvalidSignatureError):
            decode_token(token, settings)

    def test_expired(self):
        token = make_token(5, exp=datetime.now(timezone.utc) - timedelta(minutes=1))

        with pytest.raises(jwt.ExpiredSignatureError):
            decode_token(token, settings)

    def test_audience_checked_when_configured(self):
        strict = Settings(jwt_secret_key=settings.jwt_secret_key, jwt_audience="tacotuesday")

        assert decode_token(make_token(5, aud="tacotuesday"), strict)["Id"] == "5"
        with pytest.raises(jwt.InvalidAudienceError):
            decode_token(make_token(5, aud="elsewhere"), strict)


class TestAuthenticatedRequests:
    def _post(self, client, headers):
        return client.post(
            "/api/Restaurants",
            json={"name": "Taco Hut", "address": "1 Main St"},
            headers=headers,
        )

    def test_garbage_token(self, client):
        response = self._post(client, {"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token"

    def test_token_without_id_claim(self, client):
        token = jwt.encode({"sub": "1"}, settings.jwt_secret_key, algorithm="HS256")

        response = self._post(client, {"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_float_id_claim_is_rejected(self, client, owner):
        token = jwt.encode({"Id": owner.id + 0.9}, settings.jwt_secret_key, algorithm="HS256")

        response = self._post(client, {"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_basic_scheme_is_rejected(self, client):
        response = self._post(client, {"Authorization": "Basic dXNlcjpwYXNz"})

        assert response.status_code == 401
