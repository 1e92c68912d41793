# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Tests for the OAuth token response model (RFC 6749 Section 5.1)."""

from __future__ import annotations

import pytest

from firefly_provider.auth import TokenResponse


class TestTokenResponse:
    def test_from_dict_full(self):
        token = TokenResponse.from_dict(
            {"access_token": "eyJ0eXAi", "token_type": "Bearer", "expires_in": 3600, "scope": "read"}
        )

        assert token.access_token == "eyJ0eXAi"
        assert token.token_type == "Bearer"
        assert token.expires_in == 3600
        assert token.scope == "read"

    def test_defaults(self):
        token = TokenResponse.from_dict({"access_token": "tok"})

        assert token.token_type == "Bearer"
        assert token.expires_in is None
        assert token.scope is None

    def test_ignores_unknown_fields(self):
        token = TokenResponse.from_dict({"access_token": "tok", "refresh_token": "r", "id_token": "i"})
        assert not hasattr(token, "refresh_token")

    def test_string_expires_in_is_coerced(self):
        assert TokenResponse.from_dict({"access_token": "tok", "expires_in": "120"}).expires_in == 120

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"access_token": ""},
            {"access_token": 42},
            {"token_type": "Bearer"},
        ],
    )
    def test_missing_access_token_raises(self, data):
        with pytest.raises(ValueError, match="access_token"):
            TokenResponse.from_dict(data)

    def test_bad_expires_in_raises(self):
        with pytest.raises(ValueError, match="expires_in"):
            TokenResponse.from_dict({"access_token": "tok", "expires_in": "soon"})

    def test_non_object_raises(self):
        with pytest.raises(ValueError, match="JSON object"):
            TokenResponse.from_dict(["tok"])  # type: ignore[arg-type]
