# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""OAuth 2.0 token endpoint response model (RFC 6749 Section 5.1)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class TokenResponse:
    """Successful access token response.

    Attributes:
        access_token: The issued token.
        token_type: Token type, normally ``"Bearer"``.
        expires_in: Lifetime in seconds, when the server reports one.
        scope: Granted scopes, if they differ from the request.
    """

    access_token: str
    token_type: str = "Bearer"
    expires_in: int | None = None
    scope: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenResponse:
        """Create from a decoded token response. Unknown fields are ignored.

        Raises:
            ValueError: If ``access_token`` is missing or a field has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"token response must be a JSON object, got {type(data).__name__}")

        access_token = data.get("access_token")
        if not isinstance(access_token, str) or not access_token:
            raise ValueError("token response is missing access_token")

        token_type = data.get("token_type") or "Bearer"
        if not isinstance(token_type, str):
            raise ValueError("token_type must be a string")

        expires_in = data.get("expires_in")
        if expires_in is not None:
            try:
                expires_in = int(expires_in)
            except (TypeError, ValueError) as exc:
                raise ValueError(f"expires_in must be an integer, got {expires_in!r}") from exc

        scope = data.get("scope")
        return cls(
            access_token=access_token,
            token_type=token_type,
            expires_in=expires_in,
            scope=scope if isinstance(scope, str) else None,
        )


__all__ = ["TokenResponse"]
