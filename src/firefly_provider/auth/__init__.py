# Copyright (c) 2026 Dedalus Labs, Inc. and its contributors
# SPDX-License-Identifier: MIT

"""Bearer token providers for the Firefly III API.

Personal access token:

    >>> provider = StaticTokenProvider("eyJ0eXAiOiJKV1Qi...")

OAuth2 client credentials (Firefly III ``/oauth/token``):

    >>> provider = ClientCredentialsTokenProvider(
    ...     "https://firefly.example.com",
    ...     client_id="7",
    ...     client_secret=os.environ["FIREFLY_CLIENT_SECRET"],
    ... )
"""

from .models import TokenResponse
from .providers import ClientCredentialsTokenProvider, StaticTokenProvider, TokenProvider, token_provider_for


__all__ = [
    "ClientCredentialsTokenProvider",
    "StaticTokenProvider",
    "TokenProvider",
    "TokenResponse",
    "token_provider_for",
]
