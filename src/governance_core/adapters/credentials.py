"""
governance_core.adapters.credentials

Service-to-service credentials attached to collaborator calls.

Responsibilities:
- Mint short-lived HS256 JWTs whose audience is the target collaborator.
- Fall back to a static API key when one is configured.
- Decode/validate minted tokens (used by collaborators and tests).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidTokenError

from governance_core.errors import GovernanceCoreError
from governance_core.settings import Settings

DEFAULT_TOKEN_TTL = timedelta(minutes=5)


@dataclass(frozen=True, slots=True)
class JwtConfig:
    alg: str
    issuer: str
    secret: str


class CredentialError(GovernanceCoreError):
    pass


def issue_service_token(
    *,
    cfg: JwtConfig,
    subject: str,
    audience: str,
    ttl: timedelta = DEFAULT_TOKEN_TTL,
) -> str:
    now = datetime.now(tz=UTC)
    payload: dict[str, Any] = {
        "iss": cfg.issuer,
        "aud": audience,
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int((now + ttl).timestamp()),
    }
    return jwt.encode(payload, cfg.secret, algorithm=cfg.alg)


def decode_service_token(*, cfg: JwtConfig, token: str, audience: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            cfg.secret,
            algorithms=[cfg.alg],
            issuer=cfg.issuer,
            audience=audience,
            options={"require": ["exp", "iat", "iss", "aud", "sub"]},
        )
    except InvalidTokenError as e:
        raise CredentialError(str(e)) from e


@dataclass(frozen=True, slots=True)
class ServiceCredentials:
    subject: str
    jwt: JwtConfig
    api_key: str | None = None

    @classmethod
    def from_settings(cls, settings: Settings) -> ServiceCredentials:
        return cls(
            subject=settings.service_subject,
            jwt=JwtConfig(
                alg=settings.jwt_alg,
                issuer=settings.jwt_issuer,
                secret=settings.jwt_secret,
            ),
            api_key=settings.adapter_api_key,
        )

    def headers(self, *, audience: str) -> dict[str, str]:
        if self.api_key:
            return {"Authorization": f"Bearer {self.api_key}"}
        token = issue_service_token(cfg=self.jwt, subject=self.subject, audience=audience)
        return {"Authorization": f"Bearer {token}"}


# --- Module Notes -----------------------------------------------------------
# Tokens are minted per call; nothing is cached between requests.
