"""
Verification of Google sign-in ID tokens through Firebase, plus a test double.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

import firebase_admin
from firebase_admin import auth, credentials, exceptions

from thoughttrail.errors import ApiError, Forbidden

logger = logging.getLogger(__name__)

GOOGLE_AUTH_FAILED = (
    "Failed to authenticate you with google. Try with some other google account"
)


@dataclass
class VerifiedIdentity:
    email: str
    name: str
    picture: str


class IdentityVerifier(Protocol):
    """Turns an identity-provider token into a verified identity."""

    def verify(self, id_token: str) -> VerifiedIdentity:
        ...


def _identity_from_claims(claims: dict) -> VerifiedIdentity:
    email = claims.get("email")
    if not email:
        raise Forbidden(GOOGLE_AUTH_FAILED)
    picture = (claims.get("picture") or "").replace("s96-c", "s384-c")
    return VerifiedIdentity(
        email=email.lower(),
        name=claims.get("name") or email.split("@")[0],
        picture=picture,
    )


@dataclass
class InMemoryIdentityVerifier:
    """Maps known tokens to claim dicts; any other token is rejected."""

    tokens: dict[str, dict] = field(default_factory=dict)

    def register(self, id_token: str, email: str, name: str = "", picture: str = "") -> None:
        self.tokens[id_token] = {"email": email, "name": name, "picture": picture}

    def verify(self, id_token: str) -> VerifiedIdentity:
        claims = self.tokens.get(id_token)
        if claims is None:
            raise Forbidden(GOOGLE_AUTH_FAILED)
        return _identity_from_claims(claims)


class FirebaseIdentityVerifier:
    """Verifies Firebase ID tokens with the Admin SDK."""

    def __init__(self, credentials_path: Optional[str] = None):
        try:
            self.app = firebase_admin.get_app()
        except ValueError:
            cred = (
                credentials.Certificate(credentials_path)
                if credentials_path
                else credentials.ApplicationDefault()
            )
            self.app = firebase_admin.initialize_app(cred)

    def verify(self, id_token: str) -> VerifiedIdentity:
        try:
            claims = auth.verify_id_token(id_token, app=self.app)
        except (ValueError, auth.InvalidIdTokenError) as exc:
            logger.warning("Google ID token rejected: %s", exc)
            raise Forbidden(GOOGLE_AUTH_FAILED) from exc
        except exceptions.FirebaseError as exc:
            # Certificate fetch or transport failure, not a bad token.
            logger.exception("Google ID token could not be verified: %s", exc)
            raise ApiError(GOOGLE_AUTH_FAILED) from exc
        return _identity_from_claims(claims)
