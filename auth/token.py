from dataclasses import dataclass
from jose import jwt, JWTError
from fastapi import HTTPException, status

from config.auth_settings import AUTH_JWT_SECRET, AUTH_JWT_ALGORITHM, AUTH_JWT_AUDIENCE


# Used when no secret is configured (local development)
UNVERIFIED_DECODE_OPTIONS = {
    "verify_signature": False,
    "verify_aud": False,
    "verify_iat": False,
    "verify_exp": False,
    "verify_nbf": False,
    "verify_iss": False,
    "verify_sub": False,
    "verify_jti": False,
    "verify_at_hash": False,
}


@dataclass
class TokenClaims:
    user_id: str
    email: str | None
    role: str | None


def decode_token(token: str, secret: str | None = None) -> dict:
    """Decode a JWT issued by the auth platform.

    The HS256 signature is verified whenever a secret is configured.
    """
    secret = AUTH_JWT_SECRET if secret is None else secret
    try:
        if not secret:
            return jwt.decode(token, key="", options=UNVERIFIED_DECODE_OPTIONS)
        if AUTH_JWT_AUDIENCE:
            return jwt.decode(
                token, secret, algorithms=[AUTH_JWT_ALGORITHM], audience=AUTH_JWT_AUDIENCE
            )
        return jwt.decode(
            token, secret, algorithms=[AUTH_JWT_ALGORITHM], options={"verify_aud": False}
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )


def extract_claims(token: str, secret: str | None = None) -> TokenClaims:
    """Extract the principal from an access token.

    Auth platform access token claims:
    - sub: user id (unique principal identifier)
    - email: email address
    - role: platform role ("authenticated", "service_role", ...)
    """
    payload = decode_token(token, secret)

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing user identifier",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenClaims(
        user_id=user_id,
        email=payload.get("email"),
        role=payload.get("role"),
    )
