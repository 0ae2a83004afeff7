"""JWT verification for resolving the calling actor.

Uses taskflow.core.config for secret and algorithm. Tokens are issued by an
external identity service; this module only verifies them.
"""

from typing import Any

from jose import JWTError, jwt

from taskflow.core.config import get_settings


def verify_token(token: str) -> dict[str, Any]:
    """Decode a bearer token signed with SECRET_KEY and return its claims.

    Raises:
        ValueError: Bad signature, expired, or no exp/sub claim.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    if "sub" not in payload:
        raise ValueError("Token missing required claim: sub")
    return payload
