# Access tokens shared with the host application's session service.
# The host signs users in and mints tokens with the same secret; this
# service only needs to verify them (issue_access_token serves tooling/tests).

from __future__ import annotations
import os, time
from typing import Any, Dict, List, Tuple
import jwt  # PyJWT

# ---- Config ----------------------------------------------------------------

APP_JWT_SECRET = os.environ.get("APP_JWT_SECRET")
if not APP_JWT_SECRET:
    raise RuntimeError("APP_JWT_SECRET must be set")

ISS = os.getenv("APP_JWT_ISS", "http://localhost:8000")
AUD = os.getenv("APP_JWT_AUD", "filter-service")

ACCESS_TTL = int(os.getenv("ACCESS_TOKEN_TTL_SECONDS", "900"))  # 15m

# ---- Public API ------------------------------------------------------------


def issue_access_token(user: Dict[str, Any], roles: List[str], *, account_id: str | None = None) -> Tuple[str, int]:
    """
    Returns: (access_token, access_exp_epoch)
    Claims carry sub/email/roles and, when given, the account the user acts for.
    """
    iat = int(time.time())
    exp = iat + ACCESS_TTL
    payload = {
        "iss": ISS,
        "aud": AUD,
        "iat": iat,
        "exp": exp,
        "sub": user["sub"],
        "email": user.get("email"),
        "roles": roles,
        "typ": "access",
    }
    if account_id:
        payload["account_id"] = account_id
    return jwt.encode(payload, APP_JWT_SECRET, algorithm="HS256"), exp


def verify_access(token: str) -> Dict[str, Any]:
    payload = jwt.decode(
        token,
        APP_JWT_SECRET,
        algorithms=["HS256"],
        audience=AUD,
        issuer=ISS,
        options={"require": ["exp", "iat", "aud", "iss", "sub"]},
    )
    if payload.get("typ") != "access":
        raise jwt.InvalidTokenError("wrong token type")
    return payload
