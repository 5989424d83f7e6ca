from typing import Optional

BEARER_PREFIX = "Bearer "


def mask_key(key: Optional[str]) -> str:
    """Masks a credential for logging, keeping only its edges."""
    if not key:
        return "<none>"
    if len(key) <= 8:
        return "****"
    return f"{key[:4]}...{key[-4:]}"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Returns the token of an ``Authorization: Bearer <token>`` header value."""
    if not authorization or not authorization.startswith(BEARER_PREFIX):
        return None
    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None
