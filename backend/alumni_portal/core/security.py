from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, ExpiredSignatureError, jwt
import bcrypt

from alumni_portal.core.config import settings
from alumni_portal.core.exceptions import InvalidTokenError, TokenExpiredError

ACCOUNT_KIND_INSTITUTION = "institution"
ACCOUNT_KIND_MEMBER = "member"
ACCOUNT_KINDS = (ACCOUNT_KIND_INSTITUTION, ACCOUNT_KIND_MEMBER)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password against a stored bcrypt digest.

    A missing or malformed digest never matches.
    """
    if not hashed_password or plain_password is None:
        return False
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str) -> str:
    """Hash password with configurable rounds (BCRYPT_ROUNDS in .env)"""
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def create_access_token(
    account_id: str,
    kind: str = ACCOUNT_KIND_MEMBER,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed session token bound to an institution or member id"""
    if kind not in ACCOUNT_KINDS:
        raise ValueError(f"Unknown account kind: {kind}")

    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.ACCESS_TOKEN_EXPIRE_DAYS)

    to_encode = {
        "sub": str(account_id),
        "kind": kind,
        "type": "access",
        "iat": issued_at,
        "exp": issued_at + expires_delta,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a session token.

    Raises:
        TokenExpiredError: signature is valid but ``exp`` has passed
        InvalidTokenError: bad signature, malformed token, wrong type or claims
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError()

    if payload.get("type") != "access":
        raise InvalidTokenError()
    if not payload.get("sub") or payload.get("kind") not in ACCOUNT_KINDS:
        raise InvalidTokenError()

    return payload
