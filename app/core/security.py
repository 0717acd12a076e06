from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import ExpiredSignatureError, JWTError, jwt
import bcrypt

from app.core.config import Settings, settings
from app.core.exceptions import InvalidTokenError, TokenExpiredError


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password"""
    # Bcrypt has a 72 byte limit - truncate password if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode('utf-8'))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    """Hash password with configurable rounds (BCRYPT_ROUNDS in .env, process-wide)"""
    password_bytes = password.encode('utf-8')[:72]
    hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS))
    return hashed.decode('utf-8')


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
    config: Optional[Settings] = None
) -> str:
    """Create JWT access token; `config` defaults to the process settings"""
    config = config or settings
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def create_refresh_token(data: Dict[str, Any], config: Optional[Settings] = None) -> str:
    """Create JWT refresh token"""
    config = config or settings
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(days=config.REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode.update({"exp": expire, "type": "refresh"})
    return jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str, config: Optional[Settings] = None) -> Dict[str, Any]:
    """Decode JWT token"""
    config = config or settings
    try:
        return jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise TokenExpiredError()
    except JWTError:
        raise InvalidTokenError("Could not validate credentials")


def token_subject(payload: Dict[str, Any], expected_type: str) -> int:
    """Return the user id carried by a decoded token of the given type"""
    if payload.get("type") != expected_type:
        raise InvalidTokenError("Invalid token type")

    sub = payload.get("sub")
    try:
        return int(sub)
    except (TypeError, ValueError):
        raise InvalidTokenError("Invalid token payload")


def issue_token_pair(user: Dict[str, Any], config: Optional[Settings] = None) -> Dict[str, str]:
    """Access + refresh token for a stored user row"""
    role = user["role"]
    token_data = {
        "sub": str(user["id"]),
        "username": user["username"],
        "role": getattr(role, "value", role),
    }
    return {
        "access_token": create_access_token(token_data, config=config),
        "refresh_token": create_refresh_token(token_data, config=config),
        "token_type": "bearer",
    }
