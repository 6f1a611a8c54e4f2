"""
Security utilities for admin authentication
Handles credential checks, JWT tokens and the admin guard
"""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import JWTError, jwt
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import hmac

from .config import Settings
from .exceptions import UnauthorizedException, ForbiddenException

# Security scheme
security = HTTPBearer(auto_error=False)

class CredentialVerifier(ABC):
    """Pluggable admin credential check"""

    @abstractmethod
    def verify(self, username: str, password: str) -> bool:
        ...

class StaticCredentialVerifier(CredentialVerifier):
    """
    Compares against a single configured username/password pair.
    Usernames are case-insensitive; surrounding whitespace is ignored on both.
    """

    def __init__(self, username: str, password: str):
        self._username = username.strip().lower()
        self._password = password.strip()

    def verify(self, username: str, password: str) -> bool:
        user_ok = hmac.compare_digest(username.strip().lower().encode(), self._username.encode())
        pass_ok = hmac.compare_digest(password.strip().encode(), self._password.encode())
        return user_ok and pass_ok

class SecurityUtils:
    """Issues and checks admin access tokens with the configured signing key"""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 30):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "SecurityUtils":
        return cls(settings.SECRET_KEY, settings.ALGORITHM, settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def create_access_token(self, data: Dict[str, Any], expires_minutes: Optional[int] = None) -> str:
        """Create JWT access token"""
        to_encode = data.copy()
        expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or self.expire_minutes)
        to_encode.update({"exp": expire, "type": "access"})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def decode_token(self, token: str) -> Dict[str, Any]:
        """Decode and validate JWT token"""
        try:
            return jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise UnauthorizedException("Invalid authentication credentials")

async def require_admin(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> Dict[str, Any]:
    """Extract and validate the admin from the bearer token"""
    if credentials is None:
        raise UnauthorizedException("Admin login required")

    tokens: SecurityUtils = request.app.state.context.tokens
    payload = tokens.decode_token(credentials.credentials)

    if payload.get("type") != "access":
        raise UnauthorizedException("Invalid token type")
    if payload.get("role") != "admin":
        raise ForbiddenException("Insufficient permissions")

    return {"username": payload.get("sub"), "role": payload.get("role")}
