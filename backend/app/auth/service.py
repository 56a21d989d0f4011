"""Authentication service: fixed account list, bearer tokens and role checks."""
import logging
from datetime import datetime, timedelta, UTC
from functools import lru_cache
from typing import Iterable, Optional

import bcrypt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from .. import config
from ..errors import Unauthenticated, Unauthorized
from .models import Account, TokenData

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str, rounds: int = 12) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


class AuthService:
    def __init__(
        self,
        accounts: Iterable[Account],
        secret_key: str = config.JWT_SECRET,
        algorithm: str = config.JWT_ALGORITHM,
        expire_minutes: int = config.ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        self.accounts = {account.username: account for account in accounts}
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def authenticate_user(self, username: str, password: str) -> Optional[Account]:
        """Return the account when the password matches, otherwise None."""
        account = self.accounts.get(username)
        if not account or not verify_password(password, account.password):
            return None
        return account

    def create_access_token(self, account: Account, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode = {"sub": account.username, "role": account.role, "exp": expire}
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify_token(self, token: str) -> TokenData:
        """Decode a bearer token. Expired or tampered tokens raise ``Unauthorized``."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError:
            raise Unauthorized("Invalid token")
        username = payload.get("sub")
        if username is None:
            raise Unauthorized("Invalid token")
        return TokenData(username=username, role=payload.get("role"))


@lru_cache(maxsize=1)
def get_auth_service() -> AuthService:
    """Dependency returning the process-wide AuthService."""
    return AuthService([Account(**user) for user in config.load_auth_users()])


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    service: AuthService = Depends(get_auth_service),
) -> TokenData:
    """Dependency to get the caller from the ``Authorization: Bearer`` header."""
    if credentials is None or not credentials.credentials:
        raise Unauthenticated("Token missing")
    return service.verify_token(credentials.credentials)


def require_role(role: str):
    """
    Usage:
        @router.get("/admin-only")
        def endpoint(user=Depends(require_role("admin"))):
    """

    def role_checker(user: TokenData = Depends(get_current_user)) -> TokenData:
        if user.role != role:
            logger.warning(f"User '{user.username}' with role '{user.role}' denied; '{role}' required")
            raise Unauthorized("Forbidden")
        return user

    return role_checker
