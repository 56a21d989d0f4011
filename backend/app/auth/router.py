"""Login endpoint."""
import logging

from fastapi import APIRouter, Depends

from ..errors import InvalidCredentials
from .models import LoginRequest, LoginResponse
from .service import AuthService, get_auth_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post("/login", response_model=LoginResponse)
def login(credentials: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange a username and password for a bearer token valid one hour."""
    account = service.authenticate_user(credentials.username, credentials.password)
    if not account:
        logger.warning(f"Failed login for '{credentials.username}'")
        raise InvalidCredentials("Invalid credentials")
    logger.info(f"User '{account.username}' logged in")
    return LoginResponse(token=service.create_access_token(account))
