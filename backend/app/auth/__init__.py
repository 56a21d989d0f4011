"""Authentication package for the application."""
from .models import Account, LoginRequest, LoginResponse, TokenData
from .service import (
    AuthService,
    get_auth_service,
    get_current_user,
    hash_password,
    require_role,
    verify_password,
)
from .router import router as auth_router

__all__ = [
    'Account',
    'LoginRequest',
    'LoginResponse',
    'TokenData',
    'AuthService',
    'get_auth_service',
    'get_current_user',
    'hash_password',
    'require_role',
    'verify_password',
    'auth_router'
]
