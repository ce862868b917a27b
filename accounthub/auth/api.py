# accounthub/auth/api.py
from typing import Optional

from fastapi import APIRouter, Depends, Header

from accounthub.auth.schemas import (
    AuthResponse, ForgotPasswordRequest, Principal, RefreshRequest,
    ResetPasswordRequest, SignInRequest, SignUpRequest,
)
from accounthub.auth.service import AuthService
from accounthub.shared.auth import bearer_token, get_auth_service, require_principal

router = APIRouter(prefix="/auth", tags=["Auth"])

# null fields are left out of every auth payload
_auth = dict(response_model=AuthResponse, response_model_exclude_none=True)


@router.post("/signup", status_code=201, **_auth)
def api_signup(inb: SignUpRequest, svc: AuthService = Depends(get_auth_service)):
    return svc.sign_up(inb)

@router.post("/signin", **_auth)
def api_signin(inb: SignInRequest, svc: AuthService = Depends(get_auth_service)):
    return svc.sign_in(str(inb.email), inb.password)

@router.post("/refresh", **_auth)
def api_refresh(inb: RefreshRequest, svc: AuthService = Depends(get_auth_service)):
    return svc.refresh(inb.refresh_token)

@router.post("/logout", **_auth)
def api_logout(svc: AuthService = Depends(get_auth_service)):
    return svc.logout()

@router.get("/check-session", **_auth)
def api_check_session(
    authorization: Optional[str] = Header(default=None),
    svc: AuthService = Depends(get_auth_service),
):
    return svc.check_session(bearer_token(authorization))

@router.get("/me", response_model=Principal)
def api_me(principal: Principal = Depends(require_principal)):
    return principal

@router.post("/forgot-password", **_auth)
def api_forgot_password(inb: ForgotPasswordRequest, svc: AuthService = Depends(get_auth_service)):
    svc.forgot_password(str(inb.email))
    return AuthResponse(
        success=True,
        message="If that email is registered, a password reset link has been sent.",
    )

@router.post("/reset-password", **_auth)
def api_reset_password(inb: ResetPasswordRequest, svc: AuthService = Depends(get_auth_service)):
    svc.reset_password(inb.token, inb.new_password)
    return AuthResponse(success=True, message="Password has been reset")
