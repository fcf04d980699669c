"""
Account endpoints — sign-in, sign-up and the email-based flows.

Handlers stay thin: parse the DTO, call the service, shape the response.
Every failure is a typed AppError rendered by the global handler.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from config import AppSettings
from dependencies import (
    get_auth_service,
    get_current_user_id,
    get_email_verification_service,
    get_magic_link_service,
    get_password_reset_service,
    get_profile_service,
    get_settings,
)
from schemas.dto.requests.auth import (
    ChangePasswordRequest,
    LoginRequest,
    MagicLinkLoginRequest,
    PersonalInformationsRequest,
    SendEmailRequest,
    SignupRequest,
    StartLoginRequest,
    VerifyEmailRequest,
)
from schemas.dto.responses.auth import (
    EmailSentResponse,
    LoginResponse,
    SignupResponse,
    StartLoginResponse,
    UserProfileResponse,
)
from schemas.dto.responses.common import ErrorResponse
from schemas.models.user import UserDoc
from services.auth_service import AuthService
from services.email_verification_service import EmailVerificationService
from services.magic_link_service import MagicLinkService
from services.password_reset_service import PasswordResetService
from services.profile_service import ProfileService
from shared.access_tokens import generate_access_jwt

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
)


def _sign_in(
    response: Response, settings: AppSettings, user: UserDoc, auth_method: str
) -> str:
    access_token = generate_access_jwt(settings.jwt, str(user.id), auth_method)
    response.set_cookie(
        "access_token",
        value=access_token,
        httponly=True,
        secure=settings.jwt.cookie_secure,
        samesite="lax",
        path="/",
        max_age=settings.jwt.access_token_ttl_seconds,
    )
    return access_token


@router.post("/start-sign-in", response_model=StartLoginResponse)
async def start_sign_in(
    body: StartLoginRequest, auth: AuthService = Depends(get_auth_service)
) -> StartLoginResponse:
    result = await auth.start_login(body.email)
    return StartLoginResponse(email=result.email, user_exists=result.user_exists)


@router.post("/sign-in", response_model=LoginResponse)
async def sign_in(
    body: LoginRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: AppSettings = Depends(get_settings),
) -> LoginResponse:
    user = await auth.login(body.email, body.password)
    access_token = _sign_in(response, settings, user, "pwd")
    return LoginResponse(
        access_token=access_token, user=UserProfileResponse.from_user(user)
    )


@router.post(
    "/sign-up", response_model=SignupResponse, status_code=status.HTTP_201_CREATED
)
async def sign_up(
    body: SignupRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service),
    settings: AppSettings = Depends(get_settings),
) -> SignupResponse:
    user = await auth.signup(body.email, body.password)
    access_token = _sign_in(response, settings, user, "pwd")
    return SignupResponse(
        access_token=access_token, user=UserProfileResponse.from_user(user)
    )


@router.post("/send-email-verification", response_model=EmailSentResponse)
async def send_email_verification(
    body: SendEmailRequest,
    verification: EmailVerificationService = Depends(get_email_verification_service),
) -> EmailSentResponse:
    email_sent = await verification.send_email_address_verification_email(
        body.email, check_before_send=body.check_before_send
    )
    return EmailSentResponse(email_sent=email_sent)


@router.post("/verify-email", response_model=UserProfileResponse)
async def verify_email(
    body: VerifyEmailRequest,
    verification: EmailVerificationService = Depends(get_email_verification_service),
) -> UserProfileResponse:
    user = await verification.verify_email(body.verify_email_token)
    return UserProfileResponse.from_user(user)


@router.post("/send-magic-link", response_model=EmailSentResponse)
async def send_magic_link(
    body: SendEmailRequest,
    magic_links: MagicLinkService = Depends(get_magic_link_service),
) -> EmailSentResponse:
    email_sent = await magic_links.send_magic_link_email(
        body.email, check_before_send=body.check_before_send
    )
    return EmailSentResponse(email_sent=email_sent)


@router.post("/sign-in-with-magic-link", response_model=LoginResponse)
async def sign_in_with_magic_link(
    body: MagicLinkLoginRequest,
    response: Response,
    magic_links: MagicLinkService = Depends(get_magic_link_service),
    settings: AppSettings = Depends(get_settings),
) -> LoginResponse:
    user = await magic_links.login_with_magic_link(body.magic_link_token)
    access_token = _sign_in(response, settings, user, "mlink")
    return LoginResponse(
        access_token=access_token, user=UserProfileResponse.from_user(user)
    )


@router.post("/reset-password", response_model=EmailSentResponse)
async def reset_password(
    body: SendEmailRequest,
    resets: PasswordResetService = Depends(get_password_reset_service),
) -> EmailSentResponse:
    email_sent = await resets.send_reset_password_email(
        body.email, check_before_send=body.check_before_send
    )
    return EmailSentResponse(email_sent=email_sent)


@router.post("/change-password", response_model=UserProfileResponse)
async def change_password(
    body: ChangePasswordRequest,
    resets: PasswordResetService = Depends(get_password_reset_service),
) -> UserProfileResponse:
    user = await resets.change_password(body.reset_password_token, body.password)
    return UserProfileResponse.from_user(user)


@router.post("/personal-information", response_model=UserProfileResponse)
async def update_personal_information(
    body: PersonalInformationsRequest,
    user_id: str = Depends(get_current_user_id),
    profiles: ProfileService = Depends(get_profile_service),
) -> UserProfileResponse:
    user = await profiles.update_personal_informations(
        user_id,
        given_name=body.given_name,
        family_name=body.family_name,
        phone_number=body.phone_number,
        job=body.job,
    )
    return UserProfileResponse.from_user(user)
