# menuhub/routers/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from menuhub.core.database import get_db
from menuhub.deps import get_code_sender, get_token_service
from menuhub.schemas.auth import (
    EmailCodeRequest,
    EmailCodeVerify,
    LoginPayload,
    MessageResponse,
    SignupPayload,
    SmsCodeRequest,
    SmsCodeVerify,
    TokenResponse,
)
from menuhub.schemas.user import UserRead
from menuhub.services import accounts
from menuhub.services.notifications import CodeSender
from menuhub.services.tokens import TokenService
from menuhub.services.verification import CodeChannel

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def signup(payload: SignupPayload, db: Session = Depends(get_db)):
    return accounts.signup(
        db,
        phone_number=payload.phone_number,
        email=payload.email,
        password=payload.password,
    )


@router.post("/login", response_model=TokenResponse)
def login(
    payload: LoginPayload,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    token = accounts.login_with_password(
        db,
        token_service,
        phone_number=payload.phone_number,
        password=payload.password,
    )
    return {"token": token, "token_type": "bearer"}


@router.post("/login/sms/request", response_model=MessageResponse)
def request_sms_code(
    payload: SmsCodeRequest,
    db: Session = Depends(get_db),
    sender: CodeSender = Depends(get_code_sender),
):
    accounts.request_login_code(db, sender, channel=CodeChannel.SMS, identifier=payload.phone_number)
    return {"message": "Verification code sent"}


@router.post("/login/sms/verify", response_model=TokenResponse)
def verify_sms_code(
    payload: SmsCodeVerify,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    token = accounts.login_with_code(
        db,
        token_service,
        channel=CodeChannel.SMS,
        identifier=payload.phone_number,
        code=payload.code,
    )
    return {"token": token, "token_type": "bearer"}


@router.post("/login/email/request", response_model=MessageResponse)
def request_email_code(
    payload: EmailCodeRequest,
    db: Session = Depends(get_db),
    sender: CodeSender = Depends(get_code_sender),
):
    accounts.request_login_code(db, sender, channel=CodeChannel.EMAIL, identifier=payload.email)
    return {"message": "Verification code sent to email"}


@router.post("/login/email/verify", response_model=TokenResponse)
def verify_email_code(
    payload: EmailCodeVerify,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
):
    token = accounts.login_with_code(
        db,
        token_service,
        channel=CodeChannel.EMAIL,
        identifier=payload.email,
        code=payload.code,
    )
    return {"token": token, "token_type": "bearer"}
