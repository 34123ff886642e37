from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from gamestore.api.deps import get_login_customer_use_case, get_register_customer_use_case
from gamestore.api.schemas.auth import (
    AuthTokenResponse,
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
)
from gamestore.application.dto.auth import LoginCustomerInput, RegisterCustomerInput
from gamestore.application.use_cases.login_customer import LoginCustomerUseCase
from gamestore.application.use_cases.register_customer import RegisterCustomerUseCase
from gamestore.domain.exceptions import InvalidCredentialsError, UsernameAlreadyExistsError


router = APIRouter()


@router.post("/v1/auth/register", response_model=RegisterResponse, status_code=201)
def register_customer(
    req: RegisterRequest,
    use_case: RegisterCustomerUseCase = Depends(get_register_customer_use_case),
):
    try:
        output = use_case.execute(
            RegisterCustomerInput(
                username=req.username,
                password=req.password,
            )
        )
    except UsernameAlreadyExistsError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return RegisterResponse(
        customer={
            "id": output.customer.id,
            "username": output.customer.username,
        }
    )


@router.post("/v1/auth/login", response_model=AuthTokenResponse)
def login_customer(
    req: LoginRequest,
    use_case: LoginCustomerUseCase = Depends(get_login_customer_use_case),
):
    try:
        output = use_case.execute(
            LoginCustomerInput(
                username=req.username,
                password=req.password,
            )
        )
    except InvalidCredentialsError as exc:
        raise HTTPException(status_code=401, detail=str(exc)) from exc

    return AuthTokenResponse(
        access_token=output.access_token,
        access_expires_at=output.access_expires_at,
        customer={
            "id": output.customer.id,
            "username": output.customer.username,
        },
    )
