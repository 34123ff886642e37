from __future__ import annotations

import logging

from gamestore.application.dto.auth import AccessTokenOutput, LoginCustomerInput
from gamestore.application.ports.customer_port import CustomerPort
from gamestore.application.ports.password_hasher_port import PasswordHasherPort
from gamestore.application.ports.token_port import TokenPort
from gamestore.domain.exceptions import InvalidCredentialsError

from .auth_common import build_customer_output, normalize_username, utcnow


logger = logging.getLogger(__name__)


class LoginCustomerUseCase:
    def __init__(
        self,
        *,
        customer_port: CustomerPort,
        password_hasher: PasswordHasherPort,
        token_port: TokenPort,
    ):
        self._customer_port = customer_port
        self._password_hasher = password_hasher
        self._token_port = token_port

    def execute(self, command: LoginCustomerInput) -> AccessTokenOutput:
        username = normalize_username(command.username)
        customer = self._customer_port.get_customer_by_username(username=username)
        if customer is None or not customer.password_hash:
            logger.info("login_customer: unknown_username username=%s", username)
            raise InvalidCredentialsError("Invalid credentials.")

        verified, replacement_hash = self._password_hasher.verify_and_update(
            command.password,
            customer.password_hash,
        )
        if not verified:
            logger.info("login_customer: bad_password customer_id=%s", customer.id)
            raise InvalidCredentialsError("Invalid credentials.")

        if replacement_hash:
            self._customer_port.update_customer_password_hash(
                customer_id=customer.id,
                password_hash=replacement_hash,
            )
            logger.info("login_customer: password_hash_upgraded customer_id=%s", customer.id)

        access_token, expires_at = self._token_port.create_access_token(user_id=customer.id, now=utcnow())
        return AccessTokenOutput(
            customer=build_customer_output(customer),
            access_token=access_token,
            access_expires_at=expires_at,
        )
