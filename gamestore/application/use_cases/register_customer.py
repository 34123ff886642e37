from __future__ import annotations

from gamestore.application.dto.auth import RegisterCustomerInput, RegisterCustomerOutput
from gamestore.application.ports.customer_port import CustomerPort
from gamestore.application.ports.password_hasher_port import PasswordHasherPort
from gamestore.domain.exceptions import UsernameAlreadyExistsError

from .auth_common import build_customer_output, normalize_username


class RegisterCustomerUseCase:
    def __init__(
        self,
        *,
        customer_port: CustomerPort,
        password_hasher: PasswordHasherPort,
    ):
        self._customer_port = customer_port
        self._password_hasher = password_hasher

    def execute(self, command: RegisterCustomerInput) -> RegisterCustomerOutput:
        username = normalize_username(command.username)
        password = command.password

        if not username:
            raise ValueError("username is required.")
        if len(username) < 3 or len(username) > 64:
            raise ValueError("username must have between 3 and 64 characters.")
        if len(password) < 8:
            raise ValueError("password must have at least 8 characters.")

        password_hash = self._password_hasher.hash(password)

        def _tx(customer_port: CustomerPort) -> RegisterCustomerOutput:
            if customer_port.get_customer_by_username(username=username) is not None:
                raise UsernameAlreadyExistsError("Username already taken.")

            customer = customer_port.create_customer(username=username, password_hash=password_hash)
            return RegisterCustomerOutput(customer=build_customer_output(customer))

        return self._customer_port.execute_in_transaction(_tx)
