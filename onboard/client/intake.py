"""
Intake form client - submits a registration to the onboarding API.

Mirrors the registration form: it requires an email or a phone before
sending, makes exactly one request, and surfaces either the server's
message or its error text (falling back to a generic message).
"""

import logging
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"
MISSING_CONTACT = "Please enter email or phone."
REGISTRATION_FAILED = "Registration failed."


@dataclass(frozen=True)
class IntakeResult:
    """Outcome shown to the person filling in the form."""

    ok: bool
    message: str


class IntakeForm:
    """
    Registration form backed by POST /api/register.

    No retries, no client-side password checks.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        http_client: httpx.Client | None = None,
        timeout: float = 10.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = http_client or httpx.Client(timeout=timeout)

    def submit(self, email: str = "", phone: str = "", password: str = "") -> IntakeResult:
        """
        Validate locally and submit the registration.

        Args:
            email: Email address, may be blank
            phone: Phone number, may be blank
            password: Password

        Returns:
            IntakeResult with the message to display
        """
        if not email and not phone:
            return IntakeResult(ok=False, message=MISSING_CONTACT)

        try:
            response = self._client.post(
                f"{self._base_url}/api/register",
                json={"email": email, "phone": phone, "password": password},
            )
        except httpx.HTTPError as e:
            logger.warning("Registration request failed: %s", e)
            return IntakeResult(ok=False, message=REGISTRATION_FAILED)

        body = _json_or_empty(response)
        if response.is_success:
            return IntakeResult(ok=True, message=body.get("message") or "")
        return IntakeResult(ok=False, message=body.get("error") or REGISTRATION_FAILED)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "IntakeForm":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _json_or_empty(response: httpx.Response) -> dict:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}
