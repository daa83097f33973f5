"""
API v1 routes.

Defines the register-user endpoint. Responses are plain text and always
carry the CORS access control headers.
"""

from fastapi import APIRouter, Depends, Request, status
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.access_control import ACCESS_CONTROL_HEADERS, unsupported_method_response
from src.api.authorization import BasicCredentials, get_basic_credentials
from src.api.dependencies import get_registration_service
from src.domain.exceptions import EmailAlreadyRegistered, EmailNotEligible, RegistrationNotPersisted
from src.domain.registration import RegistrationService

API_NAME = "register-user"

router = APIRouter(tags=["v1"])


def _text(message: str, status_code: int) -> PlainTextResponse:
    return PlainTextResponse(message, status_code=status_code, headers=ACCESS_CONTROL_HEADERS)


@router.head(f"/{API_NAME}", response_class=PlainTextResponse, summary="Check the endpoint")
@router.options(f"/{API_NAME}", response_class=PlainTextResponse, summary="CORS preflight")
async def register_user_check() -> PlainTextResponse:
    """Answer HEAD and OPTIONS with a simple 'Ok', regardless of credentials."""
    return _text("Ok", status.HTTP_200_OK)


@router.put(
    f"/{API_NAME}",
    response_class=PlainTextResponse,
    responses={
        400: {"description": "Missing credentials, ineligible or already registered email"},
        500: {"description": "The password hash could not be verified after writing"},
    },
    summary="Register a new user",
    description="Credentials (email:password) of the new user are provided "
    "via HTTP BASIC AUTH. The response body describes the result.",
)
def register_user(
    credentials: BasicCredentials | None = Depends(get_basic_credentials),
    service: RegistrationService = Depends(get_registration_service),
) -> PlainTextResponse:
    """
    Register a new user.

    The username of the Basic credentials is the email to register,
    the password is the user's plaintext password.
    """
    if credentials is None:
        return _text(
            "Missing authorization credentials or incorrect format.",
            status.HTTP_400_BAD_REQUEST,
        )

    try:
        service.register(credentials.username, credentials.password)
    except EmailNotEligible:
        return _text(
            "The supplied email is not eligible to be registered.",
            status.HTTP_400_BAD_REQUEST,
        )
    except EmailAlreadyRegistered:
        return _text(
            "The supplied email is already registered.",
            status.HTTP_400_BAD_REQUEST,
        )
    except RegistrationNotPersisted:
        return _text(
            "Failed to register the supplied email.",
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return _text("Successfully registered the supplied email.", status.HTTP_200_OK)


async def unsupported_method_handler(request: Request, exc: StarletteHTTPException) -> Response:
    """
    Answer 405s for the register-user path with the plain-text CORS response.

    Routing raises the 405 for any method without a route (GET, POST, CONNECT,
    PROPFIND, ...). Other HTTP errors and paths keep FastAPI's default handler.
    """
    if (
        exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED
        and request.url.path.rstrip("/").endswith(f"/{API_NAME}")
    ):
        return unsupported_method_response(API_NAME, request.method)
    return await http_exception_handler(request, exc)
