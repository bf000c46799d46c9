"""Sign-in and sign-out endpoints delegating to the identity provider."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Header, Request, Response, status
from fastapi.responses import RedirectResponse

from camp_registration.config import parse_bearer_token
from camp_registration.errors import Unauthenticated

if TYPE_CHECKING:
    from camp_registration.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get("/login")
async def login(request: Request, provider: str | None = None) -> RedirectResponse:
    """Redirect to the OAuth provider's consent page."""
    container: AppContainer = request.app.state.container
    url = container.identity_provider.sign_in_url(
        provider or container.settings.oauth_provider,
        redirect_to=container.settings.oauth_redirect_url,
    )
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    request: Request, authorization: str | None = Header(default=None)
) -> Response:
    """Revoke the caller's session."""
    container: AppContainer = request.app.state.container
    token = parse_bearer_token(authorization)
    if token is None:
        raise Unauthenticated
    container.identity_provider.sign_out(token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
