"""Spotify implicit-grant connect, callback, and logout."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from genremap.api.state import AppState, get_state
from genremap.core.credential_codec import fragment_from_url
from genremap.core.errors import MissingConfiguration

router = APIRouter()


class CallbackBody(BaseModel):
    """Either the fragment ('#access_token=...') or the full redirect URL."""
    fragment: Optional[str] = None
    redirect_url: Optional[str] = None


@router.get("/auth-url")
def get_auth_url(state: AppState = Depends(get_state)):
    """Return the Spotify authorization URL and whether a credential is held."""
    controller = state.controller
    logged_in = controller.state.connected
    try:
        url = controller.connect()
    except MissingConfiguration as e:
        return {"auth_url": None, "error": e.message, "logged_in": logged_in}
    return {"auth_url": url, "logged_in": logged_in}


@router.get("/connect")
def connect(state: AppState = Depends(get_state)):
    """Redirect the browser to Spotify's consent screen."""
    try:
        url = state.controller.connect()
    except MissingConfiguration as e:
        raise HTTPException(status_code=503, detail=e.message)
    return RedirectResponse(url=url, status_code=302)


@router.post("/callback")
async def complete_login(body: CallbackBody, state: AppState = Depends(get_state)):
    """
    Accept the redirect fragment posted by the callback page.
    A fragment without an access token (e.g. '#error=access_denied') is ignored.
    """
    fragment = body.fragment or ""
    if not fragment and body.redirect_url:
        fragment = fragment_from_url(body.redirect_url)
    controller = state.controller
    ok = await controller.accept_fragment(fragment)
    return {"ok": ok, "state": controller.state.to_dict()}


@router.post("/logout")
def logout(next: Optional[str] = None, state: AppState = Depends(get_state)):
    """Clear the stored credential so the user is disconnected."""
    state.controller.disconnect()
    if next and next.startswith("/") and not next.startswith("//"):
        return RedirectResponse(url=next, status_code=303)
    return {"ok": True}
