"""Genre table for the current session."""
from fastapi import APIRouter, Depends, HTTPException

from genremap.api.render import genre_bars
from genremap.api.state import AppState, get_state
from genremap.core.errors import ExpiredCredential

router = APIRouter()


@router.get("/")
def get_genres(state: AppState = Depends(get_state)):
    """Current session state, with bar widths for rendering."""
    session = state.controller.state
    payload = session.to_dict()
    payload["bars"] = genre_bars(session.genres)
    return payload


@router.post("/reload")
async def reload_genres(state: AppState = Depends(get_state)):
    """Fetch and aggregate again with the current credential."""
    controller = state.controller
    if not controller.state.connected:
        raise HTTPException(status_code=409, detail="Not connected to Spotify.")
    try:
        await controller.reload()
    except ExpiredCredential as e:
        raise HTTPException(status_code=401, detail=e.message)
    return controller.state.to_dict()
