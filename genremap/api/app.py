"""FastAPI app, CORS, and route registration."""
import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

# Configure logging in the worker process (so core INFO logs are visible with uvicorn --reload)
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s: %(name)s: %(message)s",
)

from genremap.api.render import CALLBACK_PAGE, render_page
from genremap.api.state import AppState, get_state
from genremap.config import ensure_data_dir

from genremap.api.routes import genres, spotify

__all__ = ["app", "AppState", "get_state"]

logger = logging.getLogger(__name__)


def _log_startup_failure(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error("Session startup failed: %s", error, exc_info=error)


@asynccontextmanager
async def lifespan(app: FastAPI):
    ensure_data_dir()
    state = get_state()
    # Stored credential is loaded in the background so startup never waits on Spotify
    startup = asyncio.create_task(state.controller.start())
    startup.add_done_callback(_log_startup_failure)
    logger.info("Session controller started")

    yield

    if not startup.done():
        startup.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await startup
    state.shutdown()


app = FastAPI(
    title="Genre Map API",
    description="Top-artist genre breakdown for a connected Spotify account",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(spotify.router, prefix="/api/spotify", tags=["spotify"])
app.include_router(genres.router, prefix="/api/genres", tags=["genres"])


@app.get("/", response_class=HTMLResponse)
def index(state: AppState = Depends(get_state)):
    return render_page(state.controller.state)


@app.get("/callback", response_class=HTMLResponse)
def callback_page():
    """Spotify redirects here; the page posts the fragment and strips it from the URL."""
    return CALLBACK_PAGE
