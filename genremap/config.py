"""Configuration: env, storage paths, Spotify app settings."""
import os
from pathlib import Path

# Base paths (project root = parent of genremap package)
BASE_DIR = Path(__file__).resolve().parent.parent

# Load .env from project root so SPOTIFY_CLIENT_ID etc. are set
try:
    from dotenv import load_dotenv
    load_dotenv(BASE_DIR / ".env")
except ImportError:
    pass
DATA_DIR = Path(os.getenv("GENREMAP_DATA_DIR", str(BASE_DIR / "data")))
TOKEN_STORAGE_PATH = DATA_DIR / "storage.json"
TOKEN_STORAGE_KEY = "spotify_token"

# API
API_HOST = os.getenv("GENREMAP_API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("GENREMAP_API_PORT", "8000"))

# Spotify (implicit grant; no client secret, no refresh token)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID", "")
SPOTIFY_CLIENT_ID_PLACEHOLDER = "YOUR_SPOTIFY_CLIENT_ID_HERE"
SPOTIFY_REDIRECT_URI = os.getenv("SPOTIFY_REDIRECT_URI", "http://localhost:8000/callback")
SPOTIFY_AUTH_ENDPOINT = "https://accounts.spotify.com/authorize"
SPOTIFY_SCOPES = ["user-top-read"]
SPOTIFY_REQUEST_TIMEOUT_SEC = float(os.getenv("SPOTIFY_REQUEST_TIMEOUT_SEC", "10"))

# Provider may omit expires_in; assume one hour
DEFAULT_TOKEN_LIFETIME_SEC = 3600

TOP_ARTISTS_LIMIT = 50
TOP_ARTISTS_TIME_RANGE = "medium_term"


def is_client_id_configured(client_id: str | None) -> bool:
    """True if client_id looks like a real Spotify app identifier."""
    if not client_id or not client_id.strip():
        return False
    return client_id.strip() != SPOTIFY_CLIENT_ID_PLACEHOLDER


def ensure_data_dir() -> None:
    DATA_DIR.mkdir(parents=True, exist_ok=True)
