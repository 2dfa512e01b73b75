from dotenv import load_dotenv
import os

load_dotenv()


def _env_int(name: str, default):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


# Base & output directories
BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CACHE_DIR = os.path.join(BASE_DIR, "cache")
ANALYSIS_DIR = os.getenv("ANALYSIS_DIR", os.path.join(BASE_DIR, "analysis"))

# Cache files
SPOTIFY_TOKEN_FILE = os.path.join(CACHE_DIR, "spotify_token.json")

# Spotify credentials (REQUIRED)
SPOTIFY_CLIENT_ID = os.getenv("SPOTIFY_CLIENT_ID")
SPOTIFY_CLIENT_SECRET = os.getenv("SPOTIFY_CLIENT_SECRET")
SPOTIFY_REDIRECT_URI = os.getenv(
    "SPOTIFY_REDIRECT_URI", "http://127.0.0.1:8888/auth/callback"
)
# Minted once with scripts/get_tokens.py, then kept in .env
SPOTIFY_REFRESH_TOKEN = os.getenv("SPOTIFY_REFRESH_TOKEN")

# Spotify API constants
SPOTIFY_AUTH_URL = "https://accounts.spotify.com/authorize"
SPOTIFY_TOKEN_URL = "https://accounts.spotify.com/api/token"
SPOTIFY_API_BASE = "https://api.spotify.com/v1"

SCOPES = [
    "user-library-read",
    "user-library-modify",
    "playlist-modify-private",
]

# Spotify batch limits
SAVED_TRACKS_PAGE_SIZE = 50
PLAYLIST_ADD_CHUNK = 100
SAVED_TRACKS_REMOVE_CHUNK = 50

REQUEST_TIMEOUT = _env_int("REQUEST_TIMEOUT", 30)

# OpenAI classification
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-2024-08-06")
OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.3"))

# Unset means one batch per bucket whatever its size
CLASSIFIER_MAX_BATCH = _env_int("CLASSIFIER_MAX_BATCH", None)

# Parallel /tracks/{id} lookups per month
DETAIL_FETCH_WORKERS = _env_int("DETAIL_FETCH_WORKERS", 10)

# Playlist naming
PLAYLIST_PREFIX_YEAR = "Liked Songs "
