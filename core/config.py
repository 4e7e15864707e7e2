# =============================================================================
# core/config.py  —  Runtime Settings
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Holds the handful of static values the server needs: where the
#   Frankfurter API lives, how long to wait for it, and how many characters
#   a single tool response may contain.
#
# HOW IT IS USED:
#   Settings.from_env() is called ONCE at process start (tools/mcp_server.py).
#   The resulting object is passed to the HTTP client and the formatter.
#   Nothing else in core/ reads the environment.
#
# ENVIRONMENT OVERRIDES:
#   FRANKFURTER_API_URL          → base URL (default: public v1 endpoint)
#   FRANKFURTER_TIMEOUT          → request timeout in seconds (default: 10)
#   FRANKFURTER_CHARACTER_LIMIT  → max characters per response (default: 25000)
#
#   A .env file works too: the entry points call load_dotenv() first.
# =============================================================================

from dataclasses import dataclass
import os


DEFAULT_API_BASE_URL = "https://api.frankfurter.dev/v1"
DEFAULT_TIMEOUT_SECONDS = 10.0
DEFAULT_CHARACTER_LIMIT = 25000

SERVER_NAME = "frankfurter-mcp-server"
SERVER_VERSION = "1.0.0"


@dataclass(frozen=True)
class Settings:
    """Immutable configuration shared by the client adapter and the formatter."""

    api_base_url: str = DEFAULT_API_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    character_limit: int = DEFAULT_CHARACTER_LIMIT
    server_name: str = SERVER_NAME
    server_version: str = SERVER_VERSION

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive, got {self.timeout_seconds}")
        if self.character_limit <= 0:
            raise ValueError(f"character_limit must be positive, got {self.character_limit}")
        # "https://host/v1/" and "https://host/v1" should build the same URLs.
        object.__setattr__(self, "api_base_url", self.api_base_url.rstrip("/"))

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "Settings":
        """Build settings from environment variables, falling back to defaults.

        Raises:
            ValueError: If a numeric override is not a valid number.
        """
        env = os.environ if environ is None else environ

        return cls(
            api_base_url=env.get("FRANKFURTER_API_URL", DEFAULT_API_BASE_URL),
            timeout_seconds=float(env.get("FRANKFURTER_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)),
            character_limit=int(env.get("FRANKFURTER_CHARACTER_LIMIT", DEFAULT_CHARACTER_LIMIT)),
        )
