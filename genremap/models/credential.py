"""Bearer credential obtained from the implicit grant redirect."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Credential:
    """Opaque access token and its absolute expiry (ms since epoch)."""
    access_token: str
    expires_at: int

    def is_valid(self, now_ms: int) -> bool:
        return now_ms < self.expires_at

    def to_record(self) -> dict:
        """Persisted shape: {"accessToken": ..., "expiresAt": ...}."""
        return {"accessToken": self.access_token, "expiresAt": self.expires_at}
