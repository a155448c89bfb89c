"""Dashboard configuration from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

MATCH_POLICIES = ("fallback", "exact", "fragment")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


@dataclass
class DashboardConfig:
    """Configuration for the spreadsheet-backed daily report."""

    # Google Sheets access
    spreadsheet_id: str = ""
    client_email: str = ""
    private_key: str = ""
    # Which rule decides that a Registro belongs to a report date
    match_policy: str = "fallback"
    # Days added to the report date before exact-date comparison
    offset_days: int = 0
    # Match DMA/Nave/ROV rows by date fragment when no Registro matched
    legacy_fallback: bool = True
    # Read ambiguous textual dates (04/08/2025) as day-first
    dayfirst: bool = False
    # Concurrent range fetches
    fetch_workers: int = 4

    @classmethod
    def from_env(cls) -> DashboardConfig:
        """Load configuration from environment variables."""
        policy = os.environ.get("OPS_DASHBOARD_MATCH_POLICY", "fallback").strip().lower()
        return cls(
            spreadsheet_id=os.environ.get("GOOGLE_SHEETS_SPREADSHEET_ID", "").strip(),
            client_email=os.environ.get("GOOGLE_SHEETS_CLIENT_EMAIL", "").strip(),
            # Keys pasted into .env files usually carry escaped newlines
            private_key=os.environ.get("GOOGLE_SHEETS_PRIVATE_KEY", "").replace("\\n", "\n"),
            match_policy=policy or "fallback",
            offset_days=_env_int("OPS_DASHBOARD_OFFSET_DAYS", 0),
            legacy_fallback=_env_flag("OPS_DASHBOARD_LEGACY_FALLBACK", True),
            dayfirst=_env_flag("OPS_DASHBOARD_DAYFIRST", False),
            fetch_workers=max(1, _env_int("OPS_DASHBOARD_FETCH_WORKERS", 4)),
        )

    def validate(self) -> list[str]:
        """Return list of validation errors, empty if config is valid."""
        errors = []
        if not self.spreadsheet_id:
            errors.append("GOOGLE_SHEETS_SPREADSHEET_ID is required")
        if not self.client_email:
            errors.append("GOOGLE_SHEETS_CLIENT_EMAIL is required")
        if not self.private_key.strip():
            errors.append("GOOGLE_SHEETS_PRIVATE_KEY is required")
        if self.match_policy not in MATCH_POLICIES:
            errors.append(
                f"OPS_DASHBOARD_MATCH_POLICY must be one of {', '.join(MATCH_POLICIES)}"
                f" (got {self.match_policy!r})"
            )
        return errors
