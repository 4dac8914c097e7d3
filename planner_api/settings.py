from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url

from timegrid.positioner import SpanPolicy


class Settings(BaseSettings):
    database_url: str = Field(..., alias="DATABASE_URL")
    backend_session_secret: str = Field(..., alias="BACKEND_SESSION_SECRET")

    allowed_users_raw: str = Field("", alias="ALLOWED_USERS")

    hour_row_height_px: int = Field(64, alias="HOUR_ROW_HEIGHT_PX")
    min_item_height_px: int = Field(20, alias="MIN_ITEM_HEIGHT_PX")
    month_cell_max_visible: int = Field(3, alias="MONTH_CELL_MAX_VISIBLE")
    span_policy_raw: str = Field("overflow", alias="SPAN_POLICY")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def allowed_users(self) -> List[str]:
        return [user.strip().lower() for user in self.allowed_users_raw.split(",") if user.strip()]

    @property
    def span_policy(self) -> SpanPolicy:
        return SpanPolicy.parse(self.span_policy_raw)

    def redacted(self) -> dict:
        """Loggable view of the settings with credentials masked."""
        return {
            "database_url": make_url(self.database_url).render_as_string(hide_password=True),
            "backend_session_secret": "***" if self.backend_session_secret else "",
            "allowed_users": len(self.allowed_users),
            "hour_row_height_px": self.hour_row_height_px,
            "min_item_height_px": self.min_item_height_px,
            "month_cell_max_visible": self.month_cell_max_visible,
            "span_policy": self.span_policy.value,
        }


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None
