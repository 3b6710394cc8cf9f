from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Environment variables are loaded from .env and from the process environment.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Remote hosts
    economy_api_base: str = Field(default="https://economy.roblox.com")
    users_api_base: str = Field(default="https://users.roblox.com")
    auth_api_base: str = Field(default="https://auth.roblox.com")

    # Transport
    request_timeout: float = Field(default=60.0)
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:101.0) Gecko/20100101 Firefox/101.0"
    )

    # Session (scripts only; library callers pass the cookie to EconomyClient)
    roblosecurity: str = Field(default="")

    def validate_required(self) -> None:
        missing: list[str] = []

        if not self.roblosecurity.strip():
            missing.append("ROBLOSECURITY")
        if not self.economy_api_base.strip():
            missing.append("ECONOMY_API_BASE")
        if not self.users_api_base.strip():
            missing.append("USERS_API_BASE")

        if missing:
            raise RuntimeError(
                "Missing required environment variables: "
                + ", ".join(missing)
                + ". Check your .env file is present and loaded."
            )


settings = Settings()
