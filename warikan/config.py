from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # Allowed gap between the sum of participant shares and the payment amount.
    share_sum_tolerance: int = Field(1, ge=0, alias="SHARE_SUM_TOLERANCE")
    # A recorded settlement matches a transfer when the amounts differ by less than this.
    settlement_match_tolerance: int = Field(1, ge=1, alias="SETTLEMENT_MATCH_TOLERANCE")


settings = Settings()
