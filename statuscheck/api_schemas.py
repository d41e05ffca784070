from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class HealthResponse(BaseModel):
    status: str = Field(description="Health status")


class ConfigResponse(BaseModel):
    timeout_s: float | None = Field(default=None)
    custom_ca_file: bool = False


class StatusCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success_status: bool = Field(alias="successStatus")
    status_code: int | str | None = Field(default=None, alias="statusCode")
    status_text: str | None = Field(default=None, alias="statusText")
    server_name: str | None = Field(default=None, alias="serverName")
    time_taken: int | None = Field(default=None, alias="timeTaken", ge=0)
    message: str = Field(min_length=1)
