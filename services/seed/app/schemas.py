from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class SeedResponse(StrictModel):
    message: str = "Database seeded successfully"
    counts: dict[str, int]


class SeedErrorDetail(StrictModel):
    message: str = "Unknown error"
    code: str = "UNKNOWN"
    name: str = "Error"


class SeedErrorResponse(StrictModel):
    error: SeedErrorDetail
    status: Literal["error"] = "error"
