"""Demo data seeding schemas."""

from pydantic import BaseModel, Field


class SeedDemoRequest(BaseModel):
    months_back: int = Field(default=6, ge=1)
    approx_total: int = Field(default=500, ge=1)
    random_seed: int | None = 42
