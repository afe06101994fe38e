"""Goal and goal-plan schemas."""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, field_validator

# Server may add statuses; unknown values are kept as plain strings.
GoalStatus = Literal["ahead", "on_track", "behind", "no_net"]


class GoalCreate(BaseModel):
    name: str
    target_amount: Decimal
    current_amount: Decimal | None = None
    target_date: date | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name must not be blank")
        return v


class GoalUpdate(GoalCreate):
    pass


class Goal(BaseModel):
    id: int | str
    name: str = ""
    target_amount: Decimal = Decimal(0)
    current_amount: Decimal = Decimal(0)
    target_date: date | None = None

    model_config = {"extra": "allow"}

    @field_validator("target_amount", "current_amount", mode="before")
    @classmethod
    def missing_amount_is_zero(cls, v):
        return 0 if v is None else v


class GoalPlanItem(BaseModel):
    id: int | str
    name: str = ""
    remaining: Decimal | None = None
    months_to_target: int | float | None = None
    projected_completion: str | None = None
    status: GoalStatus | str

    model_config = {"extra": "allow"}
