from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class ConversionOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    amount: float
    from_currency: str = Field(..., alias="from")
    to_currency: str = Field(..., alias="to")
    converted_amount: float
    rate: float = Field(..., gt=0, description="Unrounded factor applied to amount")
    timestamp: str


class ValidationErrorOut(BaseModel):
    error: str = "Invalid parameters"
    message: str
    details: Dict[str, str]


class ErrorOut(BaseModel):
    error: str
    message: str


class HealthOut(BaseModel):
    status: str = "healthy"
    uptime: str


class GreetingOut(BaseModel):
    message: str = "Hello World!"
    timestamp: str
    service: str
    version: str


class CurrencyListOut(BaseModel):
    anchor: str
    currencies: List[str]
    count: int
