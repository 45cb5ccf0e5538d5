"""Pydantic schemas for the tax API."""

from decimal import Decimal

from pydantic import BaseModel, Field

from cryptocgt.domain.models.tax import Trade


class TradesRequest(BaseModel):
    trades: list[Trade] = []


class TaxReportRequest(TradesRequest):
    financial_year: str  # "2024-25"
    usd_aud_rate: Decimal = Field(default=Decimal(1), gt=0)
    other_income: Decimal = Field(default=Decimal(0), ge=0)
    carry_forward_loss: Decimal = Field(default=Decimal(0), ge=0)


class FinancialYearsResponse(BaseModel):
    financial_years: list[str]
