"""Tax API — CGT report, available financial years and xlsx export."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse

from cryptocgt.accounting.tax_engine import TaxEngine
from cryptocgt.api.deps import get_tax_engine
from cryptocgt.api.schemas.tax import FinancialYearsResponse, TaxReportRequest, TradesRequest
from cryptocgt.domain.models.tax import CGTReport
from cryptocgt.report.data_collector import ReportDataCollector
from cryptocgt.report.excel_writer import ExcelWriter, report_filename

router = APIRouter(prefix="/api/tax", tags=["tax"])

EngineDep = Annotated[TaxEngine, Depends(get_tax_engine)]

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _run_report(body: TaxReportRequest, engine: TaxEngine) -> CGTReport:
    try:
        return engine.calculate(
            body.trades,
            body.financial_year,
            usd_aud_rate=body.usd_aud_rate,
            other_income=body.other_income,
            carry_forward_loss=body.carry_forward_loss,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("/report", response_model=CGTReport)
def tax_report(body: TaxReportRequest, engine: EngineDep) -> CGTReport:
    """CGT events, summary, income tax and reporting aggregates for one financial year."""
    return _run_report(body, engine)


@router.post("/financial-years", response_model=FinancialYearsResponse)
def financial_years(body: TradesRequest, engine: EngineDep) -> FinancialYearsResponse:
    """Financial years that contain at least one closed trade."""
    return FinancialYearsResponse(financial_years=engine.available_financial_years(body.trades))


@router.post("/export")
def export_report(body: TaxReportRequest, engine: EngineDep) -> StreamingResponse:
    """Download the report as a three-sheet workbook."""
    report = _run_report(body, engine)
    buf = ExcelWriter().write_to_buffer(ReportDataCollector().collect(report))
    filename = report_filename(report.financial_year)
    return StreamingResponse(
        buf,
        media_type=XLSX_CONTENT_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
