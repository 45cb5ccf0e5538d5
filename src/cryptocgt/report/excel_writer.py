"""ExcelWriter — builds the CGT report workbook with openpyxl."""

from io import BytesIO

from openpyxl import Workbook
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from cryptocgt.report.data_collector import ReportData

# Sheet definitions: (sheet_name, headers, data_attr, number_formats)
# number_formats: dict of column_index (0-based) → openpyxl number format
SHEET_DEFS: list[tuple[str, list[str], str, dict[int, str]]] = [
    (
        "CGT Events",
        [
            "Asset", "Buy Date", "Sell Date", "Hold Days", "Cost Base ($)", "Sale Proceeds ($)",
            "Capital Gain/Loss ($)", "Long Term", "Discount Eligible", "Discounted Gain ($)", "Exchange",
        ],
        "events",
        {4: "$#,##0.00", 5: "$#,##0.00", 6: "$#,##0.00", 9: "$#,##0.00"},
    ),
    (
        "Tax Summary",
        ["Item", "Value"],
        "summary",
        {},
    ),
    (
        "Asset Summary",
        ["Asset", "Trades", "Total Gains ($)", "Total Losses ($)", "Net ($)", "Avg Hold Days"],
        "assets",
        {2: "$#,##0.00", 3: "$#,##0.00", 4: "$#,##0.00"},
    ),
]

HEADER_FONT = Font(bold=True)


def report_filename(financial_year: str) -> str:
    return f"Crypto_Tax_Report_FY{financial_year}.xlsx"


class ExcelWriter:
    """Writes ReportData to an in-memory Excel buffer."""

    def write_to_buffer(self, data: ReportData) -> BytesIO:
        """Create the three-sheet workbook and return it as BytesIO, rewound."""
        wb = Workbook()

        for idx, (sheet_name, headers, data_attr, num_fmts) in enumerate(SHEET_DEFS):
            if idx == 0:
                ws = wb.active
                ws.title = sheet_name
            else:
                ws = wb.create_sheet(title=sheet_name)

            for col_idx, header in enumerate(headers, start=1):
                cell = ws.cell(row=1, column=col_idx, value=header)
                cell.font = HEADER_FONT

            for row_idx, row in enumerate(getattr(data, data_attr, []), start=2):
                for col_idx, value in enumerate(row, start=1):
                    cell = ws.cell(row=row_idx, column=col_idx, value=value)
                    fmt = num_fmts.get(col_idx - 1)  # col_idx is 1-based, num_fmts keys are 0-based
                    if fmt:
                        cell.number_format = fmt

            _auto_fit_columns(ws)

        buf = BytesIO()
        wb.save(buf)
        buf.seek(0)
        return buf


def _auto_fit_columns(ws) -> None:
    """Set column widths based on content (approximate)."""
    for col_cells in ws.columns:
        max_len = max((len(str(c.value)) for c in col_cells if c.value is not None), default=0)
        col_letter = get_column_letter(col_cells[0].column)
        ws.column_dimensions[col_letter].width = min(max_len + 3, 50)
