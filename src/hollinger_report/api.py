from __future__ import annotations

import io
from datetime import date

from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse

from hollinger_report.config import settings
from hollinger_report.errors import ConfigError, DataSourceError, ReportError, SheetNameCollisionError
from hollinger_report.services.aggregate import HollingerAggregator
from hollinger_report.services.xlsx.workbook import build_report_xlsx_bytes

app = FastAPI(title="hollinger-report", version="0.1.0")

_XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/v1/reports/hollinger:generate")
def generate_hollinger_report() -> StreamingResponse:
    try:
        report = HollingerAggregator(settings.source_config()).aggregate()
        data = build_report_xlsx_bytes(report, options=settings.workbook_options())
    except (ConfigError, DataSourceError) as e:
        raise HTTPException(status_code=503, detail=str(e)) from e
    except SheetNameCollisionError as e:
        raise HTTPException(status_code=409, detail=str(e)) from e
    except ReportError as e:
        raise HTTPException(status_code=500, detail=str(e)) from e

    filename = f"HollingerBoxSummary_{date.today():%Y%m%d}.xlsx"
    return StreamingResponse(
        io.BytesIO(data),
        media_type=_XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
