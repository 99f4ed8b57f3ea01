"""
CSV export utilities
"""
import csv
import io
from datetime import date, datetime
from typing import Dict, Iterable, Iterator, List, Optional

from fastapi.responses import StreamingResponse


def export_filename(prefix: str, start: Optional[date], end: Optional[date], generated_at: datetime) -> str:
    """
    Download name such as ``attendance_2026-06-01_to_2026-06-30.csv``

    Open-ended ranges fall back to the generation timestamp.
    """
    if start and end:
        return f"{prefix}_{start.isoformat()}_to_{end.isoformat()}.csv"
    if start:
        return f"{prefix}_from_{start.isoformat()}.csv"
    if end:
        return f"{prefix}_until_{end.isoformat()}.csv"
    return f"{prefix}_{generated_at.strftime('%Y%m%d%H%M%S')}.csv"


def iter_csv(headers: List[str], rows: Iterable[Dict]) -> Iterator[str]:
    """
    Yield CSV text one line at a time, header first

    Rows are dictionaries keyed by column title; missing columns are blank.
    An empty ``rows`` gives a header-only file.
    """
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=headers, extrasaction="ignore")

    def flush() -> str:
        text = buffer.getvalue()
        buffer.seek(0)
        buffer.truncate(0)
        return text

    writer.writeheader()
    yield flush()
    for row in rows:
        writer.writerow({header: "" if row.get(header) is None else str(row[header]) for header in headers})
        yield flush()


def stream_csv(headers: List[str], rows: Iterable[Dict], filename: str = "export.csv") -> StreamingResponse:
    """Stream rows as a CSV attachment"""
    return StreamingResponse(
        iter_csv(headers, rows),
        media_type="text/csv; charset=utf-8",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        }
    )
