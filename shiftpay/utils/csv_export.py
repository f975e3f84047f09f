"""
CSV export utilities
"""
import csv
import io
from typing import Dict, Iterable, List

from fastapi.responses import StreamingResponse


def stream_csv(headers: List[str], rows: Iterable[Dict], filename: str = "export.csv") -> StreamingResponse:
    """
    Stream rows as a CSV attachment.

    Fields containing commas, quotes or newlines are quoted; missing keys
    are written as empty cells.
    """
    def generate():
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=headers, quoting=csv.QUOTE_MINIMAL, extrasaction="ignore")

        def flush() -> str:
            chunk = buffer.getvalue()
            buffer.seek(0)
            buffer.truncate(0)
            return chunk

        writer.writeheader()
        yield flush()
        for row in rows:
            writer.writerow({h: "" if row.get(h) is None else str(row[h]) for h in headers})
            yield flush()

    return StreamingResponse(
        generate(),
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
