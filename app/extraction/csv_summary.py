"""Structural summary of CSV content: headers, a bounded sample and totals."""

import csv
from typing import TextIO


def summarize_csv(reader_stream: TextIO, sample_rows: int = 100) -> str:
    reader = csv.reader(reader_stream)
    headers = next((row for row in reader if row), [])
    lines: list[str] = []

    if headers:
        lines.append("CSV Structure:")
        lines.append(f"Columns: {', '.join(headers)}")
        lines.append("\nData Sample:")
        lines.append(" | ".join(headers))
        lines.append("-" * (len(headers) * 10))

    row_count = 0
    for row in reader:
        if not row:
            continue
        if row_count < sample_rows:
            padded = [row[i] if i < len(row) else "" for i in range(len(headers))]
            lines.append(" | ".join(padded))
        row_count += 1

    if headers:
        lines.append(f"\n\nTotal Rows: {row_count}")
        lines.append(f"Total Columns: {len(headers)}")

    return "\n".join(lines) + "\n" if lines else ""
