"""CSV export utilities."""
import csv

from django.http import HttpResponse


def _cell(value):
    return "" if value is None else str(value)


def rows_to_csv_response(rows, columns, filename):
    """Stream ``rows`` into a downloadable CSV with a UTF-8 BOM so Excel detects the encoding.

    A row can be any object. The supplier incentive export passes
    ``(incentive, report)`` tuples, so its columns are callables that pick
    from either side of the pair. ``columns`` is a list of
    ``(attribute_name_or_callable, header)``; ``None`` renders as an empty
    cell. ``filename`` is given without the ``.csv`` extension.
    """
    response = HttpResponse(content_type="text/csv; charset=utf-8")
    response["Content-Disposition"] = f'attachment; filename="{filename}.csv"'
    response.write("\ufeff")

    writer = csv.writer(response)
    writer.writerow([header for _, header in columns])

    if hasattr(rows, "iterator"):
        rows = rows.iterator()
    for row in rows:
        writer.writerow([
            _cell(source(row) if callable(source) else getattr(row, source, ""))
            for source, _ in columns
        ])
    return response
