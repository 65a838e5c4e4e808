import csv
import re
from io import StringIO
from typing import Any, Iterable, Optional

CLIENT_CSV_HEADERS = [
    "Date",
    "Project",
    "Item",
    "Quantity",
    "Unit price",
    "Total value",
    "Staff",
    "Comment",
]

def client_csv_filename(project: Optional[str]) -> str:
    if not project or project == "all":
        return "clients_all_projects.csv"
    return f"clients_{re.sub(r'[^a-zA-Z0-9]', '_', project)}.csv"

def _one_line(value: Optional[str]) -> str:
    return re.sub(r"\r\n|\r|\n", " ", value or "")

def client_transactions_csv(transactions: Iterable[Any]) -> str:
    """
    Render output transactions as CSV: one header line plus one line per row.

    Quantities are written negated because every row is stock leaving the
    warehouse. Money columns always carry two decimals.

    Line breaks inside free-text fields become spaces so each row stays on
    a single line.
    """
    output = StringIO()
    writer = csv.writer(output, lineterminator="\n")
    writer.writerow(CLIENT_CSV_HEADERS)
    for t in transactions:
        writer.writerow([
            t.created_at.date().isoformat() if t.created_at else "",
            _one_line(t.project),
            _one_line(t.item_name),
            -t.quantity,
            f"{t.unit_price:.2f}",
            f"{t.total_value:.2f}",
            _one_line(t.staff_name),
            _one_line(t.comment),
        ])
    return output.getvalue()
