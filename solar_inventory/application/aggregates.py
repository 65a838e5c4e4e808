"""
Read models recomputed from item and transaction lists.

Everything here is a pure function over already-loaded rows (ORM objects or
anything with the same attributes). Nothing touches the database, so the
dashboard, history and clients screens can be derived from a single
``list()`` per table.

A ``project`` argument of ``None``, ``""`` or ``"all"`` means "every project".
"""

from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from solar_inventory.domain.stock import StockDirection, is_low_stock

ALL_PROJECTS = "all"
DASHBOARD_PREVIEW_SIZE = 5


def _selected(project: Optional[str]) -> Optional[str]:
    if not project or project == ALL_PROJECTS:
        return None
    return project


def _contains(needle: str, *haystacks: Optional[str]) -> bool:
    return any(needle in (h or "").lower() for h in haystacks)


def _newest_first(transactions: Iterable[Any]) -> List[Any]:
    return sorted(transactions, key=lambda t: t.created_at or datetime.min, reverse=True)


def _is_output(t: Any) -> bool:
    return t.type == StockDirection.OUTPUT.value


def project_names(transactions: Iterable[Any]) -> List[str]:
    """Distinct non-empty project names, in first-seen order."""
    seen: Dict[str, None] = {}
    for t in transactions:
        if t.project:
            seen.setdefault(t.project, None)
    return list(seen)


def supplier_names(items: Iterable[Any]) -> List[str]:
    return sorted({item.supplier for item in items if item.supplier})


def filter_inventory(items: Iterable[Any], search: Optional[str] = None, project: Optional[str] = None) -> List[Any]:
    needle = (search or "").strip().lower()
    selected = _selected(project)
    return [
        item for item in items
        if (not needle or _contains(needle, item.name, item.category, item.supplier))
        and (selected is None or item.project == selected)
    ]


def filter_staff(staff: Iterable[Any], search: Optional[str] = None) -> List[Any]:
    needle = (search or "").strip().lower()
    if not needle:
        return list(staff)
    return [m for m in staff if _contains(needle, m.name, m.email, m.role, m.department)]


def low_stock_items(items: Iterable[Any], project: Optional[str] = None) -> List[Any]:
    selected = _selected(project)
    return [
        item for item in items
        if is_low_stock(item.current_stock, item.min_stock)
        and (selected is None or item.project == selected)
    ]


def filter_transactions(
    transactions: Iterable[Any],
    search: Optional[str] = None,
    type: Optional[str] = None,
    project: Optional[str] = None,
) -> List[Any]:
    """Search over item, staff and project names; newest first."""
    needle = (search or "").strip().lower()
    selected = _selected(project)
    wanted_type = None if type in (None, "", "all") else type
    matched = [
        t for t in transactions
        if (not needle or _contains(needle, t.item_name, t.staff_name, t.project))
        and (wanted_type is None or t.type == wanted_type)
        and (selected is None or t.project == selected)
    ]
    return _newest_first(matched)


def dashboard_summary(items: Iterable[Any], transactions: Iterable[Any], project: Optional[str] = None) -> Dict[str, Any]:
    items = list(items)
    transactions = list(transactions)
    selected = _selected(project)

    scoped_items = filter_inventory(items, project=selected)
    scoped_transactions = filter_transactions(transactions, project=selected)
    low_stock = low_stock_items(scoped_items)

    return {
        "selected_project": selected,
        "projects": project_names(transactions),
        "total_items": len(scoped_items),
        "total_value": sum(item.current_stock * item.unit_price for item in scoped_items),
        "low_stock_count": len(low_stock),
        "low_stock": low_stock[:DASHBOARD_PREVIEW_SIZE],
        "recent_transactions": scoped_transactions[:DASHBOARD_PREVIEW_SIZE],
    }


def history_summary(transactions: Iterable[Any]) -> Dict[str, Any]:
    transactions = list(transactions)
    return {
        "count": len(transactions),
        "input_count": sum(1 for t in transactions if t.type == StockDirection.INPUT.value),
        "output_count": sum(1 for t in transactions if _is_output(t)),
        "total_value": sum(t.total_value for t in transactions),
    }


def group_by_project(transactions: Iterable[Any]) -> Dict[str, List[Any]]:
    groups: Dict[str, List[Any]] = defaultdict(list)
    for t in transactions:
        groups[t.project].append(t)
    return dict(groups)


def group_by_item(transactions: Iterable[Any]) -> Dict[Any, List[Any]]:
    """Keyed by item id, falling back to the item name for orphaned rows."""
    groups: Dict[Any, List[Any]] = defaultdict(list)
    for t in transactions:
        key = t.item_id if t.item_id is not None else t.item_name
        groups[key].append(t)
    return dict(groups)


def _rollup(project: Optional[str], transactions: List[Any]) -> Dict[str, Any]:
    return {
        "project": project,
        "total_value": sum(t.total_value for t in transactions),
        "total_items": sum(t.quantity for t in transactions),
        "unique_components": len({t.item_name for t in transactions}),
        "transaction_count": len(transactions),
    }


def project_stats(transactions: Iterable[Any]) -> List[Dict[str, Any]]:
    """Per-project roll-up of output transactions, highest value first."""
    outputs = [t for t in transactions if _is_output(t) and t.project]
    stats = [_rollup(project, rows) for project, rows in group_by_project(outputs).items()]
    return sorted(stats, key=lambda s: s["total_value"], reverse=True)


def selected_project_stats(transactions: Iterable[Any], project: Optional[str] = None) -> Dict[str, Any]:
    transactions = list(transactions)
    selected = _selected(project)
    if selected is None:
        return _rollup(None, [t for t in transactions if _is_output(t)])
    for stats in project_stats(transactions):
        if stats["project"] == selected:
            return stats
    return _rollup(selected, [])


def client_projects(transactions: Iterable[Any]) -> List[str]:
    """Projects that have at least one output, sorted by name."""
    return sorted({t.project for t in transactions if _is_output(t) and t.project})


def clients_view(transactions: Iterable[Any], search: Optional[str] = None, project: Optional[str] = None) -> Dict[str, Any]:
    transactions = list(transactions)
    outputs = [t for t in transactions if _is_output(t)]
    return {
        "selected_project": _selected(project),
        "projects": client_projects(transactions),
        "stats": selected_project_stats(transactions, project),
        "project_stats": project_stats(transactions),
        "transactions": filter_transactions(outputs, search=search, project=project),
    }


def top_items_by_usage(transactions: Iterable[Any], limit: int = 5, project: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Rank items by quantity taken out of stock.

    Ties are broken by total value and then by item name so the ranking is
    deterministic.
    """
    selected = _selected(project)
    outputs = [
        t for t in transactions
        if _is_output(t) and (selected is None or t.project == selected)
    ]
    usage = []
    for rows in group_by_item(outputs).values():
        usage.append({
            "item_id": rows[0].item_id,
            "item_name": rows[0].item_name,
            "total_quantity": sum(t.quantity for t in rows),
            "total_value": sum(t.total_value for t in rows),
            "transaction_count": len(rows),
        })
    usage.sort(key=lambda u: (-u["total_quantity"], -u["total_value"], u["item_name"]))
    return usage[:max(0, limit)]
