"""Stock arithmetic shared by the transaction service and the read models."""

from enum import Enum


class StockDirection(str, Enum):
    INPUT = "input"    # goods received
    OUTPUT = "output"  # goods consumed or shipped


def apply_stock_movement(current_stock: int, quantity: int, direction: StockDirection) -> int:
    """
    Return the stock level after one transaction.

    Inputs add. Outputs subtract and floor at zero, so withdrawing more than
    is on hand empties the item instead of being rejected.
    """
    if StockDirection(direction) is StockDirection.INPUT:
        return current_stock + quantity
    return max(0, current_stock - quantity)


def transaction_total(quantity: int, unit_price: float) -> float:
    return quantity * unit_price


def is_low_stock(current_stock: int, min_stock: int) -> bool:
    return current_stock <= min_stock
