"""
Load order flow from CSV or DataFrame for checkout simulation.

One row per order line: order id, product id, quantity (optionally customer).
Rows sharing an order id become one OrderRequest, in first-appearance order.
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from shopcore.cart import CartLine, OrderRequest


def _normalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Lowercase column names; map common aliases to order_id/product_id/quantity."""
    out = df.copy()
    out.columns = [str(c).lower().strip() for c in out.columns]
    renames = {
        "order": "order_id",
        "sku": "product_id",
        "product": "product_id",
        "qty": "quantity",
        "units": "quantity",
    }
    out = out.rename(columns={k: v for k, v in renames.items() if k in out.columns and v not in out.columns})
    return out


def load_orders_dataframe(
    df: pd.DataFrame,
    *,
    order_column: str = "order_id",
    product_column: str = "product_id",
    quantity_column: str = "quantity",
    customer_column: str | None = None,
) -> list[OrderRequest]:
    """
    Build OrderRequests from a line-per-row DataFrame.

    Parameters
    ----------
    df : pd.DataFrame
        Raw order lines (columns may be mixed case or aliased).
    order_column, product_column, quantity_column : str
        Column names after normalization.
    customer_column : str, optional
        Column holding the customer; first value per order is used.

    Returns
    -------
    list[OrderRequest]
        One request per distinct order id, ordered by first appearance.
    """
    out = _normalize_columns(df)
    required = [order_column, product_column, quantity_column]
    if customer_column is not None:
        required.append(customer_column)
    missing = [c for c in required if c not in out.columns]
    if missing:
        raise ValueError(f"order data is missing column(s): {', '.join(missing)}")
    if out.empty:
        return []

    out[order_column] = out[order_column].astype(str)
    out[product_column] = out[product_column].astype(str).str.strip()
    out[quantity_column] = pd.to_numeric(out[quantity_column], errors="raise").astype(int)

    requests: list[OrderRequest] = []
    for order_id, group in out.groupby(order_column, sort=False):
        lines = tuple(
            CartLine(product_id=row[product_column], quantity=int(row[quantity_column]))
            for _, row in group.iterrows()
        )
        customer = None
        if customer_column is not None:
            value = group[customer_column].iloc[0]
            customer = None if pd.isna(value) else str(value)
        requests.append(OrderRequest(lines=lines, order_id=str(order_id), customer=customer))
    return requests


def load_orders_csv(
    path: str | Path,
    *,
    order_column: str = "order_id",
    product_column: str = "product_id",
    quantity_column: str = "quantity",
    customer_column: str | None = None,
) -> list[OrderRequest]:
    """Load order lines from a CSV file. See load_orders_dataframe for columns."""
    # Read every column as text: ids like "007" must survive before aliases are resolved.
    df = pd.read_csv(path, dtype=str)
    return load_orders_dataframe(
        df,
        order_column=order_column,
        product_column=product_column,
        quantity_column=quantity_column,
        customer_column=customer_column,
    )
