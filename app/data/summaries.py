from __future__ import annotations

from typing import Any, Iterable

import pandas as pd


def commission_totals(records: Iterable[dict[str, Any]]) -> pd.DataFrame:
    """Commission and sale amounts summed per rep and period, largest payout first."""
    df = pd.DataFrame(list(records))
    cols = ["rep_id", "rep_name", "period", "commission_count", "amount", "sale_amount"]
    if df.empty:
        return pd.DataFrame(columns=cols)

    df["rep_name"] = df["rep_name"].fillna("").replace("", "Unassigned")
    out = (
        df.groupby(["rep_id", "rep_name", "period"], as_index=False, dropna=False)
        .agg(commission_count=("id", "count"), amount=("amount", "sum"), sale_amount=("sale_amount", "sum"))
        .sort_values(["amount", "rep_id"], ascending=[False, True])
        .reset_index(drop=True)
    )
    return out[cols]


def pipeline_by_stage(records: Iterable[dict[str, Any]]) -> pd.DataFrame:
    """Deal count, total amount and probability-weighted amount per stage."""
    df = pd.DataFrame(list(records))
    cols = ["stage", "deal_count", "total_amount", "weighted_amount"]
    if df.empty:
        return pd.DataFrame(columns=cols)

    df["weighted_amount"] = df["amount"] * df["probability"].clip(0, 100) / 100.0
    out = (
        df.groupby("stage", as_index=False)
        .agg(deal_count=("id", "count"), total_amount=("amount", "sum"), weighted_amount=("weighted_amount", "sum"))
        .sort_values("total_amount", ascending=False)
        .reset_index(drop=True)
    )
    return out[cols]


def status_counts(records: Iterable[dict[str, Any]], field: str) -> pd.DataFrame:
    df = pd.DataFrame(list(records))
    if df.empty or field not in df.columns:
        return pd.DataFrame(columns=[field, "count"])
    return (
        df[field]
        .fillna("(none)")
        .value_counts()
        .rename_axis(field)
        .reset_index(name="count")
    )
