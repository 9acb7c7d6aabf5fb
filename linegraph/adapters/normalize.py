from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from linegraph.errors import PlotDataError


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except Exception:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def coerce_values(value: Any, *, label: str) -> list[Any]:
    """Turn a 1-D container of numbers into a plain list.

    Element types are kept (ints stay ints) so series can carry integer,
    decimal or float coordinates. Non-finite values pass through; the layout
    pass ignores them.
    """
    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.tolist()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        out = list(value)
        for i, raw in enumerate(out):
            _check_numeric(raw, label=label, index=i)
        return out

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> list[Any]:
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.tolist()
    out = arr.tolist()
    for i, raw in enumerate(out):
        _check_numeric(raw, label=label, index=i)
    return out


def _check_numeric(raw: Any, *, label: str, index: int) -> None:
    if isinstance(raw, (str, bytes, bytearray)) or raw is None:
        raise PlotDataError(f"{label} contains non-numeric value at index {index}: {raw!r}")
    try:
        float(raw)
    except (TypeError, ValueError) as exc:
        raise PlotDataError(f"{label} contains non-numeric value at index {index}: {raw!r}") from exc
