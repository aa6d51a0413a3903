from typing import Any, List, Optional

def to_int(v) -> Optional[int]:
    try:
        if v is None or v == "" or str(v).lower() in ("null", "nan"):
            return None
        return int(float(v))
    except (TypeError, ValueError):
        return None

def to_float(v) -> Optional[float]:
    try:
        if v is None or v == "" or str(v).lower() in ("null", "nan"):
            return None
        return float(v)
    except (TypeError, ValueError):
        return None

def to_str(v) -> str:
    return "" if v is None else str(v)

def to_opt_str(v) -> Optional[str]:
    text = to_str(v).strip()
    return text or None

def to_str_list(v: Any) -> List[str]:
    if v is None:
        return []
    if isinstance(v, str):
        return [v] if v.strip() else []
    try:
        return [str(item) for item in v if item is not None]
    except TypeError:
        return []
