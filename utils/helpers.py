"""
Funciones auxiliares generales
"""
from typing import Any, Mapping, Optional, Sequence


def is_nan(x):
    """Verifica si un valor es NaN"""
    if x is None:
        return True
    return x != x


def safe_float(value: Any) -> Optional[float]:
    """Convierte a float; None si falta, está vacío o no es numérico."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    return None if is_nan(result) else result


def is_blank(value: Any) -> bool:
    """True para None, NaN y cadenas vacías."""
    if isinstance(value, str):
        return not value.strip()
    return is_nan(value)


def first_present(props: Mapping[str, Any], keys: Sequence[str]) -> Any:
    """
    Devuelve el primer valor no vacío entre varias claves alternativas.
    El orden de `keys` define la prioridad.
    """
    for key in keys:
        value = props.get(key)
        if not is_blank(value):
            return value
    return None


def fmt_number(x, decimals=1) -> str:
    """Formatea un número sin ceros de relleno innecesarios"""
    value = safe_float(x)
    if value is None:
        return "—"
    if float(value).is_integer():
        return f"{int(value)}"
    return f"{value:.{decimals}f}"
