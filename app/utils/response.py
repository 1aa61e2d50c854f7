from typing import Any, Dict, Optional


def success_response(data: Any, meta: Optional[Dict] = None) -> Dict:
    """Formato estándar de respuesta para éxitos.

    Estructura:
    {
      "status": "ok",
      "data": ...,
      "meta": { ... }  # opcional
    }
    """
    payload = {"status": "ok", "data": data}
    if meta is not None:
        payload["meta"] = meta
    return payload


def error_response(title: str, status: int, detail: Optional[str] = None) -> Dict:
    """Formato estándar de respuesta para errores.

    Estructura:
    {
      "error": "...",
      "status": 500,
      "detail": "..."  # opcional
    }
    """
    payload = {"error": title, "status": status}
    if detail is not None:
        payload["detail"] = detail
    return payload
