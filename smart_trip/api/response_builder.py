from typing import Any, Dict
from fastapi.responses import JSONResponse


def success(**payload: Any) -> Dict[str, Any]:
    return {"success": True, **payload}


def failure(status_code: int, error: Any, **payload: Any) -> JSONResponse:
    """Error envelope shared by every endpoint: ``{"success": false, "error": ...}``."""

    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": str(error), **payload},
    )
