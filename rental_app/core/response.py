from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from .paginate import Page, paginator


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return paginator.get_single_json_dumps(data)
    if isinstance(data, list):
        if data and all(isinstance(item, BaseModel) for item in data):
            return paginator.get_list_json_dumps(data)
        return [_dump(item) for item in data]
    return data


def send_success(message: str, data: Any = None, status_code: int = 200) -> JSONResponse:
    content: Dict[str, Any] = {"status": "success", "message": message}
    if data is not None:
        content["data"] = _dump(data)
    return JSONResponse(content=content, status_code=status_code)


def send_paginated_success(
    message: str, page: Page, status_code: int = 200
) -> JSONResponse:
    return JSONResponse(
        content={
            "status": "success",
            "message": message,
            "data": _dump(page.items),
            "meta": page.meta,
        },
        status_code=status_code,
    )


def send_error(
    message: str,
    errors: Optional[Dict[str, List[str]]] = None,
    status_code: int = 400,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"status": "error", "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(content=content, status_code=status_code, headers=headers)
