from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

DataT = TypeVar("DataT")


class ApiResponse(BaseModel, Generic[DataT]):
    success: bool = True
    data: Optional[DataT] = None
    message: Optional[str] = None


class Pagination(BaseModel):
    total: int
    page: int
    limit: int


def error_body(status_code: int, error: str) -> dict:
    return {"success": False, "error": error, "statusCode": status_code}
