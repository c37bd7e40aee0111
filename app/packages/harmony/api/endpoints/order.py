"""订单接口：返回值由全局响应增强统一包装。"""

from typing import Any

from fastapi import APIRouter, HTTPException, status

from app.packages.harmony.core.routing import AdvisedRoute
from app.packages.harmony.core.result import TerResult

router = APIRouter(prefix="/order", tags=["订单"], route_class=AdvisedRoute)

_BOOKS: dict[int, dict[str, Any]] = {
    1: {"id": 1, "title": "The Pragmatic Programmer", "price": 42.5},
    2: {"id": 2, "title": "Fluent Python", "price": 55.0},
}


@router.get("/book")
def get_book() -> str:
    return "book"


@router.get("/book/{book_id}")
def get_book_detail(book_id: int) -> dict[str, Any]:
    """按 ID 查询图书；不存在时抛出 404，由异常处理器渲染为失败信封。"""
    book = _BOOKS.get(book_id)
    if book is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="book not found")
    return book


@router.get("/receipt")
def get_receipt() -> TerResult[str, str, dict[str, Any]]:
    """端点自行构建信封时，声明的返回类型保证不会被再次包装。"""
    return TerResult[str, str, dict[str, Any]](
        success=True,
        code="200",
        message="receipt issued",
        data={"order_id": "A-1001", "amount": 97.5},
    )
