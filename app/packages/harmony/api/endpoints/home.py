"""首页接口：返回纯文本，通常不在统一包装的包前缀范围内。"""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.packages.harmony.core.routing import AdvisedRoute

router = APIRouter(tags=["首页"], route_class=AdvisedRoute)


@router.get("/home", response_class=PlainTextResponse)
def home() -> str:
    return "home"
