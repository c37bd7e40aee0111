"""个人中心接口。"""

from fastapi import APIRouter

from app.packages.harmony.core.exceptions import PermissionDenied
from app.packages.harmony.core.routing import AdvisedRoute

router = APIRouter(prefix="/personal", tags=["个人中心"], route_class=AdvisedRoute)


@router.get("/account")
def get_account() -> dict:
    raise PermissionDenied("access denied.")
