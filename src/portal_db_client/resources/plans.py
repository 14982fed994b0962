from __future__ import annotations

from portal_db_client.models import Plan
from portal_db_client.resources.base import ResourceClientBase
from portal_db_client.routes import BasePath

__all__ = ["PlanReadMixin"]


class PlanReadMixin(ResourceClientBase):
    def get_all_plans(self) -> list[Plan]:
        return self._get(self._endpoint(BasePath.PLAN), list[Plan])
