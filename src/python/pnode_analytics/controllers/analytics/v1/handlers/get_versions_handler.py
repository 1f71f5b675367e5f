from injector import inject, singleton
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.analytics.v1.schemas import GetVersionsRequest, GetVersionsResponse
from pnode_analytics.services.analytics import AnalyticsService

@singleton
class GetVersionsHandler(RequestHandler[GetVersionsRequest, GetVersionsResponse]):

    @inject
    def __init__(self,
                 analytics_service: AnalyticsService):
        super().__init__()
        self.__analytics_service = analytics_service

    async def _on_validate(self, request: GetVersionsRequest):
        pass

    async def _on_invoke(self, request: GetVersionsRequest) -> GetVersionsResponse:
        versions = await self.__analytics_service.get_version_distribution()
        return GetVersionsResponse(versions=versions)
