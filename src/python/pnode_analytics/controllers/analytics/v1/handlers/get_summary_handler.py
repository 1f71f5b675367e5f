from injector import inject, singleton
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.analytics.v1.schemas import GetSummaryRequest, GetSummaryResponse
from pnode_analytics.services.analytics import AnalyticsService

@singleton
class GetSummaryHandler(RequestHandler[GetSummaryRequest, GetSummaryResponse]):

    @inject
    def __init__(self,
                 analytics_service: AnalyticsService):
        super().__init__()
        self.__analytics_service = analytics_service

    async def _on_validate(self, request: GetSummaryRequest):
        pass

    async def _on_invoke(self, request: GetSummaryRequest) -> GetSummaryResponse:
        summary = await self.__analytics_service.get_summary()
        return GetSummaryResponse(summary=summary)
