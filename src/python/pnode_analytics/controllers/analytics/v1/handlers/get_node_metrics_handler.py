from injector import inject, singleton
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.analytics.v1.schemas import GetNodeMetricsRequest, GetNodeMetricsResponse
from pnode_analytics.services.analytics import AnalyticsService

@singleton
class GetNodeMetricsHandler(RequestHandler[GetNodeMetricsRequest, GetNodeMetricsResponse]):

    @inject
    def __init__(self,
                 analytics_service: AnalyticsService):
        super().__init__()
        self.__analytics_service = analytics_service

    async def _on_validate(self, request: GetNodeMetricsRequest):
        pass

    async def _on_invoke(self, request: GetNodeMetricsRequest) -> GetNodeMetricsResponse:
        node_metrics = await self.__analytics_service.get_node_metrics()
        return GetNodeMetricsResponse(node_metrics=node_metrics)
