from injector import inject, singleton
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.analytics.v1.schemas import GetTopNodesRequest, GetTopNodesResponse
from pnode_analytics.exceptions import InvalidArgumentException
from pnode_analytics.services.analytics import AnalyticsService

MAX_TOP_NODES_LIMIT = 100

@singleton
class GetTopNodesHandler(RequestHandler[GetTopNodesRequest, GetTopNodesResponse]):

    @inject
    def __init__(self,
                 analytics_service: AnalyticsService):
        super().__init__()
        self.__analytics_service = analytics_service

    async def _on_validate(self, request: GetTopNodesRequest):
        if request.limit < 1 or request.limit > MAX_TOP_NODES_LIMIT:
            raise InvalidArgumentException(f"limit must be between 1 and {MAX_TOP_NODES_LIMIT}")

    async def _on_invoke(self, request: GetTopNodesRequest) -> GetTopNodesResponse:
        top_nodes = await self.__analytics_service.get_top_nodes(request.limit)
        return GetTopNodesResponse(top_nodes=top_nodes)
