from injector import inject, singleton
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.pnodes.v1.schemas import GetPNodeStatsRequest, GetPNodeStatsResponse
from pnode_analytics.exceptions import InvalidArgumentException, ItemNotFoundException
from pnode_analytics.services.pnodes import NodeStatsService

@singleton
class GetPNodeStatsHandler(RequestHandler[GetPNodeStatsRequest, GetPNodeStatsResponse]):

    @inject
    def __init__(self,
                 node_stats_service: NodeStatsService):
        super().__init__()
        self.__node_stats_service = node_stats_service

    async def _on_validate(self, request: GetPNodeStatsRequest):
        if not request.pubkey:
            raise InvalidArgumentException("pubkey is mandatory")

    async def _on_invoke(self, request: GetPNodeStatsRequest) -> GetPNodeStatsResponse:
        # Get node stats
        pubkey: str = request.pubkey or ""
        stats = await self.__node_stats_service.get_node_stats(pubkey)
        if stats is None:
            raise ItemNotFoundException(f"Stats for pNode with pubkey {pubkey} not found or unavailable")

        # Return response
        return GetPNodeStatsResponse(pubkey=pubkey, stats=stats)
