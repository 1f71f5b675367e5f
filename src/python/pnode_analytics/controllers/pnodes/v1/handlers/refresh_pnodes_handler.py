from injector import inject, singleton
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.pnodes.v1.schemas import RefreshPNodesRequest, RefreshPNodesResponse
from pnode_analytics.services.pnodes import PNodeCacheService

@singleton
class RefreshPNodesHandler(RequestHandler[RefreshPNodesRequest, RefreshPNodesResponse]):

    @inject
    def __init__(self, pnode_cache_service: PNodeCacheService):
        super().__init__()
        self.__pnode_cache_service = pnode_cache_service

    async def _on_validate(self, request: RefreshPNodesRequest):
        pass

    async def _on_invoke(self, request: RefreshPNodesRequest) -> RefreshPNodesResponse:
        # Invalidate and rediscover
        pnodes, source = await self.__pnode_cache_service.refresh()

        # Return response
        return RefreshPNodesResponse(
            total_count=len(pnodes),
            source=source
        )
