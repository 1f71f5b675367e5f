from injector import inject, singleton
from pnode_analytics.constants import STATUS_ONLINE
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.pnodes.v1.schemas import ListPNodesRequest, ListPNodesResponse
from pnode_analytics.services.pnodes import PNodeCacheService

@singleton
class ListPNodesHandler(RequestHandler[ListPNodesRequest, ListPNodesResponse]):

    @inject
    def __init__(self,
                 pnode_cache_service: PNodeCacheService):
        super().__init__()
        self.__pnode_cache_service = pnode_cache_service

    async def _on_validate(self, request: ListPNodesRequest):
        pass

    async def _on_invoke(self, request: ListPNodesRequest) -> ListPNodesResponse:
        # List nodes
        pnodes = await self.__pnode_cache_service.get_all_pnodes()

        # Return response
        return ListPNodesResponse(
            pnodes=pnodes,
            total_count=len(pnodes),
            online_count=sum(1 for pnode in pnodes if pnode.status == STATUS_ONLINE)
        )
