from injector import inject, singleton
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.pnodes.v1.schemas import GetPNodeRequest, GetPNodeResponse
from pnode_analytics.exceptions import InvalidArgumentException, ItemNotFoundException
from pnode_analytics.services.pnodes import PNodeCacheService

@singleton
class GetPNodeHandler(RequestHandler[GetPNodeRequest, GetPNodeResponse]):

    @inject
    def __init__(self,
                 pnode_cache_service: PNodeCacheService):
        super().__init__()
        self.__pnode_cache_service = pnode_cache_service

    async def _on_validate(self, request: GetPNodeRequest):
        if not request.pubkey:
            raise InvalidArgumentException("pubkey is mandatory")

    async def _on_invoke(self, request: GetPNodeRequest) -> GetPNodeResponse:
        # Get node
        pnode = await self.__pnode_cache_service.get_pnode(request.pubkey or "")
        if pnode is None:
            raise ItemNotFoundException(f"pNode with pubkey {request.pubkey} not found")

        # Return response
        return GetPNodeResponse(pnode=pnode)
