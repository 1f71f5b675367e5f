import logging
from injector import inject, singleton
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.pnodes.v1.schemas import GetMapNodesRequest, GetMapNodesResponse
from pnode_analytics.services.map import MapService

@singleton
class GetMapNodesHandler(RequestHandler[GetMapNodesRequest, GetMapNodesResponse]):

    @inject
    def __init__(self,
                 map_service: MapService):
        super().__init__()
        self.__logger = logging.getLogger(self.__class__.__name__)
        self.__map_service = map_service

    async def _on_validate(self, request: GetMapNodesRequest):
        pass

    async def _on_invoke(self, request: GetMapNodesRequest) -> GetMapNodesResponse:
        # The map view degrades to an empty list rather than an error
        try:
            map_nodes = await self.__map_service.get_map_nodes()
        except Exception:
            self.__logger.warning("Failed to build map nodes, returning an empty map", exc_info=True)
            map_nodes = []

        # Return response
        return GetMapNodesResponse(nodes=map_nodes)
