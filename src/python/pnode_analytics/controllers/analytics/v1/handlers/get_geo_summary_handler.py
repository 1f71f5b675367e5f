from injector import inject, singleton
from pnode_analytics.controllers import RequestHandler
from pnode_analytics.controllers.analytics.v1.schemas import GetGeoSummaryRequest, GetGeoSummaryResponse
from pnode_analytics.services.map import MapService

@singleton
class GetGeoSummaryHandler(RequestHandler[GetGeoSummaryRequest, GetGeoSummaryResponse]):

    @inject
    def __init__(self,
                 map_service: MapService):
        super().__init__()
        self.__map_service = map_service

    async def _on_validate(self, request: GetGeoSummaryRequest):
        pass

    async def _on_invoke(self, request: GetGeoSummaryRequest) -> GetGeoSummaryResponse:
        geo_summary = await self.__map_service.get_geo_summary()
        return GetGeoSummaryResponse(geo_summary=geo_summary)
