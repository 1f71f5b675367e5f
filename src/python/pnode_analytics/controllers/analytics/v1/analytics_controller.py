from fastapi import APIRouter, Request, Response
from fastapi_injector import Injected
from pnode_analytics.controllers.analytics.v1.handlers import GetSummaryHandler, GetNodeMetricsHandler, GetVersionsHandler, GetTopNodesHandler, GetGeoSummaryHandler

router = APIRouter(prefix="/v1/analytics")

@router.post(":summary")
async def get_summary(request: Request, get_summary_handler: GetSummaryHandler = Injected(GetSummaryHandler)) -> Response:
    return await get_summary_handler.invoke(request)

@router.post(":node-metrics")
async def get_node_metrics(request: Request, get_node_metrics_handler: GetNodeMetricsHandler = Injected(GetNodeMetricsHandler)) -> Response:
    return await get_node_metrics_handler.invoke(request)

@router.post(":versions")
async def get_versions(request: Request, get_versions_handler: GetVersionsHandler = Injected(GetVersionsHandler)) -> Response:
    return await get_versions_handler.invoke(request)

@router.post(":top-nodes")
async def get_top_nodes(request: Request, get_top_nodes_handler: GetTopNodesHandler = Injected(GetTopNodesHandler)) -> Response:
    return await get_top_nodes_handler.invoke(request)

@router.post(":geo-summary")
async def get_geo_summary(request: Request, get_geo_summary_handler: GetGeoSummaryHandler = Injected(GetGeoSummaryHandler)) -> Response:
    return await get_geo_summary_handler.invoke(request)
