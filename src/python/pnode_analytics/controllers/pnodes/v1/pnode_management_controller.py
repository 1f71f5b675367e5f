from fastapi import APIRouter, Request, Response
from fastapi_injector import Injected
from pnode_analytics.controllers.pnodes.v1.handlers import ListPNodesHandler, GetPNodeHandler, GetPNodeStatsHandler, GetMapNodesHandler, RefreshPNodesHandler

router = APIRouter(prefix="/v1/pnodes")

@router.post(":list")
async def list_pnodes(request: Request, list_pnodes_handler: ListPNodesHandler = Injected(ListPNodesHandler)) -> Response:
    return await list_pnodes_handler.invoke(request)

@router.post(":get")
async def get_pnode(request: Request, get_pnode_handler: GetPNodeHandler = Injected(GetPNodeHandler)) -> Response:
    return await get_pnode_handler.invoke(request)

@router.post(":get-stats")
async def get_pnode_stats(request: Request, get_pnode_stats_handler: GetPNodeStatsHandler = Injected(GetPNodeStatsHandler)) -> Response:
    return await get_pnode_stats_handler.invoke(request)

@router.post(":map")
async def get_map_nodes(request: Request, get_map_nodes_handler: GetMapNodesHandler = Injected(GetMapNodesHandler)) -> Response:
    return await get_map_nodes_handler.invoke(request)

@router.post(":refresh")
async def refresh_pnodes(request: Request, refresh_pnodes_handler: RefreshPNodesHandler = Injected(RefreshPNodesHandler)) -> Response:
    return await refresh_pnodes_handler.invoke(request)
