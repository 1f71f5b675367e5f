import asyncio
import logging
from typing import Optional
import uvicorn
from injector import Injector
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi_injector import attach_injector
from prometheus_client import make_asgi_app
from pnode_analytics.clients.geo import IpApiClient
from pnode_analytics.clients.prpc import PrpcClient
from pnode_analytics.configs import AnalyticsConfig
from pnode_analytics.controllers.analytics.v1 import router as analytics_controller_router
from pnode_analytics.controllers.pnodes.v1 import router as pnode_management_controller_router
from pnode_analytics.repositories import LocalCacheRepository, RedisCacheRepository, TieredCacheRepository
from pnode_analytics.services.enrichment import StatsEnrichmentScheduler

def build_cache(config: AnalyticsConfig) -> TieredCacheRepository:
    # Remote tier first, local tier always last
    return TieredCacheRepository([
        RedisCacheRepository(
            redis_url=config.cache_redis_url,
            key_prefix=config.cache_key_prefix,
            connect_timeout_seconds=config.cache_connect_timeout_seconds,
            operation_timeout_seconds=config.cache_operation_timeout_seconds,
            retry_interval_seconds=config.cache_retry_interval_seconds
        ),
        LocalCacheRepository()
    ])

def build_app(config: AnalyticsConfig,
              cache: Optional[TieredCacheRepository] = None,
              prpc_client: Optional[PrpcClient] = None,
              ip_api_client: Optional[IpApiClient] = None) -> FastAPI:
    #########################
    # Build Cache & Clients #
    #########################

    cache = cache or build_cache(config)
    prpc_client = prpc_client or PrpcClient(
        port=config.prpc_port,
        default_timeout=config.prpc_discovery_timeout_seconds
    )
    ip_api_client = ip_api_client or IpApiClient(
        base_url=config.geo_base_url,
        default_timeout=config.geo_timeout_seconds
    )

    ######################
    # Initialize FastAPI #
    ######################

    # Initialize FastAPI
    fast_api: FastAPI = FastAPI(
        title="pNode Analytics API",
        description="API for pNode discovery, stats and analytics",
        version="1.0.0"
    )

    # Add CORS middleware
    fast_api.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    fast_api.include_router(pnode_management_controller_router)
    fast_api.include_router(analytics_controller_router)

    ################################
    # Initialize Prometheus Client #
    ################################

    # Create and mount Prometheus ASGI app
    prometheus_app = make_asgi_app()
    fast_api.mount("/metrics", prometheus_app)

    ##################################
    # Initialize Dependency Injector #
    ##################################

    def configure_bindings(binder):
        binder.bind(AnalyticsConfig, to=config)
        binder.bind(TieredCacheRepository, to=cache)
        binder.bind(PrpcClient, to=prpc_client)
        binder.bind(IpApiClient, to=ip_api_client)

    # Initialize the dependency injector
    injector: Injector = Injector([configure_bindings])
    attach_injector(fast_api, injector)

    ############################
    # Startup & Shutdown Hooks #
    ############################

    scheduler: StatsEnrichmentScheduler = injector.get(StatsEnrichmentScheduler)
    background_tasks: set[asyncio.Task] = set()

    async def warm_up():
        # Scheduler starts once the cache has attempted to connect, reachable or not
        await cache.initialize()
        if config.enrichment_enabled:
            scheduler.start()

    @fast_api.on_event("startup")
    async def startup_event():
        task: asyncio.Task = asyncio.create_task(warm_up())
        background_tasks.add(task)
        task.add_done_callback(background_tasks.discard)

    @fast_api.on_event("shutdown")
    async def shutdown_event():
        for task in list(background_tasks):
            task.cancel()
        await scheduler.stop()
        await prpc_client.close()
        await ip_api_client.close()
        await cache.close()

    return fast_api

def main():
    #####################
    # Configure Logging #
    #####################

    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s %(levelname)s: [%(name)s] %(message)s',
        datefmt='%Y-%m-%dT%H:%M:%SZ',
        handlers=[logging.StreamHandler()]
    )

    ###############
    # Load Config #
    ###############

    config = AnalyticsConfig()
    logging.getLogger().setLevel(config.log_level)

    ################
    # Start Server #
    ################

    # Start the server
    fast_api: FastAPI = build_app(config)
    uvicorn.run(fast_api, host=config.server_host, port=config.server_port, access_log=False)

if __name__ == "__main__":
    main()
