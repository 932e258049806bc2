"""Starlette web adapter serving the station catalog."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from starlette.applications import Starlette
from starlette.responses import JSONResponse, PlainTextResponse, Response
from starlette.routing import Route

from station_catalog.domain.errors import CatalogError

from .rate_limit_middleware import RateLimitMiddleware
from .serializers import enrichment_to_json, station_page_to_json

if TYPE_CHECKING:
    from starlette.requests import Request
    from starlette.types import ASGIApp

    from station_catalog.adapters.config import AppConfig
    from station_catalog.domain.ports import EnrichmentService, StationQueryService

logger = logging.getLogger(__name__)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET",
}


def _internal_error() -> JSONResponse:
    return JSONResponse({"error": "internal error"}, status_code=500, headers=CORS_HEADERS)


def _bad_request(message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=400, headers=CORS_HEADERS)


def _parse_bound(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class CatalogWebAdapter:
    """HTTP surface for station queries and on-demand enrichment."""

    def __init__(
        self,
        query_service: StationQueryService,
        config: AppConfig,
        enrichment_service: EnrichmentService | None = None,
    ) -> None:
        """Initialize the web adapter.

        Args:
            query_service: Query engine behind GET /stations.
            config: Application configuration.
            enrichment_service: Fan-out behind GET /enrichment. The route is
                not registered when omitted.
        """
        self.query_service = query_service
        self.enrichment_service = enrichment_service
        self.config = config
        self._server: Any | None = None

    async def index(self, _request: Request) -> Response:
        """Plain-text service info."""
        logger.info("/ hit")
        return PlainTextResponse(self.config.index_text)

    async def healthz(self, _request: Request) -> Response:
        """Health check endpoint for load balancers and monitoring."""
        return PlainTextResponse("Ok")

    async def stations(self, request: Request) -> Response:
        """Filtered, paginated station listing."""
        try:
            page = await self.query_service.query(request.url.query)
        except CatalogError:
            logger.exception("Failed to fetch stations")
            return _internal_error()

        logger.info(f"/stations hit: {len(page.records)} of {page.meta.total_count}")
        return JSONResponse(station_page_to_json(page), headers=CORS_HEADERS)

    async def enrichment(self, request: Request) -> Response:
        """Enrich an inclusive identifier range given as ?from=&to=."""
        if self.enrichment_service is None:
            return _bad_request("enrichment is not configured")

        low = _parse_bound(request.query_params.get("from"))
        high = _parse_bound(request.query_params.get("to"))
        if low is None or high is None:
            return _bad_request("'from' and 'to' must be integers")
        if low > high:
            return _bad_request("'from' must not be greater than 'to'")

        requested = high - low + 1
        if requested > self.config.enrichment_max_range:
            return _bad_request(
                f"range of {requested} exceeds the maximum of {self.config.enrichment_max_range}"
            )

        results = await self.enrichment_service.enrich_range(low, high)
        logger.info(f"/enrichment hit: {len(results)} of {requested} resolved")
        return JSONResponse(enrichment_to_json(results, requested), headers=CORS_HEADERS)

    def build_app(self) -> ASGIApp:
        """Build the ASGI application, wrapped in rate limiting when enabled."""
        routes = [
            Route("/", self.index, methods=["GET"]),
            Route("/healthz", self.healthz, methods=["GET"]),
            Route("/stations", self.stations, methods=["GET"]),
        ]
        if self.enrichment_service is not None:
            routes.append(Route("/enrichment", self.enrichment, methods=["GET"]))

        app: ASGIApp = Starlette(routes=routes)
        if self.config.rate_limit_per_minute > 0:
            app = RateLimitMiddleware(app, requests_per_minute=self.config.rate_limit_per_minute)
        return app

    async def start(self) -> None:
        """Serve the application until stopped."""
        import uvicorn

        config = uvicorn.Config(
            self.build_app(),
            host=self.config.host,
            port=self.config.port,
            log_level="info",
        )
        self._server = uvicorn.Server(config)
        logger.info(f"Listening on http://{self.config.host}:{self.config.port}")
        await self._server.serve()

    async def stop(self) -> None:
        """Ask the server to shut down."""
        if self._server:
            self._server.should_exit = True
