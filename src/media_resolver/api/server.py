"""FastAPI web server for the download API."""

import logging
import time
import traceback
import uuid
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..cache import EphemeralCache
from ..config import Settings, load_settings
from ..errors import ResolverError
from ..ratelimit import TokenBucketLimiter
from ..scraper.fetcher import Fetcher, PageFetcher
from ..service import MediaResolver
from .schemas import DownloadRequest, HealthResponse


logger = logging.getLogger(__name__)


CONTENT_SECURITY_POLICY = "; ".join([
    "default-src 'self'",
    "style-src 'self' 'unsafe-inline'",
    "script-src 'self'",
    "img-src 'self' data: https:",
    "connect-src 'self'",
])

SECURITY_HEADERS = {
    "Content-Security-Policy": CONTENT_SECURITY_POLICY,
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
}

GENERIC_ERROR = "Download failed, please try again later"


def client_ip(request: Request) -> str:
    """Client address, preferring the first X-Forwarded-For hop."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return request.client.host if request.client else "unknown"


def _error_details(exc: BaseException) -> dict:
    return {
        "type": type(exc).__name__,
        "message": str(exc),
        "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    }


class LenientCORSMiddleware(CORSMiddleware):
    """Answers every preflight with 200. Disallowed origins get no allow-origin header."""
    
    def preflight_response(self, request_headers):
        response = super().preflight_response(request_headers)
        if response.status_code == 200:
            return response
        dropped = ("access-control-allow-origin", "content-length", "content-type")
        headers = {k: v for k, v in response.headers.items() if k.lower() not in dropped}
        return Response(status_code=200, headers=headers)


def create_app(
    settings: Optional[Settings] = None,
    fetcher: Optional[Fetcher] = None,
    clock: Callable[[], float] = time.monotonic,
) -> FastAPI:
    """
    Create the FastAPI application.
    
    Args:
        settings: Service settings (packaged config if None)
        fetcher: Page fetcher used by scrapers
        clock: Monotonic time source shared by cache and rate limiter
        
    Returns:
        Configured FastAPI app
    """
    settings = settings or load_settings()
    
    app = FastAPI(
        title=settings.app.name,
        description="Resolve social media post URLs to downloadable media",
        version=settings.app.version,
    )
    
    # Initialize components
    cache = EphemeralCache(
        default_ttl=settings.cache.ttl_seconds,
        max_entries=settings.cache.max_entries,
        evict_batch=settings.cache.evict_batch,
        clock=clock,
    )
    limiter = TokenBucketLimiter(
        capacity=settings.rate_limit.capacity,
        window_seconds=settings.rate_limit.window_seconds,
        clock=clock,
    )
    resolver = MediaResolver(
        cache=cache,
        fetcher=fetcher or PageFetcher(
            timeout=settings.fetch.timeout_seconds,
            max_bytes=settings.fetch.max_bytes,
        ),
    )
    
    app.state.settings = settings
    app.state.cache = cache
    app.state.limiter = limiter
    app.state.resolver = resolver
    
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        if request.method == "OPTIONS":
            # Preflights are answered by CORSMiddleware before reaching here
            response = Response(status_code=200)
        else:
            response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response
    
    # Added last so it wraps everything, including error responses
    app.add_middleware(
        LenientCORSMiddleware,
        allow_origins=settings.app.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # ==================== ERROR HANDLERS ====================
    
    @app.exception_handler(ResolverError)
    async def resolver_error_handler(request: Request, exc: ResolverError):
        request_id = getattr(request.state, "request_id", None)
        payload = exc.to_payload()
        if request_id:
            payload["requestId"] = request_id
        if exc.status_code >= 500 and settings.is_development:
            payload["details"] = _error_details(exc)
        
        headers = {}
        retry_after = getattr(exc, "retry_after", None)
        if retry_after is not None:
            headers["Retry-After"] = str(max(1, round(retry_after)))
        
        return JSONResponse(payload, status_code=exc.status_code, headers=headers)
    
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            {"success": False, "error": "Invalid request body"},
            status_code=400,
        )
    
    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        message = "Method not allowed" if exc.status_code == 405 else str(exc.detail)
        return JSONResponse(
            {"success": False, "error": message},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )
    
    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        request_id = getattr(request.state, "request_id", None)
        logger.error("[%s] Unhandled error", request_id or "-", exc_info=exc)
        payload = {"success": False, "error": GENERIC_ERROR}
        if request_id:
            payload["requestId"] = request_id
        if settings.is_development:
            payload["details"] = _error_details(exc)
        return JSONResponse(payload, status_code=500)
    
    # ==================== API ====================
    
    @app.post("/api/download")
    async def download(request: Request, body: DownloadRequest):
        """Resolve a post URL to its media."""
        limiter.consume(client_ip(request))
        
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        logger.info("[%s] Request: url=%s platform=%s", request_id, body.url, body.platform)
        
        try:
            resolution = await resolver.resolve(body.url, body.platform, request_id=request_id)
        except ResolverError as e:
            logger.warning("[%s] Failed: %s: %s", request_id, type(e).__name__, e)
            raise
        except Exception as e:
            logger.exception("[%s] Unexpected error", request_id)
            payload = {"success": False, "error": GENERIC_ERROR, "requestId": request_id}
            if settings.is_development:
                payload["details"] = _error_details(e)
            return JSONResponse(payload, status_code=500)
        
        payload = resolution.to_payload()
        payload["requestId"] = request_id
        return payload
    
    @app.get("/api/health", response_model=HealthResponse)
    async def health():
        """Liveness check, not rate limited."""
        return HealthResponse(
            status="ok",
            timestamp=datetime.now(timezone.utc).isoformat(),
            version=settings.app.version,
        )
    
    return app


def run_server(
    settings: Optional[Settings] = None,
    host: Optional[str] = None,
    port: Optional[int] = None,
    debug: bool = False,
):
    """
    Run the API server.
    
    Args:
        settings: Service settings (packaged config if None)
        host: Host to bind to (settings value if None)
        port: Port to bind to (settings value if None)
        debug: Log at debug level
    """
    import uvicorn
    
    settings = settings or load_settings()
    app = create_app(settings)
    uvicorn.run(
        app,
        host=host or settings.server.host,
        port=port or settings.server.port,
        log_level="debug" if debug else settings.logging.level.lower(),
    )
