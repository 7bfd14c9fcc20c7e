"""
SEO Score API - FastAPI Application Entry Point
"""
import socket

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.errors import AuditError
from app.api.v1.endpoints import audit, health
from app.logger import logger

# Create app
app = FastAPI(
    title=settings.APP_NAME,
    description="Composite SEO score from PageSpeed Insights and SerpApi",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router, prefix="/api/v1")
app.include_router(audit.router)


@app.exception_handler(AuditError)
async def audit_error_handler(request: Request, exc: AuditError):
    """Render audit errors as JSON bodies."""
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


def get_network_ip() -> str:
    """Best-effort LAN address of this host."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    try:
        # No packet is sent; connect() only selects the outbound interface
        sock.connect(("10.255.255.255", 1))
        return sock.getsockname()[0]
    except OSError:
        return "0.0.0.0"
    finally:
        sock.close()


@app.on_event("startup")
async def startup():
    """Log where the API is reachable."""
    logger.info(f"{settings.APP_NAME} is running")
    logger.info(f"Local:    http://localhost:{settings.PORT}")
    logger.info(f"Network:  http://{get_network_ip()}:{settings.PORT}")
    if not settings.PSI_API_KEY:
        logger.warning("PSI_API_KEY not set. Audits will fail until it is configured.")
    if not settings.visibility_enabled:
        logger.info("SERPAPI_KEY not set. Keyword and index scores will be skipped.")


@app.get("/")
async def root():
    """Root endpoint."""
    return {"status": "ok", "message": "API is awake and running"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)
