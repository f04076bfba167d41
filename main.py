from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from shortlink_app.config import settings
from shortlink_app.errors import LinkError
from shortlink_app.logging_config import setup_logging
from shortlink_app.api.v1 import links, redirect

logger = setup_logging(level=settings.log_level, json_format=settings.log_json)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Short links with expiration, password protection and click statistics",
    debug=settings.debug
)


@app.exception_handler(LinkError)
async def link_error_handler(request: Request, exc: LinkError):
    """Map link lifecycle failures to their HTTP status"""
    if exc.status_code >= 500:
        logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": type(exc).__name__},
    )


@app.get("/")
def read_root():
    """Root endpoint with API information"""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc"
    }


@app.get("/health")
def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "environment": settings.environment}


######## Include routers
app.include_router(links.router, prefix="/api/v1")
app.include_router(redirect.router)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host=settings.host, port=settings.port, reload=settings.debug)
