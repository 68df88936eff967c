"""
Main FastAPI Application

BenefitScout API with all routes registered.
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from benefitscout.config import settings
from benefitscout.errors import GenerationError
from benefitscout.api.public import router as public_router
from benefitscout.api.insights import INSIGHTS_PATH, router as insights_router
from benefitscout.api.exceptions import CategoryNotFoundError


logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("openai").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


# Create FastAPI app
app = FastAPI(
    title="BenefitScout API",
    description="Find the best card and loyalty-program benefit for a purchase",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(public_router)
app.include_router(insights_router)


# Health check endpoint
@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}


# Error handlers
@app.exception_handler(GenerationError)
async def generation_error_handler(request, exc):
    """Handle advisory generation failures."""
    logger.error(f"Insights generation failed: {exc.details}")
    return JSONResponse(
        status_code=500,
        content={"success": False, "error": "Failed to generate insights", "details": exc.details}
    )


@app.exception_handler(CategoryNotFoundError)
async def category_not_found_handler(request, exc):
    """Handle unknown category errors."""
    return JSONResponse(
        status_code=404,
        content={"error": "Category Not Found", "detail": exc.detail}
    )


@app.exception_handler(ValueError)
async def value_error_handler(request, exc):
    """Handle ValueError exceptions."""
    return JSONResponse(
        status_code=400,
        content={"error": "Bad Request", "detail": str(exc)}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request, exc):
    """Handle request validation errors."""
    if request.url.path == INSIGHTS_PATH:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return JSONResponse(
            status_code=422,
            content={"success": False, "error": "Invalid user profile", "details": problems}
        )

    return JSONResponse(
        status_code=422,
        content={"error": "Validation Error", "detail": exc.errors()}
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc):
    """Handle generic HTTP exceptions."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP Exception", "detail": exc.detail}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle general exceptions."""
    logger.exception("Unhandled error")
    return JSONResponse(
        status_code=500,
        content={"error": "Internal Server Error", "detail": str(exc)}
    )
