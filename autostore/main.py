import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from autostore import __version__
from autostore.core.config import Settings, get_settings
from autostore.core.container import ApplicationContainer
from autostore.core.logging import configure_logging
from autostore.interfaces.http.deps import get_catalog_service
from autostore.interfaces.http.routers import create_api_router
from autostore.modules.advisory import SafetyAdvisor
from autostore.modules.packages import CatalogService, PackageCategory, filter_by_category

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
templates = Jinja2Templates(directory=str(BASE_DIR / "web" / "templates"))


@asynccontextmanager
async def lifespan(app: FastAPI):
    container: ApplicationContainer = app.state.container
    await container.init_infrastructure()
    yield
    await container.dispose()


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        fields = [
            {"loc": [str(part) for part in error.get("loc", ())], "msg": error.get("msg", "")}
            for error in exc.errors()
        ]
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": "Invalid request", "fields": fields},
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error(request: Request, exc: SQLAlchemyError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Storage failure"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )


def create_app(settings: Optional[Settings] = None, *, advisor: Optional[SafetyAdvisor] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        description="APK catalog and distribution service for in-vehicle displays",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.container = ApplicationContainer.build(settings, advisor=advisor)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _register_error_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/", response_class=HTMLResponse, include_in_schema=False)
    async def catalog_page(
        request: Request,
        category: Optional[str] = None,
        service: CatalogService = Depends(get_catalog_service),
    ):
        apps = filter_by_category(await service.list_packages(), category)
        return templates.TemplateResponse(
            request,
            "index.html",
            {
                "apps": apps,
                "categories": PackageCategory.values(),
                "selected_category": category,
            },
        )

    return app


app = create_app()
