"""
EasyFront Server
================

FastAPI backend for the visual page builder.

Features:
- Canvas sessions with grid-snapped placement
- HTML/CSS generation from the canvas
- Edited CSS merged back into the canvas
- Project and widget persistence in JSON files
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .config import AppConfig
from .canvas.grid import GRID_SIZES
from .canvas.state_manager import StateManager
from .services.persistence import Repository
from .services.project_service import ProjectService
from .services.widget_service import WidgetService
from .api import canvas_routes, code_routes, element_routes, project_routes, widget_routes

config = AppConfig.from_env()

# Configure logging
logging.basicConfig(
    level=config.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Shared service instances
state_manager: StateManager = None
project_service: ProjectService = None
widget_service: WidgetService = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    global state_manager, project_service, widget_service

    logger.info("[EASYFRONT] Starting up...")
    app_config = AppConfig.from_env()

    state_manager = StateManager(default_grid_size=app_config.default_grid_size)
    repository = Repository(app_config.data_dir)
    project_service = ProjectService(repository)
    widget_service = WidgetService(repository)

    # Inject into route modules
    canvas_routes.state_manager = state_manager
    canvas_routes.widget_service = widget_service

    element_routes.state_manager = state_manager

    code_routes.state_manager = state_manager
    code_routes.layout_mode = app_config.layout_mode

    project_routes.state_manager = state_manager
    project_routes.project_service = project_service

    widget_routes.widget_service = widget_service

    logger.info(f"[EASYFRONT] Services initialized (data_dir={app_config.data_dir})")

    yield

    logger.info("[EASYFRONT] Shutting down...")


# Create FastAPI app
app = FastAPI(
    title="EasyFront",
    description="Visual page builder with two-way HTML/CSS sync",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(canvas_routes.router)
app.include_router(element_routes.router)
app.include_router(code_routes.router)
app.include_router(project_routes.router)
app.include_router(widget_routes.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "easyfront",
        "sessions": len(state_manager.session_ids()) if state_manager else 0
    }


@app.get("/api/info")
async def api_info():
    """Get API information and component types."""
    return {
        "service": "EasyFront",
        "version": __version__,
        "component_types": [
            {"type": "button", "label": "Bouton", "default_size": {"width": 120, "height": 40}},
            {"type": "input", "label": "Input", "default_size": {"width": 200, "height": 40}},
            {"type": "textarea", "label": "Textarea", "default_size": {"width": 300, "height": 100}},
            {"type": "div", "label": "Container", "default_size": {"width": 300, "height": 200}},
            {"type": "h1", "label": "Titre H1", "default_size": {"width": 200, "height": 40}},
            {"type": "p", "label": "Paragraphe", "default_size": {"width": 300, "height": 60}},
            {"type": "img", "label": "Image", "default_size": {"width": 200, "height": 200}},
        ],
        "grid_sizes": list(GRID_SIZES),
        "endpoints": {
            "canvas": "/api/canvas/state/{session_id}",
            "elements": "/api/element/{session_id}/{element_id}",
            "code": "/api/code/{session_id}/css",
            "projects": "/api/projects",
            "widgets": "/api/widgets"
        }
    }


def main():
    import uvicorn
    uvicorn.run(
        "easyfront.server:app",
        host="0.0.0.0",
        port=8080,
        reload=False
    )


if __name__ == "__main__":
    main()
