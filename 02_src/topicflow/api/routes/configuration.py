"""Configuration API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException, Request

from ...app import IApplication
from ...errors import ConfigurationError, CycleError
from ...logging_config import get_logger

logger = get_logger(__name__)


class VertexResponse(BaseModel):
    """Response model for a graph vertex."""

    id: int
    kind: str
    name: str
    label: str
    value: str | None = None


class EdgeResponse(BaseModel):
    """Response model for a graph edge."""

    source: int
    target: int


class GraphResponse(BaseModel):
    """Response model for the topic/agent graph."""

    vertices: list[VertexResponse]
    edges: list[EdgeResponse]
    has_cycle: bool


def create_configuration_router(app: IApplication) -> APIRouter:
    """Create configuration router."""
    router = APIRouter(tags=["configuration"])

    @router.post("/upload", response_model=GraphResponse)
    async def upload_configuration(request: Request) -> dict[str, Any]:
        """Replace the running configuration with the request body."""
        content = await request.body()
        if not content.strip():
            raise HTTPException(status_code=400, detail="Empty configuration")

        try:
            graph = await app.load_configuration_bytes(content)
            return graph.to_dict()
        except CycleError as e:
            raise HTTPException(status_code=409, detail=str(e))
        except ConfigurationError as e:
            logger.warning("Rejected configuration upload: %s", e)
            raise HTTPException(status_code=400, detail=str(e))
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/graph", response_model=GraphResponse)
    async def get_graph() -> dict[str, Any]:
        """Get the graph of the current wiring."""
        try:
            return app.graph().to_dict()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
