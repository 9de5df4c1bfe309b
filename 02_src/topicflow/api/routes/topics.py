"""Topic API routes."""

import math
from datetime import datetime

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...topics import Topic


class TopicValueResponse(BaseModel):
    """Response model for a topic and its last value."""

    name: str
    value: str | None = None
    numeric: float | None = None
    timestamp: datetime | None = None


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


def topic_table(topics: list[Topic]) -> list[dict]:
    """Render topics with their last message, in creation order."""
    table = []
    for topic in topics:
        message = topic.last_message
        row = {"name": topic.name, "value": None, "numeric": None, "timestamp": None}
        if message is not None:
            row["value"] = message.text
            row["timestamp"] = message.created_at
            # JSON has no NaN or infinity
            if math.isfinite(message.number):
                row["numeric"] = message.number
        table.append(row)
    return table


def create_topics_router(app: IApplication) -> APIRouter:
    """Create topics router."""
    router = APIRouter(tags=["topics"])

    @router.get("/topics", response_model=list[TopicValueResponse])
    async def get_topics() -> list[dict]:
        """Get every topic with its last value."""
        try:
            return topic_table(app.topics())
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/reset", response_model=StatusResponse)
    async def reset_system() -> dict:
        """Drop the configuration and every topic."""
        try:
            await app.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    @router.get("/reset-topics", response_model=StatusResponse)
    async def reset_topics() -> dict:
        """Reset agent state and clear last values, keeping the wiring."""
        try:
            await app.reset_topics()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
