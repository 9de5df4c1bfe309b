"""Publishing API routes."""

import asyncio

from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from .topics import TopicValueResponse, topic_table


def create_publishing_router(app: IApplication) -> APIRouter:
    """Create publishing router."""
    router = APIRouter(tags=["publishing"])

    @router.get("/publish", response_model=list[TopicValueResponse])
    async def publish(
        topic: str = Query(..., min_length=1, description="Topic name"),
        message: str = Query(..., description="Number or text to publish"),
    ) -> list[dict]:
        """Publish a value on a topic and return the topic table."""
        try:
            await app.publish(topic, message)
        except asyncio.CancelledError:
            # An agent downstream was closed while this request waited on its queue
            if asyncio.current_task().cancelling():
                raise
            raise HTTPException(status_code=503, detail="Agent closed during publish")
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        return topic_table(app.topics())

    return router
