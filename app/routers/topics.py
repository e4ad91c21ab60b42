# =============================================================================
# app/routers/topics.py - Topic CRUD Endpoints
# =============================================================================
# Mounted at /api/topics. Reading is public; writing requires authentication.
# =============================================================================

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, status

from app.auth import AuthUser, get_current_user
from app.dependencies import DatabaseDep
from app.parsers import body_of
from core.models.topic import TopicCreate, TopicResponse, TopicUpdate
from core.services.topic_service import TopicService

router = APIRouter(tags=["Topics"])

TopicId = Annotated[UUID, Path(description="Topic UUID")]


@router.get("", response_model=list[TopicResponse])
def list_topics(database: DatabaseDep):
    """List all topics, alphabetically."""
    return TopicService(database).list_topics()


@router.get("/{topic_id}", response_model=TopicResponse)
def get_topic(topic_id: TopicId, database: DatabaseDep):
    return TopicService(database).require(topic_id)


@router.post("", response_model=TopicResponse, status_code=status.HTTP_201_CREATED)
def create_topic(
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
    payload: TopicCreate = Depends(body_of(TopicCreate)),
):
    """
    Create a topic.

    Returns 409 if the slug is already taken.
    """
    return TopicService(database).create_topic(payload)


@router.put("/{topic_id}", response_model=TopicResponse)
def update_topic(
    topic_id: TopicId,
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
    payload: TopicUpdate = Depends(body_of(TopicUpdate)),
):
    return TopicService(database).update_topic(str(topic_id), payload)


@router.delete("/{topic_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_topic(
    topic_id: TopicId,
    database: DatabaseDep,
    user: AuthUser = Depends(get_current_user),
):
    TopicService(database).delete(topic_id)
