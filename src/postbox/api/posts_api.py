import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import ValidationError
from starlette.requests import ClientDisconnect

from postbox.db.post_db import PostNotFoundError, PostStore
from postbox.model.post import Post, PostPayload

router = APIRouter()

logger = logging.getLogger(__name__)


def get_post_store(request: Request) -> PostStore:
    return request.app.state.post_store


async def read_post_payload(request: Request) -> PostPayload:
    # The body is JSON whatever Content-Type the client sent.
    try:
        raw_body = await request.body()
        return PostPayload.model_validate_json(raw_body)
    except (ValidationError, ClientDisconnect) as e:
        logger.warning("%s %s rejected: %s", request.method, request.url.path, e)
        raise HTTPException(status_code=400, detail="Error reading request body")


@router.get("/posts")
def get_posts(store: PostStore = Depends(get_post_store)) -> list[Post]:
    return store.list_posts()


@router.post("/posts", status_code=status.HTTP_201_CREATED)
def create_post(
    post_data: PostPayload = Depends(read_post_payload),
    store: PostStore = Depends(get_post_store),
) -> Post:
    return store.create_post(post_data.body if post_data.body is not None else "")


@router.get("/post/{post_id}")
def get_post(
    post_id: int,
    store: PostStore = Depends(get_post_store),
) -> Post:
    try:
        return store.get_post(post_id)
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")


# Existing clients expect 201 from an update
@router.put("/post/{post_id}", status_code=status.HTTP_201_CREATED)
def update_post(
    post_id: int,
    post_data: PostPayload = Depends(read_post_payload),
    store: PostStore = Depends(get_post_store),
) -> Post:
    if post_data.id is not None and post_data.id != post_id:
        logger.info("Ignoring payload id %d for post %d", post_data.id, post_id)
    try:
        return store.update_post(post_id, post_data.body)
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")


@router.delete("/post/{post_id}")
def delete_post(
    post_id: int,
    store: PostStore = Depends(get_post_store),
):
    try:
        store.delete_post(post_id)
    except PostNotFoundError:
        raise HTTPException(status_code=404, detail="Post not found")
    return Response(status_code=status.HTTP_200_OK)


# Older clients delete with POST on the item path
@router.post("/post/{post_id}")
def delete_post_with_post(
    post_id: int,
    store: PostStore = Depends(get_post_store),
):
    return delete_post(post_id, store)
