import logging

from fastapi import APIRouter, Depends, status

from postbox.api.posts_api import get_post_store
from postbox.db.post_db import PostStore

router = APIRouter()


@router.get("/healthcheck", status_code=status.HTTP_200_OK)
def healthcheck(store: PostStore = Depends(get_post_store)):
    logging.info("healthcheck")
    return {"healthcheck": "Everything is OK!", "posts": store.count()}
