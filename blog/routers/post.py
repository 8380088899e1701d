from fastapi import APIRouter, Depends, status, UploadFile, File, Form
from fastapi.responses import HTMLResponse, PlainTextResponse
from typing import Optional
import httpx
from pydantic import ValidationError
from sqlalchemy.orm import Session
from blog.core.config import Settings, get_settings
from blog.core.exceptions import PostValidationError
from blog.crud.post import PostStore
from blog.db.session import get_db
from blog.schemas.post import PostCreate
from blog.services.feed import render
from blog.services.pipeline import PostCreationPipeline

router = APIRouter()


def get_store(db: Session = Depends(get_db)) -> PostStore:
    return PostStore(db)


def get_http_client() -> Optional[httpx.Client]:
    # None lets the fetcher open a short lived client per download
    return None


def get_pipeline(
    store: PostStore = Depends(get_store),
    http_client: Optional[httpx.Client] = Depends(get_http_client),
    settings: Settings = Depends(get_settings),
) -> PostCreationPipeline:
    return PostCreationPipeline(
        store,
        http_client=http_client,
        images_dir=settings.images_dir,
        fetch_timeout=settings.avatar_fetch_timeout,
    )


@router.post("", status_code=status.HTTP_201_CREATED, response_class=PlainTextResponse)
def create_post(
    content: Optional[str] = Form(None),
    user: Optional[str] = Form(None),
    avatar_url: Optional[str] = Form(None),
    thumbnail: Optional[UploadFile] = File(None),
    pipeline: PostCreationPipeline = Depends(get_pipeline),
):
    try:
        post_in = PostCreate(content=content, user=user, avatar_url=avatar_url)
    except ValidationError as e:
        raise PostValidationError(f"Rejected post: {e.errors(include_url=False)}")

    # Browsers send an empty file part when nothing was picked
    upload = thumbnail.file if thumbnail is not None and thumbnail.filename else None

    new_post = pipeline.create(post_in, upload)
    return PlainTextResponse(str(new_post.id), status_code=status.HTTP_201_CREATED)


@router.get("", response_class=HTMLResponse)
def get_posts(store: PostStore = Depends(get_store)):
    return HTMLResponse(render(store.list_all()))
