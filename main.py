import logging
import os
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from blog.core.config import settings
from blog.core.exceptions import AppException
from blog.db.base import Base
from blog.db.models import post as post_model  # noqa: F401 registers the posts table
from blog.db.session import engine
from blog.routers import post

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    os.makedirs(settings.thumbnails_dir, exist_ok=True)
    os.makedirs(settings.avatars_dir, exist_ok=True)
    logging.info(f"Serving images from {settings.images_dir}")
    yield


app = FastAPI(title="Blog", lifespan=lifespan)

app.include_router(post.router, prefix="/api/posts", tags=["Posts"])
app.mount("/images", StaticFiles(directory=settings.images_dir, check_dir=False), name="images")


@app.exception_handler(AppException)
async def app_exception_handler(request: Request, exc: AppException):
    if exc.status_code >= 500:
        logging.error(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")
    else:
        logging.info(f"{type(exc).__name__} on {request.method} {request.url.path}: {exc}")

    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


@app.get("/blog", include_in_schema=False)
def blog_page():
    page = os.path.join(settings.static_dir, "blog.html")
    if not os.path.isfile(page):
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(page, media_type="text/html")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host=settings.host, port=settings.port)
