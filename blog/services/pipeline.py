import logging
import os
import shutil
from typing import BinaryIO, Optional, Tuple
import httpx
from blog.core.config import settings
from blog.core.exceptions import FetchError, PersistError, PostValidationError, StoreError
from blog.crud.post import PostStore
from blog.db.models.post import Post
from blog.schemas.post import PostCreate
from blog.services.png import PNG_SIGNATURE, is_valid_png
from blog.services.remote_file import download_and_store_png
from blog.services.slug import unique_image_name


class PostCreationPipeline:
    """Creates a post together with its optional thumbnail and avatar.

    Any failure after the image name is chosen removes both candidate image
    paths for that name, so a failed attempt leaves no files and no row.
    """

    def __init__(
        self,
        store: PostStore,
        http_client: Optional[httpx.Client] = None,
        images_dir: Optional[str] = None,
        fetch_timeout: Optional[float] = None,
    ):
        self.store = store
        self.http_client = http_client
        self.images_dir = images_dir or settings.images_dir
        if fetch_timeout is None:
            fetch_timeout = settings.avatar_fetch_timeout
        self.fetch_timeout = fetch_timeout

    def image_paths(self, name: str) -> Tuple[str, str]:
        thumbnail_path = os.path.join(self.images_dir, "thumbnails", f"{name}.png")
        avatar_path = os.path.join(self.images_dir, "avatars", f"{name}.png")
        return thumbnail_path, avatar_path

    def create(self, post_in: PostCreate, thumbnail: Optional[BinaryIO] = None) -> Post:
        if thumbnail is not None:
            check_thumbnail(thumbnail)

        name = unique_image_name()
        thumbnail_path, avatar_path = self.image_paths(name)
        stored_thumbnail = None
        stored_avatar = None

        if thumbnail is not None:
            try:
                persist_upload(thumbnail, thumbnail_path)
            except OSError as e:
                logging.error(f"Could not save thumbnail to {thumbnail_path}: {str(e)}")
                cleanup(thumbnail_path, avatar_path)
                raise PersistError(f"Could not save thumbnail: {e}") from e
            stored_thumbnail = thumbnail_path

        if post_in.avatar_url:
            try:
                os.makedirs(os.path.dirname(avatar_path), exist_ok=True)
                download_and_store_png(
                    post_in.avatar_url,
                    avatar_path,
                    client=self.http_client,
                    timeout=self.fetch_timeout,
                )
            except OSError as e:
                logging.error(f"Could not prepare avatar directory for {avatar_path}: {str(e)}")
                cleanup(thumbnail_path, avatar_path)
                raise PersistError(f"Could not prepare avatar directory: {e}") from e
            except FetchError:
                cleanup(thumbnail_path, avatar_path)
                raise
            stored_avatar = avatar_path

        try:
            new_post = self.store.insert(
                content=post_in.content,
                user=post_in.user,
                avatar_path=stored_avatar,
                thumbnail_path=stored_thumbnail,
            )
        except StoreError:
            cleanup(thumbnail_path, avatar_path)
            raise

        logging.info(f"Created post {new_post.id} by {new_post.user}")
        return new_post


def check_thumbnail(thumbnail: BinaryIO) -> None:
    head = thumbnail.read(len(PNG_SIGNATURE))
    thumbnail.seek(0)
    if not is_valid_png(head):
        raise PostValidationError("Uploaded thumbnail is not a PNG", detail="Thumbnail must be a PNG image")


def persist_upload(upload: BinaryIO, destination: str) -> None:
    os.makedirs(os.path.dirname(destination), exist_ok=True)
    upload.seek(0)
    with open(destination, "wb") as f:
        shutil.copyfileobj(upload, f)


def cleanup(*paths: str) -> None:
    # Best effort, must never replace the error being reported
    for path in paths:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logging.warning(f"Could not remove {path} during cleanup: {str(e)}")
