from html import escape
from typing import Iterable
from blog.db.models.post import Post


def render_post(post: Post) -> str:
    thumbnail = ""
    if post.thumbnail_url:
        thumbnail = f"<img class='post__thumbnail' src='{escape(post.thumbnail_url)}' />"

    avatar = ""
    if post.avatar_url:
        avatar = (
            f"<img class='post__avatar' src='{escape(post.avatar_url)}' "
            f"alt='{escape(post.user)}' />"
        )

    return f"""
        <div data-id="{post.id}" class="post" style="margin-bottom: 1.5rem">
            <div>
                {thumbnail}
                <p>{escape(post.content)}</p>
            </div>
            <div>
                Created by {avatar} <strong>{escape(post.user)}</strong> on <time>{post.created_at}</time>
            </div>

            <hr/>
        </div>
    """


def render(posts: Iterable[Post]) -> str:
    # Input is already newest first
    return "".join(render_post(post) for post in posts)
