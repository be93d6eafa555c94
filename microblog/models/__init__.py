from microblog.models.user import User
from microblog.models.post import Post
from microblog.models.reply import Reply
from microblog.models.engagement import Like

__all__ = ["User", "Post", "Reply", "Like"]
