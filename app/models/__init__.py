# Importar todos os models
from .user import User
from .post import Post, Like, Comment, POST_TYPES
from .follow import Follow
from .report import Report, ReportStatus
from .settings import UserSettings

__all__ = ['User', 'Post', 'Like', 'Comment', 'POST_TYPES', 'Follow', 'Report', 'ReportStatus', 'UserSettings']
