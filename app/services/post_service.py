# app/services/post_service.py
"""
Serviço de posts, likes e comentários
"""
import logging
from sqlalchemy import and_, or_
from app import db
from app.models import Comment, Like, Post, Report, POST_TYPES
from app.services.exceptions import InvalidArgument, NotFound, Unauthorized
from app.services.transaction import transaction

logger = logging.getLogger(__name__)


def _after_cursor(query, model, cursor_id):
    """Aplica paginação por cursor sobre (created_at DESC, id DESC)"""
    if cursor_id is None:
        return query

    cursor = db.session.get(model, cursor_id)
    if cursor is None:
        raise InvalidArgument('Invalid cursor')

    return query.filter(or_(
        model.created_at < cursor.created_at,
        and_(model.created_at == cursor.created_at, model.id < cursor.id)
    ))


def _cursor_page(query, model, limit, cursor_id=None):
    """
    Uma página ordenada por (created_at DESC, id DESC)

    Returns:
        tuple: (rows, next_cursor); next_cursor é None quando a página veio incompleta
    """
    if limit < 1:
        raise InvalidArgument('Invalid limit')

    query = _after_cursor(query, model, cursor_id)
    rows = query.order_by(model.created_at.desc(), model.id.desc()).limit(limit).all()

    next_cursor = rows[-1].id if len(rows) == limit else None
    return rows, next_cursor


class PostService:

    @staticmethod
    def get_post(post_id):
        post = db.session.get(Post, post_id)
        if post is None:
            raise NotFound('Post')
        return post

    @staticmethod
    def feed(limit, cursor=None):
        """Posts mais recentes primeiro; retorna (posts, next_cursor)"""
        return _cursor_page(Post.query, Post, limit, cursor)

    @staticmethod
    def posts_by_user(user_id, limit, cursor=None):
        return _cursor_page(Post.query.filter_by(author_id=user_id), Post, limit, cursor)

    @staticmethod
    def create_post(author, title, content, post_type, image_url=None):
        if not content or not post_type:
            raise InvalidArgument('Missing required fields')

        if post_type not in POST_TYPES:
            raise InvalidArgument('Invalid post type')

        with transaction('Failed to create post') as session:
            post = Post(
                author_id=author.id,
                title=title,
                content=content,
                type=post_type,
                image_url=image_url,
            )
            session.add(post)

        return post

    @staticmethod
    def _check_owner(post, user, verb):
        if post.author_id != user.id and not user.is_admin:
            raise Unauthorized(f'Not authorized to {verb} this post')

    @staticmethod
    def update_post(user, post_id, title=None, content=None, post_type=None):
        post = PostService.get_post(post_id)
        PostService._check_owner(post, user, 'update')

        if post_type and post_type not in POST_TYPES:
            raise InvalidArgument('Invalid post type')

        with transaction('Failed to update post'):
            if title is not None:
                post.title = title
            if content:
                post.content = content
            if post_type:
                post.type = post_type

        return post

    @staticmethod
    def delete_post(user, post_id):
        """Remove o post com likes, comentários e denúncias em uma única transação"""
        post = PostService.get_post(post_id)
        PostService._check_owner(post, user, 'delete')

        with transaction('Failed to delete post') as session:
            session.query(Like).filter(Like.post_id == post_id).delete(synchronize_session='evaluate')
            session.query(Comment).filter(Comment.post_id == post_id).delete(synchronize_session='evaluate')
            session.query(Report).filter(Report.post_id == post_id).delete(synchronize_session='evaluate')
            session.delete(post)

        logger.info(f"Post {post_id} removido por {user.id}")

    @staticmethod
    def toggle_like(user, post_id):
        """Curte ou descurte; retorna True se o post ficou curtido"""
        PostService.get_post(post_id)

        with transaction('Failed to toggle like') as session:
            like = Like.query.filter_by(post_id=post_id, user_id=user.id).first()
            if like:
                session.delete(like)
                liked = False
            else:
                session.add(Like(post_id=post_id, user_id=user.id))
                liked = True

        return liked

    @staticmethod
    def like_info(post_id, viewer_id=None):
        count = Like.query.filter_by(post_id=post_id).count()
        is_liked = False
        if viewer_id is not None:
            is_liked = Like.query.filter_by(post_id=post_id, user_id=viewer_id).first() is not None
        return {'count': count, 'isLiked': is_liked}

    @staticmethod
    def comments(post_id, limit, cursor=None):
        comments, _ = _cursor_page(Comment.query.filter_by(post_id=post_id), Comment, limit, cursor)
        return comments

    @staticmethod
    def add_comment(author, post_id, content):
        if not isinstance(content, str) or not content.strip():
            raise InvalidArgument('Comment content is required')

        PostService.get_post(post_id)

        with transaction('Failed to create comment') as session:
            comment = Comment(post_id=post_id, author_id=author.id, content=content)
            session.add(comment)

        return comment
