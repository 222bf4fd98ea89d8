# app/services/search_service.py
"""
Busca de usuários e posts por texto
"""
import math
from sqlalchemy import or_
from app.models import Post, User
from app.services.exceptions import InvalidArgument

SEARCH_TYPES = ('all', 'users', 'posts')


def _like_pattern(query):
    """Padrão para ilike com % e _ do usuário tratados como literais"""
    escaped = query.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f'%{escaped}%'


def _pagination(total, page, limit):
    return {
        'total': total,
        'pages': math.ceil(total / limit),
        'currentPage': page,
        'limit': limit,
    }


class SearchService:
    """Busca sem diferenciar maiúsculas; usuários banidos e seus posts ficam de fora"""

    @staticmethod
    def _users_query(query):
        pattern = _like_pattern(query)
        return User.query.filter(
            User.is_banned.is_(False),
            or_(
                User.name.ilike(pattern, escape='\\'),
                User.headline.ilike(pattern, escape='\\'),
                User.bio.ilike(pattern, escape='\\'),
            )
        )

    @staticmethod
    def _posts_query(query):
        pattern = _like_pattern(query)
        return Post.query.join(User, Post.author_id == User.id).filter(
            User.is_banned.is_(False),
            or_(
                Post.title.ilike(pattern, escape='\\'),
                Post.content.ilike(pattern, escape='\\'),
            )
        )

    @staticmethod
    def _user_result(user):
        return {
            'id': user.id,
            'name': user.name,
            'image': user.image,
            'headline': user.headline,
            'followersCount': user.followers.count(),
            'postCount': user.posts.count(),
        }

    @staticmethod
    def search(query, search_type='all', page=1, limit=20, viewer_id=None, preview_limit=5):
        """
        Busca usuários e/ou posts

        Args:
            query: texto buscado em nome/headline/bio e título/conteúdo
            search_type: 'all' (prévia dos dois tipos), 'users' ou 'posts' (paginados)
            viewer_id: usuário logado, para o isLiked dos posts

        Returns:
            dict: resposta pronta para a API
        """
        if search_type not in SEARCH_TYPES:
            raise InvalidArgument('Invalid search type')
        if page < 1 or limit < 1:
            raise InvalidArgument('Invalid pagination')

        query = (query or '').strip()
        if not query:
            return {'users': [], 'posts': []}

        users_query = SearchService._users_query(query).order_by(User.name.asc(), User.id.asc())
        posts_query = SearchService._posts_query(query).order_by(Post.created_at.desc(), Post.id.desc())

        if search_type == 'all':
            users = users_query.limit(preview_limit).all()
            posts = posts_query.limit(preview_limit).all()
            return {
                'users': [SearchService._user_result(u) for u in users],
                'posts': [p.to_dict(viewer_id) for p in posts],
            }

        offset = (page - 1) * limit

        if search_type == 'users':
            total = users_query.count()
            users = users_query.offset(offset).limit(limit).all()
            return {
                'users': [SearchService._user_result(u) for u in users],
                'pagination': _pagination(total, page, limit),
            }

        total = posts_query.count()
        posts = posts_query.offset(offset).limit(limit).all()
        return {
            'posts': [p.to_dict(viewer_id) for p in posts],
            'pagination': _pagination(total, page, limit),
        }
