# app/services/follow_service.py
"""
Grafo de seguidores: seguir, deixar de seguir e consultas de perfil
"""
import math
from app import db
from app.models import Follow, User
from app.services.exceptions import InvalidArgument, NotFound, Unauthorized
from app.services.transaction import transaction


class FollowService:

    @staticmethod
    def get_user(user_id):
        user = db.session.get(User, user_id)
        if user is None:
            raise NotFound('User')
        return user

    @staticmethod
    def is_following(follower_id, following_id):
        return Follow.query.filter_by(
            follower_id=follower_id,
            following_id=following_id
        ).first() is not None

    @staticmethod
    def follow(follower, target_id):
        """Retorna False se já seguia o usuário"""
        if follower.id == target_id:
            raise InvalidArgument('You cannot follow yourself')

        FollowService.get_user(target_id)

        if FollowService.is_following(follower.id, target_id):
            return False

        with transaction('Failed to follow user') as session:
            session.add(Follow(follower_id=follower.id, following_id=target_id))
        return True

    @staticmethod
    def unfollow(follower, target_id):
        """Retorna False se não seguia o usuário"""
        if follower.id == target_id:
            raise InvalidArgument('Invalid operation')

        follow = Follow.query.filter_by(follower_id=follower.id, following_id=target_id).first()
        if follow is None:
            return False

        with transaction('Failed to unfollow user') as session:
            session.delete(follow)
        return True

    @staticmethod
    def _page(query, related, page, limit):
        if page < 1 or limit < 1:
            raise InvalidArgument('Invalid pagination')

        total = query.count()
        rows = query.order_by(Follow.created_at.desc(), Follow.id.desc()) \
            .offset((page - 1) * limit).limit(limit).all()

        items = []
        for follow in rows:
            user = getattr(follow, related)
            items.append({
                'id': user.id,
                'name': user.name,
                'image': user.image,
                'headline': user.headline,
                'followedAt': follow.created_at.isoformat() if follow.created_at else None,
            })

        pagination = {
            'total': total,
            'pages': math.ceil(total / limit),
            'currentPage': page,
            'limit': limit,
        }
        return items, pagination

    @staticmethod
    def followers(user_id, page, limit):
        FollowService.get_user(user_id)
        return FollowService._page(Follow.query.filter_by(following_id=user_id), 'follower', page, limit)

    @staticmethod
    def following(user_id, page, limit):
        FollowService.get_user(user_id)
        return FollowService._page(Follow.query.filter_by(follower_id=user_id), 'following', page, limit)

    @staticmethod
    def connections(user_id, limit):
        """Usuários com follow mútuo"""
        follows_user = db.session.query(Follow.follower_id).filter(Follow.following_id == user_id)
        followed_by_user = db.session.query(Follow.following_id).filter(Follow.follower_id == user_id)

        return User.query.filter(
            User.id.in_(follows_user),
            User.id.in_(followed_by_user)
        ).order_by(User.id).limit(limit).all()

    @staticmethod
    def profile(user_id, viewer_id=None, connections_limit=6):
        user = FollowService.get_user(user_id)

        data = user.to_dict()
        data.update({
            'followersCount': user.followers.count(),
            'followingCount': user.following.count(),
            'postCount': user.posts.count(),
            'isFollowing': viewer_id is not None and FollowService.is_following(viewer_id, user_id),
            'connections': [
                {'id': c.id, 'name': c.name, 'image': c.image, 'headline': c.headline}
                for c in FollowService.connections(user_id, connections_limit)
            ],
        })
        return data

    @staticmethod
    def update_profile(actor, user_id, name=None, bio=None, location=None, headline=None):
        if actor.id != user_id and not actor.is_admin:
            raise Unauthorized()

        user = FollowService.get_user(user_id)

        if name is not None and (not isinstance(name, str) or not name.strip()):
            raise InvalidArgument('Name cannot be empty')

        with transaction('Failed to update user'):
            if name:
                user.name = name
            user.bio = bio or None
            user.location = location or None
            user.headline = headline or None

        return user
