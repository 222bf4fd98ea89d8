# app/services/admin_service.py
"""
Ações administrativas sobre usuários e estatísticas do painel
"""
import logging
from datetime import datetime, timedelta
from sqlalchemy import func
from app import db
from app.models import Comment, Like, Post, Report, ReportStatus, User
from app.services.exceptions import InvalidArgument, NotFound
from app.services.transaction import transaction

logger = logging.getLogger(__name__)

DASHBOARD_DAYS = 7


def _user_admin_dict(user):
    data = user.to_dict()
    data['postCount'] = user.posts.count()
    data.pop('bio', None)
    data.pop('headline', None)
    data.pop('location', None)
    return data


class AdminService:

    @staticmethod
    def toggle_ban(context, user_id):
        """Bane ou desbane um usuário; o admin não pode banir a si mesmo"""
        context.require_admin()

        if user_id == context.actor_id:
            raise InvalidArgument('Cannot ban your own account')

        user = db.session.get(User, user_id)
        if user is None:
            raise NotFound('User')

        with transaction('Failed to update user status'):
            user.is_banned = not user.is_banned

        logger.info(f"Usuário {user_id} {'banido' if user.is_banned else 'desbanido'} por {context.actor_id}")
        return _user_admin_dict(user)

    @staticmethod
    def promote(context, user_id):
        context.require_admin()

        user = db.session.get(User, user_id)
        if user is None:
            raise NotFound('User')

        if user.is_admin:
            raise InvalidArgument('User is already an admin')

        with transaction('Failed to promote user'):
            user.role = User.ROLE_ADMIN

        logger.info(f"Usuário {user_id} promovido a admin por {context.actor_id}")
        return _user_admin_dict(user)

    @staticmethod
    def _count_between(model, start, end):
        return db.session.query(func.count(model.id)).filter(
            model.created_at >= start,
            model.created_at < end
        ).scalar() or 0

    @staticmethod
    def dashboard_stats(context, now=None):
        """
        Estatísticas do painel administrativo

        Args:
            context: capacidade do chamador (admin)
            now: instante de referência (padrão: agora, UTC)

        Returns:
            dict: totais, crescimento de usuários, engajamento e distribuição de conteúdo
        """
        context.require_admin()

        now = now or datetime.utcnow()
        start_of_today = datetime(now.year, now.month, now.day)
        start_of_tomorrow = start_of_today + timedelta(days=1)

        days = [start_of_today - timedelta(days=DASHBOARD_DAYS - 1 - i) for i in range(DASHBOARD_DAYS)]
        labels = [day.strftime('%b %d') for day in days]

        count = AdminService._count_between
        total_posts = Post.query.count()
        posts_with_images = Post.query.filter(Post.image_url.isnot(None)).count()

        return {
            'totalUsers': User.query.count(),
            'newUsersToday': count(User, start_of_today, start_of_tomorrow),
            'totalPosts': total_posts,
            'newPostsToday': count(Post, start_of_today, start_of_tomorrow),
            'totalComments': Comment.query.count(),
            'totalLikes': Like.query.count(),
            'reportedContent': Report.query.filter_by(status=ReportStatus.PENDING).count(),
            'userGrowthData': {
                'labels': labels,
                'data': [count(User, day, day + timedelta(days=1)) for day in days],
            },
            'engagementData': {
                'posts': [count(Post, day, day + timedelta(days=1)) for day in days],
                'comments': [count(Comment, day, day + timedelta(days=1)) for day in days],
                'likes': [count(Like, day, day + timedelta(days=1)) for day in days],
                'labels': labels,
            },
            'contentDistribution': {
                'labels': ['Professional', 'Social', 'With Images', 'Text Only'],
                'data': [
                    Post.query.filter_by(type='professional').count(),
                    Post.query.filter_by(type='social').count(),
                    posts_with_images,
                    total_posts - posts_with_images,
                ],
            },
        }
