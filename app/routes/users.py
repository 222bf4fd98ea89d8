# app/routes/users.py
from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required, current_user
from app.services.exceptions import InvalidArgument
from app.services.follow_service import FollowService
from app.services.post_service import PostService
from app.services.settings_service import SettingsService

bp = Blueprint('users', __name__, url_prefix='/api/users')


def _target_user_id():
    body = request.get_json(silent=True)
    target = body.get('targetUserId') if isinstance(body, dict) else None
    if not isinstance(target, int) or isinstance(target, bool):
        raise InvalidArgument('targetUserId is required')
    return target


@bp.route('/<int:user_id>', methods=['GET'])
def profile(user_id):
    """Perfil com contadores, conexões e se o usuário logado o segue"""
    viewer_id = current_user.id if current_user.is_authenticated else None
    return jsonify(FollowService.profile(
        user_id,
        viewer_id=viewer_id,
        connections_limit=current_app.config['PROFILE_CONNECTIONS_LIMIT'],
    ))


@bp.route('/<int:user_id>', methods=['PATCH'])
@login_required
def update_profile(user_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    user = FollowService.update_profile(
        current_user,
        user_id,
        name=data.get('name'),
        bio=data.get('bio'),
        location=data.get('location'),
        headline=data.get('headline'),
    )
    return jsonify(user.to_dict())


@bp.route('/<int:user_id>/posts', methods=['GET'])
def user_posts(user_id):
    FollowService.get_user(user_id)
    limit = request.args.get('limit', current_app.config['FEED_PAGE_SIZE'], type=int)
    cursor = request.args.get('cursor', None, type=int)

    posts, next_cursor = PostService.posts_by_user(user_id, limit, cursor)
    viewer_id = current_user.id if current_user.is_authenticated else None

    return jsonify({
        'posts': [post.to_dict(viewer_id) for post in posts],
        'nextCursor': next_cursor,
    })


@bp.route('/follow', methods=['POST'])
@login_required
def follow():
    if FollowService.follow(current_user, _target_user_id()):
        return jsonify({'message': 'Successfully followed user'})
    return jsonify({'message': 'Already following this user'})


@bp.route('/unfollow', methods=['POST'])
@login_required
def unfollow():
    if FollowService.unfollow(current_user, _target_user_id()):
        return jsonify({'message': 'Successfully unfollowed user'})
    return jsonify({'message': 'Not following this user'})


@bp.route('/<int:user_id>/followers', methods=['GET'])
def followers(user_id):
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', current_app.config['FOLLOW_PAGE_SIZE'], type=int)

    items, pagination = FollowService.followers(user_id, page, limit)
    return jsonify({'followers': items, 'pagination': pagination})


@bp.route('/<int:user_id>/following', methods=['GET'])
def following(user_id):
    page = request.args.get('page', 1, type=int)
    limit = request.args.get('limit', current_app.config['FOLLOW_PAGE_SIZE'], type=int)

    items, pagination = FollowService.following(user_id, page, limit)
    return jsonify({'following': items, 'pagination': pagination})


@bp.route('/<int:user_id>/following/<int:target_id>', methods=['GET'])
def is_following(user_id, target_id):
    FollowService.get_user(user_id)
    FollowService.get_user(target_id)
    return jsonify({'isFollowing': FollowService.is_following(user_id, target_id)})


@bp.route('/<int:user_id>/settings', methods=['GET'])
@login_required
def get_settings(user_id):
    """Preferências do usuário (próprio usuário ou admin)"""
    return jsonify(SettingsService.get_settings(current_user, user_id).to_dict())


@bp.route('/<int:user_id>/settings', methods=['PATCH'])
@login_required
def update_settings(user_id):
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        data = {}
    return jsonify(SettingsService.update_settings(current_user, user_id, data).to_dict())
