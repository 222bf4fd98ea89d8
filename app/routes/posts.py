# app/routes/posts.py
from flask import Blueprint, current_app, jsonify, request
from flask_login import login_required, current_user
from app.services.post_service import PostService
from app.services.report_service import ReportService

bp = Blueprint('posts', __name__, url_prefix='/api/posts')


def _viewer_id():
    return current_user.id if current_user.is_authenticated else None


def _json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@bp.route('', methods=['GET'])
def feed():
    """Feed paginado por cursor, mais recentes primeiro"""
    limit = request.args.get('limit', current_app.config['FEED_PAGE_SIZE'], type=int)
    cursor = request.args.get('cursor', None, type=int)

    posts, next_cursor = PostService.feed(limit, cursor)
    viewer_id = _viewer_id()

    return jsonify({
        'posts': [post.to_dict(viewer_id) for post in posts],
        'nextCursor': next_cursor,
    })


@bp.route('', methods=['POST'])
@login_required
def create_post():
    data = _json_body()
    post = PostService.create_post(
        current_user,
        title=data.get('title'),
        content=data.get('content'),
        post_type=data.get('type'),
        image_url=data.get('imageUrl'),
    )
    return jsonify(post.to_dict(current_user.id)), 201


@bp.route('/<int:post_id>', methods=['GET'])
def get_post(post_id):
    post = PostService.get_post(post_id)
    return jsonify(post.to_dict(_viewer_id()))


@bp.route('/<int:post_id>', methods=['PATCH'])
@login_required
def update_post(post_id):
    data = _json_body()
    post = PostService.update_post(
        current_user,
        post_id,
        title=data.get('title'),
        content=data.get('content'),
        post_type=data.get('type'),
    )
    return jsonify(post.to_dict(current_user.id))


@bp.route('/<int:post_id>', methods=['DELETE'])
@login_required
def delete_post(post_id):
    """Remove o post com likes, comentários e denúncias"""
    PostService.delete_post(current_user, post_id)
    return jsonify({'success': True})


@bp.route('/<int:post_id>/like', methods=['POST'])
@login_required
def toggle_like(post_id):
    liked = PostService.toggle_like(current_user, post_id)
    return jsonify({'liked': liked})


@bp.route('/<int:post_id>/like', methods=['GET'])
def like_info(post_id):
    return jsonify(PostService.like_info(post_id, _viewer_id()))


@bp.route('/<int:post_id>/comments', methods=['GET'])
def list_comments(post_id):
    limit = request.args.get('limit', current_app.config['COMMENTS_PAGE_SIZE'], type=int)
    cursor = request.args.get('cursor', None, type=int)

    comments = PostService.comments(post_id, limit, cursor)
    return jsonify([comment.to_dict() for comment in comments])


@bp.route('/<int:post_id>/comments', methods=['POST'])
@login_required
def add_comment(post_id):
    comment = PostService.add_comment(current_user, post_id, _json_body().get('content'))
    return jsonify(comment.to_dict()), 201


@bp.route('/<int:post_id>/report', methods=['POST'])
@login_required
def report_post(post_id):
    """Denunciar um post"""
    report = ReportService.submit(current_user, post_id, _json_body().get('reason'))
    return jsonify({
        'success': True,
        'message': 'Content has been reported and will be reviewed',
        'reportId': report.id,
    })
