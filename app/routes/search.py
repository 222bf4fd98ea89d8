from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user
from app.services.search_service import SearchService

bp = Blueprint('search', __name__, url_prefix='/api/search')


@bp.route('', methods=['GET'])
def search():
    """Busca por usuários e posts: ?q=&type=all|users|posts&page=&limit="""
    viewer_id = current_user.id if current_user.is_authenticated else None

    return jsonify(SearchService.search(
        request.args.get('q', ''),
        search_type=request.args.get('type', 'all'),
        page=request.args.get('page', 1, type=int),
        limit=request.args.get('limit', current_app.config['SEARCH_PAGE_SIZE'], type=int),
        viewer_id=viewer_id,
        preview_limit=current_app.config['SEARCH_PREVIEW_LIMIT'],
    ))
