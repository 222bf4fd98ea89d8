from flask import Blueprint, jsonify, request
from app.services.admin_service import AdminService
from app.services.moderation import ResolveAction
from app.services.report_aggregator import ReportAggregator
from app.services.report_resolver import ReportResolver
from app.utils.decorators import admin_required, current_context

bp = Blueprint('admin', __name__, url_prefix='/api/admin')

@bp.route('/reported-content', methods=['GET'])
@admin_required
def reported_content():
    """Fila de moderação: uma linha por post denunciado"""
    queue = ReportAggregator.fetch_queue(current_context())
    return jsonify([entry.to_dict() for entry in queue])

@bp.route('/reported-content/<int:report_id>', methods=['PATCH'])
@admin_required
def resolve_report(report_id):
    """Aprovar (remove o post) ou rejeitar uma denúncia"""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        body = {}

    # Ação padrão é aprovar
    action = ResolveAction.parse(body.get('action'))

    outcome = ReportResolver.resolve(current_context(), report_id, action)
    return jsonify({
        'success': True,
        'message': outcome.message,
        'outcome': outcome.value,
    })

@bp.route('/dashboard-stats', methods=['GET'])
@admin_required
def dashboard_stats():
    """Estatísticas do painel administrativo"""
    return jsonify(AdminService.dashboard_stats(current_context()))

@bp.route('/users/<int:user_id>/ban', methods=['POST'])
@admin_required
def ban_user(user_id):
    """Alterna o banimento do usuário"""
    return jsonify(AdminService.toggle_ban(current_context(), user_id))

@bp.route('/users/<int:user_id>/promote', methods=['POST'])
@admin_required
def promote_user(user_id):
    """Promove o usuário a administrador"""
    return jsonify(AdminService.promote(current_context(), user_id))
