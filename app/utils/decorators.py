from functools import wraps
from flask import jsonify
from flask_login import current_user
from app.services.moderation import ModerationContext

def admin_required(f):
    """Exige usuário autenticado com papel ADMIN; anônimo também recebe 403"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated or not current_user.is_admin:
            return jsonify({'error': 'Unauthorized'}), 403

        return f(*args, **kwargs)
    return decorated_function

def current_context():
    """Monta o contexto de moderação a partir do usuário logado"""
    return ModerationContext.for_user(current_user)
