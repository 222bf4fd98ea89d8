import logging
from flask import Blueprint, jsonify, request
from flask_login import login_user, logout_user, current_user, login_required
from app.models import User
from app.services.exceptions import InvalidArgument
from app.services.transaction import transaction

bp = Blueprint('auth', __name__, url_prefix='/api/auth')
logger = logging.getLogger(__name__)

def _json_body():
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}

def _text_field(data, key):
    """Campo de texto do corpo; ausente vira string vazia"""
    value = data.get(key)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise InvalidArgument(f'Invalid {key}')
    return value

@bp.route('/register', methods=['POST'])
def register():
    data = _json_body()
    name = _text_field(data, 'name').strip()
    email = _text_field(data, 'email').strip().lower()
    password = _text_field(data, 'password')

    # Validações
    if not name or not email:
        raise InvalidArgument('Name and email are required')
    if len(password) < 6:
        raise InvalidArgument('Password must be at least 6 characters')
    if User.query.filter_by(email=email).first():
        raise InvalidArgument('Email already registered')

    user = User(name=name, email=email)
    user.set_password(password)

    with transaction('Failed to register user') as session:
        session.add(user)

    login_user(user)
    logger.info(f"Novo usuário registrado: {user.id}")
    return jsonify(user.to_dict()), 201

@bp.route('/login', methods=['POST'])
def login():
    data = _json_body()
    email = _text_field(data, 'email').strip().lower()
    password = _text_field(data, 'password')

    user = User.query.filter_by(email=email).first()
    if not user or not user.check_password(password):
        return jsonify({'error': 'Invalid email or password'}), 401

    if user.is_banned:
        return jsonify({'error': 'Your account has been banned'}), 403

    login_user(user, remember=True)
    return jsonify(user.to_dict())

@bp.route('/logout', methods=['POST'])
@login_required
def logout():
    logout_user()
    return jsonify({'success': True})

@bp.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify(current_user.to_dict())
