# app/services/settings_service.py
from app.models import UserSettings
from app.services.exceptions import InvalidArgument, Unauthorized
from app.services.follow_service import FollowService
from app.services.transaction import transaction

# Campo do corpo da requisição -> coluna
SETTINGS_FIELDS = {
    'publicProfile': 'public_profile',
    'showEmail': 'show_email',
    'emailNotifications': 'email_notifications',
    'newPostNotifications': 'new_post_notifications',
}


class SettingsService:
    """Preferências do usuário, criadas com valores padrão no primeiro acesso"""

    @staticmethod
    def _check_access(actor, user_id):
        if actor.id != user_id and not actor.is_admin:
            raise Unauthorized()
        FollowService.get_user(user_id)

    @staticmethod
    def get_settings(actor, user_id):
        SettingsService._check_access(actor, user_id)

        settings = UserSettings.query.filter_by(user_id=user_id).first()
        if settings is None:
            with transaction('Failed to fetch user settings') as session:
                settings = UserSettings(user_id=user_id)
                session.add(settings)

        return settings

    @staticmethod
    def update_settings(actor, user_id, data):
        """Atualiza só os campos presentes no corpo; todos precisam ser booleanos"""
        SettingsService._check_access(actor, user_id)

        changes = {}
        for field, column in SETTINGS_FIELDS.items():
            if field not in data:
                continue
            if not isinstance(data[field], bool):
                raise InvalidArgument(f'{field} must be a boolean')
            changes[column] = data[field]

        settings = UserSettings.query.filter_by(user_id=user_id).first()

        with transaction('Failed to update user settings') as session:
            if settings is None:
                settings = UserSettings(user_id=user_id)
                session.add(settings)
            for column, value in changes.items():
                setattr(settings, column, value)

        return settings
