"""
Tipos compartilhados pelo agregador e pelo resolvedor de denúncias
"""
from dataclasses import dataclass
from enum import Enum

from app.services.exceptions import InvalidArgument, Unauthorized


@dataclass(frozen=True)
class ModerationContext:
    """Capacidade explícita do chamador, montada pela camada de API"""
    actor_id: int
    role: str

    @property
    def is_admin(self):
        return self.role == 'ADMIN'

    @classmethod
    def for_user(cls, user):
        return cls(actor_id=user.id, role=user.role)

    def require_admin(self):
        if not self.is_admin:
            raise Unauthorized()


class ResolveAction(Enum):
    APPROVE = 'approve'
    REJECT = 'reject'

    @classmethod
    def parse(cls, value):
        """Converte o valor vindo do corpo da requisição; ausente significa aprovar"""
        if not value:
            return cls.APPROVE
        try:
            return cls(value)
        except ValueError:
            raise InvalidArgument('Invalid action. Must be "approve" or "reject"')


class ResolveOutcome(Enum):
    REMOVED = 'removed'
    CONTENT_ALREADY_REMOVED = 'content_already_removed'
    REJECTED = 'rejected'
    ALREADY_RESOLVED = 'already_resolved'

    @property
    def message(self):
        return _OUTCOME_MESSAGES[self]


_OUTCOME_MESSAGES = {
    ResolveOutcome.REMOVED: 'Report approved and content removed',
    ResolveOutcome.CONTENT_ALREADY_REMOVED: 'Report approved but post not found',
    ResolveOutcome.REJECTED: 'Report rejected',
    ResolveOutcome.ALREADY_RESOLVED: 'Report already resolved',
}
