"""
Exceções dos serviços, traduzidas para respostas HTTP na borda da API
"""
from typing import Optional


class ServiceError(Exception):
    """Erro base dos serviços"""
    status_code = 500
    default_message = 'Internal error'

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ServiceError):
    """Chamador sem privilégio para a operação"""
    status_code = 403
    default_message = 'Unauthorized'


class NotFound(ServiceError):
    """Recurso referenciado não existe"""
    status_code = 404
    default_message = 'Not found'

    def __init__(self, resource: str = 'Resource', message: Optional[str] = None):
        super().__init__(message or f'{resource} not found')
        self.resource = resource


class InvalidArgument(ServiceError):
    """Entrada malformada ou operação inválida"""
    status_code = 400
    default_message = 'Invalid argument'


class StorageFailure(ServiceError):
    """Falha de transação ou consulta; a mensagem do banco nunca vai para o cliente"""
    status_code = 500
    default_message = 'Storage failure'
