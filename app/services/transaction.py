"""
Unidade de trabalho sobre a sessão do Flask-SQLAlchemy
"""
import logging
from contextlib import contextmanager
from sqlalchemy.exc import SQLAlchemyError
from app import db
from app.services.exceptions import StorageFailure

logger = logging.getLogger(__name__)


@contextmanager
def transaction(failure_message='Storage failure'):
    """Executa o bloco em uma transação: commit no sucesso, rollback em qualquer erro.

    Erros do SQLAlchemy viram StorageFailure; os demais (inclusive ServiceError
    levantados dentro do bloco) são propagados depois do rollback.
    """
    session = db.session
    try:
        yield session
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Erro de banco, transação desfeita: {e}")
        raise StorageFailure(failure_message) from e
    except BaseException:
        session.rollback()
        raise
