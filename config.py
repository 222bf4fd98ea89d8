import os
from dotenv import load_dotenv

load_dotenv()

# Diretório base do projeto
basedir = os.path.abspath(os.path.dirname(__file__))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-key-change-in-production'

    # Database - Usar caminho absoluto
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///' + os.path.join(basedir, 'instance', 'socialhub.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Paginação
    FEED_PAGE_SIZE = 10
    COMMENTS_PAGE_SIZE = 20
    FOLLOW_PAGE_SIZE = 20
    PROFILE_CONNECTIONS_LIMIT = 6  # conexões mútuas exibidas no perfil

    # Busca
    SEARCH_PAGE_SIZE = 20
    SEARCH_PREVIEW_LIMIT = 5  # resultados de cada tipo quando type=all
