import os
from dotenv import load_dotenv

load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))
PROJECT_DIR = os.path.dirname(BASE_DIR)


def _database_uri():
    if os.environ.get('DATABASE_URL'):
        return os.environ['DATABASE_URL']
    if os.environ.get('DB_HOST'):
        return f"mysql+pymysql://{os.environ.get('DB_USER')}:{os.environ.get('DB_PASSWORD')}@{os.environ.get('DB_HOST')}:{os.environ.get('DB_PORT', '3306')}/{os.environ.get('DB_NAME')}?charset=utf8mb4"
    return 'sqlite:///' + os.path.join(PROJECT_DIR, 'comicvote.db')


def _flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")
    WTF_CSRF_SECRET_KEY = SECRET_KEY
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    FORCE_HTTPS = _flag('FORCE_HTTPS', True)

    # Visitor cookie
    VISITOR_COOKIE_NAME = os.environ.get('VISITOR_COOKIE_NAME', 'visitorId')
    VISITOR_COOKIE_MAX_AGE = 365 * 24 * 60 * 60  # 1 year
    VISITOR_COOKIE_SECURE = _flag('VISITOR_COOKIE_SECURE', True)

    # Authoring
    COMICS_CONTENT_DIR = os.environ.get('COMICS_CONTENT_DIR', os.path.join(PROJECT_DIR, 'content', 'comics'))
    COMICS_ASSETS_DIR = os.environ.get('COMICS_ASSETS_DIR', os.path.join(PROJECT_DIR, 'assets', 'comics'))
    COMICS_EXPORT_DIR = os.environ.get('COMICS_EXPORT_DIR', os.path.join(PROJECT_DIR, 'export'))
    COMIC_IMAGE_PREFIX = os.environ.get('COMIC_IMAGE_PREFIX', 'jeromeabel-creativecommons-by-nc-leconceptdelapreuve')
    COMIC_ALT_PREFIX = os.environ.get(
        'COMIC_ALT_PREFIX',
        "Dessin d'un homme, une femme et un enfant dans l'entrée d'une maison. Une bulle de texte indique : '",
    )


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    WTF_CSRF_ENABLED = False
    FORCE_HTTPS = False
    VISITOR_COOKIE_SECURE = False
    LOG_LEVEL = 'DEBUG'
