"""
Project: Digital Menu marketplace

Description:
Application settings. Every value can be overridden from the environment
or a local .env file.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def _flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'digital-menu-secret-key'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL', 'sqlite:///digital_menu.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Bearer tokens
    JWT_SECRET = os.environ.get('JWT_SECRET') or SECRET_KEY
    JWT_ALGORITHM = 'HS256'
    TOKEN_EXPIRE_MINUTES = int(os.environ.get('TOKEN_EXPIRE_MINUTES', 60 * 24 * 14))
    TOKEN_NAME = 'auth_token'

    # Literal admin/admin login for the seeded admin row
    ADMIN_LOGIN_SHORTCUT = _flag('ADMIN_LOGIN_SHORTCUT', True)

    SOCKETIO_ASYNC_MODE = os.environ.get('SOCKETIO_ASYNC_MODE', 'threading')
    CORS_ALLOWED_ORIGINS = os.environ.get('CORS_ALLOWED_ORIGINS', '*')

    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    PORT = int(os.environ.get('PORT', 5013))


class ClientConfig:
    API_BASE_URL = os.environ.get('DIGITAL_MENU_API_URL', 'http://localhost:5013/api')
    STORAGE_PATH = os.environ.get(
        'DIGITAL_MENU_STORAGE',
        os.path.join(os.path.expanduser('~'), '.digital_menu', 'storage.json'),
    )
    TIMEOUT = float(os.environ.get('DIGITAL_MENU_TIMEOUT', 10))
