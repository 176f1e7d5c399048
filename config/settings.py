import os
from dotenv import load_dotenv

# Only load the .env file if we're not on Render (i.e., we are in a local environment)
if os.environ.get("RENDER") != "true":
    load_dotenv()

def _env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')

# Flask Configuration
SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')
CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

# Server Configuration
PORT = int(os.getenv('PORT', 3000))
HOST = os.getenv('HOST', '0.0.0.0')
DEBUG = os.getenv('FLASK_ENV', 'production') == 'development'

# SocketIO Configuration
ASYNC_MODE = os.getenv('ASYNC_MODE', 'eventlet')
PING_TIMEOUT = int(os.getenv('PING_TIMEOUT', 60))
PING_INTERVAL = int(os.getenv('PING_INTERVAL', 25))

# Room Configuration
DEFAULT_MAX_PLAYERS = int(os.getenv('DEFAULT_MAX_PLAYERS', 6))
GRID_SIZE = int(os.getenv('GRID_SIZE', 30))
REQUIRE_ALL_READY = _env_bool('REQUIRE_ALL_READY')

def as_dict():
    """Settings as a dictionary, for app factory overrides."""
    return {
        'SECRET_KEY': SECRET_KEY,
        'CORS_ORIGINS': CORS_ORIGINS,
        'PORT': PORT,
        'HOST': HOST,
        'DEBUG': DEBUG,
        'ASYNC_MODE': ASYNC_MODE,
        'PING_TIMEOUT': PING_TIMEOUT,
        'PING_INTERVAL': PING_INTERVAL,
        'DEFAULT_MAX_PLAYERS': DEFAULT_MAX_PLAYERS,
        'GRID_SIZE': GRID_SIZE,
        'REQUIRE_ALL_READY': REQUIRE_ALL_READY
    }
