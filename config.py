import os
from dotenv import dotenv_values
from typing import Any

app_path: str = os.path.dirname(__file__).replace("\\", "/")
config: dict[str, str | None] = dict(dotenv_values(f'{app_path}/.env'))

def get_setting(key: str, default: str | None = None) -> str | None:
    value: str | None = os.environ.get(key)
    if value is None:
        value = config.get(key)
    return default if value is None or value == '' else value

def get_int_setting(key: str, default: int) -> int:
    value: str | None = get_setting(key)
    return default if value is None else int(value)

def get_bool_setting(key: str, default: bool = False) -> bool:
    value: str | None = get_setting(key)
    return default if value is None else value.strip().lower() in ('1', 'true', 'yes', 'on')

db_config: dict[str, Any] = {
    'host': get_setting('DB_HOST', 'localhost'),
    'port': get_int_setting('DB_PORT', 3306),
    'user': get_setting('DB_USERNAME', 'root'),
    'password': get_setting('DB_PASSWORD', ''),
    'database': get_setting('DB_DATABASE', 'ojudge'),
    'charset': 'utf8mb4',
    'pool_name': 'ojudge',
    'pool_size': get_int_setting('DB_POOL_SIZE', 5)
}

cache_config: dict[str, Any] = {
    'host': get_setting('CACHE_HOST', 'localhost'),
    'port': get_int_setting('CACHE_PORT', 6379),
    'decode_responses': True
}

app_config: dict[str, Any] = {
    'host': get_setting('HOST', '127.0.0.1'),
    'port': get_int_setting('PORT', 8080),
    'log_level': str(get_setting('LOG_LEVEL', 'INFO')).upper(),
    'cors_origins': [origin.strip() for origin in str(get_setting('CORS_ORIGINS', '*')).split(',') if origin.strip() != ''],
    'ntp': get_bool_setting('NTP'),
    # Every submission is stored under this user until logins issue sessions
    'submission_user_id': get_int_setting('SUBMISSION_USER_ID', 1)
}
