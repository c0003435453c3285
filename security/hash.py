import logging
import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_MAX_PASSWORD_BYTES: int = 72

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

def verify_password(password: str, password_hash: str) -> bool:
    if len(password.encode('utf-8')) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        logger.error("Stored password hash is not a bcrypt hash")
        return False
