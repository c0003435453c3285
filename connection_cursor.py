import logging
from threading import BoundedSemaphore, Lock
from mysql.connector.pooling import MySQLConnectionPool, PooledMySQLConnection
from mysql.connector.abstracts import MySQLCursorAbstract
from typing import Any

logger = logging.getLogger(__name__)

_pool: MySQLConnectionPool | None = None
_available: BoundedSemaphore | None = None
_pool_lock: Lock = Lock()

def get_pool(config: dict[str, Any]) -> tuple[MySQLConnectionPool, BoundedSemaphore]:
    global _pool, _available
    pool, available = _pool, _available
    if pool is None or available is None:
        with _pool_lock:
            if _pool is None or _available is None:
                logger.info("Creating a pool of %s connections to %s:%s", config['pool_size'], config['host'], config['port'])
                _pool = MySQLConnectionPool(**config)
                _available = BoundedSemaphore(config['pool_size'])
            pool, available = _pool, _available
    return pool, available

def reset_pool() -> None:
    global _pool, _available
    with _pool_lock:
        _pool = None
        _available = None

class ConnectionCursor:
    """Borrows a pooled connection for the duration of a with-block.

    The pool itself refuses to hand out more than pool_size connections, so
    callers wait on a semaphore until one is returned instead of failing.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self.config = config

    def open(self) -> Any:
        pool, self.available = get_pool(self.config)
        self.available.acquire()
        try:
            self.connection: PooledMySQLConnection = pool.get_connection()
            self.connection.autocommit = True
            self.cursor: MySQLCursorAbstract = self.connection.cursor(dictionary=True)
        except Exception:
            self.available.release()
            raise

    def __enter__(self) -> Any:
        self.open()
        return self.cursor

    def close(self) -> Any:
        try:
            self.cursor.close()
            self.connection.close()
        finally:
            self.available.release()

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
