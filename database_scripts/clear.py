import logging
from mysql.connector import MySQLConnection
from mysql.connector.abstracts import MySQLConnectionAbstract, MySQLCursorAbstract
from config import db_config
from database_scripts.create_tables import connection_config, create_tables

logger = logging.getLogger(__name__)

def clear() -> None:
    connection: MySQLConnectionAbstract
    with MySQLConnection(**connection_config(with_database=False)) as connection:
        connection.autocommit = True
        cursor: MySQLCursorAbstract
        with connection.cursor(dictionary=True) as cursor:
            cursor.execute(f"DROP DATABASE IF EXISTS `{db_config['database']}`")
            cursor.execute(f"CREATE DATABASE `{db_config['database']}`")
    logger.info("Database %s is recreated", db_config['database'])
    create_tables()

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    clear()
