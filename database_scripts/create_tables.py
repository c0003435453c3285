import os
import logging
from mysql.connector import MySQLConnection
from mysql.connector.abstracts import MySQLConnectionAbstract, MySQLCursorAbstract
from typing import TextIO
from config import db_config

logger = logging.getLogger(__name__)

sql_path: str = os.path.dirname(__file__).replace('\\', '/') + '/create_tables.sql'

def connection_config(with_database: bool = True) -> dict[str, str | int | None]:
    return {
        'host': db_config['host'],
        'port': db_config['port'],
        'user': db_config['user'],
        'password': db_config['password'],
        'charset': db_config['charset'],
        **({'database': db_config['database']} if with_database else {})
    }

def read_statements() -> list[str]:
    sql_file: TextIO
    with open(sql_path, 'r') as sql_file:
        return [statement.strip() for statement in sql_file.read().split(';') if statement.strip() != '']

def create_tables() -> None:
    connection: MySQLConnectionAbstract
    with MySQLConnection(**connection_config()) as connection:
        connection.autocommit = True
        cursor: MySQLCursorAbstract
        with connection.cursor(dictionary=True) as cursor:
            for statement in read_statements():
                cursor.execute(statement)
    logger.info("Tables are created in %s", db_config['database'])

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    create_tables()
