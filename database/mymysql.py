from mysql.connector.abstracts import MySQLCursorAbstract
from connection_cursor import ConnectionCursor
from config import db_config
from typing import Any
from datetime import datetime

def unpack_fields(fields: list[str]) -> str:
    return ', '.join(fields)

def unpack_values(fields: list[str]) -> str:
    return ', '.join(map(lambda x: f'%({x})s', fields))

def insert_into_values(table_name: str, fields: list[str], params: dict[str, str | int | datetime]) -> int | None:
    cursor: MySQLCursorAbstract
    with ConnectionCursor(db_config) as cursor:
        cursor.execute(f"INSERT INTO {table_name} ({unpack_fields(fields)}) VALUES ({unpack_values(fields)})", params)
        return cursor.lastrowid

def select_from(fields: list[str], table_name: str, order_by: str = '') -> list[Any]:
    cursor: MySQLCursorAbstract
    with ConnectionCursor(db_config) as cursor:
        cursor.execute(f"SELECT {unpack_fields(fields)} FROM {table_name}" + (f" ORDER BY {order_by}" if order_by != '' else ''))
        return list(cursor.fetchall())

def select_from_where(fields: list[str], table_name: str, condition: str, params: dict[str, str | int | datetime], order_by: str = '') -> list[Any]:
    cursor: MySQLCursorAbstract
    with ConnectionCursor(db_config) as cursor:
        cursor.execute(f"SELECT {unpack_fields(fields)} FROM {table_name} WHERE {condition}" + (f" ORDER BY {order_by}" if order_by != '' else ''), params)
        return list(cursor.fetchall())
