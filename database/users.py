from database.mymysql import insert_into_values, select_from_where
from typing import Any

def create_user(username: str, password_hash: str) -> int | None:
    return insert_into_values('users', ['username', 'password'], {'username': username, 'password': password_hash})

def get_user_by_username(username: str) -> dict[str, Any] | None:
    res: list[Any] = select_from_where(['id', 'username', 'password'], 'users', "username = BINARY %(username)s LIMIT 1", {'username': username})
    if len(res) == 0:
        return None
    else:
        return res[0]
