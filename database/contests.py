from database.mymysql import select_from, select_from_where
from typing import Any

def get_contests() -> list[Any]:
    return select_from(['id', 'name'], 'contests', order_by='id DESC')

def get_contest(id: int) -> dict[str, Any] | None:
    res: list[Any] = select_from_where(['id', 'name', 'start_date', 'end_date'], 'contests', "id = %(id)s LIMIT 1", {'id': id})
    if len(res) == 0:
        return None
    else:
        return res[0]
