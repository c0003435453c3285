from database.mymysql import select_from, select_from_where
from typing import Any

def get_problems() -> list[Any]:
    return select_from(['id', 'name'], 'problems', order_by='id')

def get_problems_by_contest(contest_id: int) -> list[Any]:
    return select_from_where(['id', 'name'], 'problems', "contest_id = %(contest_id)s", {'contest_id': contest_id}, order_by='id')

def get_problem(id: int) -> dict[str, Any] | None:
    res: list[Any] = select_from_where(['id', 'name', 'problem_statement'], 'problems', "id = %(id)s LIMIT 1", {'id': id})
    if len(res) == 0:
        return None
    else:
        return res[0]
