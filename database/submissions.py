from database.mymysql import insert_into_values, select_from, select_from_where
from typing import Any

def create_submission(user_id: int, problem_id: int, code: str, language: str) -> int | None:
    return insert_into_values('submissions', ['user_id', 'problem_id', 'code', 'language'], {'user_id': user_id, 'problem_id': problem_id, 'code': code, 'language': language})

def get_submissions() -> list[Any]:
    return select_from(['id', 'problem_id', 'language', 'code'], 'submissions', order_by='id')

def get_submission(id: int) -> dict[str, Any] | None:
    res: list[Any] = select_from_where(['id', 'problem_id', 'language', 'code'], 'submissions', "id = %(id)s LIMIT 1", {'id': id})
    if len(res) == 0:
        return None
    else:
        return res[0]
