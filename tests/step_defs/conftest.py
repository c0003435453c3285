# pyright: reportUnknownVariableType=false
# pyright: reportUntypedFunctionDecorator=false
from pytest import fixture, MonkeyPatch
from pytest_bdd import given, when, then, parsers
from fastapi.testclient import TestClient
from httpx import Response
from datetime import datetime, timedelta, timezone
from fakes import FakeCache, FakeDatabase
from main import app
from database import users, contests, problems, submissions
import cache

client: TestClient = TestClient(app)

# General -----------------------------------------------------------
@fixture(autouse=True)
def database(monkeypatch: MonkeyPatch) -> FakeDatabase:
    fake: FakeDatabase = FakeDatabase()
    monkeypatch.setattr(users, 'create_user', fake.create_user)
    monkeypatch.setattr(users, 'get_user_by_username', fake.get_user_by_username)
    monkeypatch.setattr(contests, 'get_contests', fake.get_contests)
    monkeypatch.setattr(contests, 'get_contest', fake.get_contest)
    monkeypatch.setattr(problems, 'get_problems', fake.get_problems)
    monkeypatch.setattr(problems, 'get_problems_by_contest', fake.get_problems_by_contest)
    monkeypatch.setattr(problems, 'get_problem', fake.get_problem)
    monkeypatch.setattr(submissions, 'create_submission', fake.create_submission)
    monkeypatch.setattr(submissions, 'get_submissions', fake.get_submissions)
    monkeypatch.setattr(submissions, 'get_submission', fake.get_submission)
    return fake

@fixture(autouse=True)
def flags(monkeypatch: MonkeyPatch) -> FakeCache:
    fake: FakeCache = FakeCache()
    monkeypatch.setattr(cache, 'cache', fake)
    return fake

@fixture
def names_convert() -> dict[str, str]:
    return {
        'the correct': 'correct',
        'a non-existing': 'non-existing',
        'another': 'another',
        'an unsupported': 'me'
    }

@fixture
def data() -> dict[str, str | int | bool]:
    return {}

@fixture
def form() -> dict[str, str | int | bool]:
    return {}

@fixture
def body() -> dict[str, str | int | bool]:
    return {}

@given("the database is unavailable")
def database_unavailable(database: FakeDatabase) -> None:
    database.unavailable = True

@given(parsers.parse("the {flag} flag is set"))
def set_flag(flag: str, flags: FakeCache) -> None:
    flags.set(flag, 'True')

@given(parsers.parse("with an empty {field}"))
def empty_field(data: dict[str, str | int | bool], field: str) -> None:
    data[field] = '' if type(data[field]) is str else 0

@given(parsers.parse("a field {field} is set to {value}"))
def set_to(data: dict[str, str | int | bool], field: str, value: str) -> None:
    data[field] = eval(value)

@given("put into form")
def put_into_form(data: dict[str, str | int | bool], form: dict[str, str | int | bool]) -> None:
    for key, value in data.items():
        form[key] = value
    data.clear()

@given("put into body")
def put_into_body(data: dict[str, str | int | bool], body: dict[str, str | int | bool]) -> None:
    for key, value in data.items():
        body[key] = value
    data.clear()

@when(parsers.parse("makes {method} request {uri}"), target_fixture="response")
def makes_request(method: str, uri: str, form: dict[str, str | int | bool], body: dict[str, str | int | bool]) -> Response:
    response: Response
    match method:
        case 'POST':
            if len(form) > 0:
                response = client.post(uri, data=form)
            else:
                response = client.post(uri, json=body)
        case 'GET':
            response = client.get(uri)
        case _:
            response = Response(status_code=500)
    form.clear()
    body.clear()
    return response

@then(parsers.parse("gets status {code:d}"))
def check_status_code(code: int, response: Response) -> None:
    assert response.status_code == code

@then(parsers.parse("has a field {field}"))
def has_field(field: str, response: Response) -> None:
    assert field in response.json().keys()

@then(parsers.parse("{field} equals to {value}"))
def field_equals_value(field: str, value: str, response: Response) -> None:
    assert field in response.json().keys()
    assert str(response.json()[field]) == value

@then(parsers.parse("{field} length is {value:d}"))
def field_length_value(field: str, value: int, response: Response) -> None:
    assert field in response.json().keys()
    assert len(response.json()[field]) == value

@then(parsers.parse("the response has {count:d} entries"))
def response_length(count: int, response: Response) -> None:
    assert isinstance(response.json(), list)
    assert len(response.json()) == count

@then(parsers.parse("entry {index:d} has {field} set to {value}"))
def entry_field_equals_value(index: int, field: str, value: str, response: Response) -> None:
    assert str(response.json()[index][field]) == value

@then(parsers.parse("every entry has {field} set to {value}"))
def every_entry_field_equals_value(field: str, value: str, response: Response) -> None:
    assert len(response.json()) > 0
    assert all(str(entry[field]) == value for entry in response.json())

# Users -------------------------------------------------------------

@given(parsers.parse("{fields} of {name} user"))
def user(fields: str, name: str, names_convert: dict[str, str], data: dict[str, str | int | bool]) -> None:
    fields_list: list[str] = []
    if fields == "all data":
        fields_list = ['username', 'email', 'password']
    else:
        fields_list = fields.replace(" and ", ", ").split(", ")
    if 'username' in fields_list:
        data['username'] = names_convert[name]
    if 'email' in fields_list:
        data['email'] = names_convert[name] + '@test'
    if 'password' in fields_list:
        data['password'] = names_convert[name]

@given(parsers.parse("{name} user is registered"))
def user_registered(name: str, names_convert: dict[str, str]) -> None:
    response: Response = client.post('/register', data={
        'username': names_convert[name],
        'email': names_convert[name] + '@test',
        'password': names_convert[name]
    })
    assert response.status_code == 201

# Contests and problems ---------------------------------------------

@given(parsers.parse('an {state} contest "{name}"'))
def contest(state: str, name: str, database: FakeDatabase) -> None:
    now: datetime = datetime.now(timezone.utc).replace(tzinfo=None)
    start_date: datetime
    end_date: datetime
    match state:
        case 'ongoing':
            start_date, end_date = now - timedelta(hours=1), now + timedelta(hours=1)
        case 'ended':
            start_date, end_date = now - timedelta(days=2), now - timedelta(days=1)
        case 'unstarted':
            start_date, end_date = now + timedelta(days=1), now + timedelta(days=2)
        case _:
            raise ValueError(f"Unknown contest state {state}")
    database.contests.append({'id': len(database.contests) + 1, 'name': name, 'start_date': start_date, 'end_date': end_date})

@given(parsers.parse('a problem "{name}" in contest {contest_id:d}'))
def problem_in_contest(name: str, contest_id: int, database: FakeDatabase) -> None:
    database.problems.append({'id': len(database.problems) + 1, 'name': name, 'problem_statement': f"Solve {name}", 'contest_id': contest_id})

@given(parsers.parse('a problem "{name}" outside of contests'))
def problem_outside_contests(name: str, database: FakeDatabase) -> None:
    database.problems.append({'id': len(database.problems) + 1, 'name': name, 'problem_statement': f"Solve {name}", 'contest_id': None})

@then(parsers.parse("{field} is a UTC datetime"))
def field_is_utc_datetime(field: str, response: Response) -> None:
    value: str = response.json()[field]
    assert value.endswith('+00:00')
    assert datetime.fromisoformat(value).utcoffset() == timedelta(0)

@then(parsers.parse("was redirected with status {code:d} to {path}"))
def redirected_to(code: int, path: str, response: Response) -> None:
    assert len(response.history) == 1
    assert response.history[0].status_code == code
    assert response.url.path == path
