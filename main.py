import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException, Form, Request
from fastapi.responses import JSONResponse, RedirectResponse
from fastapi.middleware.cors import CORSMiddleware
from models import Empty, Error
from models import ContestListEntry, ContestFull
from models import ProblemListEntry, ProblemFull
from models import SubmissionCreate, SubmissionId, SubmissionPublic
from mysql.connector.errors import Error as MySQLError, IntegrityError
from redis.exceptions import RedisError
from config import app_config
from security.hash import hash_password, verify_password, BCRYPT_MAX_PASSWORD_BYTES
from date_time import as_utc, get_current_utc_datetime, is_ongoing
from typing import Annotated, Any
from validation import text_max_length
from database import users, contests, problems, submissions
import cache

logging.basicConfig(level=app_config['log_level'], format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    cache.seed_cache()
    yield

app: FastAPI = FastAPI(
    title="ojudge API (Connector)",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        'docExpansion': 'none',
        'defaultModelRendering': 'model'
    }
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=app_config['cors_origins'],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(MySQLError)
@app.exception_handler(RedisError)
def storage_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Storage error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse({'detail': "Internal Server Error"}, status_code=500)

@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse('/docs', status_code=301)

@app.post("/register", status_code=201, tags=["Users"], description="Register a user. The email is accepted but not stored", responses={
    201: { 'model': Empty, 'description': "All good" },
    400: { 'model': Error, 'description': "Invalid data" },
    403: { 'model': Error, 'description': "User registration is blocked" },
    409: { 'model': Error, 'description': "Username is already taken" },
    500: { 'model': Error, 'description': "Internal Server Error" }
})
def post_register(username: Annotated[str, Form()] = "", email: Annotated[str, Form()] = "", password: Annotated[str, Form()] = "") -> JSONResponse:
    username = username.strip()
    if cache.is_blocked('user_registration'):
        raise HTTPException(status_code=403, detail="User registration is blocked")
    if username == "":
        raise HTTPException(status_code=400, detail="Username is empty")
    if len(username) < 3:
        raise HTTPException(status_code=400, detail="Username is too short")
    if len(username) > text_max_length['tinytext']:
        raise HTTPException(status_code=400, detail="Username is too long")
    if email == "":
        raise HTTPException(status_code=400, detail="Email is empty")
    if len(email) > text_max_length['tinytext']:
        raise HTTPException(status_code=400, detail="Email is too long")
    if password == "":
        raise HTTPException(status_code=400, detail="Password is empty")
    if len(password.encode('utf-8')) > BCRYPT_MAX_PASSWORD_BYTES:
        raise HTTPException(status_code=400, detail="Password is too long")
    # TODO: persist the email once the users table has a column for it
    try:
        user_id: int | None = users.create_user(username, hash_password(password))
    except IntegrityError:
        logger.info("Registration conflict for username %s", username)
        raise HTTPException(status_code=409, detail="Username is already taken")
    if user_id is None:
        raise HTTPException(status_code=500, detail="Internal Server Error")
    logger.info("Registered user %s with id %s", username, user_id)
    return JSONResponse({}, status_code=201)

@app.post("/login", tags=["Users"], description="Check user credentials. No session is issued", responses={
    200: { 'model': Empty, 'description': "All good" },
    401: { 'model': Error, 'description': "Incorrect username or password" },
    403: { 'model': Error, 'description': "Authorization is blocked" },
    500: { 'model': Error, 'description': "Internal Server Error" }
})
def post_login(username: Annotated[str, Form()] = "", password: Annotated[str, Form()] = "") -> JSONResponse:
    username = username.strip()
    if cache.is_blocked('authorization'):
        raise HTTPException(status_code=403, detail="Authorization is blocked")
    user_db: dict[str, Any] | None = users.get_user_by_username(username)
    if user_db is None or not verify_password(password, user_db['password']):
        logger.info("Failed login for username %s", username)
        raise HTTPException(status_code=401, detail="Incorrect username or password")
    return JSONResponse({})

@app.get("/contests", tags=["Contests"], description="Get all contests, newest first", responses={
    200: { 'model': list[ContestListEntry], 'description': "All good" },
    500: { 'model': Error, 'description': "Internal Server Error" }
})
def get_contests() -> JSONResponse:
    return JSONResponse([{'id': contest['id'], 'name': contest['name']} for contest in contests.get_contests()])

@app.get("/contests/{contest_id}", tags=["Contests", "Problems"], description="Get a contest with its problems", responses={
    200: { 'model': ContestFull, 'description': "All good" },
    404: { 'model': Error, 'description': "Contest does not exist" },
    500: { 'model': Error, 'description': "Internal Server Error" }
})
def get_contest(contest_id: int) -> JSONResponse:
    contest: dict[str, Any] | None = contests.get_contest(contest_id)
    if contest is None:
        raise HTTPException(status_code=404, detail="Contest does not exist")
    contest_problems: list[Any] = problems.get_problems_by_contest(contest_id)
    now = get_current_utc_datetime(app_config['ntp'])
    return JSONResponse({
        'id': contest['id'],
        'name': contest['name'],
        'starts_at': as_utc(contest['start_date']).isoformat(),
        'ends_at': as_utc(contest['end_date']).isoformat(),
        'ongoing': is_ongoing(contest['start_date'], contest['end_date'], now),
        'problems': [{'id': problem['id'], 'name': problem['name']} for problem in contest_problems]
    })

@app.get("/problems", tags=["Problems"], description="Get all problems", responses={
    200: { 'model': list[ProblemListEntry], 'description': "All good" },
    500: { 'model': Error, 'description': "Internal Server Error" }
})
def get_problems() -> JSONResponse:
    return JSONResponse([{'id': problem['id'], 'name': problem['name']} for problem in problems.get_problems()])

@app.get("/problems/{problem_id}", tags=["Problems"], description="Get a problem", responses={
    200: { 'model': ProblemFull, 'description': "All good" },
    404: { 'model': Error, 'description': "Problem does not exist" },
    500: { 'model': Error, 'description': "Internal Server Error" }
})
def get_problem(problem_id: int) -> JSONResponse:
    problem: dict[str, Any] | None = problems.get_problem(problem_id)
    if problem is None:
        raise HTTPException(status_code=404, detail="Problem does not exist")
    return JSONResponse({
        'id': problem['id'],
        'name': problem['name'],
        'problem_statement': problem['problem_statement']
    })

@app.post("/problems/{problem_id}", tags=["Submissions", "Problems"], description="Submit a solution to a problem", responses={
    200: { 'model': SubmissionId, 'description': "All good" },
    400: { 'model': Error, 'description': "Invalid data" },
    403: { 'model': Error, 'description': "Submissions are blocked" },
    404: { 'model': Error, 'description': "Problem does not exist" },
    500: { 'model': Error, 'description': "Internal Server Error" }
})
def post_submission(problem_id: int, submission: SubmissionCreate) -> JSONResponse:
    if cache.is_blocked('submit'):
        raise HTTPException(status_code=403, detail="Submissions are blocked")
    if submission.code == "":
        raise HTTPException(status_code=400, detail="Code cannot be empty")
    if len(submission.code) > text_max_length['text']:
        raise HTTPException(status_code=400, detail="Code is too long")
    if submission.language == "":
        raise HTTPException(status_code=400, detail="Language cannot be empty")
    if len(submission.language) > text_max_length['tinytext']:
        raise HTTPException(status_code=400, detail="Language is too long")
    if problems.get_problem(problem_id) is None:
        raise HTTPException(status_code=404, detail="Problem does not exist")
    # TODO: submit as the logged in user once login issues sessions
    submission_id: int | None = submissions.create_submission(app_config['submission_user_id'], problem_id, submission.code, submission.language)
    if submission_id is None:
        raise HTTPException(status_code=500, detail="Internal Server Error")
    logger.info("Accepted submission %s for problem %s in %s", submission_id, problem_id, submission.language)
    return JSONResponse({'submission_id': submission_id})

def submission_public(submission: dict[str, Any]) -> dict[str, Any]:
    return {
        'id': submission['id'],
        'problem_id': submission['problem_id'],
        'language': submission['language'],
        'code': submission['code'],
        # TODO: report the verdict once a judge checks submissions
        'passed': False
    }

@app.get("/submissions", tags=["Submissions"], description="Get all submissions", responses={
    200: { 'model': list[SubmissionPublic], 'description': "All good" },
    500: { 'model': Error, 'description': "Internal Server Error" }
})
def get_submissions() -> JSONResponse:
    return JSONResponse([submission_public(submission) for submission in submissions.get_submissions()])

@app.get("/submissions/{submission_id}", tags=["Submissions"], description="Get a submission", responses={
    200: { 'model': SubmissionPublic, 'description': "All good" },
    404: { 'model': Error, 'description': "Submission does not exist" },
    500: { 'model': Error, 'description': "Internal Server Error" }
})
def get_submission(submission_id: int) -> JSONResponse:
    submission: dict[str, Any] | None = submissions.get_submission(submission_id)
    if submission is None:
        raise HTTPException(status_code=404, detail="Submission does not exist")
    return JSONResponse(submission_public(submission))

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app_config['host'], port=app_config['port'])
