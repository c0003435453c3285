from pydantic import BaseModel, Field

class Empty(BaseModel):
    pass

class Error(BaseModel):
    detail: str

class ContestListEntry(BaseModel):
    id: int
    name: str

class ProblemListEntry(BaseModel):
    id: int
    name: str

class ContestFull(ContestListEntry):
    starts_at: str = Field(description="Datetime in ISO 8601 format with the UTC offset")
    ends_at: str = Field(description="Datetime in ISO 8601 format with the UTC offset")
    ongoing: bool
    problems: list[ProblemListEntry]

class ProblemFull(ProblemListEntry):
    problem_statement: str

class SubmissionCreate(BaseModel):
    language: str
    code: str

class SubmissionId(BaseModel):
    submission_id: int

class SubmissionPublic(BaseModel):
    id: int
    problem_id: int
    language: str
    code: str
    passed: bool = Field(description="Always false until submissions are judged")
