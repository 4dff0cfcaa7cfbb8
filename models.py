from pydantic import BaseModel, ConfigDict
from typing import Optional


STUDENT_FIELDS = (
    "studentID",
    "fullName",
    "program",
    "yearLevel",
    "gender",
    "gmail",
    "university",
)


class StudentCreate(BaseModel):
    # required-ness of studentID/fullName is checked by the store (400, not 422)
    model_config = ConfigDict(coerce_numbers_to_str=True)

    studentID: Optional[str] = None
    fullName: Optional[str] = None
    program: Optional[str] = None
    yearLevel: Optional[str] = None
    gender: Optional[str] = None
    gmail: Optional[str] = None
    university: Optional[str] = None


class Student(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    studentID: str
    fullName: str
    program: Optional[str] = None
    yearLevel: Optional[str] = None
    gender: Optional[str] = None
    gmail: Optional[str] = None
    university: Optional[str] = None


class ChatRequest(BaseModel):
    message: Optional[str] = None


class HealthResponse(BaseModel):
    success: bool = True
    status: str
    service: str
    time: str


class StudentCreated(BaseModel):
    success: bool = True
    student: Student


class StudentRemoved(BaseModel):
    success: bool = True
    removed: Student


class ChatReply(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
