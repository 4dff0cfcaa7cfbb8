from fastapi import APIRouter, Depends, status
from models import ErrorResponse, StudentCreate, StudentCreated, StudentRemoved
from storage import StudentStore, get_store
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/students", response_model=List[dict])
def get_students(store: StudentStore = Depends(get_store)):
    students = store.list()
    logger.info("GET /students - returned %d students", len(students))
    return students


@router.post(
    "/students",
    status_code=status.HTTP_201_CREATED,
    response_model=StudentCreated,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def post_student(payload: Optional[StudentCreate] = None, store: StudentStore = Depends(get_store)):
    payload = payload or StudentCreate()
    logger.info("POST /students - studentID: %s", payload.studentID)
    student = store.create(payload.model_dump())
    return {"success": True, "student": student}


@router.delete(
    "/students/{student_id}",
    response_model=StudentRemoved,
    response_model_exclude_none=True,
    responses={404: {"model": ErrorResponse}},
)
def delete_student(student_id: str, store: StudentStore = Depends(get_store)):
    logger.info("DELETE /students/%s", student_id)
    removed = store.delete(student_id)
    return {"success": True, "removed": removed}
