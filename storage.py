import json
import logging
import os
import tempfile
import threading
from typing import List, Optional

from errors import DuplicateStudentError, MissingFieldError, StudentNotFoundError
from models import STUDENT_FIELDS
from settings import get_settings

logger = logging.getLogger(__name__)


def load_students(path: str) -> List[dict]:
    """Read the student array from *path*. Raises on a missing or malformed file."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a JSON array")
    return data


def save_students(path: str, students: List[dict]):
    """Rewrite *path* with *students*, swapping a temp file into place."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".students-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(students, f, indent=2)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


class StudentStore:
    """In-memory student list mirrored to a JSON file.

    The list is the source of truth while the process runs; the file is
    rewritten after every create/delete and read once by ``load``.
    """

    def __init__(self, path: str) -> None:
        self.path = path
        self._lock = threading.Lock()
        self._students: List[dict] = []

    def load(self) -> int:
        with self._lock:
            try:
                self._students = load_students(self.path)
                logger.info("Loaded %d students from %s", len(self._students), self.path)
            except FileNotFoundError:
                self._students = []
                logger.warning("No %s found, starting empty", self.path)
            except (OSError, ValueError) as e:
                self._students = []
                logger.warning("Could not read %s, starting empty: %s", self.path, e)
            return len(self._students)

    def list(self) -> List[dict]:
        with self._lock:
            return list(self._students)

    def snapshot(self, limit: int) -> List[dict]:
        with self._lock:
            return list(self._students[:limit])

    def create(self, record: dict) -> dict:
        student_id = record.get("studentID")
        full_name = record.get("fullName")
        if not student_id or not full_name:
            raise MissingFieldError("studentID and fullName required.")

        student = {k: record[k] for k in STUDENT_FIELDS if record.get(k) is not None}
        with self._lock:
            if any(s.get("studentID") == student_id for s in self._students):
                raise DuplicateStudentError("Duplicate ID.")
            self._students.append(student)
            try:
                save_students(self.path, self._students)
            except OSError:
                self._students.pop()
                raise
        logger.info("Created student %s (total: %d)", student_id, len(self._students))
        return student

    def delete(self, student_id: str) -> dict:
        with self._lock:
            index = self._find(student_id)
            if index is None:
                raise StudentNotFoundError("Student not found.")
            removed = self._students.pop(index)
            try:
                save_students(self.path, self._students)
            except OSError:
                self._students.insert(index, removed)
                raise
        logger.info("Removed student %s (total: %d)", student_id, len(self._students))
        return removed

    def _find(self, student_id: str) -> Optional[int]:
        for index, student in enumerate(self._students):
            if student.get("studentID") == student_id:
                return index
        return None


_store: Optional[StudentStore] = None
_store_lock = threading.Lock()


def get_store() -> StudentStore:
    """Return the process-wide store, loading it from disk on first use."""
    global _store
    with _store_lock:
        if _store is None:
            _store = StudentStore(get_settings().students_file)
            _store.load()
        return _store
