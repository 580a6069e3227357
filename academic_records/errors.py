class AcademicRecordsError(Exception):
    """Base class for academic records errors."""


class RecordNotFoundError(AcademicRecordsError):
    """Raised when a requested row does not exist in the records store."""


class StudentNotFoundError(RecordNotFoundError):
    """Raised when no profile matches the requested student id."""

    def __init__(self, student_id: str):
        super().__init__(f"Student not found: {student_id}")
        self.student_id = student_id


class DraftStorageError(AcademicRecordsError):
    """Raised by a draft storage backend when it cannot read or write a draft."""
