# course_service/errors.py
from fastapi import status


class CourseServiceError(Exception):
    """Base error; carries the HTTP status it maps to at the route boundary."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    title = "Internal Server Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidIdentifier(CourseServiceError):
    status_code = status.HTTP_400_BAD_REQUEST
    title = "Invalid Identifier"

    def __init__(self, value: str):
        super().__init__(f"'{value}' is not a valid course id")
        self.value = value


class CourseNotFound(CourseServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    title = "Course Not Found"

    def __init__(self, course_id: str):
        super().__init__(f"No course with id '{course_id}'")
        self.course_id = course_id


class StoreOperationFailed(CourseServiceError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    title = "Store Operation Failed"

    def __init__(self, operation: str, reason: str):
        super().__init__(f"Database {operation} failed")
        self.operation = operation
        self.reason = reason


class StoreUnavailable(CourseServiceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    title = "Service Unavailable"
