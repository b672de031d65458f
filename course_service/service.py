# course_service/service.py
import logging
from datetime import date
from typing import Any, Dict, List, Optional

from bson import ObjectId

from .data_service import CourseRepository
from .errors import CourseNotFound, InvalidIdentifier
from .models import CourseCreate, CourseUpdate, DeleteResult, InsertResult, UpdateResult

logger = logging.getLogger("course_service.service")

# (primary, mirror): whichever is provided is written under both names
MIRRORED_FIELDS = [("title", "course_name"), ("thumbnail", "image")]
PLAIN_FIELDS = ["price", "category", "description", "duration", "isFeatured"]


def parse_object_id(value: str) -> ObjectId:
    if not ObjectId.is_valid(value):
        raise InvalidIdentifier(value)
    return ObjectId(value)


def build_update_fields(update: CourseUpdate, today: Optional[date] = None) -> Dict[str, Any]:
    """Build the $set document for an update.

    Only keys present in the request are written. A mirrored pair takes the
    first non-null value of (primary, mirror) and writes it to both names;
    an empty string counts as a value.
    lastUpdated is always stamped.
    """
    provided = update.model_dump(exclude_unset=True)
    fields: Dict[str, Any] = {}

    for primary, mirror in MIRRORED_FIELDS:
        if primary in provided or mirror in provided:
            value = provided.get(primary)
            if value is None:
                value = provided.get(mirror)
            fields[primary] = value
            fields[mirror] = value

    for name in PLAIN_FIELDS:
        if name in provided:
            fields[name] = provided[name]

    fields["lastUpdated"] = (today or date.today()).isoformat()
    return fields


class CourseService:
    def __init__(self, repository: CourseRepository):
        self.repository = repository

    async def list(self) -> List[Dict[str, Any]]:
        return await self.repository.find_all()

    async def list_popular(self) -> List[Dict[str, Any]]:
        return await self.repository.find_popular()

    async def list_by_instructor_email(self, email: str) -> List[Dict[str, Any]]:
        return await self.repository.find_by_instructor_email(email)

    async def get_by_id(self, course_id: str) -> Dict[str, Any]:
        course = await self.repository.find_by_id(parse_object_id(course_id))
        if course is None:
            raise CourseNotFound(course_id)
        return course

    async def create(self, course: CourseCreate) -> InsertResult:
        document = course.model_dump(exclude_unset=True)
        # the store assigns identifiers
        document.pop("_id", None)
        result = await self.repository.insert(document)
        logger.info(f"Created course {result.insertedId}")
        return result

    async def update(self, course_id: str, update: CourseUpdate) -> UpdateResult:
        oid = parse_object_id(course_id)
        result = await self.repository.update(oid, build_update_fields(update))
        if result.matchedCount == 0:
            logger.info(f"Update matched no course for id {course_id}")
        return result

    async def delete(self, course_id: str) -> DeleteResult:
        return await self.repository.delete(parse_object_id(course_id))

    async def top_instructors(self) -> List[Dict[str, Any]]:
        return await self.repository.top_instructors()
