# course_service/models.py
from typing import Annotated, Any, Optional, Union

from bson import ObjectId
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field


def _stringify_object_id(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


PyObjectId = Annotated[str, BeforeValidator(_stringify_object_id)]

Duration = Union[str, int, float]


class Instructor(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    rating: Optional[float] = None

    model_config = ConfigDict(extra="allow")


class CourseCreate(BaseModel):
    """Payload accepted by POST /courses; unknown keys are stored as given"""
    title: str
    course_name: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[Duration] = None
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    isFeatured: Optional[bool] = None
    studentsEnrolled: Optional[int] = Field(default=None, ge=0)
    instructor: Optional[Instructor] = None

    model_config = ConfigDict(extra="allow")


class CourseUpdate(BaseModel):
    """The fixed field subset PATCH /courses/{id} overwrites"""
    title: Optional[str] = None
    course_name: Optional[str] = None
    price: Optional[float] = None
    category: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[Duration] = None
    thumbnail: Optional[str] = None
    image: Optional[str] = None
    isFeatured: Optional[bool] = None

    model_config = ConfigDict(extra="ignore")


def serialize_documents(documents: Any) -> Any:
    """Render stored documents as JSON-ready data without re-validating them.

    Documents written outside this API keep whatever shape they were stored
    with; ObjectId values anywhere in the tree become hex strings and
    datetimes become ISO strings.
    """
    return jsonable_encoder(documents, custom_encoder={ObjectId: str})


class InsertResult(BaseModel):
    acknowledged: bool
    insertedId: PyObjectId


class UpdateResult(BaseModel):
    acknowledged: bool
    matchedCount: int
    modifiedCount: int
    upsertedCount: int = 0
    upsertedId: Optional[PyObjectId] = None


class DeleteResult(BaseModel):
    acknowledged: bool
    deletedCount: int

