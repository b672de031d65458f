# course_service/data_service.py
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from bson.errors import BSONError
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from .errors import StoreOperationFailed
from .models import DeleteResult, InsertResult, UpdateResult

logger = logging.getLogger("course_service.data")

POPULAR_LIMIT = 6
TOP_INSTRUCTORS_LIMIT = 4

# Driver faults plus documents the BSON encoder rejects
STORE_ERRORS = (PyMongoError, BSONError)

# Keyed by email so namesakes stay apart; instructors without an email
# fall back to their display name.
INSTRUCTOR_KEY = {"$ifNull": ["$instructor.email", "$instructor.name"]}

TOP_INSTRUCTORS_PIPELINE = [
    {"$match": {"$or": [
        {"instructor.email": {"$exists": True, "$ne": None}},
        {"instructor.name": {"$exists": True, "$ne": None}},
    ]}},
    {"$group": {
        "_id": INSTRUCTOR_KEY,
        "name": {"$first": "$instructor.name"},
        "email": {"$first": "$instructor.email"},
        "bio": {"$first": "$instructor.bio"},
        "avatar": {"$first": "$instructor.avatar"},
        "averageRating": {"$avg": "$instructor.rating"},
        "totalCourses": {"$sum": 1},
    }},
    {"$sort": {"averageRating": -1, "totalCourses": -1, "_id": 1}},
    {"$limit": TOP_INSTRUCTORS_LIMIT},
    {"$project": {
        "_id": 0,
        "name": 1,
        "email": 1,
        "bio": 1,
        "avatar": 1,
        "averageRating": 1,
        "totalCourses": 1,
    }},
]


class CourseRepository:
    """Thin async wrapper around the courses collection.

    Every driver failure is logged and re-raised as StoreOperationFailed so
    the route layer can answer with a structured 500.
    """

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    def _failed(self, operation: str, exc: Exception) -> StoreOperationFailed:
        logger.error(f"{operation} on '{self.collection.name}' failed: {str(exc)}")
        return StoreOperationFailed(operation, str(exc))

    async def find_all(self) -> List[Dict[str, Any]]:
        try:
            return await self.collection.find({}).to_list(length=None)
        except STORE_ERRORS as e:
            raise self._failed("find", e)

    async def find_popular(self, limit: int = POPULAR_LIMIT) -> List[Dict[str, Any]]:
        try:
            cursor = self.collection.find({}).sort([("studentsEnrolled", -1), ("_id", 1)]).limit(limit)
            return await cursor.to_list(length=None)
        except STORE_ERRORS as e:
            raise self._failed("find", e)

    async def find_by_instructor_email(self, email: str) -> List[Dict[str, Any]]:
        try:
            return await self.collection.find({"instructor.email": email}).to_list(length=None)
        except STORE_ERRORS as e:
            raise self._failed("find", e)

    async def find_by_id(self, course_id: ObjectId) -> Optional[Dict[str, Any]]:
        try:
            return await self.collection.find_one({"_id": course_id})
        except STORE_ERRORS as e:
            raise self._failed("findOne", e)

    async def insert(self, document: Dict[str, Any]) -> InsertResult:
        try:
            result = await self.collection.insert_one(document)
        except STORE_ERRORS as e:
            raise self._failed("insertOne", e)
        return InsertResult(acknowledged=result.acknowledged, insertedId=result.inserted_id)

    async def update(self, course_id: ObjectId, fields: Dict[str, Any]) -> UpdateResult:
        try:
            result = await self.collection.update_one({"_id": course_id}, {"$set": fields})
        except STORE_ERRORS as e:
            raise self._failed("updateOne", e)
        return UpdateResult(
            acknowledged=result.acknowledged,
            matchedCount=result.matched_count,
            modifiedCount=result.modified_count,
            upsertedCount=0 if result.upserted_id is None else 1,
            upsertedId=result.upserted_id,
        )

    async def delete(self, course_id: ObjectId) -> DeleteResult:
        try:
            result = await self.collection.delete_one({"_id": course_id})
        except STORE_ERRORS as e:
            raise self._failed("deleteOne", e)
        return DeleteResult(acknowledged=result.acknowledged, deletedCount=result.deleted_count)

    async def top_instructors(self) -> List[Dict[str, Any]]:
        try:
            return await self.collection.aggregate(TOP_INSTRUCTORS_PIPELINE).to_list(length=None)
        except STORE_ERRORS as e:
            raise self._failed("aggregate", e)
