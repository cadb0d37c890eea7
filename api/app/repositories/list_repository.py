"""
List Repository - keyed access to list documents with staged renames
"""
from typing import Any, Dict, List, Optional
import logging

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError

from app.models.travel_list import TravelList
from app.utils.errors import Conflict
from app.utils.mongodb import LISTS_COLLECTION

logger = logging.getLogger(__name__)

# Rename markers. `rename_to` sits on the source document while a rename is
# in flight and holds the target name plus the version the mark gave the
# source; `renamed_from` sits on the target until the source is gone.
RENAME_TO = "rename_to"
RENAMED_FROM = "renamed_from"


class ListRepository:
    """
    Data access for the `lists` collection.

    Every write bumps the document `version`; multi-step writes use it as a
    compare-and-set guard. Documents carrying rename markers are settled
    before they are handed to callers, so a reader never sees both keys of
    an interrupted rename.
    """

    def __init__(self, db: AsyncIOMotorDatabase):
        self.collection: AsyncIOMotorCollection = db[LISTS_COLLECTION]

    async def get(self, name: str) -> Optional[TravelList]:
        doc = await self.collection.find_one({"_id": name})
        doc = await self._settle(doc)
        return TravelList.from_document(doc) if doc else None

    async def list_all(self) -> List[TravelList]:
        docs = await self.collection.find({}).to_list(length=None)
        lists = []
        for doc in docs:
            doc = await self._settle(doc)
            if doc:
                lists.append(TravelList.from_document(doc))
        return lists

    async def insert(self, travel_list: TravelList) -> TravelList:
        try:
            await self.collection.insert_one(travel_list.to_document())
        except DuplicateKeyError:
            raise Conflict(f'List with the name "{travel_list.name}" already exists.')
        return travel_list

    async def update_fields(self, name: str, fields: Dict[str, Any]) -> Optional[TravelList]:
        """Set fields on a list, returning the updated list or None if absent"""
        doc = await self.collection.find_one_and_update(
            {"_id": name},
            {"$set": fields, "$inc": {"version": 1}},
            return_document=ReturnDocument.AFTER,
        )
        return TravelList.from_document(doc) if doc else None

    async def compare_and_set(self, travel_list: TravelList, fields: Dict[str, Any]) -> bool:
        """
        Write fields only if the stored version still equals the version the
        caller read. Returns False when another writer got there first.
        """
        result = await self.collection.update_one(
            {"_id": travel_list.name, "version": travel_list.version},
            {"$set": fields, "$inc": {"version": 1}},
        )
        return result.modified_count == 1

    async def add_destinations(self, name: str, destination_ids: List[int]) -> Optional[TravelList]:
        """Add ids with set semantics; returns None if the list is absent"""
        doc = await self.collection.find_one_and_update(
            {"_id": name},
            {
                "$addToSet": {"destinations": {"$each": destination_ids}},
                "$inc": {"version": 1},
            },
            return_document=ReturnDocument.AFTER,
        )
        return TravelList.from_document(doc) if doc else None

    async def remove_destination(self, name: str, destination_id: int) -> Optional[TravelList]:
        doc = await self.collection.find_one_and_update(
            {"_id": name},
            {"$pull": {"destinations": destination_id}, "$inc": {"version": 1}},
            return_document=ReturnDocument.AFTER,
        )
        return TravelList.from_document(doc) if doc else None

    async def delete(self, name: str) -> bool:
        result = await self.collection.delete_one({"_id": name})
        return result.deleted_count == 1

    async def rename(self, source: TravelList, new_name: str, fields: Dict[str, Any]) -> TravelList:
        """
        Move `source` to the key `new_name`, applying `fields` on the way.

        Raises Conflict when the target exists, when another rename of the
        source is in flight or when the source changed after it was read.
        The source is left in place in all of those cases.
        """
        old_name = source.name
        marked_version = await self._mark_source(source, new_name)

        target = TravelList.from_document({**source.to_document(), **fields, "_id": new_name})
        target.name = new_name
        target.version = 0
        target_doc = target.to_document()
        target_doc[RENAMED_FROM] = old_name
        await self._insert_target(target_doc)

        dropped = await self._drop_source(old_name, new_name, marked_version)
        if not dropped and await self.collection.find_one({"_id": old_name}):
            # Source was written to after the mark; undo the copy
            await self._roll_back(old_name, new_name)
            raise Conflict(f'List "{old_name}" was modified during the rename, try again.')

        await self._clear_marker(new_name, RENAMED_FROM)
        logger.info(f"List renamed: {old_name} -> {new_name}")
        return target

    async def _mark_source(self, source: TravelList, new_name: str) -> int:
        """
        Tag the source with the rename and bump its version. Returns the
        version the source must still have when it is deleted.
        """
        marked_version = source.version + 1
        marked = await self.collection.find_one_and_update(
            {"_id": source.name, "version": source.version, RENAME_TO: {"$exists": False}},
            {
                "$set": {RENAME_TO: {"name": new_name, "version": marked_version}},
                "$inc": {"version": 1},
            },
        )
        if marked is None:
            raise Conflict(f'List "{source.name}" is already being renamed or has changed, try again.')
        return marked_version

    async def _insert_target(self, target_doc: Dict[str, Any]):
        try:
            await self.collection.insert_one(target_doc)
        except DuplicateKeyError:
            await self._clear_marker(target_doc[RENAMED_FROM], RENAME_TO)
            raise Conflict(f'List "{target_doc["_id"]}" already exists.')

    async def _drop_source(self, old_name: str, new_name: str, marked_version: int) -> bool:
        """Delete the source only while it is untouched since it was marked"""
        result = await self.collection.delete_one({
            "_id": old_name,
            "version": marked_version,
            f"{RENAME_TO}.name": new_name,
        })
        return result.deleted_count == 1

    async def _roll_back(self, old_name: str, new_name: str):
        await self.collection.delete_one({"_id": new_name, RENAMED_FROM: old_name})
        await self.collection.update_one(
            {"_id": old_name, f"{RENAME_TO}.name": new_name},
            {"$unset": {RENAME_TO: ""}},
        )

    async def _clear_marker(self, name: str, marker: str):
        await self.collection.update_one({"_id": name}, {"$unset": {marker: ""}})

    async def _settle(self, doc: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """
        Finish or roll back an interrupted rename touching `doc`.
        Returns the document as it should be seen, or None if it is gone.

        A rename is only finished while the source still has the version it
        was marked with; any later write to the source rolls the copy back.
        """
        if doc is None:
            return None

        if RENAME_TO in doc:
            old_name = doc["_id"]
            new_name, marked_version = doc[RENAME_TO]["name"], doc[RENAME_TO]["version"]
            target = await self.collection.find_one({"_id": new_name, RENAMED_FROM: old_name})
            if target is not None and doc.get("version") == marked_version:
                if await self._drop_source(old_name, new_name, marked_version):
                    logger.warning(f"Completing interrupted rename {old_name} -> {new_name}")
                    await self._clear_marker(new_name, RENAMED_FROM)
                    return None
                # The source changed underneath us; decide again on its current state
                return await self._settle(await self.collection.find_one({"_id": old_name}))
            logger.warning(f"Rolling back interrupted rename {old_name} -> {new_name}")
            await self._roll_back(old_name, new_name)
            return {k: v for k, v in doc.items() if k != RENAME_TO}

        if RENAMED_FROM in doc:
            old_name, new_name = doc[RENAMED_FROM], doc["_id"]
            source = await self.collection.find_one({"_id": old_name})
            if source is not None:
                marker = source.get(RENAME_TO) or {}
                completed = (
                    marker.get("name") == new_name
                    and source.get("version") == marker.get("version")
                    and await self._drop_source(old_name, new_name, marker["version"])
                )
                if not completed:
                    logger.warning(f"Rolling back interrupted rename {old_name} -> {new_name}")
                    await self._roll_back(old_name, new_name)
                    return None
                logger.warning(f"Completing interrupted rename {old_name} -> {new_name}")
            await self._clear_marker(new_name, RENAMED_FROM)
            doc = {k: v for k, v in doc.items() if k != RENAMED_FROM}

        return doc
