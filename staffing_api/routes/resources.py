"""
Generic CRUD routes, one set per collection.

GET    /{collection}          -- list every record
GET    /{collection}/{id}     -- one record, 404 if missing
POST   /{collection}          -- create (201), id is generated server-side
PUT    /{collection}/{id}     -- shallow-merge the body over the record, 404 if missing
DELETE /{collection}/{id}     -- remove; deleting a missing id still answers 200

Each handler is a thin translation to the collection store. The store does
blocking file I/O, so calls are pushed to a worker thread.
"""

import asyncio
from typing import Any, Callable, Sequence

from fastapi import APIRouter, Body, Depends, HTTPException, params

from staffing_api.errors import NotFound
from staffing_api.models.schemas import MessageResponse, Record
from staffing_api.store import CollectionStore, get_store


def store_dependency(collection: str) -> Callable[[], CollectionStore]:
    """Build a FastAPI dependency returning the store for `collection`."""

    def _store() -> CollectionStore:
        return get_store(collection)

    _store.__name__ = f"{collection}_store"
    return _store


def not_found(e: NotFound) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail=f"Record '{e.key}' not found in {e.collection}.",
    )


def add_crud_routes(router: APIRouter, collection: str, tag: str) -> APIRouter:
    """Register the five CRUD endpoints for `collection` on `router`."""
    store_dep = store_dependency(collection)
    singular = tag.rstrip("s").lower()

    @router.get(
        "",
        response_model=list[Record],
        summary=f"List all {collection}",
        tags=[tag],
    )
    async def list_records(store: CollectionStore = Depends(store_dep)) -> list[Record]:
        return await asyncio.to_thread(store.list)

    @router.get(
        "/{record_id}",
        response_model=Record,
        summary=f"Get one {singular} by id",
        tags=[tag],
        responses={404: {"description": f"No {singular} with that id"}},
    )
    async def get_record(record_id: str, store: CollectionStore = Depends(store_dep)) -> Record:
        try:
            return await asyncio.to_thread(store.get, record_id)
        except NotFound as e:
            raise not_found(e)

    @router.post(
        "",
        response_model=Record,
        status_code=201,
        summary=f"Create a {singular}",
        description="Any JSON object is accepted. An `id` in the body is ignored.",
        tags=[tag],
    )
    async def create_record(
        fields: dict[str, Any] = Body(examples=[{"name": "Ana"}]),
        store: CollectionStore = Depends(store_dep),
    ) -> Record:
        return await asyncio.to_thread(store.create, fields)

    @router.put(
        "/{record_id}",
        response_model=Record,
        summary=f"Update a {singular}",
        description="Fields in the body replace the stored ones; fields not sent are kept.",
        tags=[tag],
        responses={404: {"description": f"No {singular} with that id"}},
    )
    async def update_record(
        record_id: str,
        fields: dict[str, Any] = Body(),
        store: CollectionStore = Depends(store_dep),
    ) -> Record:
        try:
            return await asyncio.to_thread(store.update, record_id, fields)
        except NotFound as e:
            raise not_found(e)

    @router.delete(
        "/{record_id}",
        response_model=MessageResponse,
        summary=f"Delete a {singular}",
        description="Idempotent: deleting an id that does not exist also succeeds.",
        tags=[tag],
    )
    async def delete_record(record_id: str, store: CollectionStore = Depends(store_dep)) -> MessageResponse:
        await asyncio.to_thread(store.delete, record_id)
        return MessageResponse(message=f"{singular.capitalize()} deleted")

    return router


def build_router(
    collection: str,
    tag: str,
    dependencies: Sequence[params.Depends] | None = None,
) -> APIRouter:
    router = APIRouter(prefix=f"/{collection}", dependencies=list(dependencies or []))
    return add_crud_routes(router, collection, tag)
