"""Admin CRUD endpoints, generated once per content collection.

Every non-singleton collection gets list/get/create/update/delete routes;
ordered collections also get a ``move`` route (swap with the neighbour) and
collections with a visibility flag get an ``active`` toggle. All routes
require an admin session.
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status

from festival_cms.models.schemas import ActiveToggle, Direction
from festival_cms.resources import RESOURCES, ResourceSpec
from festival_cms.routers.deps import get_store, require_admin
from festival_cms.store.collection_store import CollectionStore
from festival_cms.sync.ordering import find_swap_partner, next_order_number


def _list_filters(spec: ResourceSpec, request: Request) -> Dict[str, Any]:
    filters: Dict[str, Any] = {}
    for name in spec.filter_fields:
        if name in request.query_params:
            filters[name] = request.query_params[name]
    return filters


def build_admin_router(spec: ResourceSpec) -> APIRouter:
    router = APIRouter(
        prefix=f"/admin/{spec.collection}",
        tags=[f"Admin: {spec.label}"],
        dependencies=[Depends(require_admin)],
    )
    create_model = spec.create_schema
    update_model = spec.update_schema

    async def list_records(
        request: Request, store: CollectionStore = Depends(get_store)
    ) -> List[Dict[str, Any]]:
        return await store.select(
            spec.collection,
            _list_filters(spec, request),
            spec.order_by,
            spec.descending,
        )

    async def get_record(
        record_id: str, store: CollectionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        return await store.get(spec.collection, record_id)

    async def create_record(
        payload: create_model, store: CollectionStore = Depends(get_store)
    ) -> Dict[str, Any]:
        values = payload.model_dump()
        if spec.orderable and values.get("order_number") is None:
            scope = {name: values.get(name) for name in spec.order_scope}
            existing = await store.select(spec.collection, scope)
            values["order_number"] = next_order_number(existing)
        return await store.insert(spec.collection, values)

    async def update_record(
        record_id: str,
        payload: update_model,
        store: CollectionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            return await store.get(spec.collection, record_id)
        return await store.update(spec.collection, record_id, changes)

    async def delete_record(
        record_id: str,
        confirm: bool = Query(False, description="Must be true to delete"),
        store: CollectionStore = Depends(get_store),
    ):
        if not confirm:
            raise HTTPException(
                status_code=400,
                detail=f"Deleting a {spec.label.lower()} must be confirmed",
            )
        await store.delete(spec.collection, record_id)
        return None

    async def move_record(
        record_id: str,
        direction: Direction = Query(...),
        store: CollectionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        record = await store.get(spec.collection, record_id)
        scope = {name: record.get(name) for name in spec.order_scope}
        siblings = await store.select(spec.collection, scope, spec.order_by)
        pair = find_swap_partner(siblings, record_id, direction)
        if pair is not None:
            current, neighbour = pair
            await store.update(
                spec.collection, current["id"],
                {"order_number": neighbour["order_number"]},
            )
            await store.update(
                spec.collection, neighbour["id"],
                {"order_number": current["order_number"]},
            )
            siblings = await store.select(spec.collection, scope, spec.order_by)
        return {"moved": pair is not None, "records": siblings}

    async def set_active(
        record_id: str,
        payload: ActiveToggle,
        store: CollectionStore = Depends(get_store),
    ) -> Dict[str, Any]:
        return await store.update(
            spec.collection, record_id, {spec.active_field: payload.value}
        )

    router.add_api_route("", list_records, methods=["GET"])
    router.add_api_route(
        "", create_record, methods=["POST"], status_code=status.HTTP_201_CREATED
    )
    router.add_api_route("/{record_id}", get_record, methods=["GET"])
    router.add_api_route("/{record_id}", update_record, methods=["PATCH"])
    router.add_api_route(
        "/{record_id}",
        delete_record,
        methods=["DELETE"],
        status_code=status.HTTP_204_NO_CONTENT,
    )
    if spec.orderable:
        router.add_api_route("/{record_id}/move", move_record, methods=["POST"])
    if spec.active_field:
        router.add_api_route("/{record_id}/active", set_active, methods=["PUT"])
    return router


router = APIRouter()
for _spec in RESOURCES.values():
    if not _spec.singleton:
        router.include_router(build_admin_router(_spec))
