"""Demo item API routes built with the type-safe endpoint wrapper."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Request
from fastapi import Response

from typed_endpoint.core.config import get_endpoint_options
from typed_endpoint.core.errors import NotFoundError
from typed_endpoint.endpoint import Send
from typed_endpoint.endpoint import TypeSafeEndpoint
from typed_endpoint.schemas.envelope import SendResponse
from typed_endpoint.schemas.envelope import send_error
from typed_endpoint.schemas.item import Item
from typed_endpoint.schemas.item import ItemCreate
from typed_endpoint.schemas.item import ItemListResponse
from typed_endpoint.schemas.item import ItemPath
from typed_endpoint.schemas.item import ItemSearch

CATALOG: tuple[Item, ...] = (
    Item(id=1, name="Notebook", price=4.5, tags=["paper"]),
    Item(id=2, name="Fountain pen", price=32.0, tags=["ink", "gift"]),
    Item(id=3, name="Desk lamp", price=58.9),
)

router = APIRouter(prefix="/api/v1", tags=["items"])
endpoint = TypeSafeEndpoint(get_endpoint_options())


def _find_item(item_id: int) -> Item | None:
    for item in CATALOG:
        if item.id == item_id:
            return item
    return None


async def get_item(request: Request, _: Response, send: Send) -> SendResponse[Item]:
    """Get a catalogue item by identifier."""
    item = _find_item(int(request.path_params["item_id"]))
    if item is None:
        raise NotFoundError("Item not found")
    return send(200, item)


async def create_item(request: Request, _: Response, send: Send) -> SendResponse[Item]:
    """Create an item and echo it back with its assigned identifier."""
    payload = ItemCreate.model_validate(await request.json())
    next_id = max(item.id for item in CATALOG) + 1
    return send(201, Item(id=next_id, **payload.model_dump()))


async def search_items(request: Request, _: Response, send: Send) -> SendResponse[ItemListResponse]:
    """List catalogue items at or below a price ceiling."""
    filters = ItemSearch.model_validate(dict(request.query_params))
    matches = [item for item in CATALOG if item.price <= filters.max_price]
    if not matches:
        return send_error(404, "No items match")
    return send(200, ItemListResponse(items=matches))


router.add_api_route(
    "/items/{item_id}",
    endpoint.create(params_schema=ItemPath, response_schema=Item, callback=get_item),
    methods=["GET"],
)
router.add_api_route(
    "/items",
    endpoint.create(body_schema=ItemCreate, response_schema=Item, callback=create_item),
    methods=["POST"],
    status_code=201,
)
router.add_api_route(
    "/items",
    endpoint.create(query_schema=ItemSearch, response_schema=ItemListResponse, callback=search_items),
    methods=["GET"],
)
