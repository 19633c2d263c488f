"""Inventory item API endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Path, Query, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from bluestar.api.dependencies import get_current_user
from bluestar.database import get_db
from bluestar.errors import APIError, ErrorKind
from bluestar.models.category import Category
from bluestar.models.item import Item
from bluestar.models.user import User
from bluestar.schemas.base import DataResponse, StatusResponse
from bluestar.schemas.item import ItemResponse
from bluestar.services.validation import (
    get_sanitized_body,
    raise_for,
    validate_description,
    validate_label,
)
from bluestar.services.validators import MAX_ID, is_id_valid, is_string_valid

router = APIRouter(prefix="/inventory", tags=["inventory"])

MAX_RESULTS = 50

ItemId = Annotated[int, Path(gt=0, le=MAX_ID)]


def get_item(db: Session, item_id: int) -> Item:
    """Get an item or fail with 404."""
    item = db.query(Item).filter(Item.id == item_id).first()
    if not item:
        raise APIError(ErrorKind.NOT_FOUND, "Item not found", status.HTTP_404_NOT_FOUND)
    return item


def find_category(db: Session, category_id: Any) -> Category | None:
    """Look up a category from an untrusted id, returning None when absent."""
    return db.query(Category).filter(Category.id == int(category_id)).first()


def ensure_unique_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    """Fail when another item already uses ``name``."""
    query = db.query(Item).filter(Item.name == name)
    if exclude_id is not None:
        query = query.filter(Item.id != exclude_id)
    if query.first():
        raise APIError(ErrorKind.ALREADY_EXISTS, "Item already exists")


def commit_item(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise APIError(ErrorKind.ALREADY_EXISTS, "Item already exists") from None


@router.get("", response_model=DataResponse[list[ItemResponse]])
def get_items(
    db: Annotated[Session, Depends(get_db)],
    search: str | None = Query(default=None, description="Part of the item name"),
    category_id: str | None = Query(default=None, alias="categoryId"),
):
    """Search items by name and category."""
    search = search.strip() if search else None
    category_id = category_id.strip() if category_id else None

    if search and not is_string_valid(search):
        raise APIError(ErrorKind.VALIDATION_ERR, "Invalid search query")
    if category_id and not is_id_valid(category_id):
        raise APIError(ErrorKind.VALIDATION_ERR, "Invalid category id")

    query = db.query(Item)
    if search:
        query = query.filter(Item.name.ilike(f"%{search}%"))
    if category_id:
        if not find_category(db, category_id):
            raise APIError(
                ErrorKind.NOT_FOUND, "Category does not exist", status.HTTP_404_NOT_FOUND
            )
        query = query.filter(Item.category_id == int(category_id))

    items = query.order_by(Item.name).limit(MAX_RESULTS).all()
    if not items:
        raise APIError(ErrorKind.NOT_FOUND, "No items found", status.HTTP_404_NOT_FOUND)

    return {"data": items}


@router.get("/{item_id}", response_model=DataResponse[ItemResponse])
def get_item_by_id(
    item_id: ItemId,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single item."""
    return {"data": get_item(db, item_id)}


@router.post("", response_model=DataResponse[ItemResponse], status_code=status.HTTP_201_CREATED)
def create_item(
    current_user: Annotated[User, Depends(get_current_user)],
    body: Annotated[dict[str, Any], Depends(get_sanitized_body)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new inventory item."""
    name = body.get("name")
    raise_for(validate_label(name, "item name"))
    ensure_unique_name(db, name)

    category_id = body.get("categoryId")
    if not is_id_valid(category_id) or not find_category(db, category_id):
        raise APIError(ErrorKind.VALIDATION_ERR, "Missing or invalid item category")
    raise_for(validate_description(body.get("description")))

    item = Item(
        name=name, category_id=int(category_id), description=body.get("description") or None
    )
    db.add(item)
    commit_item(db)
    db.refresh(item)
    return {"message": "Item successfully created!", "data": item}


@router.put("/{item_id}", response_model=DataResponse[ItemResponse])
def update_item(
    item_id: ItemId,
    current_user: Annotated[User, Depends(get_current_user)],
    body: Annotated[dict[str, Any], Depends(get_sanitized_body)],
    db: Annotated[Session, Depends(get_db)],
):
    """Rename an item, move it to another category, or change its description."""
    item = get_item(db, item_id)

    name = body.get("name")
    raise_for(validate_label(name, "item name", required=False))
    raise_for(validate_description(body.get("description")))

    category_id = body.get("categoryId")
    if category_id:
        if not is_id_valid(category_id):
            raise APIError(ErrorKind.VALIDATION_ERR, "Invalid category ID")
        if not find_category(db, category_id):
            raise APIError(
                ErrorKind.NOT_FOUND, "Category does not exist", status.HTTP_404_NOT_FOUND
            )

    if name:
        ensure_unique_name(db, name, exclude_id=item.id)
        item.name = name
    if category_id:
        item.category_id = int(category_id)
    if "description" in body:
        item.description = body["description"] or None

    commit_item(db)
    db.refresh(item)
    return {"data": item}


@router.delete("/{item_id}", response_model=StatusResponse)
def delete_item(
    item_id: ItemId,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete an item."""
    item = get_item(db, item_id)
    db.delete(item)
    db.commit()
    return StatusResponse(message="Item deleted successfully")
