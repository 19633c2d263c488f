"""Category API endpoints."""

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
from bluestar.schemas.category import CategoryResponse
from bluestar.services.validation import get_sanitized_body, raise_for, validate_label
from bluestar.services.validators import MAX_ID, is_id_valid

router = APIRouter(prefix="/category", tags=["categories"])

CategoryId = Annotated[int, Path(gt=0, le=MAX_ID)]


def get_category(db: Session, category_id: int) -> Category:
    """Get a category or fail with 404."""
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise APIError(ErrorKind.NOT_FOUND, "Category not found", status.HTTP_404_NOT_FOUND)
    return category


def ensure_unique_name(db: Session, name: str, exclude_id: int | None = None) -> None:
    """Fail when another category already uses ``name``."""
    query = db.query(Category).filter(Category.name == name)
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    if query.first():
        raise APIError(ErrorKind.ALREADY_EXISTS, "Category already exists")


def commit_category(db: Session) -> None:
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise APIError(ErrorKind.ALREADY_EXISTS, "Category already exists") from None


@router.get("", response_model=DataResponse[list[CategoryResponse]])
def get_categories(
    db: Annotated[Session, Depends(get_db)],
    search: str | None = Query(default=None, description="Category id or part of its name"),
):
    """Get all categories, one category by id, or categories matching a name."""
    query = db.query(Category)
    if search:
        search = search.strip()
        if is_id_valid(search):
            query = query.filter(Category.id == int(search))
        else:
            query = query.filter(Category.name.ilike(f"%{search}%"))

    categories = query.order_by(Category.name).all()
    if not categories:
        raise APIError(ErrorKind.NOT_FOUND, "No categories found", status.HTTP_404_NOT_FOUND)

    return {"message": "Categories found", "data": categories}


@router.get("/{category_id}", response_model=DataResponse[CategoryResponse])
def get_category_by_id(
    category_id: CategoryId,
    db: Annotated[Session, Depends(get_db)],
):
    """Get a single category."""
    return {"message": "Category found", "data": get_category(db, category_id)}


@router.post(
    "",
    response_model=DataResponse[CategoryResponse],
    status_code=status.HTTP_201_CREATED,
)
def create_category(
    current_user: Annotated[User, Depends(get_current_user)],
    body: Annotated[dict[str, Any], Depends(get_sanitized_body)],
    db: Annotated[Session, Depends(get_db)],
):
    """Create a new category."""
    name = body.get("name")
    raise_for(validate_label(name, "category name"))
    ensure_unique_name(db, name)

    category = Category(name=name)
    db.add(category)
    commit_category(db)
    db.refresh(category)
    return {"message": "Category successfully created", "data": category}


@router.put("/{category_id}", response_model=DataResponse[CategoryResponse])
def update_category(
    category_id: CategoryId,
    current_user: Annotated[User, Depends(get_current_user)],
    body: Annotated[dict[str, Any], Depends(get_sanitized_body)],
    db: Annotated[Session, Depends(get_db)],
):
    """Rename a category."""
    name = body.get("name")
    raise_for(validate_label(name, "category name"))

    category = get_category(db, category_id)
    ensure_unique_name(db, name, exclude_id=category.id)

    category.name = name
    commit_category(db)
    db.refresh(category)
    return {"message": "Category successfully updated", "data": category}


@router.delete("/{category_id}", response_model=StatusResponse)
def delete_category(
    category_id: CategoryId,
    current_user: Annotated[User, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
):
    """Delete a category that no item refers to."""
    category = get_category(db, category_id)

    if db.query(Item.id).filter(Item.category_id == category.id).first():
        raise APIError(ErrorKind.VALIDATION_ERR, "Category still has items")

    db.delete(category)
    db.commit()
    return StatusResponse(message="Category successfully deleted")
