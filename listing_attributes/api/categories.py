"""Category API endpoints."""

from fastapi import APIRouter, HTTPException, status

from listing_attributes.dependencies import CurrentUser, DbSession
from listing_attributes.models.category import Category
from listing_attributes.schemas.category import CategoryCreate, CategoryResponse

router = APIRouter()


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    db: DbSession,
):
    """List active top-level categories with their subcategories."""
    categories = (
        db.query(Category)
        .filter(Category.parent_id.is_(None), Category.is_active.is_(True))
        .order_by(Category.position.asc(), Category.name.asc())
        .all()
    )
    return categories


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: str,
    db: DbSession,
):
    """Get a category or subcategory by ID."""
    category = db.query(Category).filter(Category.id == category_id).first()

    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Category '{category_id}' not found",
        )

    return category


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    category_in: CategoryCreate,
    db: DbSession,
    user: CurrentUser,
):
    """Create a new category, or a subcategory when parent_id is set."""
    # Check for existing category
    existing = db.query(Category).filter(Category.id == category_in.id).first()
    if existing:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Category '{category_in.id}' already exists",
        )

    if category_in.parent_id is not None:
        parent = db.query(Category).filter(Category.id == category_in.parent_id).first()
        if not parent:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Parent category '{category_in.parent_id}' does not exist",
            )
        if parent.is_subcategory:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Subcategories cannot be nested more than one level",
            )

    category = Category(
        id=category_in.id,
        name=category_in.name,
        icon=category_in.icon,
        parent_id=category_in.parent_id,
        position=category_in.position,
    )

    db.add(category)
    db.commit()
    db.refresh(category)

    return category
