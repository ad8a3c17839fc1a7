"""Attribute API endpoints."""

from fastapi import APIRouter, HTTPException, Query, status

from listing_attributes.dependencies import AttributeServiceDep, CurrentUser, DbSession
from listing_attributes.errors import (
    CategoryNotFoundError,
    DefinitionInUseError,
    InvalidDefinitionError,
)
from listing_attributes.models.attribute import AttributeDefinition
from listing_attributes.schemas.attribute import (
    AttributeAdminResponse,
    AttributeDefinitionCreate,
    AttributeDefinitionResponse,
    AttributeDefinitionUpdate,
    AttributeValueEntry,
    SaveValuesRequest,
    SaveValuesResponse,
)
from listing_attributes.schemas.display import AttributePanel
from listing_attributes.services.definition_store import AttributeDefinitionStore
from listing_attributes.services.value_store import AttributeValueStore

router = APIRouter()


def _get_definition_or_404(store: AttributeDefinitionStore, attribute_id: str) -> AttributeDefinition:
    attribute = store.get(attribute_id)
    if not attribute:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Attribute '{attribute_id}' not found",
        )
    return attribute


# === Public reads ===


@router.get("/by-category/{category_id}", response_model=list[AttributeDefinitionResponse])
async def get_attributes_by_category(
    category_id: str,
    db: DbSession,
):
    """Get the active attributes of a category in authored order.

    Unknown categories return an empty list, never 404.
    """
    return AttributeDefinitionStore(db).definitions_for_category(category_id)


@router.get("/values/{listing_id}", response_model=dict[str, AttributeValueEntry])
async def get_listing_values(
    listing_id: str,
    db: DbSession,
):
    """Get the stored attribute values of a listing keyed by attribute ID.

    Listings without values, including unknown listings, return {}.
    """
    return AttributeValueStore(db).entries_for_listing(listing_id)


@router.get("/display/{listing_id}", response_model=AttributePanel)
async def display_listing_attributes(
    listing_id: str,
    service: AttributeServiceDep,
    category_id: str = Query(..., description="Category (or subcategory) of the listing"),
    variant: str | None = Query(None, description="Layout: default, compact or table"),
):
    """Resolve and format the set attributes of a listing.

    Unrecognized variants use the default layout.
    """
    return await service.display(category_id, listing_id, variant)


# === Listing owner writes ===


@router.post("/values/{listing_id}", response_model=SaveValuesResponse)
async def save_listing_values(
    listing_id: str,
    values_in: SaveValuesRequest,
    db: DbSession,
    user: CurrentUser,
):
    """Replace the attribute values of a listing.

    Blank values are dropped. Values are converted to their attribute's
    type; a value that cannot be converted rejects the whole request.
    """
    store = AttributeValueStore(db)
    try:
        stored = store.save_values(listing_id, values_in.attributes, values_in.category_id)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )

    return SaveValuesResponse(listing_id=listing_id, values=stored, saved=len(stored))


@router.delete("/values/{listing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_listing_values(
    listing_id: str,
    db: DbSession,
    user: CurrentUser,
):
    """Delete every attribute value of a listing."""
    AttributeValueStore(db).delete_for_listing(listing_id)


@router.delete("/values/{listing_id}/{attribute_id}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_listing_value(
    listing_id: str,
    attribute_id: str,
    db: DbSession,
    user: CurrentUser,
):
    """Clear one attribute value of a listing."""
    if not AttributeValueStore(db).clear_value(listing_id, attribute_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Listing '{listing_id}' has no value for attribute '{attribute_id}'",
        )


# === Admin ===


@router.get("/admin/all", response_model=list[AttributeAdminResponse])
async def list_all_attributes(
    db: DbSession,
    user: CurrentUser,
):
    """List every attribute, including retired ones."""
    return AttributeDefinitionStore(db).list_all()


@router.post("/admin", response_model=AttributeAdminResponse, status_code=status.HTTP_201_CREATED)
async def create_attribute(
    attribute_in: AttributeDefinitionCreate,
    db: DbSession,
    user: CurrentUser,
):
    """Create an attribute for a category."""
    store = AttributeDefinitionStore(db)
    try:
        return store.create(attribute_in)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InvalidDefinitionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/admin/{attribute_id}", response_model=AttributeAdminResponse)
async def update_attribute(
    attribute_id: str,
    attribute_in: AttributeDefinitionUpdate,
    db: DbSession,
    user: CurrentUser,
):
    """Update an existing attribute."""
    store = AttributeDefinitionStore(db)
    attribute = _get_definition_or_404(store, attribute_id)

    try:
        return store.update(attribute, attribute_in)
    except InvalidDefinitionError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/admin/{attribute_id}/retire", response_model=AttributeAdminResponse)
async def retire_attribute(
    attribute_id: str,
    db: DbSession,
    user: CurrentUser,
):
    """Deactivate an attribute without touching stored values."""
    store = AttributeDefinitionStore(db)
    attribute = _get_definition_or_404(store, attribute_id)
    return store.retire(attribute)


@router.delete("/admin/{attribute_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_attribute(
    attribute_id: str,
    db: DbSession,
    user: CurrentUser,
):
    """Delete an attribute.

    Note: This will fail while listings store values for it; retire it instead.
    """
    store = AttributeDefinitionStore(db)
    attribute = _get_definition_or_404(store, attribute_id)

    try:
        store.delete(attribute)
    except DefinitionInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
