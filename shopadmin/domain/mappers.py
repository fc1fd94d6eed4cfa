# shopadmin/domain/mappers.py
"""
Single place where raw content-store documents are reshaped into domain models
(and domain input back into store fields). Routers, services and client views
never touch raw document keys themselves.

Store documents use camelCase keys, a string `_id`, references shaped as
{"_type": "reference", "_ref": id} and images shaped as
{"_type": "image", "asset": {"_type": "reference", "_ref": asset_id}}.
"""
from __future__ import annotations
import re
from typing import Any, Callable, Dict, Optional

from shopadmin.domain.models.product import Product, Category, CategoryRef, Rating, Dimensions
from shopadmin.domain.models.order import Order, OrderItem

AssetUrl = Callable[[str], str]


def _identity(asset_id: str) -> str:
    return asset_id


def reference(doc_id: str) -> Dict[str, str]:
    return {"_type": "reference", "_ref": doc_id}


def image_reference(asset_id: str) -> Dict[str, Any]:
    return {"_type": "image", "asset": reference(asset_id)}


def ref_id(value) -> Optional[str]:
    """Extract the target id from a reference (or a bare id string)."""
    if isinstance(value, dict):
        return value.get("_ref") or value.get("_id")
    if isinstance(value, str) and value:
        return value
    return None


def image_url(value, asset_url: AssetUrl = _identity) -> Optional[str]:
    # already dereferenced by a projection, or stored as a plain URL
    if isinstance(value, str):
        return value or None
    if not isinstance(value, dict):
        return None
    asset = value.get("asset") or {}
    if asset.get("url"):
        return asset["url"]
    if asset.get("_ref"):
        return asset_url(asset["_ref"])
    return None


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", (text or "").lower()).strip("-")


def _num(value, default=0):
    return value if isinstance(value, (int, float)) and not isinstance(value, bool) else default


# ---------- store -> domain --------------------------------------------------

def category_from_doc(doc: dict, asset_url: AssetUrl = _identity) -> Category:
    return Category(
        id=str(doc.get("_id", "")),
        title=doc.get("title") or "",
        image=image_url(doc.get("image"), asset_url),
        products=int(_num(doc.get("products"))),
    )


def product_from_doc(
    doc: dict,
    category_doc: Optional[dict] = None,
    asset_url: AssetUrl = _identity,
) -> Product:
    """
    `category_doc` is the dereferenced category when the caller resolved it;
    otherwise only the reference id is kept (plus a title if the stored value
    was already an expanded category).
    """
    raw_cat = doc.get("category")
    category = None
    cat_id = ref_id(raw_cat)
    if category_doc is not None:
        category = CategoryRef(id=str(category_doc.get("_id", cat_id or "")), title=category_doc.get("title"))
    elif cat_id:
        title = raw_cat.get("title") if isinstance(raw_cat, dict) else None
        category = CategoryRef(id=cat_id, title=title)

    slug = doc.get("slug")
    if isinstance(slug, dict):
        slug = slug.get("current")

    rating = doc.get("rating")
    dims = doc.get("dimensions")

    return Product(
        id=str(doc.get("_id", "")),
        title=doc.get("title") or "",
        description=doc.get("description"),
        slug=slug,
        price=_num(doc.get("price")),
        original_price=doc.get("originalPrice"),
        price_without_discount=doc.get("priceWithoutDiscount"),
        discount_percentage=doc.get("discountPercentage"),
        stock=doc.get("stock"),
        stock_level=int(_num(doc.get("stockLevel"))),
        inventory=int(_num(doc.get("inventory"))),
        rating=Rating.model_validate(rating) if isinstance(rating, dict) else None,
        badge=doc.get("badge") or None,
        tags=list(doc.get("tags") or []),
        dimensions=Dimensions.model_validate(dims) if isinstance(dims, dict) else None,
        image=image_url(doc.get("image"), asset_url),
        category=category,
        is_featured_product=bool(doc.get("isFeaturedProduct")),
    )


def order_from_doc(doc: dict) -> Order:
    items = [
        OrderItem(
            product_id=it.get("productId"),
            name=it.get("name") or "",
            quantity=int(_num(it.get("quantity"))),
            price=_num(it.get("price")),
        )
        for it in (doc.get("items") or [])
        if isinstance(it, dict)
    ]
    created_at = doc.get("createdAt")
    return Order(
        id=str(doc.get("_id", "")),
        order_number=str(doc.get("orderNumber") or ""),
        created_at=str(created_at) if created_at is not None else None,
        total=_num(doc.get("total")),
        items=items,
        order_status=doc.get("orderStatus") or None,
    )


# ---------- domain input -> store --------------------------------------------

# update body key -> store field
_PRODUCT_UPDATE_FIELDS = {
    "title": "title",
    "price": "price",
    "price_without_discount": "priceWithoutDiscount",
    "badge": "badge",
    "description": "description",
    "inventory": "inventory",
    "tags": "tags",
}


def product_fields_for_update(
    changes: Dict[str, Any],
    image_asset_id: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Build the `set` fields for a product patch from the supplied (snake_case)
    changes. Keys that were not supplied are left out so the patch never
    clears them.
    """
    fields = {
        store_key: changes[key]
        for key, store_key in _PRODUCT_UPDATE_FIELDS.items()
        if changes.get(key) is not None
    }
    if changes.get("category"):
        fields["category"] = reference(changes["category"])
    if image_asset_id:
        fields["image"] = image_reference(image_asset_id)
    return fields


def product_doc_for_create(payload: Dict[str, Any], image_asset_id: Optional[str] = None) -> Dict[str, Any]:
    """Shape of the add-product form: name, details, price, priceWithoutDiscount, category, inventory."""
    title = payload.get("name") or ""
    inventory = int(_num(payload.get("inventory")))
    doc: Dict[str, Any] = {
        "title": title,
        "slug": {"_type": "slug", "current": slugify(title)},
        "description": payload.get("details") or "",
        "price": _num(payload.get("price")),
        "priceWithoutDiscount": _num(payload.get("price_without_discount")),
        "inventory": inventory,
        "stockLevel": inventory,
        "tags": [],
    }
    if payload.get("category"):
        doc["category"] = reference(payload["category"])
    if image_asset_id:
        doc["image"] = image_reference(image_asset_id)
    return doc


def category_doc_for_write(payload: Dict[str, Any], image_asset_id: Optional[str] = None) -> Dict[str, Any]:
    doc: Dict[str, Any] = {}
    if payload.get("title") is not None:
        doc["title"] = payload["title"]
    if payload.get("products") is not None:
        doc["products"] = int(payload["products"])
    if image_asset_id:
        doc["image"] = image_reference(image_asset_id)
    return doc
