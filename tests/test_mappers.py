from shopadmin.domain.mappers import (
    product_from_doc,
    category_from_doc,
    order_from_doc,
    product_fields_for_update,
    product_doc_for_create,
    category_doc_for_write,
    slugify,
)


def _asset_url(asset_id):
    return f"https://cdn.test/assets/{asset_id}"


def test_product_from_full_doc():
    doc = {
        "_id": "p1",
        "title": "Rose Lounge",
        "slug": {"_type": "slug", "current": "rose-lounge"},
        "price": 250,
        "priceWithoutDiscount": 300,
        "discountPercentage": 15,
        "stockLevel": 4,
        "inventory": 4,
        "rating": {"rate": 4.2, "count": 9},
        "dimensions": {"height": 80, "depth": 90, "width": 200},
        "tags": ["featured"],
        "badge": "",
        "image": {"_type": "image", "asset": {"_type": "reference", "_ref": "img-1"}},
        "category": {"_type": "reference", "_ref": "cat-sofas"},
        "isFeaturedProduct": True,
    }
    product = product_from_doc(doc, {"_id": "cat-sofas", "title": "Sofas"}, asset_url=_asset_url)

    assert product.id == "p1"
    assert product.slug == "rose-lounge"
    assert product.price_without_discount == 300
    assert product.rating.count == 9
    assert product.dimensions.width == 200
    assert product.badge is None
    assert product.image == "https://cdn.test/assets/img-1"
    assert product.category.id == "cat-sofas"
    assert product.category.title == "Sofas"
    assert product.is_featured_product is True

    wire = product.model_dump(by_alias=True)
    assert wire["priceWithoutDiscount"] == 300
    assert wire["stockLevel"] == 4


def test_product_from_sparse_doc():
    product = product_from_doc({"_id": "p9", "category": {"_type": "reference", "_ref": "c1"}, "image": "https://x/y.jpg"})
    assert product.title == ""
    assert product.price == 0
    assert product.tags == []
    assert product.category.id == "c1"
    assert product.category.title is None
    assert product.image == "https://x/y.jpg"


def test_category_and_order_from_doc():
    category = category_from_doc({"_id": "c1", "title": "Chairs", "products": 3}, _asset_url)
    assert (category.id, category.title, category.products, category.image) == ("c1", "Chairs", 3, None)

    order = order_from_doc({
        "_id": "o1",
        "orderNumber": 1042,
        "createdAt": "2024-01-05T10:00:00Z",
        "total": 19.5,
        "items": [{"productId": "p1", "name": "Lamp", "quantity": 3, "price": 6.5}, "junk"],
    })
    assert order.order_number == "1042"
    assert order.order_status is None
    assert len(order.items) == 1
    assert order.items[0].product_id == "p1"
    assert order.model_dump(by_alias=True)["createdAt"] == "2024-01-05T10:00:00Z"


def test_update_fields_only_include_supplied_values():
    fields = product_fields_for_update(
        {"title": "New", "price_without_discount": 10, "category": "c2", "inventory": 0},
        image_asset_id="img-9",
    )
    assert fields == {
        "title": "New",
        "priceWithoutDiscount": 10,
        "inventory": 0,
        "category": {"_type": "reference", "_ref": "c2"},
        "image": {"_type": "image", "asset": {"_type": "reference", "_ref": "img-9"}},
    }
    assert product_fields_for_update({}) == {}


def test_create_doc_from_add_form():
    doc = product_doc_for_create(
        {"name": "Oak Table!", "details": "Solid oak", "price": 120, "price_without_discount": 150,
         "category": "c1", "inventory": 5},
    )
    assert doc["title"] == "Oak Table!"
    assert doc["slug"]["current"] == "oak-table"
    assert doc["description"] == "Solid oak"
    assert doc["stockLevel"] == doc["inventory"] == 5
    assert doc["category"] == {"_type": "reference", "_ref": "c1"}
    assert "image" not in doc


def test_category_write_doc_and_slugify():
    assert category_doc_for_write({"title": "Lamps"}) == {"title": "Lamps"}
    assert category_doc_for_write({"products": 2}, "img")["image"]["asset"]["_ref"] == "img"
    assert slugify("  Hello,  World ") == "hello-world"
