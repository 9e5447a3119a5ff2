"""
Tests for catalog CRUD calls and the add/edit form drafts.
"""

import httpx
import pytest

from getgrip.shared.core import events
from getgrip.shared.core.exceptions import ApiFailure, ClientValidationError, HttpStatusError
from getgrip.shared.domain.catalog.forms import (
    BrandForm,
    CategoryForm,
    PhoneModelForm,
    ProductForm,
    save_form,
)
from getgrip.shared.domain.catalog.service import BRANDS, PHONE_MODELS, PRODUCTS, CatalogService
from getgrip.shared.domain.models import Product
from tests.helpers import api_path, envelope, request_json

PRODUCT = {
    "_id": "p1",
    "name": "Clear Case",
    "description": "Slim clear case",
    "price": 499,
    "discountPrice": 399,
    "category": {"_id": "c1", "name": "Clear"},
    "phoneBrand": {"_id": "b1", "name": "Apple"},
    "phoneModel": "m1",
    "amazonLink": "https://amazon.in/dp/x",
    "images": ["http://uploads.test/a.png"],
    "isActive": True,
    "featured": True,
}


def recording_handler(seen: list, response: httpx.Response):
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return response
    return handler


class TestCatalogService:
    @pytest.mark.asyncio
    async def test_product_list_uses_limit(self, make_api):
        seen = []
        catalog = CatalogService(make_api(recording_handler(seen, envelope([PRODUCT]))))

        products = await catalog.list(PRODUCTS)

        assert seen[0].url.params["limit"] == "100"
        assert [p.id for p in products] == ["p1"]

    @pytest.mark.asyncio
    async def test_malformed_rows_are_skipped(self, make_api):
        rows = [{"_id": "b1", "name": "Apple"}, {"name": "no id"}]
        catalog = CatalogService(make_api(lambda request: envelope(rows)))

        brands = await catalog.list(BRANDS)

        assert [b.id for b in brands] == ["b1"]

    @pytest.mark.asyncio
    async def test_list_active_filters(self, make_api):
        rows = [{"_id": "b1", "name": "Apple"}, {"_id": "b2", "name": "Nokia", "isActive": False}]
        catalog = CatalogService(make_api(lambda request: envelope(rows)))

        assert [b.name for b in await catalog.list_active(BRANDS)] == ["Apple"]

    @pytest.mark.asyncio
    async def test_phone_models_by_brand_name(self, make_api):
        seen = []
        catalog = CatalogService(make_api(recording_handler(seen, envelope([]))))

        await catalog.list_phone_models("Apple")

        assert api_path(seen[0]) == "/phone-models"
        assert seen[0].url.params["brand"] == "Apple"

    @pytest.mark.asyncio
    async def test_list_failure_raises_with_fallback(self, make_api):
        catalog = CatalogService(make_api(lambda request: envelope(success=False)))
        with pytest.raises(ApiFailure, match="Failed to load brands"):
            await catalog.list(BRANDS)

    @pytest.mark.asyncio
    async def test_get(self, make_api):
        seen = []
        catalog = CatalogService(make_api(recording_handler(seen, envelope(PRODUCT))))

        product = await catalog.get(PRODUCTS, "p1")

        assert api_path(seen[0]) == "/products/p1"
        assert isinstance(product, Product)

    @pytest.mark.asyncio
    async def test_get_malformed_document(self, make_api):
        catalog = CatalogService(make_api(lambda request: envelope({"name": "no id"})))
        with pytest.raises(ApiFailure, match="Failed to load product"):
            await catalog.get(PRODUCTS, "p1")

    @pytest.mark.asyncio
    async def test_mutations_announce_changes(self, make_api, event_bus, recorder):
        recorder.listen(events.TOPIC_CATALOG_CHANGED)
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            if request.method == "POST":
                return envelope({"_id": "b9", "name": "Pixel"})
            return envelope({"_id": "b9", "name": "Google"} if request.method == "PUT" else None)

        catalog = CatalogService(make_api(handler), event_bus)
        created = await catalog.create(BRANDS, {"name": "Pixel"})
        await catalog.update(BRANDS, "b9", {"name": "Google"})
        await catalog.delete(BRANDS, "b9")

        assert created.id == "b9"
        assert [(r.method, api_path(r)) for r in seen] == [
            ("POST", "/brands"),
            ("PUT", "/brands/b9"),
            ("DELETE", "/brands/b9"),
        ]
        assert [p["action"] for p in recorder.payloads(events.TOPIC_CATALOG_CHANGED)] == [
            "created",
            "updated",
            "deleted",
        ]

    @pytest.mark.asyncio
    async def test_delete_failure_propagates(self, make_api, event_bus, recorder):
        recorder.listen(events.TOPIC_CATALOG_CHANGED)
        catalog = CatalogService(make_api(lambda request: httpx.Response(404, json={"message": "Not found"})), event_bus)

        with pytest.raises(HttpStatusError, match="Not found"):
            await catalog.delete(PHONE_MODELS, "missing")

        assert recorder.received == []


class TestForms:
    def test_product_from_resource_normalizes_refs(self):
        form = ProductForm.from_resource(Product.model_validate(PRODUCT))

        assert form.category == "c1"
        assert form.phone_brand == "b1"
        assert form.phone_model == "m1"
        assert form.price == "499"
        assert form.discount_price == "399"

    def test_product_payload(self):
        form = ProductForm(
            name="Case",
            description="Nice",
            price="499.50",
            discount_price="",
            category="c1",
            phone_brand="b1",
            phone_model="m1",
            amazon_link="https://amazon.in/dp/x",
            images=["a", "b"],
        )

        payload = form.to_payload()

        assert payload["price"] == 499.5
        assert "discountPrice" not in payload
        assert payload["phoneBrand"] == "b1"
        assert payload["images"] == ["a", "b"]
        assert payload["isActive"] is True

    def test_integral_price_is_int(self):
        form = ProductForm(price="499", discount_price="399")
        assert form.to_payload()["discountPrice"] == 399

    def test_invalid_number(self):
        form = ProductForm(price="abc")
        with pytest.raises(ClientValidationError) as exc_info:
            form.to_payload()
        assert exc_info.value.field == "price"

    def test_missing_required_field(self):
        form = ProductForm(name="Case", description="x", price="1", category="c1", phone_brand="b1")
        with pytest.raises(ClientValidationError, match="Phone model is required"):
            form.check()

    def test_single_image_fields_submit_first_url(self):
        assert BrandForm(name="Apple", logo=["l1"]).to_payload()["logo"] == "l1"
        assert BrandForm(name="Apple").to_payload()["logo"] == ""
        assert PhoneModelForm(name="S24", brand="b2", image=["i1"]).to_payload()["image"] == "i1"

    def test_category_payload(self):
        assert CategoryForm(name="Clear", description="See-through").to_payload() == {
            "name": "Clear",
            "description": "See-through",
            "isActive": True,
        }


class TestSaveForm:
    @pytest.mark.asyncio
    async def test_create_then_update(self, make_api):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return envelope({"_id": "c1", "name": "Clear"})

        catalog = CatalogService(make_api(handler))
        form = CategoryForm(name="Clear")

        await save_form(catalog, form)
        await save_form(catalog, form, "c1")

        assert [(r.method, api_path(r)) for r in seen] == [("POST", "/categories"), ("PUT", "/categories/c1")]
        assert request_json(seen[0])["name"] == "Clear"

    @pytest.mark.asyncio
    async def test_invalid_form_sends_nothing(self, make_api):
        seen = []
        catalog = CatalogService(make_api(recording_handler(seen, envelope())))

        with pytest.raises(ClientValidationError):
            await save_form(catalog, PhoneModelForm(name="S24"))

        assert seen == []

    @pytest.mark.asyncio
    async def test_server_message_surfaces(self, make_api):
        catalog = CatalogService(make_api(lambda request: envelope(success=False, message="Brand already exists")))
        with pytest.raises(ApiFailure, match="Brand already exists"):
            await save_form(catalog, BrandForm(name="Apple"))
