"""Tests for the product service."""

import pytest
from sqlalchemy import func, select

from app.core.config import Settings
from app.core.exceptions import ForbiddenError, NotFoundError
from app.db.models.product_model import Product
from app.schemas.category_schema import CategoryCreate
from app.schemas.product_schema import ProductCreate, ProductUpdate
from app.services.category_service import category_service
from app.services.product_service import ProductService, product_service


async def make_category(db, user_id, name="Tools"):
    return await category_service.create_category(db, user_id, CategoryCreate(name=name))


async def make_product(db, user_id, **fields):
    data = {"name": "Drill", "description": "800W", "price": "89.99", "stock": 10}
    data.update(fields)
    return await product_service.create_product(db, user_id, ProductCreate(**data))


class TestCreateProduct:

    async def test_create_with_category_and_owner(self, db_session, users):
        category = await make_category(db_session, users["alice"])
        product = await make_product(db_session, users["alice"], category_id=category.id)

        assert product.id == 1
        assert product.category.id == category.id
        assert product.owner.username == "alice"
        assert float(product.price) == pytest.approx(89.99)

    async def test_foreign_category_is_forbidden_and_nothing_inserted(self, db_session, users):
        theirs = await make_category(db_session, users["bob"])

        with pytest.raises(ForbiddenError):
            await make_product(db_session, users["alice"], category_id=theirs.id)

        count = (await db_session.execute(select(func.count(Product.id)))).scalar_one()
        assert count == 0

    async def test_missing_category(self, db_session, users):
        with pytest.raises(NotFoundError):
            await make_product(db_session, users["alice"], category_id=123)


class TestReadProducts:

    async def test_list_is_scoped_and_newest_first(self, db_session, users):
        await make_product(db_session, users["alice"], name="Old")
        await make_product(db_session, users["alice"], name="New")
        await make_product(db_session, users["bob"], name="Other")

        products = await product_service.list_products(db_session, users["alice"])
        assert [p.name for p in products] == ["New", "Old"]

    async def test_reused_id_is_still_listed_first(self, db_session, users):
        alice = users["alice"]
        for name in ("p1", "p2", "p3"):
            await make_product(db_session, alice, name=name)
        await product_service.delete_product(db_session, 1, alice)

        newest = await make_product(db_session, alice, name="newest")
        assert newest.id == 1

        products = await product_service.list_products(db_session, alice)
        assert [p.name for p in products] == ["newest", "p3", "p2"]

    async def test_detail_is_visible_to_other_users(self, db_session, users):
        product = await make_product(db_session, users["alice"])

        found = await product_service.get_product(db_session, product.id, users["bob"])
        assert found.owner.id == users["alice"]

    async def test_detail_can_require_ownership(self, db_session, users):
        product = await make_product(db_session, users["alice"])
        strict = ProductService(detail_requires_ownership=True)

        with pytest.raises(ForbiddenError):
            await strict.get_product(db_session, product.id, users["bob"])
        assert (await strict.get_product(db_session, product.id, users["alice"])).id == product.id

    async def test_missing_product(self, db_session, users):
        with pytest.raises(NotFoundError):
            await product_service.get_product(db_session, 7)

    def test_from_settings(self):
        service = ProductService.from_settings(
            Settings(PRODUCT_DETAIL_REQUIRES_OWNERSHIP=True, ID_ALLOCATION_STRATEGY="sequential")
        )

        assert service.detail_requires_ownership is True
        assert service.id_strategy == "sequential"


class TestUpdateProduct:

    async def test_partial_update_keeps_other_fields(self, db_session, users):
        category = await make_category(db_session, users["alice"])
        product = await make_product(db_session, users["alice"], category_id=category.id)

        updated = await product_service.update_product(
            db_session, product.id, users["alice"], ProductUpdate(name="new")
        )
        assert updated.name == "new"
        assert float(updated.price) == pytest.approx(89.99)
        assert updated.stock == 10
        assert updated.description == "800W"
        assert updated.category_id == category.id

    async def test_falsy_values_are_applied(self, db_session, users):
        product = await make_product(db_session, users["alice"])

        updated = await product_service.update_product(
            db_session, product.id, users["alice"], ProductUpdate(stock=0, price=0, description="")
        )
        assert updated.stock == 0
        assert float(updated.price) == 0
        assert updated.description == ""

    async def test_null_category_clears_it(self, db_session, users):
        category = await make_category(db_session, users["alice"])
        product = await make_product(db_session, users["alice"], category_id=category.id)

        updated = await product_service.update_product(
            db_session, product.id, users["alice"], ProductUpdate(category_id=None)
        )
        assert updated.category_id is None
        assert updated.category is None

    async def test_move_to_another_own_category(self, db_session, users):
        first = await make_category(db_session, users["alice"], "First")
        second = await make_category(db_session, users["alice"], "Second")
        product = await make_product(db_session, users["alice"], category_id=first.id)

        updated = await product_service.update_product(
            db_session, product.id, users["alice"], ProductUpdate(category_id=second.id)
        )
        assert updated.category.name == "Second"

    async def test_only_owner_can_update(self, db_session, users):
        product = await make_product(db_session, users["alice"])

        with pytest.raises(ForbiddenError):
            await product_service.update_product(
                db_session, product.id, users["bob"], ProductUpdate(name="stolen")
            )

    async def test_foreign_category_is_forbidden(self, db_session, users):
        theirs = await make_category(db_session, users["bob"])
        product = await make_product(db_session, users["alice"])

        with pytest.raises(ForbiddenError):
            await product_service.update_product(
                db_session, product.id, users["alice"], ProductUpdate(category_id=theirs.id)
            )


class TestDeleteProduct:

    async def test_owner_deletes(self, db_session, users):
        product = await make_product(db_session, users["alice"])

        deleted = await product_service.delete_product(db_session, product.id, users["alice"])
        assert deleted.id == product.id

        with pytest.raises(NotFoundError):
            await product_service.get_product(db_session, product.id)

    async def test_only_owner_can_delete(self, db_session, users):
        product = await make_product(db_session, users["alice"])

        with pytest.raises(ForbiddenError):
            await product_service.delete_product(db_session, product.id, users["bob"])
