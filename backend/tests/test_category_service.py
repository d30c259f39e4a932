"""Tests for the category service."""

import pytest

from app.core.exceptions import ConflictError, ForbiddenError, NotFoundError, ValidationError
from app.crud import product_crud
from app.schemas.category_schema import CategoryCreate, CategoryUpdate
from app.schemas.product_schema import ProductCreate
from app.services.category_service import category_service
from app.services.product_service import product_service


async def create(db, user_id, name, parent_id=None):
    return await category_service.create_category(db, user_id, CategoryCreate(name=name, parent_id=parent_id))


class TestCreateCategory:

    async def test_create_returns_relations(self, db_session, users):
        category = await create(db_session, users["alice"], "Electronics")

        assert category.id == 1
        assert category.name == "Electronics"
        assert category.user_id == users["alice"]
        assert category.parent is None
        assert category.children == []

    async def test_duplicate_name_per_owner(self, db_session, users):
        await create(db_session, users["alice"], "Electronics")

        with pytest.raises(ConflictError):
            await create(db_session, users["alice"], "Electronics")

        other = await create(db_session, users["bob"], "Electronics")
        assert other.user_id == users["bob"]

    async def test_blank_name_is_rejected(self, db_session, users):
        with pytest.raises(ValidationError):
            await create(db_session, users["alice"], "   ")

    async def test_parent_must_exist(self, db_session, users):
        with pytest.raises(NotFoundError):
            await create(db_session, users["alice"], "Phones", parent_id=99)

    async def test_parent_must_belong_to_owner(self, db_session, users):
        bobs = await create(db_session, users["bob"], "Bob root")

        with pytest.raises(ForbiddenError):
            await create(db_session, users["alice"], "Phones", parent_id=bobs.id)

    async def test_child_is_visible_from_parent(self, db_session, users):
        parent = await create(db_session, users["alice"], "Electronics")
        child = await create(db_session, users["alice"], "Phones", parent_id=parent.id)

        assert child.parent.id == parent.id
        reloaded = await category_service.get_category(db_session, parent.id, users["alice"])
        assert [c.id for c in reloaded.children] == [child.id]


class TestReadCategories:

    async def test_list_is_scoped_and_newest_first(self, db_session, users):
        await create(db_session, users["alice"], "First")
        await create(db_session, users["alice"], "Second")
        await create(db_session, users["bob"], "Other")

        categories = await category_service.list_categories(db_session, users["alice"])
        assert [c.name for c in categories] == ["Second", "First"]

    async def test_reused_id_is_still_listed_first(self, db_session, users):
        alice = users["alice"]
        for name in ("c1", "c2", "c3"):
            await create(db_session, alice, name)
        await category_service.delete_category(db_session, 1, alice)

        newest = await create(db_session, alice, "newest")
        assert newest.id == 1

        categories = await category_service.list_categories(db_session, alice)
        assert [c.name for c in categories] == ["newest", "c3", "c2"]

    async def test_list_counts_products(self, db_session, users):
        category = await create(db_session, users["alice"], "Tools")
        for name in ("Hammer", "Saw"):
            await product_service.create_product(
                db_session, users["alice"], ProductCreate(name=name, price=5, stock=1, category_id=category.id)
            )

        [listed] = await category_service.list_categories(db_session, users["alice"])
        assert listed.product_count == 2

    async def test_get_missing(self, db_session, users):
        with pytest.raises(NotFoundError):
            await category_service.get_category(db_session, 42, users["alice"])

    async def test_get_checks_owner_only_when_given(self, db_session, users):
        category = await create(db_session, users["alice"], "Private")

        with pytest.raises(ForbiddenError):
            await category_service.get_category(db_session, category.id, users["bob"])

        found = await category_service.get_category(db_session, category.id)
        assert found.id == category.id


class TestUpdateCategory:

    async def test_rename(self, db_session, users):
        category = await create(db_session, users["alice"], "Old")

        updated = await category_service.update_category(
            db_session, category.id, users["alice"], CategoryUpdate(name="New")
        )
        assert updated.name == "New"

    async def test_rename_to_existing_name_conflicts(self, db_session, users):
        await create(db_session, users["alice"], "Books")
        category = await create(db_session, users["alice"], "Music")

        with pytest.raises(ConflictError):
            await category_service.update_category(
                db_session, category.id, users["alice"], CategoryUpdate(name="Books")
            )

    async def test_rename_to_same_name_is_allowed(self, db_session, users):
        category = await create(db_session, users["alice"], "Books")

        updated = await category_service.update_category(
            db_session, category.id, users["alice"], CategoryUpdate(name="Books")
        )
        assert updated.name == "Books"

    async def test_self_parent_conflicts(self, db_session, users):
        category = await create(db_session, users["alice"], "Loop")

        with pytest.raises(ConflictError):
            await category_service.update_category(
                db_session, category.id, users["alice"], CategoryUpdate(parent_id=category.id)
            )

    async def test_descendant_parent_conflicts(self, db_session, users):
        root = await create(db_session, users["alice"], "Root")
        child = await create(db_session, users["alice"], "Child", parent_id=root.id)
        grandchild = await create(db_session, users["alice"], "Grandchild", parent_id=child.id)

        with pytest.raises(ConflictError):
            await category_service.update_category(
                db_session, root.id, users["alice"], CategoryUpdate(parent_id=grandchild.id)
            )

    async def test_null_parent_clears_and_absent_keeps(self, db_session, users):
        parent = await create(db_session, users["alice"], "Parent")
        child = await create(db_session, users["alice"], "Child", parent_id=parent.id)

        renamed = await category_service.update_category(
            db_session, child.id, users["alice"], CategoryUpdate(name="Renamed")
        )
        assert renamed.parent_id == parent.id

        cleared = await category_service.update_category(
            db_session, child.id, users["alice"], CategoryUpdate(parent_id=None)
        )
        assert cleared.parent_id is None
        assert cleared.parent is None

    async def test_foreign_parent_is_forbidden(self, db_session, users):
        mine = await create(db_session, users["alice"], "Mine")
        theirs = await create(db_session, users["bob"], "Theirs")

        with pytest.raises(ForbiddenError):
            await category_service.update_category(
                db_session, mine.id, users["alice"], CategoryUpdate(parent_id=theirs.id)
            )

    async def test_other_users_category_is_forbidden(self, db_session, users):
        theirs = await create(db_session, users["bob"], "Theirs")

        with pytest.raises(ForbiddenError):
            await category_service.update_category(
                db_session, theirs.id, users["alice"], CategoryUpdate(name="Mine now")
            )


class TestDeleteCategory:

    async def test_parent_with_children_cannot_be_deleted(self, db_session, users):
        parent = await create(db_session, users["alice"], "Parent")
        parent_id = parent.id
        await create(db_session, users["alice"], "Child", parent_id=parent_id)

        with pytest.raises(ConflictError):
            await category_service.delete_category(db_session, parent_id, users["alice"])

        # The rollback expires loaded instances, so look it up again
        still_there = await category_service.get_category(db_session, parent_id, users["alice"])
        assert still_there.id == parent_id

    async def test_products_are_detached(self, db_session, users):
        category = await create(db_session, users["alice"], "Doomed")
        product = await product_service.create_product(
            db_session, users["alice"], ProductCreate(name="Lamp", price=10, stock=3, category_id=category.id)
        )

        deleted = await category_service.delete_category(db_session, category.id, users["alice"])
        assert deleted.id == category.id

        with pytest.raises(NotFoundError):
            await category_service.get_category(db_session, category.id)

        orphan = await product_crud.get_product(db_session, product.id)
        assert orphan is not None
        assert orphan.category_id is None

    async def test_only_owner_can_delete(self, db_session, users):
        category = await create(db_session, users["alice"], "Mine")

        with pytest.raises(ForbiddenError):
            await category_service.delete_category(db_session, category.id, users["bob"])
