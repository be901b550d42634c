"""Tests for cart provisioning on the caller's session."""

import uuid

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from app.modules.shopping_cart.domain.services.cart_service import ShoppingCartService
from app.modules.shopping_cart.infrastructure.database.models import ShoppingCartModel
from app.modules.user_management.domain.models.user import User
from app.shared.core.exceptions import BadRequestError

PLACEHOLDER_HASH = "$2b$04$placeholderhashplaceholderhashplaceholderhashpla"


async def cart_of(session, user_id: str):
    stmt = select(ShoppingCartModel).where(ShoppingCartModel.user_id == uuid.UUID(user_id))
    return (await session.execute(stmt)).scalar_one_or_none()


@pytest.fixture
def carts() -> ShoppingCartService:
    return ShoppingCartService()


@pytest_asyncio.fixture
async def owner(session, repository) -> User:
    user = await repository.create(User(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password_hash=PLACEHOLDER_HASH,
        phone="5550000000",
        is_active=True,
    ))
    await session.commit()
    return user


class TestShoppingCartService:

    async def test_create_cart(self, carts, session, owner):
        cart = await carts.create_cart(owner.id, session)
        await session.commit()

        assert cart.id is not None
        assert cart.user_id == uuid.UUID(owner.id)
        assert (await cart_of(session, owner.id)).id == cart.id

    async def test_second_cart_for_same_user_is_rejected(self, carts, session, owner):
        await carts.create_cart(owner.id, session)

        with pytest.raises(IntegrityError):
            await carts.create_cart(owner.id, session)
        await session.rollback()

    async def test_destroy_cart(self, carts, session, owner):
        await carts.create_cart(owner.id, session)
        await carts.destroy_cart(owner.id, session)
        await session.commit()

        assert await cart_of(session, owner.id) is None

    async def test_destroy_without_cart_is_a_no_op(self, carts, session, owner, caplog):
        await carts.destroy_cart(owner.id, session)

        assert await cart_of(session, owner.id) is None
        assert "No shopping cart to destroy" in caplog.text

    async def test_nothing_persists_without_commit(self, carts, session, owner):
        await carts.create_cart(owner.id, session)
        await session.rollback()

        assert await cart_of(session, owner.id) is None

    async def test_malformed_user_id(self, carts, session):
        with pytest.raises(BadRequestError):
            await carts.create_cart("not-a-uuid", session)
