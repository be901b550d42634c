"""Tests for the user lifecycle: creation, sign-in, updates, listing and activation toggling."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.modules.notifications.domain.models.mail import Cases
from app.modules.notifications.domain.services.mail_service import NotificationDispatcher
from app.modules.shopping_cart.infrastructure.database.models import ShoppingCartModel
from app.modules.user_management.domain.models.user import User
from app.modules.user_management.domain.services.credential_service import CredentialService
from app.modules.user_management.domain.services.user_service import UserService, build_user_service
from app.modules.user_management.infrastructure.database.models import UserModel
from app.shared.core.exceptions import (
    BadRequestError,
    ConflictError,
    InternalServerError,
    UnauthorizedError,
)
from tests.conftest import make_engine


async def count_rows(session: AsyncSession, model, **filters) -> int:
    stmt = select(func.count()).select_from(model)
    for column, value in filters.items():
        stmt = stmt.where(getattr(model, column) == value)
    return (await session.execute(stmt)).scalar_one()


async def create_user(user_service: UserService, payload: dict, **overrides) -> str:
    """Create a user and return its id."""
    data = {**payload, **overrides}
    await user_service.create(**data)
    user = await user_service.repository.get_by_email(data["email"])
    return user.id


# =============================================================================
# CREATE
# =============================================================================


class TestCreate:

    async def test_creates_active_user_with_hashed_password(self, user_service, user_payload, session):
        result = await user_service.create(**user_payload)

        assert result["status_code"] == 201
        assert result["token"]

        rows = (await session.execute(select(UserModel))).scalars().all()
        assert len(rows) == 1
        assert rows[0].is_active is True
        assert rows[0].email == "ada@example.com"
        assert rows[0].password != user_payload["password"]
        assert CredentialService().verify_password(user_payload["password"], rows[0].password)

    async def test_token_identifies_the_new_user(self, user_service, user_payload):
        result = await user_service.create(**user_payload)

        claims = CredentialService().decode_token(result["token"])
        user = await user_service.repository.get_by_email(user_payload["email"])

        assert claims["sub"] == user.id
        assert claims["email"] == "ada@example.com"

    async def test_provisions_a_cart(self, user_service, user_payload, session):
        user_id = await create_user(user_service, user_payload)

        user = await user_service.repository.get_by_id(user_id, include=["cart"])
        assert user.cart_id is not None
        assert await count_rows(session, ShoppingCartModel) == 1

    async def test_email_is_stored_lower_case(self, user_service, user_payload, session):
        await user_service.create(**{**user_payload, "email": "Ada@Example.COM"})

        assert await count_rows(session, UserModel, email="ada@example.com") == 1

    async def test_sends_welcome_email_after_commit(self, user_service, user_payload, notifier):
        await user_service.create(**user_payload)

        notifier.dispatch.assert_called_once()
        message = notifier.dispatch.call_args.args[0]
        assert message.addressee == "ada@example.com"
        assert message.subject == Cases.CREATE_ACCOUNT
        assert message.context == {"first_name": "Ada", "last_name": "Lovelace"}

    async def test_duplicate_email_is_a_conflict_and_changes_nothing(
        self, user_service, user_payload, session, notifier
    ):
        await user_service.create(**user_payload)
        notifier.reset_mock()

        with pytest.raises(ConflictError):
            await user_service.create(**{**user_payload, "first_name": "Other", "email": "ADA@example.com"})

        assert await count_rows(session, UserModel) == 1
        assert await count_rows(session, ShoppingCartModel) == 1
        user = await user_service.repository.get_by_email("ada@example.com")
        assert user.first_name == "Ada"
        notifier.dispatch.assert_not_called()

    async def test_persistence_failure_rolls_back_and_is_internal(
        self, user_service, user_payload, session, notifier
    ):
        fault = OperationalError("INSERT INTO shopping_carts", {}, Exception("disk I/O error"))

        with patch.object(user_service.cart_service, "create_cart", AsyncMock(side_effect=fault)):
            with pytest.raises(InternalServerError) as exc_info:
                await user_service.create(**user_payload)

        assert exc_info.value.details["operation"] == "create"
        assert await count_rows(session, UserModel) == 0
        notifier.dispatch.assert_not_called()

    async def test_notification_failure_does_not_undo_creation(self, session, repository, user_payload):
        mail_service = MagicMock()
        mail_service.send = AsyncMock(side_effect=RuntimeError("provider down"))
        dispatcher = NotificationDispatcher(mail_service=mail_service)
        service = build_user_service(session, repository=repository, notifier=dispatcher)

        result = await service.create(**user_payload)
        await dispatcher.drain()

        assert result["status_code"] == 201
        mail_service.send.assert_awaited_once()
        assert await count_rows(session, UserModel) == 1
        assert await count_rows(session, ShoppingCartModel) == 1


# =============================================================================
# SIGN IN AND LOOKUPS
# =============================================================================


class TestSignIn:

    async def test_correct_credentials_return_token(self, user_service, user_payload):
        await user_service.create(**user_payload)

        result = await user_service.sign_in(user_payload["email"], user_payload["password"])

        assert result["status_code"] == 200
        assert CredentialService().decode_token(result["token"])["email"] == "ada@example.com"

    async def test_wrong_password_is_unauthorized(self, user_service, user_payload):
        await user_service.create(**user_payload)

        with pytest.raises(UnauthorizedError) as exc_info:
            await user_service.sign_in(user_payload["email"], "not-the-password")

        assert exc_info.value.status_code == 401

    async def test_unknown_email_is_unauthorized(self, user_service):
        with pytest.raises(UnauthorizedError):
            await user_service.sign_in("nobody@example.com", "whatever-pass")

    async def test_unknown_email_and_wrong_password_look_the_same(self, user_service, user_payload):
        await user_service.create(**user_payload)

        with pytest.raises(UnauthorizedError) as wrong_password:
            await user_service.sign_in(user_payload["email"], "not-the-password")
        with pytest.raises(UnauthorizedError) as unknown_email:
            await user_service.sign_in("nobody@example.com", "whatever-pass")

        assert wrong_password.value.message == unknown_email.value.message

    async def test_deactivated_user_cannot_sign_in(self, user_service, user_payload):
        user_id = await create_user(user_service, user_payload)
        await user_service.delete_user(user_id)

        with pytest.raises(UnauthorizedError):
            await user_service.sign_in(user_payload["email"], user_payload["password"])

    async def test_email_lookup_is_case_insensitive(self, user_service, user_payload):
        await user_service.create(**user_payload)

        result = await user_service.sign_in("ADA@EXAMPLE.COM", user_payload["password"])
        assert result["status_code"] == 200


class TestFindOneByEmail:

    async def test_returns_user(self, user_service, user_payload):
        await user_service.create(**user_payload)

        user = await user_service.find_one_by_email("ada@example.com")
        assert user.first_name == "Ada"

    async def test_missing_user_is_unauthorized(self, user_service):
        with pytest.raises(UnauthorizedError):
            await user_service.find_one_by_email("nobody@example.com")

    async def test_storage_fault_is_internal(self, user_service):
        user_service.repository.get_by_email = AsyncMock(side_effect=SQLAlchemyError("connection lost"))

        with pytest.raises(InternalServerError):
            await user_service.find_one_by_email("ada@example.com")


class TestVerifyEmail:

    async def test_free_email_is_available(self, user_service):
        assert await user_service.verify_email("new@example.com") is True

    async def test_taken_email_is_a_conflict(self, user_service, user_payload):
        await user_service.create(**user_payload)

        with pytest.raises(ConflictError) as exc_info:
            await user_service.verify_email("Ada@example.com")

        assert exc_info.value.status_code == 409


# =============================================================================
# UPDATE
# =============================================================================


class TestUpdate:

    async def test_changes_only_the_given_field(self, user_service, user_payload):
        user_id = await create_user(user_service, user_payload)
        before = await user_service.repository.get_by_id(user_id)

        result = await user_service.update(user_id, {"email": "new@example.com"})

        assert result["status_code"] == 204
        after = await user_service.repository.get_by_id(user_id)
        assert after.email == "new@example.com"
        assert after.first_name == before.first_name
        assert after.last_name == before.last_name
        assert after.phone == before.phone
        assert after.password_hash == before.password_hash
        assert after.is_active is True

    async def test_empty_patch_leaves_row_untouched(self, user_service, user_payload):
        user_id = await create_user(user_service, user_payload)
        before = await user_service.repository.get_by_id(user_id)

        await user_service.update(user_id, {})

        after = await user_service.repository.get_by_id(user_id)
        assert after.model_dump() == before.model_dump()
        assert after.password_hash == before.password_hash

    async def test_none_values_are_ignored(self, user_service, user_payload):
        user_id = await create_user(user_service, user_payload)

        await user_service.update(user_id, {"first_name": None, "last_name": "Byron"})

        after = await user_service.repository.get_by_id(user_id)
        assert after.first_name == "Ada"
        assert after.last_name == "Byron"

    async def test_unknown_id_is_a_bad_request(self, user_service):
        with pytest.raises(BadRequestError):
            await user_service.update("00000000-0000-0000-0000-000000000000", {"first_name": "X"})

    async def test_malformed_id_is_a_bad_request(self, user_service):
        with pytest.raises(BadRequestError):
            await user_service.update("not-a-uuid", {"first_name": "X"})

    async def test_taken_email_is_a_conflict(self, user_service, user_payload):
        await create_user(user_service, user_payload)
        other_id = await create_user(user_service, user_payload, email="grace@example.com")

        with pytest.raises(ConflictError):
            await user_service.update(other_id, {"email": "ada@example.com"})

        other = await user_service.repository.get_by_id(other_id)
        assert other.email == "grace@example.com"

    async def test_invalid_email_is_a_bad_request(self, user_service, user_payload):
        user_id = await create_user(user_service, user_payload)

        with pytest.raises(BadRequestError):
            await user_service.update(user_id, {"email": "not-an-email"})


# =============================================================================
# GET ALL
# =============================================================================


@pytest_asyncio.fixture
async def twenty_five_users(session, repository):
    """Insert 25 users directly; hashing is irrelevant for listing."""
    for index in range(25):
        await repository.create(User(
            first_name=f"User{index}",
            last_name="Test",
            email=f"user{index}@example.com",
            password_hash="$2b$04$placeholderhashplaceholderhashplaceholderhashpla",
            phone="5550000000",
        ))
    await session.commit()


class TestGetAll:

    async def test_first_page(self, user_service, twenty_five_users):
        result = await user_service.get_all(page=1, limit=10)

        assert result["status_code"] == 200
        assert len(result["users"]) == 10
        assert result["prev_page"] is None
        assert result["page"] == 1
        assert result["next_page"] == 2
        assert result["total_pages"] == 3
        assert result["total_users"] == 25

    async def test_middle_page(self, user_service, twenty_five_users):
        result = await user_service.get_all(page=2, limit=10)

        assert len(result["users"]) == 10
        assert result["prev_page"] == 1
        assert result["next_page"] == 3

    async def test_last_page_has_no_next_page(self, user_service, twenty_five_users):
        result = await user_service.get_all(page=3, limit=10)

        assert len(result["users"]) == 5
        assert result["prev_page"] == 2
        assert result["next_page"] is None

    async def test_exact_multiple_last_page(self, user_service, twenty_five_users):
        result = await user_service.get_all(page=5, limit=5)

        assert len(result["users"]) == 5
        assert result["next_page"] is None

    async def test_pages_do_not_overlap(self, user_service, twenty_five_users):
        seen = []
        for page in (1, 2, 3):
            result = await user_service.get_all(page=page, limit=10)
            seen.extend(user.id for user in result["users"])

        assert len(seen) == 25
        assert len(set(seen)) == 25

    @pytest.mark.parametrize("page", [0, -1, 4, 100])
    async def test_out_of_range_page_is_a_bad_request(self, user_service, twenty_five_users, page):
        with pytest.raises(BadRequestError):
            await user_service.get_all(page=page, limit=10)

    async def test_non_positive_limit_is_a_bad_request(self, user_service):
        with pytest.raises(BadRequestError):
            await user_service.get_all(page=1, limit=0)

    async def test_empty_store_returns_empty_first_page(self, user_service):
        result = await user_service.get_all(page=1, limit=10)

        assert result["users"] == []
        assert result["total_pages"] == 0
        assert result["prev_page"] is None
        assert result["next_page"] is None

    async def test_storage_fault_is_internal(self, user_service):
        user_service.repository.count = AsyncMock(side_effect=SQLAlchemyError("connection lost"))

        with pytest.raises(InternalServerError) as exc_info:
            await user_service.get_all(page=1, limit=10)

        assert exc_info.value.message == "could not search users"

    async def test_password_hash_never_serialized(self, user_service, twenty_five_users):
        result = await user_service.get_all(page=1, limit=10)

        assert "password_hash" not in result["users"][0].model_dump()


# =============================================================================
# DELETE USER (ACTIVATION TOGGLE)
# =============================================================================


class TestDeleteUser:

    async def test_deactivation_destroys_cart(self, user_service, user_payload, session):
        user_id = await create_user(user_service, user_payload)

        result = await user_service.delete_user(user_id)

        assert result["status_code"] == 204
        user = await user_service.repository.get_by_id(user_id, include=["cart"])
        assert user.is_active is False
        assert user.cart_id is None
        assert await count_rows(session, ShoppingCartModel) == 0

    async def test_reactivation_creates_cart(self, user_service, user_payload, session):
        user_id = await create_user(user_service, user_payload)
        await user_service.delete_user(user_id)

        result = await user_service.delete_user(user_id)

        assert result["status_code"] == 200
        user = await user_service.repository.get_by_id(user_id, include=["cart"])
        assert user.is_active is True
        assert user.cart_id is not None
        assert await count_rows(session, ShoppingCartModel) == 1

    async def test_user_row_is_never_deleted(self, user_service, user_payload, session):
        user_id = await create_user(user_service, user_payload)

        await user_service.delete_user(user_id)

        assert await count_rows(session, UserModel) == 1

    async def test_unknown_id_is_a_bad_request(self, user_service):
        with pytest.raises(BadRequestError):
            await user_service.delete_user("00000000-0000-0000-0000-000000000000")

    async def test_cart_failure_rolls_back_everything(self, user_service, user_payload, session):
        user_id = await create_user(user_service, user_payload)

        with patch.object(
            user_service.cart_service, "destroy_cart", AsyncMock(side_effect=RuntimeError("cart store down"))
        ):
            with pytest.raises(InternalServerError):
                await user_service.delete_user(user_id)

        user = await user_service.repository.get_by_id(user_id, include=["cart"])
        assert user.is_active is True
        assert user.cart_id is not None

    async def test_user_save_failure_restores_cart(self, user_service, user_payload, session):
        """The cart was already deleted in the transaction when the user write fails."""
        user_id = await create_user(user_service, user_payload)

        with patch.object(
            user_service.repository, "update", AsyncMock(side_effect=SQLAlchemyError("write failed"))
        ):
            with pytest.raises(InternalServerError):
                await user_service.delete_user(user_id)

        user = await user_service.repository.get_by_id(user_id, include=["cart"])
        assert user.is_active is True
        assert user.cart_id is not None
        assert await count_rows(session, ShoppingCartModel) == 1

    async def test_reactivation_failure_leaves_user_inactive(self, user_service, user_payload, session):
        user_id = await create_user(user_service, user_payload)
        await user_service.delete_user(user_id)

        with patch.object(
            user_service.cart_service, "create_cart", AsyncMock(side_effect=RuntimeError("cart store down"))
        ):
            with pytest.raises(InternalServerError):
                await user_service.delete_user(user_id)

        user = await user_service.repository.get_by_id(user_id, include=["cart"])
        assert user.is_active is False
        assert user.cart_id is None


class TestReactivate:

    async def test_restores_account_and_cart(self, user_service, user_payload, session):
        user_id = await create_user(user_service, user_payload)
        await user_service.delete_user(user_id)

        result = await user_service.reactivate(user_payload["email"], user_payload["password"])

        assert result["status_code"] == 200
        assert user_service.credentials.decode_token(result["token"])["sub"] == user_id
        user = await user_service.repository.get_by_id(user_id, include=["cart"])
        assert user.is_active is True
        assert user.cart_id is not None
        assert await count_rows(session, ShoppingCartModel) == 1

    async def test_wrong_password_keeps_account_inactive(self, user_service, user_payload):
        user_id = await create_user(user_service, user_payload)
        await user_service.delete_user(user_id)

        with pytest.raises(UnauthorizedError):
            await user_service.reactivate(user_payload["email"], "not-the-password")

        assert (await user_service.repository.get_by_id(user_id)).is_active is False

    async def test_unknown_email(self, user_service):
        with pytest.raises(UnauthorizedError):
            await user_service.reactivate("nobody@example.com", "whatever-password")

    async def test_active_account_is_left_alone(self, user_service, user_payload, session):
        user_id = await create_user(user_service, user_payload)

        with pytest.raises(BadRequestError):
            await user_service.reactivate(user_payload["email"], user_payload["password"])

        assert (await user_service.repository.get_by_id(user_id)).is_active is True
        assert await count_rows(session, ShoppingCartModel) == 1


# =============================================================================
# CONCURRENCY
# =============================================================================


class TestConcurrentRegistration:

    async def test_same_email_registers_once(self, tmp_path, user_payload):
        """Two sessions racing on one email: one wins, the other fails cleanly."""
        engine = await make_engine(f"sqlite+aiosqlite:///{tmp_path / 'race.db'}")
        factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

        try:
            async with factory() as first, factory() as second:
                services = [
                    build_user_service(first, notifier=MagicMock()),
                    build_user_service(second, notifier=MagicMock()),
                ]

                results = await asyncio.gather(
                    *(service.create(**user_payload) for service in services),
                    return_exceptions=True,
                )

            successes = [r for r in results if isinstance(r, dict)]
            failures = [r for r in results if isinstance(r, Exception)]
            assert len(successes) == 1
            assert len(failures) == 1
            assert isinstance(failures[0], (ConflictError, InternalServerError))

            async with factory() as check:
                assert await count_rows(check, UserModel, email="ada@example.com") == 1
                assert await count_rows(check, ShoppingCartModel) == 1
        finally:
            await engine.dispose()
