"""Tests for the typed user query helper and its error policy."""

from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from sqlalchemy.exc import SQLAlchemyError

from app.modules.shopping_cart.domain.services.cart_service import ShoppingCartService
from app.modules.user_management.domain.models.query import QueryOptions, SortOrder
from app.modules.user_management.domain.models.user import User
from app.modules.user_management.domain.services.user_queries import UserQueryService
from app.shared.core.exceptions import BadRequestError, InternalServerError

PLACEHOLDER_HASH = "$2b$04$placeholderhashplaceholderhashplaceholderhashpla"


@pytest.fixture
def queries(repository) -> UserQueryService:
    return UserQueryService(repository)


@pytest_asyncio.fixture
async def users(session, repository):
    """Three users, the last one deactivated; only the first owns a cart."""
    created = []
    for index, name in enumerate(("Ada", "Grace", "Linus")):
        created.append(await repository.create(User(
            first_name=name,
            last_name="Test",
            email=f"{name.lower()}@example.com",
            password_hash=PLACEHOLDER_HASH,
            phone="5550000000",
            is_active=index < 2,
        )))
    await ShoppingCartService().create_cart(created[0].id, session)
    await session.commit()
    return created


class TestFindOne:

    async def test_returns_matching_user(self, queries, users):
        user = await queries.find_one(QueryOptions(filters={"email": "GRACE@example.com"}))
        assert user.first_name == "Grace"

    async def test_no_match_is_a_bad_request(self, queries, users):
        with pytest.raises(BadRequestError):
            await queries.find_one(QueryOptions(filters={"email": "nobody@example.com"}))

    async def test_unknown_column_is_a_bad_request(self, queries, users):
        with pytest.raises(BadRequestError):
            await queries.find_one(QueryOptions(filters={"password": "x"}))


class TestFindAll:

    async def test_filters_combine(self, queries, users):
        active = await queries.find_all(QueryOptions(filters={"is_active": True}))
        assert {user.first_name for user in active} == {"Ada", "Grace"}

    async def test_order_and_window(self, queries, users):
        oldest = await queries.find_all(QueryOptions(order_by=SortOrder.OLDEST, limit=2))
        latest = await queries.find_all(QueryOptions(order_by=SortOrder.LATEST, limit=2))

        assert len(oldest) == 2
        assert len(latest) == 2
        assert oldest[0].created_at <= oldest[1].created_at
        assert latest[0].created_at >= latest[1].created_at

    async def test_empty_result_is_a_bad_request(self, queries, users):
        with pytest.raises(BadRequestError):
            await queries.find_all(QueryOptions(filters={"last_name": "Nobody"}))


class TestFindByPk:

    async def test_loads_cart_when_included(self, queries, users):
        user = await queries.find_by_pk(users[0].id, QueryOptions(include=["cart"]))
        assert user.cart_id is not None

    async def test_cart_not_loaded_by_default(self, queries, users):
        user = await queries.find_by_pk(users[1].id)
        assert user.cart_id is None

    async def test_unknown_id_is_a_bad_request(self, queries, users):
        with pytest.raises(BadRequestError):
            await queries.find_by_pk("00000000-0000-0000-0000-000000000000")

    async def test_malformed_id_is_a_bad_request(self, queries):
        with pytest.raises(BadRequestError):
            await queries.find_by_pk("not-a-uuid")

    def test_unknown_relation_is_rejected(self):
        with pytest.raises(ValueError):
            QueryOptions(include=["orders"])


class TestFindAndCountAll:

    async def test_page_shape(self, queries, users):
        result = await queries.find_and_count_all(QueryOptions(limit=2, offset=0), page=1)

        assert len(result.data) == 2
        assert result.page == 1
        assert result.total_pages == 2
        assert result.total_users == 3

    async def test_count_respects_filters(self, queries, users):
        result = await queries.find_and_count_all(QueryOptions(filters={"is_active": True}, limit=10), page=1)

        assert result.total_users == 2
        assert result.total_pages == 1

    async def test_requires_a_limit(self, queries, users):
        with pytest.raises(BadRequestError):
            await queries.find_and_count_all(QueryOptions(), page=1)

    async def test_empty_result_is_a_bad_request(self, queries, users):
        with pytest.raises(BadRequestError):
            await queries.find_and_count_all(QueryOptions(limit=2, offset=10), page=6)


class TestErrorTranslation:
    """Unexpected failures become InternalServerError naming entity and operation."""

    @pytest.mark.parametrize(
        "operation, call",
        [
            ("find_one", lambda q: q.find_one(QueryOptions())),
            ("find_all", lambda q: q.find_all(QueryOptions())),
            ("find_and_count_all", lambda q: q.find_and_count_all(QueryOptions(limit=5), page=1)),
        ],
    )
    async def test_storage_faults_are_wrapped(self, queries, operation, call):
        queries.repository.find = AsyncMock(side_effect=SQLAlchemyError("connection lost"))

        with pytest.raises(InternalServerError) as exc_info:
            await call(queries)

        assert exc_info.value.details == {"entity": "user", "operation": operation}
        assert operation in exc_info.value.message

    async def test_find_by_pk_fault_is_wrapped(self, queries):
        queries.repository.get_by_id = AsyncMock(side_effect=RuntimeError("boom"))

        with pytest.raises(InternalServerError) as exc_info:
            await queries.find_by_pk("00000000-0000-0000-0000-000000000000")

        assert exc_info.value.details["operation"] == "find_by_pk"

    async def test_known_outcomes_pass_through_unchanged(self, queries):
        original = BadRequestError("custom message")
        queries.repository.find = AsyncMock(side_effect=original)

        with pytest.raises(BadRequestError) as exc_info:
            await queries.find_all(QueryOptions())

        assert exc_info.value is original
