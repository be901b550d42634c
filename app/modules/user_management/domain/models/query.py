# 📄 File: app/modules/user_management/domain/models/query.py
# 🧭 Purpose (Layman Explanation):
# Describes a search over users: which values to match, how to sort, how many rows to
# return and which related records (like the cart) to load along the way.
# 🧪 Purpose (Technical Summary):
# Query options value object consumed by the user query helper and the repository,
# plus the paginated result shape returned by count-and-fetch queries.
# 🔗 Dependencies:
# pydantic, typing
# 🔄 Connected Modules / Calls From:
# user_queries.py, user_repository_impl.py, sibling modules querying users

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .user import User


class SortOrder(str, Enum):
    """Row ordering accepted by user queries."""
    LATEST = "created_at DESC"
    OLDEST = "created_at ASC"


class QueryOptions(BaseModel):
    """
    Options bag for a user query.

    filters: column -> value equality filters, combined with AND
    order_by: a SortOrder value
    limit / offset: row window
    include: relations to eager-load (currently "cart")
    """

    model_config = ConfigDict(frozen=True)

    filters: Dict[str, Any] = Field(default_factory=dict)
    order_by: SortOrder = SortOrder.OLDEST
    limit: Optional[int] = Field(default=None, gt=0)
    offset: Optional[int] = Field(default=None, ge=0)
    include: List[str] = Field(default_factory=list)

    @field_validator("include")
    @classmethod
    def validate_include(cls, v: List[str]) -> List[str]:
        allowed = {"cart"}
        unknown = set(v) - allowed
        if unknown:
            raise ValueError(f"Unknown relations: {sorted(unknown)}")
        return v


class PaginatedUsers(BaseModel):
    """Result of a count-and-fetch user query."""

    data: List[User]
    page: int
    total_pages: int
    total_users: int
