"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from typing import Any, ClassVar, Self
from uuid import UUID

from marketplace.domain.errors import InvalidIdError

# Largest value the integer columns hold on every supported database.
MAX_STORED_INT = 2147483647


@dataclass(frozen=True)
class EntityId:
    """Unique identifier for a persisted record."""

    value: UUID

    entity: ClassVar[str] = "record"

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    @classmethod
    def parse(cls, value: Any) -> Self:
        """Parse a path or payload value.

        Raises:
            InvalidIdError: If the value is not a valid UUID.
        """
        if isinstance(value, UUID):
            return cls(value=value)
        try:
            return cls.from_string(str(value).strip())
        except (TypeError, ValueError):
            raise InvalidIdError(cls.entity) from None

    def __str__(self) -> str:
        return str(self.value)


class EventId(EntityId):
    entity = "event"


class BoothId(EntityId):
    entity = "booth"


class RatingId(EntityId):
    entity = "rating"


class VendorId(EntityId):
    entity = "vendor"


class AreaId(EntityId):
    entity = "area"


class CategoryId(EntityId):
    entity = "event category"


class RentalId(EntityId):
    entity = "rental"


class RentalProductId(EntityId):
    entity = "rental product"


class BannerId(EntityId):
    entity = "banner"


class UserId(EntityId):
    entity = "user"


@dataclass(frozen=True)
class Price:
    """Whole-currency price; zero is allowed."""

    amount: int

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Price cannot be negative")
        if self.amount > MAX_STORED_INT:
            raise ValueError(f"Price cannot exceed {MAX_STORED_INT}")

    @classmethod
    def parse(cls, value: Any) -> Self:
        """Parse an integer price from a number or numeric string."""
        if isinstance(value, bool):
            raise ValueError("Price must be a valid positive number")
        try:
            amount = int(str(value).strip())
        except (TypeError, ValueError):
            raise ValueError("Price must be a valid positive number") from None
        return cls(amount=amount)


@dataclass(frozen=True)
class BoothSlot:
    """Number of booths an event offers."""

    value: int

    DEFAULT: ClassVar[int] = 10

    def __post_init__(self) -> None:
        if self.value < 1:
            raise ValueError("Booth slot must be a positive integer")
        if self.value > MAX_STORED_INT:
            raise ValueError(f"Booth slot cannot exceed {MAX_STORED_INT}")

    @classmethod
    def parse(cls, value: Any) -> Self:
        if isinstance(value, bool):
            raise ValueError("Booth slot must be a positive integer")
        try:
            slots = int(str(value).strip())
        except (TypeError, ValueError):
            raise ValueError("Booth slot must be a positive integer") from None
        return cls(value=slots)


@dataclass(frozen=True)
class StarRating:
    """Integer rating between 1 and 5 inclusive."""

    value: int

    MIN: ClassVar[int] = 1
    MAX: ClassVar[int] = 5

    def __post_init__(self) -> None:
        if not self.MIN <= self.value <= self.MAX:
            raise ValueError("Rating star must be between 1 and 5")
