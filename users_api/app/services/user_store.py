"""
In‑memory storage and business logic for users.

``UserStore`` keeps the user records of one application instance.  It
is created by ``create_app`` and reached from request handlers through
the ``get_user_store`` dependency, so every app (and every test) gets
its own collection.

Records are kept in an insertion‑ordered ``dict`` keyed by id, which
gives constant time lookups for get/update/delete while listing,
searching and paginating still follow creation order.  Identifiers are
sequential (``user_1``, ``user_2``, ...) and never reused after a
deletion.

The store never raises for missing records: ``get_user`` and
``update_user`` return ``None``, ``delete_user`` returns ``False``.
Input is expected to be validated already (see ``services.validation``).
"""

import logging
import math
import threading
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ..schemas.user import User, UserCreate, UserStats, UserUpdate

logger = logging.getLogger(__name__)

ID_PREFIX = "user_"

# Upper bound (exclusive) and label of each age band.  Ages at or above
# the last bound fall into ``OLDEST_AGE_BAND``.
AGE_BANDS: Tuple[Tuple[int, str], ...] = (
    (18, "0-17"),
    (25, "18-24"),
    (35, "25-34"),
    (45, "35-44"),
    (55, "45-54"),
    (65, "55-64"),
)
OLDEST_AGE_BAND = "65+"

# Fields a client may change; ``id`` and ``created_at`` are not among them.
MUTABLE_FIELDS = ("name", "email", "age")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def age_band(age: int) -> str:
    """Return the label of the statistics band ``age`` belongs to."""
    for upper, label in AGE_BANDS:
        if age < upper:
            return label
    return OLDEST_AGE_BAND


def round_half_up(value: float, digits: int = 2) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def paginate(records: Sequence[User], page: int, limit: int) -> Tuple[List[User], int]:
    """Slice ``records`` for a 1‑based ``page``.

    Pages past the end yield an empty list.  The second element is the
    total number of records before slicing.
    """
    start = max(page - 1, 0) * limit
    return list(records[start:start + limit]), len(records)


class UserStore:
    """Ordered in‑memory collection of users.

    Every public method holds a single re‑entrant lock for its whole
    duration, so the store may be shared between threads, e.g. by
    plain ``def`` handlers, which FastAPI runs in its threadpool.
    Records returned to callers are copies; modifying them does not
    affect the stored data.

    Parameters
    ----------
    clock : Callable[[], datetime], optional
        Source of timestamps.  Defaults to the current UTC time; tests
        inject a fixed or stepping clock.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._clock = clock or utcnow
        self._users: Dict[str, User] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def _generate_id(self) -> str:
        user_id = f"{ID_PREFIX}{self._next_id}"
        self._next_id += 1
        return user_id

    def _timestamp_after(self, previous: datetime) -> datetime:
        # updated_at must strictly increase even if the clock did not move.
        now = self._clock()
        if now <= previous:
            now = previous + timedelta(microseconds=1)
        return now

    def create_user(self, data: UserCreate) -> User:
        """Store a new user and return it.

        The id and both timestamps are assigned here; ``created_at``
        and ``updated_at`` start out equal.  ``age`` stays unset when the
        input did not provide it, so it is left out of responses.
        """
        with self._lock:
            now = self._clock()
            user = User(
                id=self._generate_id(),
                **data.model_dump(exclude_unset=True),
                created_at=now,
                updated_at=now,
            )
            self._users[user.id] = user
            logger.info("Created user %s", user.id)
            return user.model_copy()

    def list_users(self, page: int, limit: int) -> Tuple[List[User], int]:
        """Return one page of users in creation order and the total count."""
        with self._lock:
            items, total = paginate(list(self._users.values()), page, limit)
            return [user.model_copy() for user in items], total

    def get_user(self, user_id: str) -> Optional[User]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user is not None else None

    def update_user(
        self, user_id: str, changes: Union[UserUpdate, Mapping[str, Any]]
    ) -> Optional[User]:
        """Overwrite the provided fields of a user.

        ``changes`` may be a ``UserUpdate`` (only fields set by the
        client are applied) or a plain mapping.  Keys other than
        ``name``, ``email`` and ``age`` are ignored.  ``updated_at`` is
        bumped on every successful call, including an empty update.
        Returns ``None`` if the user does not exist.
        """
        if isinstance(changes, UserUpdate):
            changes = changes.changes()
        updates = {key: value for key, value in changes.items() if key in MUTABLE_FIELDS}
        with self._lock:
            current = self._users.get(user_id)
            if current is None:
                return None
            updates["updated_at"] = self._timestamp_after(current.updated_at)
            updated = current.model_copy(update=updates)
            self._users[user_id] = updated
            logger.info("Updated user %s (%s)", user_id, ", ".join(sorted(updates)))
            return updated.model_copy()

    def delete_user(self, user_id: str) -> bool:
        with self._lock:
            if self._users.pop(user_id, None) is None:
                return False
            logger.info("Deleted user %s", user_id)
            return True

    def search_users(self, query: str, page: int, limit: int) -> Tuple[List[User], int]:
        """Case‑insensitive substring search over name and email.

        The whole collection is filtered first and the matches are then
        paginated like :meth:`list_users`; the total is the number of
        matches.
        """
        needle = query.lower()
        with self._lock:
            matches = [
                user
                for user in self._users.values()
                if needle in user.name.lower() or needle in user.email.lower()
            ]
            items, total = paginate(matches, page, limit)
            return [user.model_copy() for user in items], total

    def get_stats(self) -> UserStats:
        """Return the user count, mean age and per‑band age counts.

        Users without an age are counted in ``total_users`` only.  The
        mean is rounded half‑up to two decimals and is ``None`` when no
        user has an age.  Bands without users are left out of
        ``age_groups``.
        """
        with self._lock:
            ages = [user.age for user in self._users.values() if user.age is not None]
            total = len(self._users)
        average_age = round_half_up(sum(ages) / len(ages)) if ages else None
        age_groups: Dict[str, int] = {}
        for age in ages:
            label = age_band(age)
            age_groups[label] = age_groups.get(label, 0) + 1
        return UserStats(total_users=total, average_age=average_age, age_groups=age_groups)

    def clear(self) -> None:
        """Remove every user.  The id counter keeps counting."""
        with self._lock:
            self._users.clear()
            logger.info("Cleared user store")
