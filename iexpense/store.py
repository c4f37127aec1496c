"""
Expense Store

The store owns the ordered list of expense records for a session.
It is created once, loads whatever list was saved last time, and
after every mutation:

1. writes the full list back to storage
2. hands a StoreChange to each observer, in subscription order

Loading never fails from the caller's point of view: a missing or
unreadable blob simply yields an empty list. Write failures, and
records the chosen encoding cannot represent, are logged and recorded
on the change, never raised.
"""

from typing import Callable, Iterable, Iterator, Optional, Union

import structlog

from iexpense.audit import AuditLogger, configure_logging
from iexpense.codec import (
    DecodeError,
    EncodeError,
    decode_items,
    encode_items,
    suffix_for,
)
from iexpense.config import Settings, StorageFormat, get_settings
from iexpense.config.settings import DEFAULT_STORAGE_KEY
from iexpense.models.change import ChangeType, StoreChange
from iexpense.models.expense import ExpenseItem
from iexpense.services.storage import (
    InMemoryStorage,
    LocalFileStorage,
    StorageError,
    StorageInterface,
)


logger = structlog.get_logger(__name__)

Observer = Callable[[StoreChange], None]


class ExpenseStore:
    """
    Observable, persisted list of expense records.

    Insertion order is display order. Consumers that need to mutate
    the list share this one instance.
    """

    def __init__(
        self,
        storage: Optional[StorageInterface] = None,
        key: str = DEFAULT_STORAGE_KEY,
        fmt: Union[StorageFormat, str] = StorageFormat.JSON,
    ):
        """
        Create the store and load its saved list.

        Args:
            storage: Where the list is mirrored. Defaults to process memory.
            key: Storage key the list lives under
            fmt: Encoding of the stored blob
        """
        self._storage = storage if storage is not None else InMemoryStorage()
        self._key = key
        self._format = StorageFormat(fmt)
        self._observers: list[Observer] = []
        self._persisted = True
        self._items: list[ExpenseItem] = self._load()

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    @property
    def items(self) -> tuple[ExpenseItem, ...]:
        """Snapshot of the records in display order."""
        return tuple(self._items)

    @property
    def total(self) -> float:
        """Sum of all amounts."""
        return sum((item.amount for item in self._items), 0.0)

    @property
    def persisted(self) -> bool:
        """Whether the last write reached storage."""
        return self._persisted

    @property
    def key(self) -> str:
        return self._key

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[ExpenseItem]:
        return iter(tuple(self._items))

    def __getitem__(self, index: int) -> ExpenseItem:
        return self._items[index]

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add(self, item: ExpenseItem) -> StoreChange:
        """
        Append a record to the end of the list.

        Always succeeds; see StoreChange.persisted for whether the
        updated list was saved.
        """
        self._items.append(item)
        persisted = self._save()

        change = StoreChange(
            change_type=ChangeType.ADDED,
            items=(item,),
            offsets=(len(self._items) - 1,),
            count=len(self._items),
            persisted=persisted,
        )
        self._notify(change)
        return change

    def remove(self, offsets: Iterable[int]) -> Optional[StoreChange]:
        """
        Remove the records at the given positions.

        Survivors keep their relative order. Repeated offsets count
        once. An empty set of offsets changes nothing and returns None.

        Raises:
            IndexError: If any offset is outside the current list.
                        Nothing is removed in that case.
        """
        positions = sorted(set(offsets))
        if not positions:
            return None

        size = len(self._items)
        for position in positions:
            if not 0 <= position < size:
                raise IndexError(
                    f"Offset {position} out of range for {size} expense(s)"
                )

        removed = tuple(self._items[position] for position in positions)
        doomed = set(positions)
        self._items = [
            item for index, item in enumerate(self._items)
            if index not in doomed
        ]
        persisted = self._save()

        change = StoreChange(
            change_type=ChangeType.REMOVED,
            items=removed,
            offsets=tuple(positions),
            count=len(self._items),
            persisted=persisted,
        )
        self._notify(change)
        return change

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register a callback for every change.

        Returns:
            A function that removes the callback again. Calling it
            more than once is harmless.
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            try:
                self._observers.remove(observer)
            except ValueError:
                pass

        return unsubscribe

    def _notify(self, change: StoreChange) -> None:
        # Exceptions from observers propagate to the mutating caller.
        for observer in list(self._observers):
            observer(change)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _load(self) -> list[ExpenseItem]:
        try:
            data = self._storage.read(self._key)
        except StorageError as e:
            logger.warning(
                "expense_list_read_failed",
                key=self._key,
                error=str(e),
            )
            return []

        if data is None:
            return []

        try:
            items = decode_items(data, self._format)
        except DecodeError as e:
            logger.warning(
                "expense_list_decode_failed",
                key=self._key,
                format=self._format.value,
                error=str(e),
            )
            return []

        logger.debug("expense_list_loaded", key=self._key, count=len(items))
        return items

    def _save(self) -> bool:
        try:
            data = encode_items(self._items, self._format)
        except EncodeError as e:
            logger.error(
                "expense_list_encode_failed",
                key=self._key,
                format=self._format.value,
                count=len(self._items),
                error=str(e),
            )
            self._persisted = False
            return False

        try:
            self._storage.write(self._key, data)
        except StorageError as e:
            logger.error(
                "expense_list_write_failed",
                key=self._key,
                count=len(self._items),
                error=str(e),
            )
            self._persisted = False
            return False

        self._persisted = True
        return True


def create_store(
    settings: Optional[Settings] = None,
    storage: Optional[StorageInterface] = None,
    audit: bool = True,
) -> ExpenseStore:
    """
    Factory function wiring a ready-to-use store.

    Args:
        settings: Settings to use. Defaults to get_settings().
        storage: Storage override. Defaults to the configured data directory.
        audit: Attach an AuditLogger to the store.

    Returns:
        The store, loaded from storage
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    logging_settings = settings.logging

    configure_logging(logging_settings.level, logging_settings.format)

    if storage is None:
        storage = LocalFileStorage(
            storage_settings.data_dir,
            suffix=suffix_for(storage_settings.storage_format),
        )

    store = ExpenseStore(
        storage=storage,
        key=storage_settings.storage_key,
        fmt=storage_settings.storage_format,
    )

    if audit:
        AuditLogger().attach(store)

    logger.info(
        "expense_store_ready",
        key=store.key,
        format=storage_settings.storage_format.value,
        count=len(store),
    )
    return store
