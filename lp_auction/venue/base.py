"""Shared journaling for simulated venue components."""

import copy
from typing import Any, ClassVar


class JournaledComponent:
    """Snapshot/restore of the fields named in `_journal_fields`.

    Only a component's own state is journaled; references to other
    components are left alone.
    """

    _journal_fields: ClassVar[tuple[str, ...]] = ()

    def snapshot(self) -> dict[str, Any]:
        return {name: copy.deepcopy(getattr(self, name)) for name in self._journal_fields}

    def restore(self, snapshot: dict[str, Any]) -> None:
        for name, value in snapshot.items():
            setattr(self, name, value)
