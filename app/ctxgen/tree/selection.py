"""Selection set handle and change notification channel.

The selection set is the externally owned ground truth of checked file
paths. It is only ever replaced wholesale, so a reader holding a snapshot
always sees either the old or the new set in full.
"""

import logging
import os
from collections.abc import Callable, Iterable, Iterator

from ctxgen.tree.models import Node

logger = logging.getLogger(__name__)

ChangeListener = Callable[[Node | None], None]


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Normalize a path to the absolute form used as node identity."""
    return os.path.abspath(os.fspath(path))


class SelectionSet:
    """Versioned, replace-only set of selected file paths.

    Args:
        paths: Initial selected paths. Relative paths are made absolute
            against the current working directory.
    """

    def __init__(self, paths: Iterable[str | os.PathLike[str]] = ()) -> None:
        self._paths: frozenset[str] = frozenset(normalize_path(p) for p in paths)
        self._version = 0

    @property
    def version(self) -> int:
        """Number of replacements applied so far."""
        return self._version

    def snapshot(self) -> frozenset[str]:
        """Return the current set of paths.

        The returned frozenset is immutable, so it stays consistent for the
        whole duration of a traversal even if ``replace`` runs meanwhile.
        """
        return self._paths

    def replace(self, paths: Iterable[str | os.PathLike[str]]) -> int:
        """Replace the whole set with ``paths`` (deduplicated).

        Returns:
            The new version number.
        """
        new_paths = frozenset(normalize_path(p) for p in paths)
        # Single reference assignment; readers never see a partial set
        self._paths = new_paths
        self._version += 1
        logger.debug("Selection replaced: %d path(s), version %d", len(new_paths), self._version)
        return self._version

    def __contains__(self, path: object) -> bool:
        return path in self._paths

    def __len__(self) -> int:
        return len(self._paths)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._paths))

    def __repr__(self) -> str:
        return f"SelectionSet({len(self._paths)} paths, version={self._version})"


class ChangeNotifier:
    """Observer channel for tree change events.

    Listeners receive the changed node, or ``None`` when everything may
    have changed.
    """

    def __init__(self) -> None:
        self._listeners: list[ChangeListener] = []

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a listener.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def fire(self, node: Node | None = None) -> None:
        """Notify every listener of a change.

        A listener that raises is logged and does not prevent the
        remaining listeners from being called.
        """
        for listener in list(self._listeners):
            try:
                listener(node)
            except Exception:
                logger.exception("Change listener %r failed", listener)

    def __len__(self) -> int:
        return len(self._listeners)
