"""Tri-state selection tree over a filesystem root.

The model lazily materializes one directory level at a time and derives
each directory's selection state from the files beneath it. Aggregates
are pulled fresh on every query; the optional file-set cache is scoped to
a generation that advances on every ``set_selection`` and ``refresh``.
"""

import logging
import os
from collections.abc import Callable, Iterable

from ctxgen.tree.models import EntryKind, Node, ScanEntry, SelectionState
from ctxgen.tree.scanner import DirectoryScanner
from ctxgen.tree.selection import ChangeListener, ChangeNotifier, SelectionSet

logger = logging.getLogger(__name__)


def name_sort_key(name: str) -> tuple[str, str]:
    """Case-aware ordering key for entry names.

    Names compare case-insensitively first; on a tie the lower-case
    spelling sorts before the upper-case one.
    """
    return (name.casefold(), name.swapcase())


def aggregate_state(files: Iterable[str], selected: frozenset[str]) -> SelectionState:
    """Derive a directory's state from its descendant file paths.

    Args:
        files: Every file path under the directory.
        selected: Snapshot of the selection set.

    Returns:
        SELECTED if there is at least one file and all are selected,
        UNSELECTED if none are, PARTIAL otherwise.
    """
    files = list(files)
    all_selected = len(files) > 0 and all(path in selected for path in files)
    some_selected = any(path in selected for path in files)

    if all_selected:
        return SelectionState.SELECTED
    if some_selected:
        return SelectionState.PARTIAL
    return SelectionState.UNSELECTED


class SelectionTreeModel:
    """Selection tree bound to one root directory.

    Args:
        root: Tracked root directory. An empty root yields an empty tree.
        selection: Selection set handle; a fresh empty set if omitted.
        scanner: Directory scanner; a default scanner if omitted.
        cache_file_sets: Memoize descendant file lists per directory until
            the next ``set_selection``/``refresh``.
        notifier: Change channel; a fresh one if omitted.
    """

    def __init__(
        self,
        root: str | os.PathLike[str] | None,
        selection: SelectionSet | None = None,
        scanner: DirectoryScanner | None = None,
        *,
        cache_file_sets: bool = False,
        notifier: ChangeNotifier | None = None,
    ) -> None:
        self._root = os.path.abspath(os.fspath(root)) if root else ""
        self._selection = selection if selection is not None else SelectionSet()
        self._scanner = scanner or DirectoryScanner()
        self._notifier = notifier or ChangeNotifier()

        self._cache_file_sets = cache_file_sets
        self._generation = 0
        self._file_sets: dict[str, tuple[str, ...]] = {}
        self._file_sets_generation = 0

    @property
    def root(self) -> str:
        """Absolute root path, or an empty string if unset."""
        return self._root

    @property
    def selection(self) -> SelectionSet:
        """The selection set handle backing this tree."""
        return self._selection

    @property
    def scanner(self) -> DirectoryScanner:
        """The scanner used for listings and aggregates."""
        return self._scanner

    @property
    def generation(self) -> int:
        """Counter advanced by every ``set_selection`` and ``refresh``."""
        return self._generation

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_children(self, node: Node | None = None) -> list[Node]:
        """Materialize the children of ``node`` (or of the root).

        Directories come first, then files, each group ordered by
        ``name_sort_key``. Every node's state is computed against a single
        snapshot of the selection set.

        Args:
            node: Directory node to expand. None expands the root.

        Returns:
            Freshly built child nodes. Empty for a file node, an unset
            root, or an unreadable directory.
        """
        if not self._root:
            logger.info("No root directory set; tree is empty")
            return []

        if node is None:
            dir_path = self._root
        elif node.is_directory:
            dir_path = node.path
        else:
            return []

        selected = self._selection.snapshot()
        entries = self._scanner.list_entries(dir_path)

        directories = sorted(
            (e for e in entries if e.is_directory), key=lambda e: name_sort_key(e.name)
        )
        files = sorted(
            (e for e in entries if not e.is_directory), key=lambda e: name_sort_key(e.name)
        )

        return [self._build_node(dir_path, entry, selected) for entry in [*directories, *files]]

    def get_checked_leaves(self) -> list[Node]:
        """Return one selected file node per path in the selection set.

        Independent of which directories have been expanded. Stale paths
        are reported as-is.
        """
        return [
            Node(path=path, kind=EntryKind.FILE, selection_state=SelectionState.SELECTED)
            for path in sorted(self._selection.snapshot())
        ]

    def state_of(self, path: str | os.PathLike[str]) -> SelectionState:
        """Compute the selection state of any path under the root.

        Directories are aggregated from their descendant files; anything
        else is SELECTED exactly when it is in the selection set.
        """
        full_path = self._resolve(path)
        selected = self._selection.snapshot()
        if os.path.isdir(full_path):
            return aggregate_state(self.files_under(full_path), selected)
        if full_path in selected:
            return SelectionState.SELECTED
        return SelectionState.UNSELECTED

    def files_under(self, dir_path: str | os.PathLike[str]) -> tuple[str, ...]:
        """Return every file path under ``dir_path``, honoring the cache."""
        directory = self._resolve(dir_path)
        if not self._cache_file_sets:
            return tuple(self._scanner.list_all_files(directory))

        generation = self._generation
        file_sets = self._file_sets
        if self._file_sets_generation != generation:
            file_sets = {}
            self._file_sets = file_sets
            self._file_sets_generation = generation

        cached = file_sets.get(directory)
        if cached is None:
            cached = tuple(self._scanner.list_all_files(directory))
            # A refresh during the scan means the listing may be stale
            if self._generation == generation:
                file_sets[directory] = cached
        return cached

    # -------------------------------------------------------------------------
    # Mutation and notification
    # -------------------------------------------------------------------------

    def set_selection(self, paths: Iterable[str | os.PathLike[str]]) -> None:
        """Replace the selection set with exactly ``paths``.

        Relative paths are resolved against the root; empty entries are
        dropped. Consumers are notified that every previously computed
        state may be stale.
        """
        resolved = [self._resolve(p) for p in paths if os.fspath(p)]
        version = self._selection.replace(resolved)
        self._generation += 1
        logger.debug("Selection set to %d path(s) (version %d)", len(self._selection), version)
        self._notifier.fire(None)

    def refresh(self, node: Node | None = None) -> None:
        """Signal consumers to re-query, without changing any data.

        Args:
            node: The node that changed, or None for the whole tree.
        """
        self._generation += 1
        self._notifier.fire(node)

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register a change listener; returns its unsubscribe callable."""
        return self._notifier.subscribe(listener)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _build_node(self, dir_path: str, entry: ScanEntry, selected: frozenset[str]) -> Node:
        """Build a child node with its selection state."""
        full_path = os.path.join(dir_path, entry.name)
        if entry.is_directory:
            state = aggregate_state(self.files_under(full_path), selected)
        elif full_path in selected:
            state = SelectionState.SELECTED
        else:
            state = SelectionState.UNSELECTED
        return Node(path=full_path, kind=entry.kind, selection_state=state)

    def _resolve(self, path: str | os.PathLike[str]) -> str:
        """Make ``path`` absolute, relative paths resolving against the root."""
        raw = os.fspath(path)
        if self._root and not os.path.isabs(raw):
            raw = os.path.join(self._root, raw)
        return os.path.abspath(raw)
