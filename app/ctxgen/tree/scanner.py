"""Directory scanner for the selection tree.

Lists the immediate entries of a directory (with an optional hidden-entry
filter) and collects every descendant file path for aggregate selection
states. Faults are never fatal: an unreadable directory or an entry that
cannot be inspected is reported to a warning channel and skipped.
"""

import errno
import logging
import os
import stat
from collections.abc import Callable
from pathlib import Path

from ctxgen.tree.models import EntryKind, ScanEntry, ScanIssue, ScanIssueKind

logger = logging.getLogger(__name__)

WarningChannel = Callable[[ScanIssue], None]

DEFAULT_HIDDEN_PREFIX = "."


def log_issue(issue: ScanIssue) -> None:
    """Default warning channel: log the issue at WARNING level."""
    logger.warning("%s", issue.message)


class DirectoryScanner:
    """Reads directory levels and descendant file sets.

    Args:
        exclude_hidden: If True, entries whose name starts with
            ``hidden_prefix`` are left out of ``list_entries``.
        hidden_prefix: Name prefix marking an entry as hidden.
        warn: Channel receiving recoverable scan issues. Defaults to
            logging each issue.
    """

    def __init__(
        self,
        *,
        exclude_hidden: bool = True,
        hidden_prefix: str = DEFAULT_HIDDEN_PREFIX,
        warn: WarningChannel | None = None,
    ) -> None:
        if not hidden_prefix:
            msg = "Hidden prefix cannot be empty"
            raise ValueError(msg)
        self._exclude_hidden = exclude_hidden
        self._hidden_prefix = hidden_prefix
        self._warn = warn or log_issue

    @property
    def exclude_hidden(self) -> bool:
        """Whether hidden entries are filtered out of listings."""
        return self._exclude_hidden

    def is_hidden(self, name: str) -> bool:
        """Check if an entry name carries the hidden marker."""
        return name.startswith(self._hidden_prefix)

    def list_entries(self, dir_path: str | Path) -> list[ScanEntry]:
        """List one directory level, classifying each entry.

        Entries are returned in the order the operating system reports
        them; callers normalize ordering. Hidden entries are dropped before
        classification when filtering is enabled. Symlinked directories are
        left out, matching ``list_all_files``.

        Args:
            dir_path: Directory to list.

        Returns:
            Classified entries. Empty if the directory cannot be read.
        """
        directory = os.fspath(dir_path)
        try:
            names = os.listdir(directory)
        except OSError as e:
            self._report(ScanIssueKind.DIRECTORY_UNREADABLE, directory, e)
            return []

        entries: list[ScanEntry] = []
        for name in names:
            if self._exclude_hidden and self.is_hidden(name):
                continue

            full_path = os.path.join(directory, name)
            try:
                kind = self._classify(full_path)
            except OSError as e:
                self._report(ScanIssueKind.ENTRY_UNSTATTABLE, full_path, e)
                continue

            # Aggregates never descend into linked directories, so neither do listings
            if kind is EntryKind.DIRECTORY and os.path.islink(full_path):
                logger.debug("Skipping symlinked directory %s", full_path)
                continue

            entries.append(ScanEntry(name=name, kind=kind))

        return entries

    def list_all_files(self, dir_path: str | Path) -> list[str]:
        """Collect every descendant file path, depth first.

        Unreadable subtrees contribute nothing and are not reported to the
        warning channel. Symlinked directories are not followed.

        Args:
            dir_path: Directory to traverse.

        Returns:
            Absolute file paths under ``dir_path``.
        """
        results: list[str] = []
        self._collect_files(os.fspath(dir_path), results)
        return results

    def _collect_files(self, directory: str, results: list[str]) -> None:
        """Append the files under ``directory`` to ``results`` recursively."""
        subdirs: list[str] = []
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            subdirs.append(entry.path)
                        elif entry.is_file():
                            results.append(entry.path)
                    except OSError as e:
                        logger.debug("Skipping %s during traversal: %s", entry.path, e)
        except OSError as e:
            logger.debug("Cannot traverse %s: %s", directory, e)
            return

        # Directory handle is closed before descending
        for subdir in subdirs:
            self._collect_files(subdir, results)

    @staticmethod
    def _classify(path: str) -> EntryKind:
        """Classify a path as file or directory.

        Follows symlinks, so a dangling link raises OSError. A directory
        that cannot be opened for listing is rejected as well.

        Raises:
            OSError: If the entry cannot be inspected.
        """
        st = os.stat(path)
        if not stat.S_ISDIR(st.st_mode):
            return EntryKind.FILE

        if not os.access(path, os.R_OK | os.X_OK):
            raise PermissionError(errno.EACCES, "Permission denied", path)
        return EntryKind.DIRECTORY

    def _report(self, kind: ScanIssueKind, path: str, error: OSError) -> None:
        """Push a recoverable issue to the warning channel."""
        issue = ScanIssue(kind=kind, path=path, detail=error.strerror or str(error))
        try:
            self._warn(issue)
        except Exception:
            logger.exception("Warning channel failed for %s", path)
