"""Toggle helper for consumers of the selection tree.

The tree has no incremental add/remove primitive. A consumer reacting to
a user toggle computes the full replacement set here and pushes it back
with ``SelectionTreeModel.set_selection``.
"""

from ctxgen.tree.model import SelectionTreeModel
from ctxgen.tree.models import Node, SelectionState


def toggled_selection(model: SelectionTreeModel, node: Node) -> list[str]:
    """Compute the selection that results from toggling ``node``.

    A file flips its own membership. A fully selected directory clears
    every file beneath it; a partially or unselected directory selects
    every file beneath it. The state is recomputed from the current
    selection rather than trusting ``node.selection_state``, which may be
    stale.

    Args:
        model: Tree whose selection is toggled.
        node: File or directory node the user toggled.

    Returns:
        Sorted list of the new selection's paths.
    """
    current = set(model.selection.snapshot())

    if not node.is_directory:
        if node.path in current:
            current.discard(node.path)
        else:
            current.add(node.path)
        return sorted(current)

    files = model.files_under(node.path)
    if model.state_of(node.path) == SelectionState.SELECTED:
        current.difference_update(files)
    else:
        current.update(files)
    return sorted(current)


def apply_toggle(model: SelectionTreeModel, node: Node) -> list[str]:
    """Toggle ``node`` and push the resulting selection into ``model``."""
    paths = toggled_selection(model, node)
    model.set_selection(paths)
    return paths
