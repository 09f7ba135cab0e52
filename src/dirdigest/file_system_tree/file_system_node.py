"""Node representation for entries in the digest tree view."""

from typing import Any, Optional

from anytree import Node


class FileSystemNode(Node):  # type: ignore
    """Node class representing a file or directory shown in the digest tree.

    Extends anytree.Node with the attributes needed to render a line of the tree. Nodes
    are created only for emitted entries and the directories leading to them, so the tree
    reflects structure rather than content inclusion.

    Attributes:
        name (str): The name of the file or directory (just the basename).
        parent (Optional[FileSystemNode]): The parent node in the tree.
        is_dir (bool): True if this node represents a directory.
        error (Optional[str]): Access or read failure recorded for the entry.

    Example:
        >>> root = FileSystemNode("project", is_dir=True)
        >>> child = FileSystemNode("main.py", parent=root)
        >>> child.label
        'main.py'
        >>> root.label
        'project/'
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        is_dir: bool = False,
        error: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir
        self.error = error

    @property
    def label(self) -> str:
        label = f"{self.name}/" if self.is_dir else self.name
        if self.error:
            label += " [unreadable]"
        return label

    def child(self, name: str) -> Optional["FileSystemNode"]:
        # Children are appended in walker order, so the most recent one is the only candidate
        if self.children and self.children[-1].name == name:
            return self.children[-1]
        return None
