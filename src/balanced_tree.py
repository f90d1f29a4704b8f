import sys
from io import StringIO
from typing import Dict, Iterator, List, NamedTuple, Optional, TextIO, Tuple

BRANCH = "  |__"
INDENT = " " * 5
EMPTY_MESSAGE = "Tree is empty!"


class NodeView(NamedTuple):
    """Read-only snapshot of a tree entry."""
    key: int
    height: int


class BalancedTree:
    class Node:
        def __init__(self, key: int) -> None:
            self.key: int = key
            self.left: Optional['BalancedTree.Node'] = None
            self.right: Optional['BalancedTree.Node'] = None
            self.height: int = 0

    def __init__(self) -> None:
        self._root: Optional[BalancedTree.Node] = None
        self._size: int = 0
        self._rotations: Dict[str, int] = {"left": 0, "right": 0}

    @staticmethod
    def _get_height(node: Optional[Node]) -> int:
        if node is None:
            return -1
        return node.height

    def _update_height(self, node: Node) -> None:
        node.height = max(self._get_height(node.left), self._get_height(node.right)) + 1

    def _get_balance(self, node: Node) -> int:
        return self._get_height(node.left) - self._get_height(node.right)

    def _right_rotate(self, n: Node) -> Node:
        pivot = n.left
        assert pivot is not None

        n.left = pivot.right
        pivot.right = n

        self._update_height(n)
        self._update_height(pivot)
        self._rotations["right"] += 1

        return pivot

    def _left_rotate(self, n: Node) -> Node:
        pivot = n.right
        assert pivot is not None

        n.right = pivot.left
        pivot.left = n

        self._update_height(n)
        self._update_height(pivot)
        self._rotations["left"] += 1

        return pivot

    def _rebalance(self, node: Node) -> Node:
        balance = self._get_balance(node)

        if balance == 2:
            assert node.left is not None
            if self._get_balance(node.left) <= 0:
                node.left = self._left_rotate(node.left)
            node = self._right_rotate(node)
        elif balance == -2:
            assert node.right is not None
            if self._get_balance(node.right) >= 0:
                node.right = self._right_rotate(node.right)
            node = self._left_rotate(node)

        self._update_height(node)
        return node

    def _insert(self, node: Optional[Node], key: int) -> Node:
        if node is None:
            self._size += 1
            return BalancedTree.Node(key)

        if key < node.key:
            node.left = self._insert(node.left, key)
        elif key > node.key:
            node.right = self._insert(node.right, key)

        return self._rebalance(node)

    def insert(self, key: int) -> bool:
        """Insert ``key``, rebalancing on the way back up.

        Inserting a key that is already present leaves the tree untouched;
        the call still reports success.
        """
        self._root = self._insert(self._root, key)
        return True

    def _find(self, key: int) -> Optional[Node]:
        node = self._root
        while node is not None:
            if key == node.key:
                return node
            if key < node.key:
                node = node.left
            else:
                node = node.right
        return None

    def search(self, key: int) -> Optional[NodeView]:
        node = self._find(key)
        if node is None:
            return None
        return NodeView(node.key, node.height)

    def contains(self, key: int) -> bool:
        return self._find(key) is not None

    def root(self) -> Optional[NodeView]:
        if self._root is None:
            return None
        return NodeView(self._root.key, self._root.height)

    def parent_of(self, key: int) -> Optional[int]:
        """Key of the parent of ``key``; None for the root or a missing key."""
        parent: Optional[BalancedTree.Node] = None
        node = self._root
        while node is not None and node.key != key:
            parent = node
            if key < node.key:
                node = node.left
            else:
                node = node.right
        if node is None or parent is None:
            return None
        return parent.key

    def min(self) -> int:
        if self._root is None:
            raise ValueError("min from empty tree")
        node = self._root
        while node.left is not None:
            node = node.left
        return node.key

    def max(self) -> int:
        if self._root is None:
            raise ValueError("max from empty tree")
        node = self._root
        while node.right is not None:
            node = node.right
        return node.key

    def size(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        return self._root is None

    def clear(self) -> None:
        self._root = None
        self._size = 0
        self._rotations = {"left": 0, "right": 0}

    def height(self) -> int:
        return self._get_height(self._root)

    def rotation_counts(self) -> Dict[str, int]:
        return dict(self._rotations)

    def in_order(self) -> List[int]:
        result: List[int] = []
        stack: List[BalancedTree.Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            result.append(node.key)
            node = node.right
        return result

    def pre_order(self) -> List[int]:
        result: List[int] = []
        if self._root is None:
            return result
        stack: List[BalancedTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node.key)
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)
        return result

    def post_order(self) -> List[int]:
        result: List[int] = []
        if self._root is None:
            return result
        stack: List[BalancedTree.Node] = [self._root]
        while stack:
            node = stack.pop()
            result.append(node.key)
            if node.left is not None:
                stack.append(node.left)
            if node.right is not None:
                stack.append(node.right)
        result.reverse()
        return result

    def _display_subtree(self, node: Optional[Node], prefix: str, side: str, out: TextIO) -> None:
        if node is None:
            return
        out.write(f"{prefix}{node.key}({node.height}) ({side})\n")
        self._display_subtree(node.left, INDENT + prefix, "LEFT", out)
        self._display_subtree(node.right, INDENT + prefix, "RIGHT", out)

    def display(self, out: Optional[TextIO] = None) -> None:
        """Write the tree to ``out`` in pre-order, one node per line.

        The root is printed alone as ``key(height)``. Every other node is
        indented five spaces per level below the root's children and tagged
        with the side of its parent it hangs from::

            2(1)
              |__1(0) (LEFT)
              |__3(0) (RIGHT)

        ``out`` defaults to the current ``sys.stdout``.
        """
        if out is None:
            out = sys.stdout
        if self._root is None:
            out.write(EMPTY_MESSAGE + "\n")
            return
        out.write(f"{self._root.key}({self._root.height})\n")
        self._display_subtree(self._root.left, BRANCH, "LEFT", out)
        self._display_subtree(self._root.right, BRANCH, "RIGHT", out)

    def render(self) -> str:
        buffer = StringIO()
        self.display(buffer)
        return buffer.getvalue()

    def _clone(self, node: Optional[Node]) -> Optional[Node]:
        if node is None:
            return None
        twin = BalancedTree.Node(node.key)
        twin.height = node.height
        twin.left = self._clone(node.left)
        twin.right = self._clone(node.right)
        return twin

    def copy(self) -> 'BalancedTree':
        clone = BalancedTree()
        clone._root = self._clone(self._root)
        clone._size = self._size
        clone._rotations = dict(self._rotations)
        return clone

    def _is_balanced(self, node: Optional[Node]) -> bool:
        if node is None:
            return True
        if abs(self._get_balance(node)) > 1:
            return False
        return self._is_balanced(node.left) and self._is_balanced(node.right)

    def is_balanced(self) -> bool:
        return self._is_balanced(self._root)

    def _check(self, node: Optional[Node], low: Optional[int], high: Optional[int]) -> Tuple[bool, int]:
        # Returns (valid, true height) for the subtree, ignoring cached heights.
        if node is None:
            return True, -1
        if (low is not None and node.key <= low) or (high is not None and node.key >= high):
            return False, 0
        left_ok, left_height = self._check(node.left, low, node.key)
        right_ok, right_height = self._check(node.right, node.key, high)
        height = max(left_height, right_height) + 1
        valid = (
            left_ok
            and right_ok
            and abs(left_height - right_height) <= 1
            and node.height == height
        )
        return valid, height

    def is_valid(self) -> bool:
        """True when ordering, stored heights and AVL balance all hold."""
        valid, _ = self._check(self._root, None, None)
        return valid

    def __len__(self) -> int:
        return self._size

    def __contains__(self, key: int) -> bool:
        return self.contains(key)

    def __iter__(self) -> Iterator[int]:
        return iter(self.in_order())

    def __repr__(self) -> str:
        return f"BalancedTree({self.in_order()})"

    def __str__(self) -> str:
        return f"BalancedTree(size={self._size}, height={self.height()})"
