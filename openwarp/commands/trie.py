"""Token trie with deepest-match lookup.

Keys are sequences of tokens rather than characters. A lookup walks as far
down the trie as the input allows and returns the deepest node on that walk
that carries a value, so shorter registrations act as fallbacks for longer
unregistered input.
"""

from dataclasses import dataclass
from typing import Generic, Iterator, Sequence, TypeVar

T = TypeVar("T")


class TrieNode(Generic[T]):
    """Single node in the token trie.

    A node may exist purely as a path segment, in which case ``value`` is None.
    """

    __slots__ = ("children", "value")

    def __init__(self, value: T | None = None) -> None:
        self.children: dict[str, "TrieNode[T]"] = {}
        self.value: T | None = value

    def get_child(self, token: str) -> "TrieNode[T] | None":
        """Get the child reached by a token, if any."""
        return self.children.get(token)

    def set_child(self, token: str, value: T | None = None) -> "TrieNode[T]":
        """Create (or replace) the child for a token and return it."""
        child: TrieNode[T] = TrieNode(value)
        self.children[token] = child
        return child

    @property
    def has_value(self) -> bool:
        """Whether this node carries a payload."""
        return self.value is not None


@dataclass(frozen=True)
class TrieMatch(Generic[T]):
    """Result of a deepest-match lookup.

    Attributes:
        value: Payload of the deepest matching node.
        consumed: Number of tokens walked to reach that node.
    """

    value: T
    consumed: int


class Trie(Generic[T]):
    """Prefix trie keyed by token sequences."""

    def __init__(self) -> None:
        self.root: TrieNode[T] = TrieNode()

    def insert(self, path: Sequence[str], value: T) -> None:
        """Store a value at a key path, creating empty nodes as needed.

        Overwrites any value already stored at the exact path. An empty path
        is ignored.

        Args:
            path: Tokens leading to the node.
            value: Payload to store.
        """
        if not path:
            return

        current = self.root
        for token in path:
            child = current.get_child(token)
            if child is None:
                child = current.set_child(token)
            current = child

        current.value = value

    def get(self, path: Sequence[str]) -> T | None:
        """Exact lookup: the value stored at a path, or None."""
        current: TrieNode[T] | None = self.root
        for token in path:
            current = current.get_child(token)
            if current is None:
                return None
        return current.value

    def deepest_match(self, path: Sequence[str]) -> TrieMatch[T] | None:
        """Find the deepest valued node along the walk described by a path.

        Args:
            path: Input tokens.

        Returns:
            The last valued node visited with its consumed length, or None if
            no node on the walk (root included) carries a value.
        """
        best: TrieMatch[T] | None = None
        current = self.root
        if current.has_value:
            best = TrieMatch(value=current.value, consumed=0)

        for depth, token in enumerate(path, start=1):
            child = current.get_child(token)
            if child is None:
                break
            current = child
            if current.has_value:
                best = TrieMatch(value=current.value, consumed=depth)

        return best

    def items(self) -> Iterator[tuple[tuple[str, ...], T]]:
        """Iterate over ``(path, value)`` for every valued node, depth first."""
        stack: list[tuple[tuple[str, ...], TrieNode[T]]] = [((), self.root)]
        while stack:
            path, node = stack.pop()
            if node.has_value:
                yield path, node.value
            for token in sorted(node.children, reverse=True):
                stack.append((path + (token,), node.children[token]))

    def paths(self) -> list[tuple[str, ...]]:
        """Key paths of every valued node, in sorted order."""
        return [path for path, _ in self.items()]

    def __len__(self) -> int:
        return sum(1 for _ in self.items())
