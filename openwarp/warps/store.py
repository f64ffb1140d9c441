"""WarpStore: public and private warp indexes.

The store is the single source of truth for warp visibility. A warp is
public when the public index holds that very object under its name, and
private when its owner's private index does. Nothing is cached on the warp.
"""

import logging
import threading

from openwarp.warps.warp import Warp

logger = logging.getLogger(__name__)

# Separates owner from warp name in a qualified lookup, e.g. "alice:home"
OWNER_SEPARATOR = ":"


class WarpStore:
    """Owner of the public and private warp indexes.

    Handles:
    - Index access (reads and mutations serialized behind one lock)
    - Visibility queries
    - Name lookup for a sender
    - Registered player names
    """

    def __init__(self) -> None:
        self._public: dict[str, Warp] = {}
        self._private: dict[str, dict[str, Warp]] = {}
        self._players: set[str] = set()
        self._lock = threading.RLock()

    # =========================================================================
    # Mutation
    # =========================================================================

    def add_public(self, warp: Warp) -> Warp | None:
        """Put a warp in the public index.

        Returns:
            The warp previously stored under that name, if any.
        """
        with self._lock:
            previous = self._public.get(warp.name)
            self._public[warp.name] = warp
        logger.debug(f"Added public warp {warp.name}")
        return previous

    def add_private(self, warp: Warp) -> Warp | None:
        """Put a warp in its owner's private index.

        Returns:
            The warp previously stored under that owner and name, if any.
        """
        with self._lock:
            owned = self._private.setdefault(warp.owner, {})
            previous = owned.get(warp.name)
            owned[warp.name] = warp
        logger.debug(f"Added private warp {warp.owner}:{warp.name}")
        return previous

    def remove_public(self, name: str) -> Warp | None:
        """Remove a public warp by name. Returns the removed warp, if any."""
        with self._lock:
            return self._public.pop(name, None)

    def remove_private(self, owner: str, name: str) -> Warp | None:
        """Remove a private warp. Returns the removed warp, if any."""
        with self._lock:
            owned = self._private.get(owner)
            if owned is None:
                return None
            return owned.pop(name, None)

    def register_player(self, player_name: str) -> bool:
        """Record a player name. Returns True if it was not known yet."""
        with self._lock:
            if player_name in self._players:
                return False
            self._players.add(player_name)
            return True

    # =========================================================================
    # Visibility
    # =========================================================================

    def is_public(self, warp: Warp) -> bool:
        """Check whether the public index holds this warp."""
        with self._lock:
            return self._public.get(warp.name) is warp

    def is_private(self, warp: Warp) -> bool:
        """Check whether the owner's private index holds this warp."""
        with self._lock:
            owned = self._private.get(warp.owner)
            if owned is None:
                return False
            return owned.get(warp.name) is warp

    # =========================================================================
    # Queries
    # =========================================================================

    def get_public(self, name: str) -> Warp | None:
        """Get a public warp by name."""
        with self._lock:
            return self._public.get(name)

    def get_private(self, owner: str, name: str) -> Warp | None:
        """Get an owner's private warp by name."""
        with self._lock:
            return self._private.get(owner, {}).get(name)

    def find(self, sender_name: str, name: str) -> Warp | None:
        """Find the warp a sender means by a name.

        ``owner:name`` addresses another owner's private warp. A bare name
        checks the sender's own private warps first, then public warps.

        Args:
            sender_name: Name of the sender asking.
            name: Warp name as typed.

        Returns:
            The matching warp, or None.
        """
        if OWNER_SEPARATOR in name:
            owner, _, warp_name = name.partition(OWNER_SEPARATOR)
            return self.get_private(owner, warp_name)

        with self._lock:
            own = self.get_private(sender_name, name)
            if own is not None:
                return own
            return self.get_public(name)

    def public_warps(self) -> dict[str, Warp]:
        """Snapshot of the public index."""
        with self._lock:
            return dict(self._public)

    def private_warps(self, owner: str) -> dict[str, Warp]:
        """Snapshot of one owner's private index."""
        with self._lock:
            return dict(self._private.get(owner, {}))

    def owners(self) -> list[str]:
        """Owners that have a private index, sorted."""
        with self._lock:
            return sorted(self._private)

    @property
    def players(self) -> list[str]:
        """Registered player names, sorted."""
        with self._lock:
            return sorted(self._players)

    def all_warps(self) -> list[Warp]:
        """Every indexed warp; a warp held by both indexes appears once."""
        seen: dict[int, Warp] = {}
        with self._lock:
            for warp in self._public.values():
                seen[id(warp)] = warp
            for owned in self._private.values():
                for warp in owned.values():
                    seen[id(warp)] = warp
        return list(seen.values())

    def unresolved(self) -> list[Warp]:
        """Warps whose target world is unresolved."""
        return [warp for warp in self.all_warps() if not warp.is_resolved]
