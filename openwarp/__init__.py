"""OpenWarp - named warp points with a trie-based command dispatcher."""

__version__ = "0.1.0"
