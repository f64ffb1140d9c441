"""Terminal shell for OpenWarp."""
