"""Base contracts shared by all execution providers."""
