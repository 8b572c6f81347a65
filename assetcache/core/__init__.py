"""Core cache components: hashing, hash store, remote metadata, freshness, writing."""
