from .memory_store import MemoryStore
from .seed import default_seed_memory

__all__ = ["MemoryStore", "default_seed_memory"]
