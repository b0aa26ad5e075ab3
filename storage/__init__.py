import logging

from .base import Repository
from .memory import InMemoryRepository

logger = logging.getLogger(__name__)


def create_repository(backend='memory'):
    """Build the configured storage backend"""
    if backend == 'supabase':
        # Imported here so the memory backend works without Supabase credentials
        from .supabase_store import SupabaseRepository
        return SupabaseRepository()

    if backend != 'memory':
        logger.warning(f"⚠️ Unknown storage backend '{backend}', falling back to memory")
    return InMemoryRepository()


__all__ = ['Repository', 'InMemoryRepository', 'create_repository']
