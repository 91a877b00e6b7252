from .store import CoordinationStore, StoreOpener, open_coordination_store

__all__ = ['CoordinationStore', 'StoreOpener', 'open_coordination_store']
