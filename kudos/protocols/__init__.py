from kudos.protocols.store import CommittableStore, KVStore

__all__ = ["CommittableStore", "KVStore"]
