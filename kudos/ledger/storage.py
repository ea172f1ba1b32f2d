"""Typed reads and writes on top of the raw byte store.

Undecodable values mean the store is corrupt, which is reported as a fatal
``StoreError`` rather than a domain error.
"""

from __future__ import annotations

from typing import TypeVar

from pydantic import BaseModel, ValidationError

from kudos.errors import StoreError
from kudos.keys import decode_uint64, encode_uint64
from kudos.protocols.store import KVStore

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_uint64(store: KVStore, key: bytes) -> int:
    raw = store.get(key)
    if raw is None:
        return 0
    try:
        return decode_uint64(raw)
    except ValueError as exc:
        raise StoreError(f"corrupt uint64 at key {key.hex()}: {exc}") from exc


def set_uint64(store: KVStore, key: bytes, value: int) -> None:
    store.set(key, encode_uint64(value))


def get_model(store: KVStore, key: bytes, model: type[ModelT]) -> ModelT | None:
    raw = store.get(key)
    if raw is None:
        return None
    return decode_model(key, raw, model)


def decode_model(key: bytes, raw: bytes, model: type[ModelT]) -> ModelT:
    try:
        return model.model_validate_json(raw)
    except ValidationError as exc:
        raise StoreError(f"corrupt {model.__name__} at key {key.hex()}") from exc


def set_model(store: KVStore, key: bytes, value: BaseModel) -> None:
    store.set(key, value.model_dump_json().encode("utf-8"))


__all__ = ["decode_model", "get_model", "get_uint64", "set_model", "set_uint64"]
