from __future__ import annotations

from typing import TypedDict


class CalendarResponse(TypedDict, total=False):
    hash: str
    timestamp: str
    status: str
    stamp_id: str
    tx_id: str
    message: str


class NetworkInfo(TypedDict, total=False):
    name: str
    chain_id: str
    rpc: str
    is_testnet: bool


class ServerInfo(TypedDict, total=False):
    service: str
    name: str
    version: str
    status: str
    network: NetworkInfo
    networks: list[NetworkInfo]
    features: list[str]
    timestamp: str


class HealthResponse(TypedDict, total=False):
    status: str
    timestamp: str


class BatchStats(TypedDict, total=False):
    pending_stamps: int
    batch_processor: str
    processor_status: str
    batch_interval: str
