from __future__ import annotations

import binascii

import base58

from alephium_indexer.domain.exceptions import AddressFormatError, DecodeError


TOTAL_NUMBER_OF_GROUPS = 4

ADDRESS_TYPE_P2PKH = 0x00
ADDRESS_TYPE_P2MPKH = 0x01
ADDRESS_TYPE_P2SH = 0x02
ADDRESS_TYPE_P2C = 0x03

HASH_LENGTH = 32


def decode_hex(value: str) -> str:
    """Decode a hex packed byte string (symbol, name) to UTF-8 text."""
    if len(value) % 2 != 0:
        raise DecodeError(f"odd length hex string: {value!r}")
    try:
        raw = binascii.unhexlify(value)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"invalid hex string: {value!r}") from exc
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"hex string is not utf-8 text: {value!r}") from exc


def _decode_address(address: str) -> tuple[int, bytes]:
    if not address:
        raise AddressFormatError("empty address")
    try:
        decoded = base58.b58decode(address)
    except ValueError as exc:
        raise AddressFormatError(f"invalid base58 address: {address!r}") from exc
    if len(decoded) < 1 + HASH_LENGTH:
        raise AddressFormatError(f"address too short: {address!r}")
    return decoded[0], decoded[1:]


def _djb2(data: bytes) -> int:
    value = 5381
    for byte in data:
        value = ((value << 5) + value + byte) & 0xFFFFFFFF
    return value


def _xor_byte(value: int) -> int:
    return ((value >> 24) ^ (value >> 16) ^ (value >> 8) ^ value) & 0xFF


def _group_from_hash_bytes(data: bytes) -> int:
    hint = _djb2(data) | 1
    return _xor_byte(hint) % TOTAL_NUMBER_OF_GROUPS


def group_of_address(address: str) -> int:
    """Shard group an address belongs to; every contract call must carry it."""
    address_type, body = _decode_address(address)

    if address_type == ADDRESS_TYPE_P2C:
        if len(body) != HASH_LENGTH:
            raise AddressFormatError(f"invalid contract address length: {address!r}")
        return body[-1] % TOTAL_NUMBER_OF_GROUPS

    if address_type in (ADDRESS_TYPE_P2PKH, ADDRESS_TYPE_P2SH):
        if len(body) != HASH_LENGTH:
            raise AddressFormatError(f"invalid address length: {address!r}")
        return _group_from_hash_bytes(body)

    if address_type == ADDRESS_TYPE_P2MPKH:
        # body: compact length prefix, public key hashes, compact m
        if len(body) < 1 + HASH_LENGTH + 1:
            raise AddressFormatError(f"invalid multisig address length: {address!r}")
        return _group_from_hash_bytes(body[1 : 1 + HASH_LENGTH])

    raise AddressFormatError(f"unknown address type {address_type}: {address!r}")


def address_from_token_id(token_id: str) -> str:
    """Contract address of a token id, as returned by pool contract calls."""
    try:
        contract_id = binascii.unhexlify(token_id)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"invalid token id: {token_id!r}") from exc
    if len(contract_id) != HASH_LENGTH:
        raise DecodeError(f"token id must be {HASH_LENGTH} bytes: {token_id!r}")
    return base58.b58encode(bytes([ADDRESS_TYPE_P2C]) + contract_id).decode("ascii")


def token_id_from_address(address: str) -> str:
    address_type, body = _decode_address(address)
    if address_type != ADDRESS_TYPE_P2C or len(body) != HASH_LENGTH:
        raise AddressFormatError(f"not a contract address: {address!r}")
    return body.hex()
