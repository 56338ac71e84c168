"""
RFC 4648 Base32 codec.

Authenticator apps expect a manually entered secret in Base32, so this is
the one representation of the secret that a user ever sees.

See also:
    https://tools.ietf.org/html/rfc4648#section-6
"""
from typing import Optional, Union

from .exceptions import InvalidEncodingError

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
PADDING_CHAR = "="

BLOCK_BITS = 5
BYTE_BITS = 8
# 8 symbols * 5 bits == 5 bytes * 8 bits, the smallest whole block
SYMBOLS_PER_BLOCK = 8

_SYMBOL_INDEX = {symbol: index for index, symbol in enumerate(ALPHABET)}


def encode(data: Optional[Union[bytes, bytearray, memoryview]], apply_padding: bool = True) -> Optional[str]:
    """
    Encodes raw bytes as Base32 text.

    :param data: bytes to encode; None is passed through as None
    :param apply_padding: append '=' until the output length is a multiple of 8
    :returns: Base32 text
    """
    if data is None:
        return None

    data = bytes(data)
    if not data:
        return ""

    symbols = []
    buffer = 0
    bits = 0
    for byte in data:
        buffer = (buffer << BYTE_BITS) | byte
        bits += BYTE_BITS
        while bits >= BLOCK_BITS:
            bits -= BLOCK_BITS
            symbols.append(ALPHABET[(buffer >> bits) & 0x1F])
        buffer &= (1 << bits) - 1

    # leftover bits are right-padded with zeros to form the final symbol
    if bits:
        symbols.append(ALPHABET[(buffer << (BLOCK_BITS - bits)) & 0x1F])

    # "1"      -> GE======   (1 byte  -> 6 padding chars)
    # "12"     -> GEZA====   (2 bytes -> 4)
    # "123"    -> GEZDG===   (3 bytes -> 3)
    # "1234"   -> GEZDGNA=   (4 bytes -> 1)
    # "12345"  -> GEZDGNBV   (5 bytes -> 0)
    if apply_padding:
        symbols.append(PADDING_CHAR * (-len(symbols) % SYMBOLS_PER_BLOCK))

    return "".join(symbols)


def decode(text: Optional[str]) -> Optional[bytes]:
    """
    Decodes Base32 text, with or without trailing padding, back to bytes.

    Only the uppercase alphabet is accepted. Blank text decodes to b"".

    :param text: Base32 text; None is passed through as None
    :returns: decoded bytes
    :raises InvalidEncodingError: if a non-alphabet character remains after
        stripping the trailing padding
    """
    if text is None:
        return None
    if not text.strip():
        return b""

    sanitized = text.rstrip(PADDING_CHAR)
    for position, symbol in enumerate(sanitized):
        if symbol not in _SYMBOL_INDEX:
            raise InvalidEncodingError(
                "Provided input string is not Base32: {!r} at position {}".format(symbol, position)
            )

    result = bytearray()
    buffer = 0
    bits = 0
    for symbol in sanitized:
        buffer = (buffer << BLOCK_BITS) | _SYMBOL_INDEX[symbol]
        bits += BLOCK_BITS
        if bits >= BYTE_BITS:
            bits -= BYTE_BITS
            result.append((buffer >> bits) & 0xFF)
            buffer &= (1 << bits) - 1

    # whatever is left in the buffer is the zero fill added by encode()
    return bytes(result)
