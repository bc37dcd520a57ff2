from __future__ import annotations
import logging
from typing import Tuple
import numpy as np

from ..models.image import Image
from ..errors import MalformedHeader, UnsupportedFormat, InvalidDimensions, TruncatedData

logger = logging.getLogger(__name__)

WHITESPACE = b" \t\n\r\v\f"
COMMENT = ord("#")
MAGIC = b"P6"
MAXVAL = 255
MAX_HEADER_DIGITS = 20
# Netpbm magics we recognise but do not decode
OTHER_NETPBM_MAGICS = {b"P1", b"P2", b"P3", b"P4", b"P5", b"P7"}


class PpmCodecService:
    """
    Binary PPM (P6) <-> Image.
    No file I/O here, bytes in and bytes out.
    """

    @staticmethod
    def _skip_separators(data: bytes, offset: int) -> int:
        """Skip whitespace and `#` comments (which run to end of line)."""
        size = len(data)
        while offset < size:
            byte = data[offset]
            if byte == COMMENT:
                while offset < size and data[offset] not in b"\n\r":
                    offset += 1
            elif byte in WHITESPACE:
                offset += 1
            else:
                break
        return offset

    def _next_token(self, data: bytes, offset: int) -> Tuple[bytes, int]:
        """
        Returns (token, offset just past the token).
        An empty token means the input ended first.
        """
        start = self._skip_separators(data, offset)
        end = start
        while end < len(data) and data[end] not in WHITESPACE and data[end] != COMMENT:
            end += 1
        return data[start:end], end

    @staticmethod
    def _parse_decimal(token: bytes, field: str) -> int:
        if not token.isdigit():
            raise MalformedHeader(f"{field} is not a decimal number: {token[:16]!r}")
        if len(token) > MAX_HEADER_DIGITS:
            raise MalformedHeader(f"{field} has too many digits ({len(token)})")
        return int(token)

    def _parse_dimension(self, token: bytes, field: str) -> int:
        if not token:
            raise InvalidDimensions(f"Missing {field}")
        value = self._parse_decimal(token, field)
        if value == 0:
            raise InvalidDimensions(f"{field.capitalize()} must be positive, got 0")
        return value

    def decode(self, data: bytes) -> Image:
        """
        Parse a P6 byte stream.

        Raises:
            MalformedHeader: bad magic token or unparsable header field.
            UnsupportedFormat: another Netpbm flavour, or maxval != 255.
            InvalidDimensions: width/height missing or zero.
            TruncatedData: fewer than width*height*3 pixel bytes.
        """
        data = bytes(data)

        magic, offset = self._next_token(data, 0)
        if magic != MAGIC:
            if magic in OTHER_NETPBM_MAGICS:
                raise UnsupportedFormat(f"Only binary PPM (P6) is supported, got {magic.decode('ascii')}")
            raise MalformedHeader(f"Bad magic number: {magic[:16]!r}")

        token, offset = self._next_token(data, offset)
        width = self._parse_dimension(token, "width")
        token, offset = self._next_token(data, offset)
        height = self._parse_dimension(token, "height")

        token, offset = self._next_token(data, offset)
        if not token:
            raise MalformedHeader("Missing max color value")
        maxval = self._parse_decimal(token, "max color value")
        if maxval != MAXVAL:
            raise UnsupportedFormat(f"Max color value must be {MAXVAL}, got {maxval}")

        # Exactly one whitespace byte separates the header from the raster
        if offset >= len(data):
            raise TruncatedData("Header ends without pixel data")
        if data[offset] not in WHITESPACE:
            raise MalformedHeader(f"Header must end with a single whitespace byte, found {data[offset]:#04x}")
        offset += 1

        expected = width * height * 3
        available = len(data) - offset
        if available < expected:
            raise TruncatedData(f"Expected {expected} bytes of pixel data for {width}x{height}, got {available}")
        if available > expected:
            logger.debug(f"Ignoring {available - expected} trailing bytes after pixel data")

        raster = np.frombuffer(data, dtype=np.uint8, count=expected, offset=offset)
        logger.debug(f"Decoded P6 image {width}x{height}")
        return Image(pixels=raster.reshape(height, width, 3))

    @staticmethod
    def encode(image: Image) -> bytes:
        """Serialize an Image as P6 with maxval 255."""
        header = f"P6\n{image.width} {image.height}\n{MAXVAL}\n".encode("ascii")
        return header + np.ascontiguousarray(image.pixels).tobytes()
