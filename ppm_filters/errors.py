"""
Error kinds raised by the codec and the pipeline.
Library code only raises these; the CLI is the one place that catches them.
"""


class PpmError(Exception):
    """Root of every error this package raises on purpose."""


class PpmFormatError(PpmError, ValueError):
    """The byte stream is not a P6 image we can decode."""


class MalformedHeader(PpmFormatError):
    pass


class UnsupportedFormat(PpmFormatError):
    """Valid Netpbm, but not P6 with maxval 255."""


class InvalidDimensions(PpmFormatError):
    pass


class TruncatedData(PpmFormatError):
    pass


class UnknownOperation(PpmError, ValueError):
    pass
