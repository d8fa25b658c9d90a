"""Exceptions raised while decoding and converting a capture."""


class ConversionError(Exception):
    """Base class for every failure that aborts a conversion."""


class InputTooSmall(ConversionError):
    """The input is shorter than the fixed header."""

    def __init__(self, size: int, minimum: int):
        self.size = size
        self.minimum = minimum
        super().__init__(
            f"Input must be at least {minimum} bytes long (got {size} bytes)"
        )


class NoChannelsEnabled(ConversionError):
    """No analog channel is flagged on in the header."""

    def __init__(self):
        super().__init__("No analog channels detected in file")


class InputTruncated(ConversionError):
    """The header announces more sample data than the input holds."""

    def __init__(self, size: int, expected: int):
        self.size = size
        self.expected = expected
        super().__init__(
            f"Input holds {size} bytes but the header describes {expected} bytes"
        )


class ChannelCountUnsupported(ConversionError):
    """A row was requested for a channel count outside 1..4."""

    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Unsupported number of channels per row: {count}")


class RowRenderOverflow(ConversionError):
    """A rendered row did not fit its fixed width."""

    def __init__(self, text: str, width: int):
        self.text = text
        self.width = width
        super().__init__(
            f"Row {text!r} needs {len(text) + 1} bytes but the row width is {width}"
        )


class WorkerFailed(ConversionError):
    """A conversion worker raised something other than a ConversionError."""

    def __init__(self, start: int, stop: int, cause: BaseException):
        self.start = start
        self.stop = stop
        self.cause = cause
        super().__init__(f"Worker for samples [{start}, {stop}) failed: {cause!r}")
