class _BaseHeaderError(ValueError):
    _msg = ""

    def __init__(self, *args):
        super().__init__(self._msg.format(*args))


class HeaderError(_BaseHeaderError):
    """Base class for all errors raised while reading or writing a header."""
    _msg = "{0}"


class InvalidMagicError(HeaderError):
    _msg = "invalid magic string; expected {0!r}, found {1!r}"


class UnsupportedVersionError(HeaderError):
    _msg = "unsupported format version: {0}.{1}"

    def __init__(self, major, minor):
        super().__init__(major, minor)
        self.major = major
        self.minor = minor


class ParseError(HeaderError):
    _msg = "syntax error at offset {0}: {1}"

    def __init__(self, offset, reason):
        super().__init__(offset, reason)
        self.offset = offset
        self.reason = reason


class TruncatedInputError(ParseError):

    def __init__(self, offset, needed):
        super().__init__(offset, "unexpected end of input, {} more byte(s) needed"
                         .format(needed))
        self.needed = needed


class MalformedFieldError(HeaderError):
    _msg = "malformed structured field {0!r}: {1}"


class UnsupportedDescriptorError(HeaderError):
    _msg = "unsupported descriptor: {0!r}"


class MalformedHeaderError(HeaderError):
    _msg = "malformed header: {0}"


class HeaderTooLargeError(HeaderError):
    _msg = "header of {0} bytes does not fit a version 1.0 length field (max {1})"


class HeaderEncodingError(HeaderError):
    _msg = "version 1.0 headers must be ASCII, found {0!r} at position {1}"
