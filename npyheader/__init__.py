# flake8: noqa
from npyheader.config import config
from npyheader.dtype import DType, RecordDType, Simple, Structured
from npyheader.envelope import MAGIC_PREFIX, parse_header, read_magic
from npyheader.errors import (HeaderEncodingError, HeaderError, HeaderTooLargeError,
                              InvalidMagicError, MalformedFieldError,
                              MalformedHeaderError, ParseError,
                              TruncatedInputError, UnsupportedDescriptorError,
                              UnsupportedVersionError)
from npyheader.header import Header, encode_header, read_header
from npyheader.parser import loads, parse_prefix, parse_value
from npyheader.version import version as __version__
