import logging
from logging import NullHandler

logging.getLogger(__name__).addHandler(NullHandler())

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0"

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]
DEFAULT_METHOD = "GET"

URLENCODED_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"
FILE_CONTENT_TYPE = "application/octet-stream"

RESPONSE_BANNER = "-----------------RESPONSE-------------------"
