# re-export common schemas for simpler imports
from .link import ShortenRequest, LinkResponse, ShortenResponse, MessageResponse

__all__ = [
    "ShortenRequest",
    "LinkResponse",
    "ShortenResponse",
    "MessageResponse",
]
