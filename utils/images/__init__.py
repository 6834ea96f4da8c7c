# Images subpackage - screenshot encoding
from .processor import encode_screenshot

__all__ = ["encode_screenshot"]
