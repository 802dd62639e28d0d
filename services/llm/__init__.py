from .completion_client import CompletionClient, truncate_content
from .image_client import GeneratedImage, ImageClient

__all__ = ["CompletionClient", "GeneratedImage", "ImageClient", "truncate_content"]
