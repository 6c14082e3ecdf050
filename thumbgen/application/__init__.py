from thumbgen.application.thumbnail_generator import ThumbnailGenerator

__all__ = ["ThumbnailGenerator"]
