from thumbgen.adapters.outbound.persistence.local_file_storage import LocalFileStorage

__all__ = ["LocalFileStorage"]
