from thumbgen.ports.outbound.file_deletion_port import FileDeletionPort
from thumbgen.ports.outbound.media_command_port import MediaCommandPort

__all__ = [
    "MediaCommandPort",
    "FileDeletionPort",
]
