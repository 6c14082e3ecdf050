from thumbgen.adapters.outbound.ffmpeg.ffmpeg_command import CommandState, FFmpegCommand

__all__ = ["FFmpegCommand", "CommandState"]
