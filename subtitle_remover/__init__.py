"""Remove burned-in subtitles from images with Gemini image editing."""

__version__ = "0.1.0"
