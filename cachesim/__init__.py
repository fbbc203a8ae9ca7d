"""Cache simulator front end that replays address traces in an OpenGL window."""

__version__ = "0.1.0"