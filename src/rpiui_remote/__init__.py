"""rpiui-remote — relay three GPIO buttons to a remote RPIUI demo over TCP."""

__version__ = "1.0.0"
