"""Time zone laboratory: fixed-width reports over the installed time zones."""

__version__ = "3.0.0"
