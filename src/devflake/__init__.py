"""devflake — platform-parameterized build and dev-shell resolver."""

__version__ = "0.1.0"
