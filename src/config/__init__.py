"""
Environment configuration loading and validation.

Provides declarative, typed and immutable configuration objects built from
environment variables (or a .env file), with upfront validation.
"""
