"""
Configuration management for the Upload API.

Contains the Pydantic settings object that is passed explicitly into
``create_app`` so that each application instance owns its own storage
directory and limits.
"""
