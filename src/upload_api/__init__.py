"""Minimal HTTP file upload/download service."""
