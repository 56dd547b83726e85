import pytest

from upload_api.errors import RandomSourceError
from upload_api.tokens import generate_token


def test_generate_token_length():
    for n in (1, 12, 16):
        token = generate_token(n)
        assert len(token) == 2 * n
        assert all(c in "0123456789abcdef" for c in token)


def test_generate_token_is_random():
    tokens = {generate_token(12) for _ in range(100)}
    assert len(tokens) == 100


def test_generate_token_rejects_non_positive_length():
    with pytest.raises(ValueError):
        generate_token(0)


def test_generate_token_wraps_entropy_failure(monkeypatch):
    def failing_token_hex(n):
        raise OSError("entropy source unavailable")

    monkeypatch.setattr("upload_api.tokens.secrets.token_hex", failing_token_hex)
    with pytest.raises(RandomSourceError, match="entropy source unavailable"):
        generate_token(12)
