"""
Shared fixtures.

A real RSA key is generated once per session so signed URLs can be
verified end to end without any Google credentials.
"""

from dataclasses import replace
from datetime import datetime, timezone

import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi.testclient import TestClient

from src.api.dependencies import AppContext, build_context
from src.config.settings import Settings
from src.core.catalog.models import BucketObject
from src.infrastructure.storage.client import MockBucketClient
from src.infrastructure.storage.signing import SigningOptions, UrlSigner
from src.main import create_app

FIXED_NOW = datetime(2024, 1, 1, tzinfo=timezone.utc)
ACCESS_ID = "player@example-project.iam.gserviceaccount.com"
BUCKET = "videos.example.com"


@pytest.fixture(scope="session")
def rsa_private_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_private_key) -> bytes:
    return rsa_private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture
def signing_options(private_key_pem) -> SigningOptions:
    return SigningOptions(
        google_access_id=ACCESS_ID,
        private_key=private_key_pem,
        bucket_name=BUCKET,
    )


@pytest.fixture
def signer(signing_options) -> UrlSigner:
    """Signer with a frozen clock so expiry values are predictable."""
    return UrlSigner(signing_options, clock=lambda: FIXED_NOW)


@pytest.fixture
def sample_objects() -> list[BucketObject]:
    """A bucket listing in the order the bucket returns it (by name)."""
    return [
        BucketObject(name="holiday.mp4", updated="2023-01-01T00:00:00Z", size=1_000_000),
        BucketObject(name="notes.txt", updated="2023-06-01T00:00:00Z", size=200),
        BucketObject(name="surf session.mp4", updated="2023-03-15T12:00:00+00:00", size=5_000_000),
    ]


@pytest.fixture
def settings(tmp_path, private_key_pem) -> Settings:
    pem_file = tmp_path / "key.pem"
    pem_file.write_bytes(private_key_pem)
    return Settings(
        _env_file=None,
        storage_mock_mode=True,
        credentials_file="",
        pem_filename=str(pem_file),
        google_access_id=ACCESS_ID,
        bucket_name=BUCKET,
    )


@pytest.fixture
def app_context(settings, sample_objects) -> AppContext:
    context = build_context(settings)
    return replace(context, bucket=MockBucketClient(sample_objects))


@pytest.fixture
def client(app_context) -> TestClient:
    return TestClient(create_app(context=app_context))
