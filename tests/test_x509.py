import dataclasses
import datetime

import pytest
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, ed25519, rsa
from cryptography.x509.oid import NameOID

from auraekit.config import AuraeConfig, AuthConfig, ConfigError, SystemConfig
from auraekit.x509 import X509Details, load_client_details


@pytest.fixture(scope="module")
def ca_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="module")
def client_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def make_cert(subject_attrs, public_key, issuer_cn, signing_key):
    now = datetime.datetime.now(datetime.timezone.utc)
    certificate = (
        x509.CertificateBuilder()
        .subject_name(x509.Name(subject_attrs))
        .issuer_name(x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, issuer_cn)]))
        .public_key(public_key)
        .serial_number(x509.random_serial_number())
        .not_valid_before(now)
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(signing_key, hashes.SHA256())
    )
    return certificate.public_bytes(serialization.Encoding.PEM)


def cn(name):
    return [x509.NameAttribute(NameOID.COMMON_NAME, name)]


@pytest.fixture(scope="module")
def client_pem(ca_key, client_key):
    return make_cert(
        cn("client.example.com"), client_key.public_key(), "ca.example.com", ca_key
    )


def test_common_names(client_pem):
    details = X509Details.from_pem(client_pem)
    assert details.subject_common_name == "client.example.com"
    assert details.issuer_common_name == "ca.example.com"


def test_rsa_key_algorithm(client_pem):
    assert X509Details.from_pem(client_pem).key_algorithm == "RSA"


def test_ed25519_key_algorithm(ca_key):
    key = ed25519.Ed25519PrivateKey.generate()
    pem = make_cert(cn("edge"), key.public_key(), "ca.example.com", ca_key)
    assert X509Details.from_pem(pem).key_algorithm == "ED25519"


def test_fingerprint_format(client_pem):
    fingerprint = X509Details.from_pem(client_pem).sha256_fingerprint
    prefix, _, digest = fingerprint.partition(":")
    assert prefix == "SHA256"
    assert len(digest) == 64
    assert all(char in "0123456789abcdef" for char in digest)


def test_fingerprint_differs_between_certificates(ca_key, client_key, client_pem):
    other = make_cert(cn("other"), client_key.public_key(), "ca.example.com", ca_key)
    first = X509Details.from_pem(client_pem).sha256_fingerprint
    second = X509Details.from_pem(other).sha256_fingerprint
    assert first != second
    assert first == X509Details.from_pem(client_pem).sha256_fingerprint


def test_accepts_text(client_pem):
    assert X509Details.from_pem(client_pem.decode("ascii")) == X509Details.from_pem(
        client_pem
    )


def test_details_as_dict(client_pem):
    data = dataclasses.asdict(X509Details.from_pem(client_pem))
    assert set(data) == {
        "subject_common_name",
        "issuer_common_name",
        "sha256_fingerprint",
        "key_algorithm",
    }
    assert X509Details(**data) == X509Details.from_pem(client_pem)


def test_missing_subject_common_name(ca_key, client_key):
    pem = make_cert(
        [x509.NameAttribute(NameOID.ORGANIZATION_NAME, "Example")],
        client_key.public_key(),
        "ca.example.com",
        ca_key,
    )
    with pytest.raises(ValueError, match="missing subject_common_name"):
        X509Details.from_pem(pem)


def test_unsupported_key_algorithm(ca_key):
    key = dsa.generate_private_key(key_size=1024)
    pem = make_cert(cn("dsa"), key.public_key(), "ca.example.com", ca_key)
    with pytest.raises(ValueError, match="missing key_algorithm"):
        X509Details.from_pem(pem)


def test_invalid_pem():
    with pytest.raises(ValueError):
        X509Details.from_pem(b"not a certificate")


def write_material(tmp_path, client_pem, client_key, ca_pem):
    ca_path = tmp_path / "ca.crt"
    crt_path = tmp_path / "client.crt"
    key_path = tmp_path / "client.key"
    ca_path.write_bytes(ca_pem)
    crt_path.write_bytes(client_pem)
    key_path.write_bytes(
        client_key.private_bytes(
            serialization.Encoding.PEM,
            serialization.PrivateFormat.PKCS8,
            serialization.NoEncryption(),
        )
    )
    return AuraeConfig(
        auth=AuthConfig(
            ca_crt=str(ca_path), client_crt=str(crt_path), client_key=str(key_path)
        ),
        system=SystemConfig(socket=str(tmp_path / "aurae.sock")),
    )


@pytest.fixture
def config(tmp_path, ca_key, client_key, client_pem):
    ca_pem = make_cert(
        cn("ca.example.com"), ca_key.public_key(), "ca.example.com", ca_key
    )
    return write_material(tmp_path, client_pem, client_key, ca_pem)


def test_load_client_details(config, client_pem):
    assert load_client_details(config) == X509Details.from_pem(client_pem)


def test_load_missing_ca(config, tmp_path):
    (tmp_path / "ca.crt").unlink()
    with pytest.raises(ConfigError, match="could not read ca crt"):
        load_client_details(config)


def test_load_missing_client_crt(config, tmp_path):
    (tmp_path / "client.crt").unlink()
    with pytest.raises(ConfigError, match="could not read client crt"):
        load_client_details(config)


def test_load_missing_client_key(config, tmp_path):
    (tmp_path / "client.key").unlink()
    with pytest.raises(ConfigError, match="could not read client key"):
        load_client_details(config)