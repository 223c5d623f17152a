"""Identity details read from a client's X.509 certificate."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec, ed25519, rsa
from cryptography.x509.oid import NameOID

from auraekit.config import AuraeConfig, ConfigError

__all__ = ["X509Details", "load_client_details"]


def _common_name(name: x509.Name) -> str | None:
    attributes = name.get_attributes_for_oid(NameOID.COMMON_NAME)
    if not attributes:
        return None
    value = attributes[0].value
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


def _key_algorithm(certificate: x509.Certificate) -> str | None:
    key = certificate.public_key()
    if isinstance(key, rsa.RSAPublicKey):
        return "RSA"
    if isinstance(key, ec.EllipticCurvePublicKey):
        return f"ECDSA ({key.curve.name})"
    if isinstance(key, ed25519.Ed25519PublicKey):
        return "ED25519"
    return None


@dataclass(frozen=True)
class X509Details:
    """The subject, issuer, fingerprint and key algorithm of a certificate."""

    subject_common_name: str
    issuer_common_name: str
    sha256_fingerprint: str
    key_algorithm: str

    @classmethod
    def from_pem(cls, data: bytes | str) -> X509Details:
        """Read the details of a PEM-encoded certificate.

        Raises :class:`ValueError` when the certificate cannot be parsed or
        lacks one of the details.
        """
        raw = data.encode("ascii") if isinstance(data, str) else bytes(data)
        certificate = x509.load_pem_x509_certificate(raw)

        subject = _common_name(certificate.subject)
        if subject is None:
            raise ValueError("missing subject_common_name")

        issuer = _common_name(certificate.issuer)
        if issuer is None:
            raise ValueError("missing issuer_common_name")

        fingerprint = certificate.fingerprint(hashes.SHA256()).hex()

        algorithm = _key_algorithm(certificate)
        if algorithm is None:
            raise ValueError("missing key_algorithm")

        return cls(
            subject_common_name=subject,
            issuer_common_name=issuer,
            sha256_fingerprint=f"SHA256:{fingerprint}",
            key_algorithm=algorithm,
        )


def _read(path: str, what: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except OSError as error:
        raise ConfigError(f"could not read {what}") from error


def load_client_details(config: AuraeConfig) -> X509Details:
    """Read the authentication material named by ``config`` and describe the client.

    The CA certificate, client certificate and client key must all be
    readable; the details come from the client certificate.
    """
    _read(config.auth.ca_crt, "ca crt")
    client_cert = _read(config.auth.client_crt, "client crt")
    _read(config.auth.client_key, "client key")
    return X509Details.from_pem(client_cert)