"""Configuration for KMS key wrapping."""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from .service import AwsKmsService, EnvelopeService
from .types import ConfigurationError, UnknownVersionError
from .versions import ProtocolVersion, get_version
from .wrap import KmsWrap
from .wrapper import Wrapper


@dataclass
class KmsWrapConfig:
    """Configuration for a KMS wrapping engine."""

    key_id: str
    """KMS key id or ARN."""

    version: str = "v4"
    """Protocol version header the engine accepts."""

    region: Optional[str] = None
    """AWS region (optional)."""

    profile: Optional[str] = None
    """AWS shared-credentials profile (optional)."""

    encryption_context: Dict[str, str] = field(default_factory=dict)
    """Default encryption context entries."""

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "KmsWrapConfig":
        """
        Load configuration from environment variables.

        Reads PASERK_KMS_KEY_ID, PASERK_KMS_VERSION, PASERK_KMS_REGION
        (falling back to AWS_REGION) and PASERK_KMS_PROFILE.

        Raises:
            ConfigurationError: If PASERK_KMS_KEY_ID is not set
        """
        env = os.environ if environ is None else environ
        key_id = env.get("PASERK_KMS_KEY_ID", "").strip()
        if not key_id:
            raise ConfigurationError("PASERK_KMS_KEY_ID is required")

        return cls(
            key_id=key_id,
            version=env.get("PASERK_KMS_VERSION", "v4"),
            region=env.get("PASERK_KMS_REGION") or env.get("AWS_REGION"),
            profile=env.get("PASERK_KMS_PROFILE"),
        )

    @classmethod
    def from_json(cls, path: Union[str, Path], version: str = "v4") -> "KmsWrapConfig":
        """
        Load configuration from a kms.json file.

        The file holds ``key-id``, ``key-arn`` and ``region``; the ARN is
        used as the key id when present.

        Raises:
            ConfigurationError: If the file is unreadable or has no key id
        """
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise ConfigurationError(f"Cannot read KMS config {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"KMS config {path} must be a JSON object")

        key_id = data.get("key-arn") or data.get("key-id")
        if not key_id:
            raise ConfigurationError(f"KMS config {path} has no key-arn or key-id")

        return cls(
            key_id=key_id,
            version=version,
            region=data.get("region"),
            profile=data.get("profile"),
        )

    def protocol_version(self) -> ProtocolVersion:
        """Resolve the configured version header."""
        try:
            return get_version(self.version)
        except UnknownVersionError as e:
            raise ConfigurationError(f"Unsupported protocol version: {self.version}") from e

    def build_engine(self, service: Optional[EnvelopeService] = None) -> KmsWrap:
        """Create a KmsWrap, backed by AWS KMS unless a service is given."""
        if service is None:
            service = AwsKmsService.from_region(self.region, self.profile)
        return KmsWrap(
            service,
            self.protocol_version(),
            self.key_id,
            self.encryption_context,
        )

    def build_wrapper(self, service: Optional[EnvelopeService] = None) -> Wrapper:
        """Create a Wrapper around a freshly built engine."""
        return Wrapper(self.build_engine(service))
