# --- File: school_records/schemas/report/report_quantum_crypto.py ---
"""
Post-quantum cryptography report subsystem schema.

Describes which algorithms a deployment is configured for and counts key
and cipher operations reported by callers. It performs no cryptography.
"""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional

from pydantic import Field

from school_records.schemas.report.report_base import ReportComponentBase, percentage, utcnow

__all__ = [
    "QuantumAlgorithm",
    "CryptoStatus",
    "ReportQuantumCrypto",
]


class QuantumAlgorithm(str, Enum):
    CRYSTALS_KYBER = "CRYSTALS_KYBER"
    CRYSTALS_DILITHIUM = "CRYSTALS_DILITHIUM"
    FALCON = "FALCON"
    SPHINCS_PLUS = "SPHINCS_PLUS"
    NTRU = "NTRU"
    CLASSIC_MCELIECE = "CLASSIC_MCELIECE"
    BIKE = "BIKE"
    HQC = "HQC"


class CryptoStatus(str, Enum):
    INITIALIZING = "INITIALIZING"
    ACTIVE = "ACTIVE"
    ROTATING = "ROTATING"
    COMPROMISED = "COMPROMISED"
    DISABLED = "DISABLED"


class ReportQuantumCrypto(ReportComponentBase):
    """Post-quantum crypto configuration and operation counters."""

    crypto_id: Optional[int] = Field(default=None)
    status: CryptoStatus = Field(default=CryptoStatus.INITIALIZING)
    primary_algorithm: QuantumAlgorithm = Field(default=QuantumAlgorithm.CRYSTALS_KYBER)
    supported_algorithms: List[QuantumAlgorithm] = Field(default_factory=list)
    security_level: int = Field(default=3, ge=1, le=5, description="NIST security category")
    hybrid_mode: bool = Field(default=True, description="Combine with a classical algorithm")
    key_rotation_days: int = Field(default=90, ge=1)
    last_key_rotation: Optional[datetime] = Field(default=None)

    # Keys
    total_keys_generated: int = Field(default=0, ge=0)
    active_keys: int = Field(default=0, ge=0)
    keys_rotated: int = Field(default=0, ge=0)

    # Operations
    total_encryptions: int = Field(default=0, ge=0)
    successful_encryptions: int = Field(default=0, ge=0)
    failed_encryptions: int = Field(default=0, ge=0)
    total_decryptions: int = Field(default=0, ge=0)
    successful_decryptions: int = Field(default=0, ge=0)
    failed_decryptions: int = Field(default=0, ge=0)

    def increment_key_generation(self) -> None:
        self.total_keys_generated += 1
        self.active_keys += 1

    def increment_encryption(self, successful: bool) -> None:
        self.total_encryptions += 1
        if successful:
            self.successful_encryptions += 1
        else:
            self.failed_encryptions += 1

    def increment_decryption(self, successful: bool) -> None:
        self.total_decryptions += 1
        if successful:
            self.successful_decryptions += 1
        else:
            self.failed_decryptions += 1

    def rotate_keys(self) -> int:
        """Count every active key as rotated; returns how many were."""
        rotated = self.active_keys
        self.keys_rotated += rotated
        self.last_key_rotation = utcnow()
        return rotated

    def is_rotation_due(self, now: Optional[datetime] = None) -> bool:
        if self.last_key_rotation is None:
            return self.active_keys > 0
        last = self.last_key_rotation
        now = now or utcnow()
        if now.tzinfo is None and last.tzinfo is not None:
            now = now.replace(tzinfo=last.tzinfo)
        elif now.tzinfo is not None and last.tzinfo is None:
            now = now.astimezone(timezone.utc).replace(tzinfo=None)
        return now - last >= timedelta(days=self.key_rotation_days)

    def get_operation_success_rate(self) -> float:
        """Successful encryptions and decryptions over all cipher operations."""
        return percentage(
            self.successful_encryptions + self.successful_decryptions,
            self.total_encryptions + self.total_decryptions,
        )
